"""Document model exports."""

from .model import DocumentModel, IdentifierNotAllowedError, MissingModelNameError

__all__ = ["DocumentModel", "IdentifierNotAllowedError", "MissingModelNameError"]
