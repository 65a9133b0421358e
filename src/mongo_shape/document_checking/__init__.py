"""Document checking exports."""

from .document_validation import DocumentValidationError, check_document, parse_document

__all__ = ["DocumentValidationError", "check_document", "parse_document"]
