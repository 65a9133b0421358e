"""Update building exports."""

from .structural_clone import clone_value
from .update_decomposition import UpdateResult, decompose_update, strip_missing_fields

__all__ = [
    "UpdateResult",
    "clone_value",
    "decompose_update",
    "strip_missing_fields",
]
