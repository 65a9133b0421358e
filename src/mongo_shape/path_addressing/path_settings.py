"""Traversal settings shared by every path-addressed operation."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_ARRAY_WILDCARD = "<idx>"
DEFAULT_MAX_ARRAY_DEPTH = 5
DEFAULT_IDENTIFIER_FIELD = "_id"


@dataclass(frozen=True)
class ShapeSettings:
    """Wildcard token, array depth bound and identifier rules for one model."""

    array_wildcard: str = DEFAULT_ARRAY_WILDCARD
    max_array_depth: int = DEFAULT_MAX_ARRAY_DEPTH
    identifier_field: str = DEFAULT_IDENTIFIER_FIELD
    allow_optional_identifier: bool = False

    def __post_init__(self) -> None:
        if not self.array_wildcard or "." in self.array_wildcard:
            raise ValueError("array_wildcard must be a non-empty token without '.'.")
        if self.array_wildcard.isdigit():
            raise ValueError("array_wildcard must not be an array index.")
        if self.max_array_depth <= 0:
            raise ValueError("max_array_depth must be greater than zero.")
        if not self.identifier_field or "." in self.identifier_field:
            raise ValueError("identifier_field must be a top-level field name.")


DEFAULT_SETTINGS = ShapeSettings()
