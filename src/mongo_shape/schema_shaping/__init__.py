"""Schema validation and narrowing exports."""

from .path_listing import list_field_paths
from .schema_narrowing import copy_schema, narrow_by_data, narrow_by_paths
from .schema_validation import SchemaDefinitionError, collect_schema_issues, validate_schema

__all__ = [
    "SchemaDefinitionError",
    "collect_schema_issues",
    "copy_schema",
    "list_field_paths",
    "narrow_by_data",
    "narrow_by_paths",
    "validate_schema",
]
