"""Schema definition exports."""

from .schema_loading import SchemaLoadError, build_schema
from .schema_models import (
    GENERAL_DISALLOWED_KINDS,
    IDENTIFIER_DISALLOWED_KINDS,
    MISSING,
    ArraySchema,
    DefaultedSchema,
    NullableSchema,
    ObjectSchema,
    OptionalSchema,
    ScalarKind,
    ScalarSchema,
    SchemaNode,
    ValidationIssue,
    unwrap_schema,
)

__all__ = [
    "ArraySchema",
    "DefaultedSchema",
    "NullableSchema",
    "ObjectSchema",
    "OptionalSchema",
    "ScalarKind",
    "ScalarSchema",
    "SchemaNode",
    "ValidationIssue",
    "MISSING",
    "GENERAL_DISALLOWED_KINDS",
    "IDENTIFIER_DISALLOWED_KINDS",
    "SchemaLoadError",
    "build_schema",
    "unwrap_schema",
]
