"""Definition-time validation of schema trees."""

from __future__ import annotations

from collections.abc import Sequence

from mongo_shape.path_addressing.field_paths import join_path
from mongo_shape.path_addressing.path_settings import DEFAULT_SETTINGS, ShapeSettings
from mongo_shape.schema_definition.schema_models import (
    GENERAL_DISALLOWED_KINDS,
    IDENTIFIER_DISALLOWED_KINDS,
    ArraySchema,
    ObjectSchema,
    SchemaNode,
    ValidationIssue,
    has_optional_layer,
    kind_name,
    unwrap_schema,
)


class SchemaDefinitionError(Exception):
    """Raised when a model schema holds node kinds a document cannot store."""

    def __init__(self, model_name: str, issues: Sequence[ValidationIssue]) -> None:
        super().__init__(f"Invalid schema provided for model '{model_name}'")
        self.model_name = model_name
        self.issues = tuple(issues)


def validate_schema(
    schema: SchemaNode, model_name: str, settings: ShapeSettings = DEFAULT_SETTINGS
) -> None:
    """Raise SchemaDefinitionError listing every disallowed node in the schema."""
    issues = collect_schema_issues(schema, settings)
    if issues:
        raise SchemaDefinitionError(model_name, issues)


def collect_schema_issues(
    schema: SchemaNode, settings: ShapeSettings = DEFAULT_SETTINGS
) -> list[ValidationIssue]:
    """Return every schema issue in traversal order."""
    if not isinstance(schema, ObjectSchema):
        return [ValidationIssue("", f"Schema root must be an object, not '{kind_name(schema)}'.")]

    issues: list[ValidationIssue] = []
    identifier_name = settings.identifier_field
    identifier = schema.fields.get(identifier_name)
    if identifier is not None:
        issues.extend(_identifier_issues(identifier, settings))

    for name, node in schema.fields.items():
        if name == identifier_name:
            continue
        _collect_node_issues(node, path=name, settings=settings, issues=issues)
    return issues


def _identifier_issues(node: SchemaNode, settings: ShapeSettings) -> list[ValidationIssue]:
    name = settings.identifier_field
    issues: list[ValidationIssue] = []
    if has_optional_layer(node) and not settings.allow_optional_identifier:
        issues.append(ValidationIssue(name, f"The '{name}' field must not be an 'optional' type."))

    base = unwrap_schema(node)
    if base.kind in IDENTIFIER_DISALLOWED_KINDS or base.kind in GENERAL_DISALLOWED_KINDS:
        issues.append(
            ValidationIssue(name, f"The '{name}' field must not be a '{kind_name(base)}' type.")
        )
    return issues


def _collect_node_issues(
    node: SchemaNode, *, path: str, settings: ShapeSettings, issues: list[ValidationIssue]
) -> None:
    base = unwrap_schema(node)
    if isinstance(base, ObjectSchema):
        for name, child in base.fields.items():
            _collect_node_issues(
                child, path=join_path(path, name), settings=settings, issues=issues
            )
        return
    if isinstance(base, ArraySchema):
        _collect_node_issues(
            base.element,
            path=join_path(path, settings.array_wildcard),
            settings=settings,
            issues=issues,
        )
        return
    if base.kind in GENERAL_DISALLOWED_KINDS:
        issues.append(ValidationIssue(path, f"Schema type '{kind_name(base)}' is not allowed."))
