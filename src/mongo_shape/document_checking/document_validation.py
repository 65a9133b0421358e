"""Runtime validation of documents against schema trees."""

from __future__ import annotations

import inspect
import re
from collections.abc import Callable, Mapping, MutableMapping, Sequence
from datetime import datetime
from typing import Any

from bson import Decimal128, ObjectId, Regex, Timestamp

from mongo_shape.path_addressing.field_paths import join_path
from mongo_shape.schema_definition.schema_models import (
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
)
from mongo_shape.update_building.structural_clone import clone_value


class DocumentValidationError(Exception):
    """Raised when a document does not satisfy its model schema."""

    def __init__(self, model_name: str, issues: Sequence[ValidationIssue]) -> None:
        super().__init__(f"Model '{model_name}' validation failed")
        self.model_name = model_name
        self.issues = tuple(issues)


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


_KIND_CHECKS: dict[ScalarKind, Callable[[Any], bool]] = {
    ScalarKind.STRING: lambda value: isinstance(value, str),
    ScalarKind.NUMBER: _is_number,
    ScalarKind.INTEGER: _is_integer,
    ScalarKind.BOOLEAN: lambda value: isinstance(value, bool),
    ScalarKind.DATE: lambda value: isinstance(value, datetime),
    ScalarKind.NULL: lambda value: value is None,
    ScalarKind.ANY: lambda value: True,
    ScalarKind.UNKNOWN: lambda value: True,
    ScalarKind.ABSENT: lambda value: value is MISSING,
    ScalarKind.OBJECT_ID: lambda value: isinstance(value, ObjectId),
    ScalarKind.DECIMAL128: lambda value: isinstance(value, Decimal128),
    ScalarKind.BINARY: lambda value: isinstance(value, bytes),
    ScalarKind.REGEX: lambda value: isinstance(value, (Regex, re.Pattern)),
    ScalarKind.TIMESTAMP: lambda value: isinstance(value, Timestamp),
    ScalarKind.TUPLE: lambda value: isinstance(value, list | tuple),
    ScalarKind.VOID: lambda value: value is MISSING,
    ScalarKind.FUNCTION: callable,
    ScalarKind.FUTURE: inspect.isawaitable,
}

# Kinds satisfied by a field that was never supplied.
_ABSENCE_KINDS = frozenset(
    {ScalarKind.ANY, ScalarKind.UNKNOWN, ScalarKind.ABSENT, ScalarKind.VOID}
)


def check_document(
    schema: SchemaNode, document: Any, *, strict: bool = True
) -> list[ValidationIssue]:
    """Return every issue found while checking ``document`` against ``schema``.

    In strict mode keys the schema does not declare are reported. A MISSING value
    counts as an absent key.
    """
    issues: list[ValidationIssue] = []
    _check_node(schema, document, path="", strict=strict, issues=issues)
    return issues


def parse_document(
    schema: SchemaNode, document: Any, *, model_name: str, strict: bool = True
) -> Any:
    """Validate ``document`` and return a copy with declared defaults applied."""
    issues = check_document(schema, document, strict=strict)
    if issues:
        raise DocumentValidationError(model_name, issues)
    return _apply_defaults(schema, clone_value(document))


def _check_node(
    node: SchemaNode, value: Any, *, path: str, strict: bool, issues: list[ValidationIssue]
) -> None:
    if isinstance(node, OptionalSchema | DefaultedSchema):
        if value is not MISSING:
            _check_node(node.inner, value, path=path, strict=strict, issues=issues)
        return
    if isinstance(node, NullableSchema):
        if value is not None:
            _check_node(node.inner, value, path=path, strict=strict, issues=issues)
        return
    if value is MISSING:
        if not (isinstance(node, ScalarSchema) and node.kind in _ABSENCE_KINDS):
            issues.append(ValidationIssue(path, "Required."))
        return

    if isinstance(node, ObjectSchema):
        _check_object(node, value, path=path, strict=strict, issues=issues)
    elif isinstance(node, ArraySchema):
        if not isinstance(value, list):
            issues.append(ValidationIssue(path, f"Expected array, received {_describe(value)}."))
            return
        for index, item in enumerate(value):
            _check_node(
                node.element, item, path=join_path(path, index), strict=strict, issues=issues
            )
    elif not _KIND_CHECKS[node.kind](value):
        issues.append(
            ValidationIssue(path, f"Expected {node.kind.value}, received {_describe(value)}.")
        )


def _check_object(
    node: ObjectSchema, value: Any, *, path: str, strict: bool, issues: list[ValidationIssue]
) -> None:
    if not isinstance(value, Mapping):
        issues.append(ValidationIssue(path, f"Expected object, received {_describe(value)}."))
        return
    for name, child in node.fields.items():
        _check_node(
            child,
            value.get(name, MISSING),
            path=join_path(path, name),
            strict=strict,
            issues=issues,
        )
    if strict:
        for key in value:
            if key not in node.fields:
                issues.append(ValidationIssue(path, f"Unrecognized key '{key}'."))


def _describe(value: Any) -> str:
    if value is MISSING:
        return "missing"
    if value is None:
        return "null"
    if isinstance(value, list):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def _apply_defaults(node: SchemaNode, value: Any) -> Any:
    if isinstance(node, DefaultedSchema):
        if value is MISSING:
            return _default_value(node)
        return _apply_defaults(node.inner, value)
    if isinstance(node, OptionalSchema | NullableSchema):
        if value is None or (value is MISSING and isinstance(node, OptionalSchema)):
            return value
        return _apply_defaults(node.inner, value)
    if isinstance(node, ObjectSchema) and isinstance(value, MutableMapping):
        for name, child in node.fields.items():
            resolved = _apply_defaults(child, value.get(name, MISSING))
            if resolved is MISSING:
                value.pop(name, None)
            else:
                value[name] = resolved
        return value
    if isinstance(node, ArraySchema) and isinstance(value, list):
        return [_apply_defaults(node.element, item) for item in value]
    return value


def _default_value(node: DefaultedSchema) -> Any:
    default = node.default
    return clone_value(default() if callable(default) else default)
