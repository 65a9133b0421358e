"""Schema loading tests."""

from __future__ import annotations

import copy
import pickle

import pytest
from mongo_shape.schema_definition import (
    MISSING,
    ArraySchema,
    DefaultedSchema,
    NullableSchema,
    ObjectSchema,
    OptionalSchema,
    ScalarKind,
    ScalarSchema,
    SchemaLoadError,
    ValidationIssue,
    build_schema,
    unwrap_schema,
)


def test_build_schema_reads_kind_names_and_field_mappings() -> None:
    schema = build_schema(
        {
            "_id": "object_id",
            "name": "string",
            "email": {"type": "string", "optional": True},
            "tags": {"type": "array", "items": "string"},
            "address": {
                "type": "object",
                "fields": {"zip": {"type": "string", "nullable": True}},
            },
        }
    )

    assert schema == ObjectSchema(
        {
            "_id": ScalarSchema(ScalarKind.OBJECT_ID),
            "name": ScalarSchema(ScalarKind.STRING),
            "email": OptionalSchema(ScalarSchema(ScalarKind.STRING)),
            "tags": ArraySchema(ScalarSchema(ScalarKind.STRING)),
            "address": ObjectSchema({"zip": NullableSchema(ScalarSchema(ScalarKind.STRING))}),
        }
    )


def test_build_schema_keeps_declaration_order() -> None:
    schema = build_schema({"b": "string", "a": "string", "c": "string"})

    assert list(schema.fields) == ["b", "a", "c"]


def test_wrappers_are_layered_nullable_then_optional_then_default() -> None:
    schema = build_schema(
        {"role": {"type": "string", "nullable": True, "optional": True, "default": "member"}}
    )

    role = schema.fields["role"]
    assert isinstance(role, DefaultedSchema)
    assert role.default == "member"
    assert isinstance(role.inner, OptionalSchema)
    assert isinstance(role.inner.inner, NullableSchema)
    assert unwrap_schema(role) == ScalarSchema(ScalarKind.STRING)


def test_array_items_accept_nested_specs() -> None:
    schema = build_schema(
        {"matrix": {"type": "array", "items": {"type": "array", "items": "number"}}}
    )

    assert schema.fields["matrix"] == ArraySchema(ArraySchema(ScalarSchema(ScalarKind.NUMBER)))


@pytest.mark.parametrize(
    ("fields", "message"),
    [
        ([], "Schema root must be a mapping"),
        ({"a.b": "string"}, "must not contain '.'"),
        ({"a": "strng"}, "unknown type 'strng'"),
        ({"a": 3}, "must be a kind name or a mapping"),
        ({"a": {"optional": True}}, "requires a string 'type'"),
        ({"a": {"type": "string", "required": True}}, "unknown keys: required"),
        ({"a": {"type": "object"}}, "requires a 'fields' mapping"),
        ({"a": {"type": "array"}}, "requires an 'items' spec"),
        ({"a": {"type": "string", "items": "string"}}, "cannot declare fields or items"),
        ({"a": {"type": "string", "optional": "yes"}}, "must be a boolean"),
        ({"a": {"type": "object", "fields": {"b": "nope"}}}, "Field 'a.b'"),
    ],
)
def test_build_schema_rejects_invalid_specs(fields: object, message: str) -> None:
    with pytest.raises(SchemaLoadError, match=message):
        build_schema(fields)


def test_scalar_schema_accepts_kind_value_strings() -> None:
    assert ScalarSchema("string") == ScalarSchema(ScalarKind.STRING)  # type: ignore[arg-type]
    assert ScalarSchema("string").kind is ScalarKind.STRING  # type: ignore[arg-type]


def test_missing_sentinel_survives_copies_and_is_falsy() -> None:
    assert copy.copy(MISSING) is MISSING
    assert copy.deepcopy({"a": MISSING})["a"] is MISSING
    assert pickle.loads(pickle.dumps(MISSING)) is MISSING
    assert not MISSING
    assert repr(MISSING) == "MISSING"


def test_validation_issue_renders_root_placeholder() -> None:
    assert ValidationIssue("", "Required.").render() == "<root>: Required."
    assert ValidationIssue("a.0", "Required.").render() == "a.0: Required."
