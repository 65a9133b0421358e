"""Narrowed schemas for partial payloads."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from mongo_shape.path_addressing.field_deletion import delete_schema_field
from mongo_shape.path_addressing.field_paths import FieldPath
from mongo_shape.path_addressing.path_settings import DEFAULT_SETTINGS, ShapeSettings
from mongo_shape.schema_definition.schema_models import (
    ArraySchema,
    DefaultedSchema,
    NullableSchema,
    ObjectSchema,
    OptionalSchema,
    ScalarSchema,
    SchemaNode,
)


def copy_schema(node: SchemaNode) -> SchemaNode:
    """Return a structurally equal schema tree sharing no nodes with ``node``."""
    if isinstance(node, ObjectSchema):
        return ObjectSchema({name: copy_schema(child) for name, child in node.fields.items()})
    if isinstance(node, ArraySchema):
        return ArraySchema(copy_schema(node.element))
    if isinstance(node, OptionalSchema):
        return OptionalSchema(copy_schema(node.inner))
    if isinstance(node, NullableSchema):
        return NullableSchema(copy_schema(node.inner))
    if isinstance(node, DefaultedSchema):
        return DefaultedSchema(copy_schema(node.inner), node.default)
    return ScalarSchema(node.kind)


def narrow_by_paths(
    schema: ObjectSchema,
    paths: Iterable[FieldPath | str],
    settings: ShapeSettings = DEFAULT_SETTINGS,
) -> ObjectSchema:
    """Return a copy of ``schema`` without the nodes the paths address."""
    unique_paths = list(dict.fromkeys(paths))
    if not unique_paths:
        return schema

    narrowed = copy_schema(schema)
    for path in unique_paths:
        delete_schema_field(narrowed, path, settings)
    return narrowed  # type: ignore[return-value]


def narrow_by_data(schema: ObjectSchema, data: Mapping[str, Any]) -> ObjectSchema:
    """Return a schema holding only the fields present in ``data``, recursively.

    Array element schemas are narrowed by the first element of the matching data
    list; empty lists keep the element schema. Optional, nullable and defaulted
    layers are rebuilt around each narrowed node.
    """
    return _narrow_object(schema, data)  # type: ignore[return-value]


def _narrow_object(schema: SchemaNode, data: Any) -> SchemaNode:
    if not isinstance(schema, ObjectSchema) or not isinstance(data, Mapping):
        return copy_schema(schema)
    return ObjectSchema(
        {
            name: _narrow_value(child, data[name])
            for name, child in schema.fields.items()
            if name in data
        }
    )


def _narrow_array(schema: SchemaNode, items: list[Any]) -> SchemaNode:
    if not isinstance(schema, ArraySchema) or not items:
        return copy_schema(schema)
    return ArraySchema(_narrow_value(schema.element, items[0]))


def _narrow_value(schema: SchemaNode, value: Any) -> SchemaNode:
    if isinstance(value, list):
        return _rewrap(schema, lambda inner: _narrow_array(inner, value))
    if isinstance(value, Mapping):
        return _rewrap(schema, lambda inner: _narrow_object(inner, value))
    return copy_schema(schema)


def _rewrap(schema: SchemaNode, narrow: Callable[[SchemaNode], SchemaNode]) -> SchemaNode:
    if isinstance(schema, OptionalSchema):
        return OptionalSchema(_rewrap(schema.inner, narrow))
    if isinstance(schema, NullableSchema):
        return NullableSchema(_rewrap(schema.inner, narrow))
    if isinstance(schema, DefaultedSchema):
        return DefaultedSchema(_rewrap(schema.inner, narrow), schema.default)
    return narrow(schema)
