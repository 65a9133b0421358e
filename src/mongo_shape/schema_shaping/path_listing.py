"""Enumeration of the field paths a schema can address."""

from __future__ import annotations

from mongo_shape.path_addressing.field_paths import join_path
from mongo_shape.path_addressing.path_settings import DEFAULT_SETTINGS, ShapeSettings
from mongo_shape.schema_definition.schema_models import (
    ArraySchema,
    ObjectSchema,
    SchemaNode,
    unwrap_schema,
)


def list_field_paths(
    schema: SchemaNode, settings: ShapeSettings = DEFAULT_SETTINGS
) -> list[str]:
    """Return every addressable path in schema order, arrays rendered with the wildcard.

    Nested arrays stop contributing paths once ``settings.max_array_depth`` levels
    have been entered.
    """
    paths: list[str] = []
    _collect_paths(schema, prefix="", array_depth=0, settings=settings, paths=paths)
    return paths


def _collect_paths(
    node: SchemaNode,
    *,
    prefix: str,
    array_depth: int,
    settings: ShapeSettings,
    paths: list[str],
) -> None:
    if prefix:
        paths.append(prefix)
    base = unwrap_schema(node)
    if isinstance(base, ObjectSchema):
        for name, child in base.fields.items():
            _collect_paths(
                child,
                prefix=join_path(prefix, name),
                array_depth=array_depth,
                settings=settings,
                paths=paths,
            )
    elif isinstance(base, ArraySchema) and array_depth < settings.max_array_depth:
        _collect_paths(
            base.element,
            prefix=join_path(prefix, settings.array_wildcard),
            array_depth=array_depth + 1,
            settings=settings,
            paths=paths,
        )
