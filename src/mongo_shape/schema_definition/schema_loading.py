"""Build schema trees from declarative field specs."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from mongo_shape.path_addressing.field_paths import join_path

from .schema_models import (
    ARRAY_KIND,
    OBJECT_KIND,
    ArraySchema,
    DefaultedSchema,
    NullableSchema,
    ObjectSchema,
    OptionalSchema,
    ScalarKind,
    ScalarSchema,
    SchemaNode,
)

_FIELD_SPEC_KEYS = frozenset({"type", "optional", "nullable", "default", "items", "fields"})


class SchemaLoadError(Exception):
    """Raised when a field spec cannot be turned into a schema node."""


def build_schema(fields: Any) -> ObjectSchema:
    """Build the root object schema from a mapping of field names to field specs.

    A field spec is either a kind name (``"string"``) or a mapping with ``type``
    plus the optional ``optional``, ``nullable``, ``default``, ``items`` (arrays)
    and ``fields`` (objects) keys.
    """
    if not isinstance(fields, Mapping):
        raise SchemaLoadError("Schema root must be a mapping of field names to field specs.")
    return _build_object(fields, prefix="")


def _build_object(fields: Mapping[Any, Any], *, prefix: str) -> ObjectSchema:
    shape: dict[str, SchemaNode] = {}
    for name, spec in fields.items():
        if not isinstance(name, str) or not name:
            raise SchemaLoadError(f"Field names under '{prefix or '<root>'}' must be strings.")
        if "." in name:
            raise SchemaLoadError(f"Field name '{join_path(prefix, name)}' must not contain '.'.")
        shape[name] = _build_field(spec, path=join_path(prefix, name))
    return ObjectSchema(shape)


def _build_field(spec: Any, *, path: str) -> SchemaNode:
    if isinstance(spec, str):
        return _build_kind(spec, {}, path=path)
    if not isinstance(spec, Mapping):
        raise SchemaLoadError(f"Field '{path}' must be a kind name or a mapping.")

    unknown_keys = sorted(str(key) for key in spec if key not in _FIELD_SPEC_KEYS)
    if unknown_keys:
        raise SchemaLoadError(f"Field '{path}' has unknown keys: {', '.join(unknown_keys)}")
    kind = spec.get("type")
    if not isinstance(kind, str):
        raise SchemaLoadError(f"Field '{path}' requires a string 'type'.")

    node = _build_kind(kind, spec, path=path)
    if _require_flag(spec, "nullable", path):
        node = NullableSchema(node)
    if _require_flag(spec, "optional", path):
        node = OptionalSchema(node)
    if "default" in spec:
        node = DefaultedSchema(node, spec["default"])
    return node


def _build_kind(kind: str, spec: Mapping[str, Any], *, path: str) -> SchemaNode:
    if kind == OBJECT_KIND:
        fields = spec.get("fields")
        if not isinstance(fields, Mapping):
            raise SchemaLoadError(f"Object field '{path}' requires a 'fields' mapping.")
        return _build_object(fields, prefix=path)
    if kind == ARRAY_KIND:
        if spec.get("items") is None:
            raise SchemaLoadError(f"Array field '{path}' requires an 'items' spec.")
        return ArraySchema(_build_field(spec["items"], path=join_path(path, "items")))
    if "fields" in spec or "items" in spec:
        raise SchemaLoadError(f"Field '{path}' of type '{kind}' cannot declare fields or items.")
    try:
        return ScalarSchema(ScalarKind(kind))
    except ValueError:
        raise SchemaLoadError(f"Field '{path}' has unknown type '{kind}'.") from None


def _require_flag(spec: Mapping[str, Any], key: str, path: str) -> bool:
    value = spec.get(key, False)
    if not isinstance(value, bool):
        raise SchemaLoadError(f"Field '{path}' flag '{key}' must be a boolean.")
    return value
