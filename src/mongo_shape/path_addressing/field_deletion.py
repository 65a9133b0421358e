"""Path-addressed deletion over data trees and schema trees."""

from __future__ import annotations

from typing import Any

from .field_paths import FieldPath
from .path_settings import DEFAULT_SETTINGS, ShapeSettings
from .tree_access import ABSENT, DataTreeAccess, SchemaTreeAccess, TreeAccess

_DATA_ACCESS = DataTreeAccess()
_SCHEMA_ACCESS = SchemaTreeAccess()


def delete_path(
    tree: Any,
    path: FieldPath | str,
    access: TreeAccess,
    settings: ShapeSettings = DEFAULT_SETTINGS,
) -> None:
    """Remove whatever ``path`` addresses inside ``tree``, in place.

    An intermediate wildcard on an array applies the rest of the path to every
    element. A missing intermediate segment ends the walk without error. At the
    last segment an array loses the addressed index (or every element for the
    wildcard) and an object loses the named key.
    """
    segments = FieldPath.coerce(path).segments
    wildcard = settings.array_wildcard
    if not segments:
        return
    current = tree

    for position, segment in enumerate(segments[:-1]):
        if segment == wildcard and access.is_array(current):
            remaining = FieldPath(segments[position + 1 :])
            for child in access.children(current):
                delete_path(child, remaining, access, settings)
            return
        current = access.get(current, segment)
        if current is ABSENT:
            return

    last = segments[-1]
    if last == wildcard and access.is_array(current):
        access.clear(current)
    else:
        access.delete(current, last)


def delete_data_field(
    document: Any, path: FieldPath | str, settings: ShapeSettings = DEFAULT_SETTINGS
) -> None:
    """Delete the value(s) at ``path`` from a document."""
    delete_path(document, path, _DATA_ACCESS, settings)


def delete_schema_field(
    schema: Any, path: FieldPath | str, settings: ShapeSettings = DEFAULT_SETTINGS
) -> None:
    """Delete the schema node(s) at ``path`` from a schema tree."""
    delete_path(schema, path, _SCHEMA_ACCESS, settings)
