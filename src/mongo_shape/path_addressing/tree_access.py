"""Tree adapters letting one path walker operate on data trees and schema trees."""

from __future__ import annotations

from collections.abc import MutableMapping, Sequence
from typing import Any, Protocol

from mongo_shape.schema_definition.schema_models import (
    ArraySchema,
    ObjectSchema,
    ScalarKind,
    ScalarSchema,
    unwrap_schema,
)

from .field_paths import parse_index


class _Absent:
    """Sentinel for a path segment with nothing behind it."""

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT: Any = _Absent()


class TreeAccess(Protocol):
    """Minimal capabilities a tree exposes to the path walker."""

    def is_array(self, node: Any) -> bool: ...

    def children(self, node: Any) -> Sequence[Any]: ...

    def get(self, node: Any, segment: str) -> Any: ...

    def delete(self, owner: Any, segment: str) -> None: ...

    def clear(self, owner: Any) -> None: ...


class DataTreeAccess:
    """Access over plain documents: mappings, lists and scalars."""

    def is_array(self, node: Any) -> bool:
        return isinstance(node, list)

    def children(self, node: Any) -> Sequence[Any]:
        return list(node)

    def get(self, node: Any, segment: str) -> Any:
        if isinstance(node, MutableMapping):
            return node.get(segment, ABSENT)
        if isinstance(node, list):
            index = parse_index(segment)
            if index is not None and index < len(node):
                return node[index]
        return ABSENT

    def delete(self, owner: Any, segment: str) -> None:
        if isinstance(owner, list):
            index = parse_index(segment)
            if index is not None and index < len(owner):
                del owner[index]
        elif isinstance(owner, MutableMapping):
            owner.pop(segment, None)

    def clear(self, owner: Any) -> None:
        owner.clear()


class SchemaTreeAccess:
    """Access over schema nodes; wrappers are looked through, array positions share one element."""

    def is_array(self, node: Any) -> bool:
        return isinstance(unwrap_schema(node), ArraySchema)

    def children(self, node: Any) -> Sequence[Any]:
        return [unwrap_schema(node).element]

    def get(self, node: Any, segment: str) -> Any:
        base = unwrap_schema(node)
        if isinstance(base, ObjectSchema):
            return base.fields.get(segment, ABSENT)
        if isinstance(base, ArraySchema) and parse_index(segment) is not None:
            return base.element
        return ABSENT

    def delete(self, owner: Any, segment: str) -> None:
        base = unwrap_schema(owner)
        if isinstance(base, ObjectSchema):
            base.fields.pop(segment, None)

    def clear(self, owner: Any) -> None:
        unwrap_schema(owner).element = ScalarSchema(ScalarKind.ANY)
