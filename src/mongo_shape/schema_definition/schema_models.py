"""Schema tree entities and the leaf kind taxonomy."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ScalarKind(str, Enum):
    """Leaf kinds a schema can declare."""

    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    DATE = "date"
    NULL = "null"
    ANY = "any"
    UNKNOWN = "unknown"
    ABSENT = "absent"
    OBJECT_ID = "object_id"
    DECIMAL128 = "decimal128"
    BINARY = "binary"
    REGEX = "regex"
    TIMESTAMP = "timestamp"
    TUPLE = "tuple"
    VOID = "void"
    FUNCTION = "function"
    FUTURE = "future"


OBJECT_KIND = "object"
ARRAY_KIND = "array"

# Kinds a document store cannot persist anywhere in a document.
GENERAL_DISALLOWED_KINDS = frozenset({ScalarKind.VOID, ScalarKind.FUNCTION, ScalarKind.FUTURE})

# Kinds that cannot serve as a primary key.
IDENTIFIER_DISALLOWED_KINDS = frozenset(
    {ARRAY_KIND, ScalarKind.TUPLE, ScalarKind.ABSENT, ScalarKind.UNKNOWN}
)


@dataclass
class ScalarSchema:
    """Leaf node holding one scalar kind."""

    kind: ScalarKind

    def __post_init__(self) -> None:
        self.kind = ScalarKind(self.kind)


@dataclass
class ObjectSchema:
    """Ordered mapping of field names to child schemas."""

    fields: dict[str, SchemaNode] = field(default_factory=dict)

    @property
    def kind(self) -> str:
        return OBJECT_KIND


@dataclass
class ArraySchema:
    """List whose every element follows one element schema."""

    element: SchemaNode

    @property
    def kind(self) -> str:
        return ARRAY_KIND


@dataclass
class OptionalSchema:
    """Wrapper allowing the field to be absent."""

    inner: SchemaNode

    @property
    def kind(self) -> str:
        return "optional"


@dataclass
class NullableSchema:
    """Wrapper allowing an explicit null."""

    inner: SchemaNode

    @property
    def kind(self) -> str:
        return "nullable"


@dataclass
class DefaultedSchema:
    """Wrapper supplying a value when the field is absent.

    ``default`` is either the value itself or a zero-argument callable producing it.
    """

    inner: SchemaNode
    default: Any

    @property
    def kind(self) -> str:
        return "defaulted"


SchemaNode = (
    ScalarSchema | ObjectSchema | ArraySchema | OptionalSchema | NullableSchema | DefaultedSchema
)
WRAPPER_TYPES = (OptionalSchema, NullableSchema, DefaultedSchema)


def unwrap_schema(node: SchemaNode) -> SchemaNode:
    """Strip optional, nullable and defaulted layers."""
    while isinstance(node, WRAPPER_TYPES):
        node = node.inner
    return node


def kind_name(node: SchemaNode) -> str:
    """Readable kind label used in issue reasons."""
    kind = node.kind
    return kind.value if isinstance(kind, ScalarKind) else kind


def has_optional_layer(node: SchemaNode) -> bool:
    while isinstance(node, WRAPPER_TYPES):
        if isinstance(node, OptionalSchema):
            return True
        node = node.inner
    return False


class _Missing:
    """Marker for a field whose removal is requested by an update payload."""

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _Missing:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> _Missing:
        return self

    def __reduce__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


@dataclass(frozen=True)
class ValidationIssue:
    """One problem found at one path."""

    path: str
    reason: str

    def render(self) -> str:
        return f"{self.path or '<root>'}: {self.reason}"
