"""Split update payloads into set and unset operator documents."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from typing import Any

from mongo_shape.path_addressing.field_paths import join_path
from mongo_shape.schema_definition.schema_models import MISSING

from .structural_clone import clone_value


@dataclass(frozen=True)
class UpdateResult:
    """Fields to write and dot paths to remove for one update payload."""

    set_document: dict[str, Any]
    unset_paths: dict[str, str]

    def as_operators(self) -> dict[str, dict[str, Any]]:
        """Return the ``$set``/``$unset`` update document, leaving out empty operators."""
        operators: dict[str, dict[str, Any]] = {}
        if self.set_document:
            operators["$set"] = self.set_document
        if self.unset_paths:
            operators["$unset"] = self.unset_paths
        return operators


def decompose_update(document: Mapping[str, Any]) -> UpdateResult:
    """Decompose an update payload whose MISSING values request field removal.

    The input is never mutated. ``unset_paths`` uses concrete array indices;
    ``set_document`` is the payload without MISSING values or emptied objects.
    """
    working = clone_value(document)
    unset_paths: dict[str, str] = {}
    _collect_unset_paths(working, prefix="", unset_paths=unset_paths)
    return UpdateResult(set_document=strip_missing_fields(working), unset_paths=unset_paths)


def _collect_unset_paths(node: Any, *, prefix: str, unset_paths: dict[str, str]) -> None:
    if isinstance(node, list):
        # A MISSING list element is dropped from the list, never unset by position.
        for index, item in enumerate(node):
            _collect_unset_paths(item, prefix=join_path(prefix, index), unset_paths=unset_paths)
        return
    if not isinstance(node, Mapping):
        return
    for key, value in node.items():
        path = join_path(prefix, key)
        if value is MISSING:
            unset_paths[path] = ""
        else:
            _collect_unset_paths(value, prefix=path, unset_paths=unset_paths)


def strip_missing_fields(document: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    """Remove MISSING values in place, pruning objects left without keys.

    Objects inside lists are kept even when empty so list positions stay stable.
    """
    for key in list(document):
        value = document[key]
        if value is MISSING:
            del document[key]
        elif isinstance(value, MutableMapping):
            strip_missing_fields(value)
            if not value:
                del document[key]
        elif isinstance(value, list):
            document[key] = _strip_list(value)
    return document


def _strip_list(items: list[Any]) -> list[Any]:
    cleaned: list[Any] = []
    for item in items:
        if item is MISSING:
            continue
        if isinstance(item, MutableMapping):
            strip_missing_fields(item)
        elif isinstance(item, list):
            item = _strip_list(item)
        cleaned.append(item)
    return cleaned
