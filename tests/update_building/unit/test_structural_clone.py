"""Structural clone tests."""

from __future__ import annotations

import re
from datetime import UTC, datetime
from decimal import Decimal
from uuid import uuid4

from bson import Binary, Decimal128, ObjectId, Regex, Timestamp
from mongo_shape.schema_definition import MISSING
from mongo_shape.update_building import clone_value


def test_containers_are_copied_recursively() -> None:
    original = {"a": [{"b": 1}], "c": {"d": [2, 3]}}

    cloned = clone_value(original)

    assert cloned == original
    assert cloned["a"] is not original["a"]
    assert cloned["a"][0] is not original["a"][0]
    cloned["c"]["d"].append(4)
    assert original["c"]["d"] == [2, 3]


def test_tuples_stay_tuples_with_copied_members() -> None:
    inner = {"a": 1}

    cloned = clone_value((inner, 2))

    assert isinstance(cloned, tuple)
    assert cloned == ({"a": 1}, 2)
    assert cloned[0] is not inner


def test_immutable_values_are_shared() -> None:
    values = [
        "text",
        b"raw",
        7,
        1.5,
        True,
        None,
        Decimal("1.10"),
        datetime(2024, 1, 2, tzinfo=UTC),
        uuid4(),
        re.compile("a+"),
        ObjectId(),
        Decimal128("1.5"),
        Binary(b"\x00\x01", 4),
        Timestamp(1700000000, 1),
    ]

    for value in values:
        assert clone_value(value) is value


def test_bson_regex_is_rebuilt() -> None:
    original = Regex("^a", "i")

    cloned = clone_value({"r": original})["r"]

    assert cloned is not original
    assert cloned.pattern == original.pattern
    assert cloned.flags == original.flags


def test_missing_sentinel_keeps_identity() -> None:
    assert clone_value({"a": MISSING})["a"] is MISSING


def test_special_looking_keys_are_copied_like_any_other() -> None:
    original = {"__proto__": {"polluted": True}, "constructor": 1}

    cloned = clone_value(original)

    assert cloned == original
    assert cloned["__proto__"] is not original["__proto__"]


def test_bytearray_and_other_objects_are_copied() -> None:
    buffer = bytearray(b"abc")
    other = {1, 2}

    cloned = clone_value({"buffer": buffer, "other": other})

    assert cloned["buffer"] == buffer
    assert cloned["buffer"] is not buffer
    assert cloned["other"] == other
    assert cloned["other"] is not other
