"""Type-aware deep copy of document values."""

from __future__ import annotations

import copy
import re
from collections.abc import Mapping
from datetime import date, time, timedelta
from decimal import Decimal
from typing import Any
from uuid import UUID

from bson import Binary, Decimal128, ObjectId, Regex, Timestamp

from mongo_shape.schema_definition.schema_models import MISSING

# date covers datetime; Binary is a bytes subclass.
_SHARED_TYPES = (
    str,
    bytes,
    bool,
    int,
    float,
    Decimal,
    date,
    time,
    timedelta,
    UUID,
    re.Pattern,
    ObjectId,
    Decimal128,
    Binary,
    Timestamp,
    type(None),
)


def clone_value(value: Any) -> Any:
    """Copy a document value so the copy can be mutated without touching the original."""
    if value is MISSING or isinstance(value, _SHARED_TYPES):
        return value
    if isinstance(value, Mapping):
        return {key: clone_value(item) for key, item in value.items()}
    if isinstance(value, list):
        return [clone_value(item) for item in value]
    if isinstance(value, tuple):
        return tuple(clone_value(item) for item in value)
    if isinstance(value, Regex):
        return Regex(value.pattern, value.flags)
    if isinstance(value, bytearray):
        return bytearray(value)
    return copy.deepcopy(value)
