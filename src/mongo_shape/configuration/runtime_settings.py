"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from mongo_shape.path_addressing.path_settings import DEFAULT_SETTINGS, ShapeSettings
from mongo_shape.schema_definition.schema_models import ObjectSchema


@dataclass(frozen=True)
class ModelOptions:
    """Per-model behaviour around fetched and written documents."""

    collection: str | None = None
    check_on_get: bool = False
    hidden_fields: tuple[str, ...] = ()


@dataclass(frozen=True)
class ModelDefinition:
    """Top-level model definition aggregate."""

    name: str
    schema: ObjectSchema
    options: ModelOptions = field(default_factory=ModelOptions)
    settings: ShapeSettings = DEFAULT_SETTINGS
    path: Path | None = None
