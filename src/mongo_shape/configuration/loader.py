"""Model definition loader service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from mongo_shape.path_addressing.field_paths import FieldPath
from mongo_shape.path_addressing.path_settings import (
    DEFAULT_ARRAY_WILDCARD,
    DEFAULT_IDENTIFIER_FIELD,
    DEFAULT_MAX_ARRAY_DEPTH,
    ShapeSettings,
)
from mongo_shape.schema_definition.schema_loading import SchemaLoadError, build_schema
from mongo_shape.schema_definition.schema_models import ObjectSchema

from .runtime_settings import ModelDefinition, ModelOptions


class ConfigurationError(Exception):
    """Raised when the model definition file is invalid."""


def load_model_definition(config_path: Path | str) -> ModelDefinition:
    """Load and validate a YAML/JSON model definition file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Model definition file not found: {path}")

    parsed = _read_yaml(path)
    if parsed is None:
        parsed = {}
    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Model definition root must be a mapping.")

    name, options = _parse_model_section(parsed.get("model"))
    settings = _parse_settings_section(parsed.get("settings"))
    schema = _parse_schema_section(parsed.get("schema"), parsed.get("schema_file"), path.parent)

    return ModelDefinition(
        name=name,
        schema=schema,
        options=options,
        settings=settings,
        path=path,
    )


def _read_yaml(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse {path.name}: {exc}") from exc


def _parse_model_section(value: Any) -> tuple[str, ModelOptions]:
    section = _require_mapping(value, "model")
    name = _require_non_empty_string(section.get("name"), "model.name")
    collection = _optional_string(section.get("collection"), "model.collection")
    check_on_get = _require_bool(section.get("check_on_get", False), "model.check_on_get")
    hidden_fields = _require_field_paths(
        _normalize_string_sequence(section.get("hidden_fields"), "model.hidden_fields"),
        "model.hidden_fields",
    )
    return name, ModelOptions(
        collection=collection,
        check_on_get=check_on_get,
        hidden_fields=hidden_fields,
    )


def _parse_settings_section(value: Any) -> ShapeSettings:
    if value is None:
        return ShapeSettings()
    section = _require_mapping(value, "settings")
    array_wildcard = _require_non_empty_string(
        section.get("array_wildcard", DEFAULT_ARRAY_WILDCARD), "settings.array_wildcard"
    )
    max_array_depth = _require_positive_int(
        section.get("max_array_depth", DEFAULT_MAX_ARRAY_DEPTH), "settings.max_array_depth"
    )
    identifier_field = _require_non_empty_string(
        section.get("identifier_field", DEFAULT_IDENTIFIER_FIELD), "settings.identifier_field"
    )
    allow_optional_identifier = _require_bool(
        section.get("allow_optional_identifier", False), "settings.allow_optional_identifier"
    )
    try:
        return ShapeSettings(
            array_wildcard=array_wildcard,
            max_array_depth=max_array_depth,
            identifier_field=identifier_field,
            allow_optional_identifier=allow_optional_identifier,
        )
    except ValueError as exc:
        raise ConfigurationError(f"settings: {exc}") from exc


def _parse_schema_section(inline: Any, schema_file: Any, base_path: Path) -> ObjectSchema:
    if inline is not None and schema_file is not None:
        raise ConfigurationError("Model definition must not set both schema and schema_file.")
    if schema_file is not None:
        if not isinstance(schema_file, str) or not schema_file.strip():
            raise ConfigurationError("schema_file must be a non-empty string.")
        schema_path = _resolve_path(base_path, schema_file)
        if not schema_path.exists():
            raise ConfigurationError(f"Schema file not found: {schema_path}")
        inline = _read_yaml(schema_path)
    if inline is None:
        raise ConfigurationError("Model definition requires either schema or schema_file.")
    try:
        return build_schema(inline)
    except SchemaLoadError as exc:
        raise ConfigurationError(str(exc)) from exc


def _normalize_string_sequence(value: Any, field_name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        stripped = value.strip()
        return (stripped,) if stripped else ()
    if isinstance(value, Sequence):
        normalized = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigurationError(f"{field_name} entries must be strings.")
            stripped = item.strip()
            if stripped:
                normalized.append(stripped)
        return tuple(normalized)
    raise ConfigurationError(f"{field_name} must be a string or list of strings.")


def _require_field_paths(paths: tuple[str, ...], field_name: str) -> tuple[str, ...]:
    for path in paths:
        try:
            FieldPath.parse(path)
        except ValueError as exc:
            raise ConfigurationError(f"{field_name}: {exc}") from exc
    return paths


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be a boolean.")
    return value


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
