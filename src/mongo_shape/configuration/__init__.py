"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_definition,
    write_placeholder_definition,
)
from .loader import ConfigurationError, load_model_definition
from .runtime_settings import ModelDefinition, ModelOptions

__all__ = [
    "ModelDefinition",
    "ModelOptions",
    "ConfigurationError",
    "load_model_definition",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_definition",
    "write_placeholder_definition",
]
