"""Path addressing exports."""

from .field_deletion import delete_data_field, delete_path, delete_schema_field
from .field_paths import FieldPath, join_path, parse_index
from .path_settings import DEFAULT_SETTINGS, ShapeSettings
from .tree_access import ABSENT, DataTreeAccess, SchemaTreeAccess, TreeAccess

__all__ = [
    "ABSENT",
    "DEFAULT_SETTINGS",
    "DataTreeAccess",
    "FieldPath",
    "SchemaTreeAccess",
    "ShapeSettings",
    "TreeAccess",
    "delete_data_field",
    "delete_path",
    "delete_schema_field",
    "join_path",
    "parse_index",
]
