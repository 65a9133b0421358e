"""Model definition scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "model.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Model definition template for mongo-shape.
# Rename the model, then describe every document field under schema.

model:
  name: "users"
  # collection defaults to the model name.
  # collection: "users"
  # Validate documents read back from the store before returning them.
  check_on_get: false
  # Dot paths removed from fetched documents; "<idx>" addresses every array element.
  hidden_fields:
    - "password"

# Optional traversal settings; the values below are the defaults.
settings:
  array_wildcard: "<idx>"
  max_array_depth: 5
  identifier_field: "_id"
  allow_optional_identifier: false

# Field specs are either a kind name or a mapping with type plus
# optional, nullable, default, items (arrays) and fields (objects).
# Kinds: string, number, integer, boolean, date, null, any, unknown, object_id,
# decimal128, binary, regex, timestamp, object, array.
schema:
  _id: object_id
  name: string
  password: string
  email:
    type: string
    optional: true
  role:
    type: string
    default: "member"
  tags:
    type: array
    items: string
  address:
    type: object
    optional: true
    fields:
      city: string
      zip:
        type: string
        nullable: true
"""


def build_placeholder_definition() -> str:
    """Build a YAML model definition template with inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_definition(output_path: Path | str) -> Path:
    """Write the model definition template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Model definition file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_definition(), encoding="utf-8")
    return destination.resolve()
