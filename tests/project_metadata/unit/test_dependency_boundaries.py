"""Boundary tests for the core shaping packages."""

from __future__ import annotations

from pathlib import Path


def _package_root() -> Path:
    return Path(__file__).resolve().parents[3] / "src" / "mongo_shape"


def test_core_packages_do_not_import_cli_or_configuration_layers() -> None:
    core_packages = (
        "path_addressing",
        "schema_definition",
        "schema_shaping",
        "update_building",
        "document_checking",
    )
    forbidden_import_fragments = (
        "import click",
        "import yaml",
        "mongo_shape.cli",
        "mongo_shape.configuration",
        "mongo_shape.document_model",
    )

    for package in core_packages:
        for module_path in sorted((_package_root() / package).glob("*.py")):
            text = module_path.read_text(encoding="utf-8")
            for fragment in forbidden_import_fragments:
                assert (
                    fragment not in text
                ), f"Forbidden core dependency in {module_path}: {fragment}"
