"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import click
from bson import json_util

from mongo_shape.configuration import (
    DEFAULT_CONFIG_FILENAME,
    ConfigurationError,
    ModelDefinition,
    load_model_definition,
    write_placeholder_definition,
)
from mongo_shape.document_checking import DocumentValidationError
from mongo_shape.document_model import DocumentModel, IdentifierNotAllowedError
from mongo_shape.schema_definition import MISSING, ValidationIssue
from mongo_shape.schema_shaping import (
    SchemaDefinitionError,
    collect_schema_issues,
    list_field_paths,
)

DEFAULT_MISSING_TOKEN = "$missing"

_CONFIG_OPTION = click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the YAML/JSON model definition file",
)
_INPUT_OPTION = click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to an Extended JSON document",
)


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="mongo-shape")
@click.option("--verbose", is_flag=True, default=False, help="Log debug details to stderr.")
def cli(verbose: bool) -> None:
    """Schema-bound document shaping utility."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s"
        )


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML model definition template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a YAML model definition with guidance comments."""
    try:
        resolved_output = write_placeholder_definition(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="check-schema")
@_CONFIG_OPTION
def check_schema(config_path: str) -> None:
    """Report every schema node a document store cannot hold."""
    definition = _load_definition(config_path)
    issues = collect_schema_issues(definition.schema, definition.settings)
    if issues:
        raise CliError(_format_issues(f"Invalid schema for model '{definition.name}'", issues))
    click.echo("ok")


@cli.command(name="list-paths")
@_CONFIG_OPTION
def list_paths(config_path: str) -> None:
    """List every field path the model schema can address."""
    definition = _load_definition(config_path)
    for path in list_field_paths(definition.schema, definition.settings):
        click.echo(path)


@cli.command(name="validate")
@_CONFIG_OPTION
@_INPUT_OPTION
@click.option(
    "--partial",
    is_flag=True,
    default=False,
    help="Validate only the fields present in the document.",
)
def validate(config_path: str, input_path: str, partial: bool) -> None:
    """Validate a document and print it with defaults applied."""
    model = _build_model(_load_definition(config_path))
    document = _read_document(input_path, missing_token=None)
    try:
        parsed = model.parse(document, partial=partial)
    except DocumentValidationError as exc:
        raise CliError(_format_issues(str(exc), exc.issues)) from exc
    click.echo(_dump(parsed))


@cli.command(name="build-update")
@_CONFIG_OPTION
@_INPUT_OPTION
@click.option(
    "--missing-token",
    default=DEFAULT_MISSING_TOKEN,
    show_default=True,
    help="String value marking a field for removal.",
)
def build_update(config_path: str, input_path: str, missing_token: str) -> None:
    """Print the $set/$unset update document for a partial payload."""
    model = _build_model(_load_definition(config_path))
    update = _read_document(input_path, missing_token=missing_token)
    try:
        operators = model.prepare_update(update)
    except DocumentValidationError as exc:
        raise CliError(_format_issues(str(exc), exc.issues)) from exc
    except IdentifierNotAllowedError as exc:
        raise CliError(str(exc)) from exc
    click.echo(_dump(operators))


@cli.command(name="hide-fields")
@_CONFIG_OPTION
@_INPUT_OPTION
def hide_fields(config_path: str, input_path: str) -> None:
    """Print a fetched document without the model's hidden fields."""
    model = _build_model(_load_definition(config_path))
    document = _read_document(input_path, missing_token=None)
    try:
        prepared = model.prepare_fetched(document)
    except DocumentValidationError as exc:
        raise CliError(_format_issues(str(exc), exc.issues)) from exc
    click.echo(_dump(prepared))


def _load_definition(config_path: str) -> ModelDefinition:
    try:
        return load_model_definition(config_path)
    except (ConfigurationError, OSError) as exc:
        raise CliError(str(exc)) from exc


def _build_model(definition: ModelDefinition) -> DocumentModel:
    try:
        return DocumentModel.from_definition(definition)
    except SchemaDefinitionError as exc:
        raise CliError(_format_issues(str(exc), exc.issues)) from exc


def _read_document(input_path: str, *, missing_token: str | None) -> Any:
    path = Path(input_path)
    try:
        document = json_util.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise CliError(str(exc)) from exc
    except ValueError as exc:
        raise CliError(f"Invalid JSON document {path}: {exc}") from exc
    if not isinstance(document, dict):
        raise CliError(f"Document root must be an object: {path}")
    if missing_token is None:
        return document
    return _replace_missing_token(document, missing_token)


def _replace_missing_token(value: Any, token: str) -> Any:
    if isinstance(value, str) and value == token:
        return MISSING
    if isinstance(value, dict):
        return {key: _replace_missing_token(item, token) for key, item in value.items()}
    if isinstance(value, list):
        return [_replace_missing_token(item, token) for item in value]
    return value


def _dump(value: Any) -> str:
    return json_util.dumps(value, indent=2, json_options=json_util.RELAXED_JSON_OPTIONS)


def _format_issues(headline: str, issues: Sequence[ValidationIssue]) -> str:
    return "\n".join([headline, *(f"  {issue.render()}" for issue in issues)])


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
