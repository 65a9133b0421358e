"""Schema-bound document model preparing payloads for a document store."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from mongo_shape.configuration.runtime_settings import ModelDefinition, ModelOptions
from mongo_shape.document_checking.document_validation import (
    DocumentValidationError,
    check_document,
    parse_document,
)
from mongo_shape.path_addressing.field_deletion import delete_data_field
from mongo_shape.path_addressing.path_settings import DEFAULT_SETTINGS, ShapeSettings
from mongo_shape.schema_definition.schema_models import ObjectSchema
from mongo_shape.schema_shaping.schema_narrowing import narrow_by_data, narrow_by_paths
from mongo_shape.schema_shaping.schema_validation import validate_schema
from mongo_shape.update_building.structural_clone import clone_value
from mongo_shape.update_building.update_decomposition import (
    decompose_update,
    strip_missing_fields,
)

_LOGGER = logging.getLogger(__name__)


class MissingModelNameError(Exception):
    """Raised when a model is defined without a name."""

    def __init__(self) -> None:
        super().__init__("Model name is required.")


class IdentifierNotAllowedError(Exception):
    """Raised when an update or replacement payload carries the identifier field."""

    def __init__(self, field_name: str) -> None:
        super().__init__(f"The '{field_name}' field is not allowed in update or replace payloads.")
        self.field_name = field_name


class DocumentModel:
    """A named, validated schema bound to one collection.

    The schema is checked once here; every write payload is then narrowed to what
    it actually carries, validated strictly and turned into store-ready documents.
    """

    def __init__(
        self,
        name: str,
        schema: ObjectSchema,
        options: ModelOptions | None = None,
        settings: ShapeSettings = DEFAULT_SETTINGS,
    ) -> None:
        if not name or not name.strip():
            raise MissingModelNameError()
        validate_schema(schema, name, settings)
        self._name = name
        self._schema = schema
        self._options = options or ModelOptions()
        self._settings = settings
        _LOGGER.debug("Schema accepted for model '%s' (%d fields)", name, len(schema.fields))

    @classmethod
    def from_definition(cls, definition: ModelDefinition) -> DocumentModel:
        return cls(
            definition.name,
            definition.schema,
            options=definition.options,
            settings=definition.settings,
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def schema(self) -> ObjectSchema:
        return self._schema

    @property
    def settings(self) -> ShapeSettings:
        return self._settings

    @property
    def collection(self) -> str:
        return self._options.collection or self._name

    @property
    def check_on_get(self) -> bool:
        return self._options.check_on_get

    @property
    def hidden_fields(self) -> tuple[str, ...]:
        return self._options.hidden_fields

    def parse(
        self,
        data: Mapping[str, Any],
        *,
        partial: bool = False,
        excluded_paths: Sequence[str] | None = None,
    ) -> dict[str, Any]:
        """Validate ``data`` strictly and return a copy of it.

        ``partial`` validates only the fields ``data`` carries and returns the copy
        untouched; otherwise declared defaults are filled in. ``excluded_paths``
        drops the addressed nodes from the schema before validating.
        """
        schema = self._schema_for(data, partial=partial, excluded_paths=excluded_paths)
        if partial:
            issues = check_document(schema, data)
            if issues:
                raise DocumentValidationError(self._name, issues)
            return clone_value(data)
        return parse_document(schema, data, model_name=self._name)

    def is_valid(
        self,
        data: Mapping[str, Any],
        *,
        partial: bool = False,
        excluded_paths: Sequence[str] | None = None,
        strict: bool = True,
    ) -> bool:
        """Return whether ``data`` passes the same checks as ``parse``.

        ``strict=False`` tolerates keys the schema does not declare.
        """
        schema = self._schema_for(data, partial=partial, excluded_paths=excluded_paths)
        return not check_document(schema, data, strict=strict)

    def hide_fields(self, data: Any, hidden_fields: Iterable[str] | None = None) -> Any:
        """Return copies of one document or a list of documents without the hidden paths."""
        paths = tuple(
            dict.fromkeys(self._options.hidden_fields if hidden_fields is None else hidden_fields)
        )
        if isinstance(data, list):
            return [self._hide_in(document, paths) for document in data]
        return self._hide_in(data, paths)

    def prepare_insert(self, documents: Any) -> Any:
        """Return the document, or list of documents, to insert.

        Each document is validated, gets its defaults and loses its MISSING values.
        """
        if isinstance(documents, list):
            return [self._prepare_one_insert(document) for document in documents]
        return self._prepare_one_insert(documents)

    def prepare_update(self, update: Mapping[str, Any]) -> dict[str, dict[str, Any]]:
        """Return the ``$set``/``$unset`` update document for a partial payload."""
        self._reject_identifier(update)
        self.parse(update, partial=True)
        operators = decompose_update(update).as_operators()
        _LOGGER.debug(
            "Update operators for model '%s': %s",
            self._name,
            ", ".join(f"{name}={len(fields)}" for name, fields in operators.items()) or "none",
        )
        return operators

    def prepare_replacement(self, replacement: Mapping[str, Any]) -> dict[str, Any]:
        """Return a full replacement document; the identifier is left to the store."""
        self._reject_identifier(replacement)
        parsed = self.parse(replacement, excluded_paths=[self._settings.identifier_field])
        return dict(strip_missing_fields(parsed))

    def prepare_fetched(self, document: Mapping[str, Any] | None) -> dict[str, Any] | None:
        """Return a fetched document ready for callers, checked when ``check_on_get`` is set."""
        if document is None:
            return None
        if self.check_on_get:
            document = self.parse(document)
        return self.hide_fields(document)

    def _prepare_one_insert(self, document: Mapping[str, Any]) -> dict[str, Any]:
        return dict(strip_missing_fields(self.parse(document)))

    def _schema_for(
        self,
        data: Mapping[str, Any],
        *,
        partial: bool,
        excluded_paths: Sequence[str] | None,
    ) -> ObjectSchema:
        if partial:
            schema = narrow_by_data(self._schema, data)
            _LOGGER.debug(
                "Narrowed schema for model '%s' to fields: %s", self._name, ", ".join(schema.fields)
            )
            return schema
        if excluded_paths:
            return narrow_by_paths(self._schema, excluded_paths, self._settings)
        return self._schema

    def _hide_in(self, document: Any, paths: tuple[str, ...]) -> Any:
        hidden = clone_value(document)
        for path in paths:
            delete_data_field(hidden, path, self._settings)
        return hidden

    def _reject_identifier(self, payload: Mapping[str, Any]) -> None:
        if self._settings.identifier_field in payload:
            raise IdentifierNotAllowedError(self._settings.identifier_field)
