"""The form engine: field selection, validation and formatting.

Usage:
    engine = FormEngine(
        fields={
            "name": {"first": {"type": "String"}, "last": {"type": "String"}},
            "email": {"type": "Email", "required": True},
            "color": {"type": "HexColor", "format": "HexColor"},
        },
        source={"email": "ada@example.com", "color": "2572eb"},
    )
    engine.format_fields()
    ok, errors = engine.validate_fields()
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from formforge.datasource import as_data_source
from formforge.errors import SchemaError
from formforge.formatters import FormatterRegistry
from formforge.schema import FieldDefinition, build_field_table
from formforge.settings import EngineSettings
from formforge.types import DataSource, ErrorEntry, FormValidationResult
from formforge.validators import ValidatorRegistry

logger = logging.getLogger(__name__)


def is_null(value: Any) -> bool:
    """Null sentinels for required checks: None and the empty string.

    ``0`` and ``False`` are values, not absences.
    """
    return value is None or (isinstance(value, str) and value == "")


class FormEngine:
    """Validates and formats the fields of one form.

    The engine owns the flattened field table and the current error set.
    Field values live in an external data source; the engine only reads and
    writes dotted paths into it.

    Assigning ``fields`` or ``defaults`` rebuilds the field table. Hosts
    that mutate the schema mapping in place must call
    ``on_schema_changed()`` afterwards.
    """

    def __init__(
        self,
        fields: Mapping[str, Any] | None = None,
        source: Any = None,
        defaults: Mapping[str, Any] | None = None,
        settings: EngineSettings | None = None,
    ):
        self.source: DataSource = as_data_source(source)
        self.settings = settings or EngineSettings()
        self.errors: list[ErrorEntry] | None = None
        self._fields: Mapping[str, Any] = fields or {}
        self._defaults: Mapping[str, Any] = defaults or {}
        self._table: dict[str, FieldDefinition] = {}
        self.on_schema_changed()

    # -------------------------------------------------------------------------
    # Schema
    # -------------------------------------------------------------------------

    @property
    def fields(self) -> Mapping[str, Any]:
        return self._fields

    @fields.setter
    def fields(self, fields: Mapping[str, Any]) -> None:
        self._fields = fields or {}
        self.on_schema_changed()

    @property
    def defaults(self) -> Mapping[str, Any]:
        return self._defaults

    @defaults.setter
    def defaults(self, defaults: Mapping[str, Any]) -> None:
        self._defaults = defaults or {}
        self.on_schema_changed()

    @property
    def field_table(self) -> dict[str, FieldDefinition]:
        """The flattened schema, keyed by dotted path."""
        return self._table

    def on_schema_changed(self) -> None:
        """Rebuild the field table from the current schema and defaults."""
        self._table = build_field_table(self._fields, self._defaults)
        logger.debug("Flattened form schema into %d field(s)", len(self._table))

    def select_fields(self, *names: str | Iterable[str]) -> dict[str, FieldDefinition]:
        """Return the fields to process.

        No argument selects every field. Otherwise names may be passed
        individually or as one iterable; unknown names are ignored.
        """
        if not names:
            return dict(self._table)

        if len(names) == 1 and not isinstance(names[0], str):
            requested = list(names[0])
        else:
            requested = list(names)

        selected: dict[str, FieldDefinition] = {}
        for name in requested:
            if name in self._table and name not in selected:
                selected[name] = self._table[name]
        return selected

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate_fields(self, *names: str | Iterable[str]) -> FormValidationResult:
        """Validate the selected fields and rebuild ``errors``.

        Returns:
            FormValidationResult with ``ok`` and the error entries (None when
            every selected field passed).

        Raises:
            SchemaError: If a field's validator is malformed.
        """
        entries: list[ErrorEntry] = []
        for key, field in self.select_fields(*names).items():
            try:
                entry = self._evaluate(key, field)
            except SchemaError as exc:
                raise SchemaError(f"Field '{key}': {exc}") from exc
            if entry:
                entries.append(entry)

        self.errors = entries or None
        return FormValidationResult(ok=not entries, errors=self.errors)

    def _evaluate(self, key: str, field: FieldDefinition) -> ErrorEntry:
        field.reset(self.source.get(key))
        value = field.value

        if field.type and (
            self.settings.validate_empty_optional or field.required or value
        ):
            field.valid = bool(ValidatorRegistry.invoke(field.type, value))

        if field.required and is_null(value):
            field.missing = True
        if field.not_null and not value:
            field.missing = True

        if field.match and value != self.source.get(field.match):
            field.mismatch = True
        if field.has_equal and value != field.equal:
            field.mismatch = True

        entry = ErrorEntry(key=key)
        if field.missing:
            entry.missing = True
        elif not field.valid:
            relaxed = self.settings.relaxed_optional and not field.required and not value
            entry.invalid = not relaxed
        if field.mismatch:
            entry.invalid = True
            entry.mismatch = True
        return entry

    # -------------------------------------------------------------------------
    # Formatting
    # -------------------------------------------------------------------------

    def format_fields(self, *names: str | Iterable[str]) -> None:
        """Apply each selected field's formatter and write the result back.

        Raises:
            SchemaError: If a field names its formatter with a non-string.
        """
        for key, field in self.select_fields(*names).items():
            if not field.format:
                continue
            try:
                formatter = FormatterRegistry.resolve(field.format)
            except SchemaError as exc:
                raise SchemaError(f"Field '{key}': {exc}") from exc
            value = formatter(self.source.get(key))
            self.source.set(key, value)
            field.value = value
