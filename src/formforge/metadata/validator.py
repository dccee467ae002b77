"""
metadata/validator.py: structural and semantic checks for form schema files.

Two passes per file:

1. JSON Schema (``schemas/form.schema.json``): document shape and the types
   of the known field properties.
2. Lint over the flattened field table: ``type``/``format`` names that are
   not registered (they would silently fall back to Blank) and ``match``
   targets that name no field.

Usage:
    from formforge.metadata.validator import validate_schema_dir

    for issue in validate_schema_dir(Path("forms")):
        print(issue)
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

from formforge.errors import SchemaLoadError
from formforge.formatters import FormatterRegistry
from formforge.metadata.loader import SCHEMA_SUFFIXES, read_document
from formforge.schema import FieldDefinition, build_field_table
from formforge.validators import ValidatorRegistry

logger = logging.getLogger(__name__)

_SCHEMAS_DIR = Path(__file__).parent / "schemas"
FORM_SCHEMA = "form.schema.json"


@dataclass
class ValidationIssue:
    """A single finding for a form schema file."""

    file: Path
    message: str
    path: str = ""           # location within the document, e.g. "fields/email/required"
    severity: str = "error"  # "error" | "warning"

    def __str__(self) -> str:
        loc = f" at {self.path}" if self.path else ""
        return f"[{self.severity.upper()}] {self.file}{loc}: {self.message}"


@lru_cache(maxsize=None)
def _form_validator() -> Draft202012Validator:
    with (_SCHEMAS_DIR / FORM_SCHEMA).open() as fh:
        schema = json.load(fh)
    return Draft202012Validator(schema)


def _json_path(error: ValidationError) -> str:
    return "/".join(str(p) for p in error.absolute_path)


def lint_field_table(
    table: dict[str, FieldDefinition],
    file: Path,
) -> list[ValidationIssue]:
    """Report references the engine would resolve silently."""
    issues: list[ValidationIssue] = []
    for key, field in table.items():
        if field.type and not ValidatorRegistry.is_registered(field.type):
            issues.append(ValidationIssue(
                file=file,
                path=f"fields/{key}/type",
                message=f"Unknown validator '{field.type}' (falls back to Blank)",
                severity="warning",
            ))
        if field.format and not FormatterRegistry.is_registered(field.format):
            issues.append(ValidationIssue(
                file=file,
                path=f"fields/{key}/format",
                message=f"Unknown formatter '{field.format}' (falls back to Blank)",
                severity="warning",
            ))
        if field.match and field.match not in table:
            issues.append(ValidationIssue(
                file=file,
                path=f"fields/{key}/match",
                message=f"'match' refers to unknown field '{field.match}'",
                severity="warning",
            ))
    return issues


def validate_schema_document(doc: Any, file: Path) -> list[ValidationIssue]:
    """Validate an already-parsed form schema document."""
    if doc is None:
        return [ValidationIssue(file=file, message="File is empty or contains only whitespace")]

    issues = [
        ValidationIssue(file=file, message=error.message, path=_json_path(error))
        for error in sorted(_form_validator().iter_errors(doc), key=lambda e: list(map(str, e.path)))
    ]
    if issues:
        return issues

    table = build_field_table(doc["fields"], doc.get("defaults"))
    return lint_field_table(table, file)


def validate_schema_file(path: Path) -> list[ValidationIssue]:
    """
    Validate a single form schema file.

    Returns:
        A list of :class:`ValidationIssue` objects (empty on success).
    """
    try:
        doc = read_document(path)
    except SchemaLoadError as exc:
        return [ValidationIssue(file=path, message=str(exc))]
    return validate_schema_document(doc, path)


def validate_schema_dir(
    schema_dir: Path,
    *,
    strict: bool = False,
) -> list[ValidationIssue]:
    """
    Validate every form schema file directly under *schema_dir*.

    Args:
        schema_dir: Directory containing ``.yaml`` / ``.yml`` / ``.json`` files.
        strict:     If ``True``, warnings are escalated to errors.

    Returns:
        A flat list of :class:`ValidationIssue` objects across all files.
    """
    if not schema_dir.is_dir():
        return [
            ValidationIssue(
                file=schema_dir,
                message=f"Schema directory does not exist: {schema_dir}",
            )
        ]

    all_issues: list[ValidationIssue] = []
    for schema_file in sorted(schema_dir.iterdir()):
        if schema_file.suffix not in SCHEMA_SUFFIXES:
            continue
        file_issues = validate_schema_file(schema_file)
        if strict:
            for issue in file_issues:
                if issue.severity == "warning":
                    issue.severity = "error"
        all_issues.extend(file_issues)

    for issue in all_issues:
        if issue.severity == "warning":
            logger.warning("Form schema warning: %s", issue)
    return all_issues
