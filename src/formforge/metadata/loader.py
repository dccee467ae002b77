"""Load form schemas from YAML (or JSON) files."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from formforge.engine import FormEngine
from formforge.errors import SchemaLoadError
from formforge.settings import EngineSettings

SCHEMA_SUFFIXES = (".yaml", ".yml", ".json")


@dataclass
class FormSchema:
    """A form schema document.

    Attributes:
        name: Form name (``form:`` key, or the file stem)
        fields: Nested field schema
        defaults: Properties merged into every field
        path: File the schema was loaded from, if any
    """

    name: str
    fields: dict[str, Any]
    defaults: dict[str, Any] = field(default_factory=dict)
    path: Path | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], name: str = "", path: Path | None = None) -> "FormSchema":
        """Create FormSchema from a parsed YAML/JSON document."""
        return cls(
            name=data.get("form") or name,
            fields=data.get("fields") or {},
            defaults=data.get("defaults") or {},
            path=path,
        )

    def create_engine(self, source: Any = None, settings: EngineSettings | None = None) -> FormEngine:
        """Build a FormEngine for this schema over ``source``."""
        return FormEngine(
            fields=self.fields,
            source=source,
            defaults=self.defaults,
            settings=settings,
        )


def read_document(path: Path) -> Any:
    """Parse a YAML/JSON file, raising SchemaLoadError on failure."""
    try:
        with open(path, encoding="utf-8") as f:
            return yaml.safe_load(f)
    except OSError as exc:
        raise SchemaLoadError(f"Cannot read {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise SchemaLoadError(f"YAML parse error in {path}: {exc}") from exc


def load_form_file(path: Path) -> FormSchema:
    """Load a single form schema file."""
    data = read_document(path)
    if not isinstance(data, dict) or "fields" not in data:
        raise SchemaLoadError(f"{path} is not a form schema (missing 'fields')")
    if not isinstance(data["fields"], dict):
        raise SchemaLoadError(f"{path}: 'fields' must be a mapping")
    return FormSchema.from_dict(data, name=path.stem, path=path)


class FormSchemaLoader:
    """Loads every form schema found in a directory."""

    def __init__(self, schema_path: Path):
        self.schema_path = schema_path
        self.forms: dict[str, FormSchema] = {}

    def load_all(self) -> None:
        """Load all schema files, keyed by form name."""
        if not self.schema_path.exists():
            return

        for schema_file in sorted(self.schema_path.iterdir()):
            if schema_file.suffix not in SCHEMA_SUFFIXES:
                continue
            form = load_form_file(schema_file)
            if form.name in self.forms:
                raise SchemaLoadError(
                    f"Duplicate form '{form.name}' defined in "
                    f"'{self.forms[form.name].path}' and '{schema_file}'"
                )
            self.forms[form.name] = form

    def get_form(self, name: str) -> FormSchema | None:
        return self.forms.get(name)

    def list_forms(self) -> list[str]:
        return sorted(self.forms.keys())
