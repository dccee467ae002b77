"""formforge: declarative field validation and formatting for forms.

A form is described by a (possibly nested) schema of fields. The engine
flattens it into dotted paths, reads each field's value from a data source,
and checks it against the declared rules:

- type: a named validator (Integer, Email, HexColor, ...)
- required / notNull: missing-value checks
- match / equal: equality against another field or a literal
- format: a named formatter applied by ``format_fields``

Usage:
    from formforge import FormEngine, ValidatorRegistry

    engine = FormEngine(
        fields={"password": {"required": True},
                "passwordConfirm": {"match": "password"}},
        source={"password": "s3cret", "passwordConfirm": "s3cret"},
    )
    ok, errors = engine.validate_fields()
"""

from formforge.datasource import PathDataSource, as_data_source
from formforge.engine import FormEngine, is_null
from formforge.errors import (
    BadDefinitionError,
    DataSourceError,
    DuplicateNameError,
    FormForgeError,
    RegistrationError,
    SchemaError,
    SchemaLoadError,
)
from formforge.formatters import FormatterRegistry, register_builtin_formatters
from formforge.latinize import latinize
from formforge.registry import canonical_name
from formforge.schema import FieldDefinition, build_field_table, flatten_schema
from formforge.settings import EngineSettings
from formforge.types import DataSource, ErrorEntry, FormValidationResult
from formforge.validators import (
    RegExpValidator,
    ValidatorRegistry,
    register_builtin_validators,
)

__all__ = [
    # Engine
    "FormEngine",
    "EngineSettings",
    "is_null",
    # Types
    "DataSource",
    "ErrorEntry",
    "FieldDefinition",
    "FormValidationResult",
    "PathDataSource",
    "as_data_source",
    # Schema
    "build_field_table",
    "flatten_schema",
    # Registries
    "FormatterRegistry",
    "RegExpValidator",
    "ValidatorRegistry",
    "canonical_name",
    "register_builtin_formatters",
    "register_builtin_validators",
    # Text
    "latinize",
    # Errors
    "BadDefinitionError",
    "DataSourceError",
    "DuplicateNameError",
    "FormForgeError",
    "RegistrationError",
    "SchemaError",
    "SchemaLoadError",
]
