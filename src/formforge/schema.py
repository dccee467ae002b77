"""Form schema flattening.

A schema maps field names either to a field definition or to a nested
schema ("container"). Flattening walks containers and re-keys their
children with dotted paths:

    {"name": {"first": {"type": "String"}, "last": {"type": "String"}},
     "email": {"type": "Email", "required": True}}

becomes ``name.first``, ``name.last`` and ``email``. A mapping is a
container only when at least one of its values is itself a mapping, so a
leaf definition's own properties are never flattened.
"""

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

UNSET: Any = object()

# Schema keys consumed by FieldDefinition; everything else is pass-through.
_KNOWN_KEYS = {"type", "format", "required", "notNull", "not_null", "match", "equal", "value"}


def _contains_mapping(node: Mapping) -> bool:
    return any(isinstance(value, Mapping) for value in node.values())


def flatten_schema(schema: Mapping[str, Any]) -> dict[str, Any]:
    """Flatten a nested schema into ``{dotted_path: leaf}``.

    Leaves are returned as-is (definitions or bare scalars). Flattening an
    already-flat schema returns an equal mapping.
    """
    flat: dict[str, Any] = {}
    for key, value in schema.items():
        if isinstance(value, Mapping) and _contains_mapping(value):
            for sub_key, sub_value in flatten_schema(value).items():
                flat[f"{key}.{sub_key}"] = sub_value
        else:
            flat[key] = value
    return flat


@dataclass
class FieldDefinition:
    """One leaf of the flattened schema.

    Attributes:
        key: Dotted path of the field in the data source
        type: Validator name (None means no type check)
        format: Formatter name (None means no formatting)
        required: Value must not be a null sentinel ("" or None)
        not_null: Value must be truthy
        match: Dotted path of another field whose value must be equal
        equal: Literal the value must equal (``UNSET`` when not declared)
        options: Pass-through properties (schema defaults included)

    ``value``, ``valid``, ``missing`` and ``mismatch`` are recomputed on
    every validation pass.
    """

    key: str
    type: str | None = None
    format: str | None = None
    required: bool = False
    not_null: bool = False
    match: str | None = None
    equal: Any = UNSET
    options: dict[str, Any] = field(default_factory=dict)

    value: Any = None
    valid: bool = True
    missing: bool = False
    mismatch: bool = False

    @property
    def has_equal(self) -> bool:
        return self.equal is not UNSET

    def reset(self, value: Any) -> None:
        """Start a new validation pass for ``value``."""
        self.value = value
        self.valid = True
        self.missing = False
        self.mismatch = False

    @classmethod
    def from_dict(cls, key: str, data: Mapping[str, Any]) -> "FieldDefinition":
        """Create a FieldDefinition from a (merged) schema leaf."""
        return cls(
            key=key,
            type=data.get("type") or None,
            format=data.get("format") or None,
            required=bool(data.get("required", False)),
            not_null=bool(data.get("notNull", data.get("not_null", False))),
            match=data.get("match") or None,
            equal=data["equal"] if "equal" in data else UNSET,
            options={k: v for k, v in data.items() if k not in _KNOWN_KEYS},
            value=data.get("value"),
        )


def build_field_table(
    schema: Mapping[str, Any],
    defaults: Mapping[str, Any] | None = None,
) -> dict[str, FieldDefinition]:
    """Flatten ``schema`` and merge every leaf with ``defaults``.

    Bare scalar leaves become ``{"value": scalar}``. Explicit field
    properties take precedence over defaults. The schema is deep-copied, so
    later mutations of the caller's mapping never leak into the table.
    """
    defaults = dict(defaults or {})
    table: dict[str, FieldDefinition] = {}
    for key, leaf in flatten_schema(copy.deepcopy(schema)).items():
        properties = dict(leaf) if isinstance(leaf, Mapping) else {"value": leaf}
        table[key] = FieldDefinition.from_dict(key, {**defaults, **properties})
    return table
