"""Core types shared by the form engine and its collaborators."""

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DataSource(Protocol):
    """Key-value store the engine reads field values from and writes to.

    Paths are dotted strings (``"name.first"``). The embedding application
    decides what backs the store.
    """

    def get(self, path: str) -> Any:
        """Return the value at ``path``, or None when it is absent."""
        ...

    def set(self, path: str, value: Any) -> None:
        """Store ``value`` at ``path``."""
        ...


@dataclass
class ErrorEntry:
    """Validation outcome for one failing field.

    Only flags that are set are part of the rendering contract; see
    ``to_dict``.
    """

    key: str
    missing: bool = False
    invalid: bool = False
    mismatch: bool = False

    @property
    def flags(self) -> list[str]:
        return [
            name
            for name in ("missing", "invalid", "mismatch")
            if getattr(self, name)
        ]

    def __bool__(self) -> bool:
        return bool(self.flags)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"key": self.key}
        for name in self.flags:
            result[name] = True
        return result


@dataclass
class FormValidationResult:
    """Result of a validation pass.

    Attributes:
        ok: True if no selected field failed
        errors: Failing entries in field order, or None when there are none
    """

    ok: bool
    errors: list[ErrorEntry] | None = None

    def __iter__(self):
        # Allows ``ok, errors = engine.validate_fields()``
        return iter((self.ok, self.errors))

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "errors": [e.to_dict() for e in self.errors] if self.errors else None,
        }
