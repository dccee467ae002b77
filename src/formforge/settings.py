"""Engine configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class EngineSettings:
    """Policies for the validation pass.

    Attributes:
        validate_empty_optional: Run the type validator on optional fields
            even when their value is empty. Off by default: an empty optional
            field is never type-checked.
        relaxed_optional: When type validation does run on an empty optional
            field and fails, leave the field out of the error set instead of
            flagging it ``invalid``.
    """

    validate_empty_optional: bool = False
    relaxed_optional: bool = True

    @classmethod
    def from_env(cls) -> EngineSettings:
        """Create settings from environment variables.

        - FORMFORGE_VALIDATE_EMPTY_OPTIONAL (default: false)
        - FORMFORGE_RELAXED_OPTIONAL (default: true)
        """
        return cls(
            validate_empty_optional=_env_flag("FORMFORGE_VALIDATE_EMPTY_OPTIONAL", False),
            relaxed_optional=_env_flag("FORMFORGE_RELAXED_OPTIONAL", True),
        )


def default_schema_path() -> Path:
    """Directory holding form schema files (FORMFORGE_SCHEMA_PATH or ./forms)."""
    configured = os.environ.get("FORMFORGE_SCHEMA_PATH")
    if configured:
        return Path(configured)
    return Path.cwd() / "forms"
