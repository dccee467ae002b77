"""Name-based registries for validators and formatters.

Both registries share the same contract:

- ``resolve(name)`` canonicalizes the name and returns the registered
  callable, or the registry's Blank default for unknown names.
- ``register(name, definition)`` adds a new entry. Names can never be
  overridden; a failed registration leaves the registry unchanged.
- ``invoke(name, value)`` resolves and calls in one step.

Registries are process-wide. Register custom entries during application
setup, before concurrent reads begin.
"""

import inspect
import logging
import re
from typing import Any, Callable

from formforge.errors import BadDefinitionError, DuplicateNameError, RegistrationError, SchemaError

logger = logging.getLogger(__name__)

_NAME_SEPARATORS = re.compile(r"[\s_\-.]+")


def canonical_name(name: str) -> str:
    """Return the canonical (classified) form of a registry name.

    ``"hex_color"``, ``"hex-color"`` and ``"hexColor"`` all become
    ``"HexColor"``.
    """
    parts = [part for part in _NAME_SEPARATORS.split(name.strip()) if part]
    return "".join(part[0].upper() + part[1:] for part in parts)


def _lookup_key(name: str) -> str:
    return canonical_name(name).casefold()


class NamedRegistry:
    """Shared behaviour of ``ValidatorRegistry`` and ``FormatterRegistry``.

    Subclasses set ``kind`` (used in messages), ``method`` (the method name
    accepted on definition objects), ``default`` (the Blank entry), and their
    own ``_entries`` / ``_names`` dictionaries.
    """

    kind: str = "entry"
    method: str = "__call__"
    default: Callable[[Any], Any]

    # lookup key -> callable
    _entries: dict[str, Callable[[Any], Any]] = {}
    # lookup key -> canonical display name
    _names: dict[str, str] = {}

    @classmethod
    def register(cls, name: str, definition: Any) -> None:
        """Register a validator/formatter under ``name``.

        ``definition`` may be a single-argument callable, an object with a
        callable ``validate``/``format`` method, or a class providing that
        method (it is instantiated once).

        Raises:
            DuplicateNameError: If the canonical name is already registered.
            BadDefinitionError: If the definition has no usable callable.
        """
        if not isinstance(name, str) or not canonical_name(name):
            raise RegistrationError(f"A {cls.kind} name must be a non-empty string")

        display_name = canonical_name(name)
        key = display_name.casefold()
        if key in cls._entries:
            raise DuplicateNameError(cls.kind, display_name)

        fn = cls._coerce(display_name, definition)
        cls._entries[key] = fn
        cls._names[key] = display_name

    @classmethod
    def _provides_method(cls, definition: Any) -> bool:
        """True when ``definition`` implements ``cls.method`` outside the builtins."""
        if not isinstance(definition, type) and cls.method in getattr(definition, "__dict__", {}):
            return True
        klass = definition if isinstance(definition, type) else type(definition)
        return any(
            cls.method in vars(base)
            for base in klass.__mro__
            if base.__module__ != "builtins"
        )

    @classmethod
    def _coerce(cls, name: str, definition: Any) -> Callable[[Any], Any]:
        if definition is None:
            raise BadDefinitionError(cls.kind, name, cls.method)

        # Builtin types (str.format) are called directly, not instantiated.
        provides = cls._provides_method(definition)
        if provides and isinstance(definition, type):
            fn = getattr(definition(), cls.method)
        elif provides:
            fn = getattr(definition, cls.method)
        elif callable(definition):
            fn = definition
        else:
            raise BadDefinitionError(cls.kind, name, cls.method)

        try:
            inspect.signature(fn).bind(None)
        except TypeError:
            raise BadDefinitionError(cls.kind, name, cls.method) from None
        except ValueError:
            # No introspectable signature (some builtins); accept as-is.
            pass
        return fn

    @classmethod
    def resolve(cls, name: str | None) -> Callable[[Any], Any]:
        """Return the callable registered under ``name``, or the Blank default.

        Raises:
            SchemaError: If ``name`` is set but is not a string.
        """
        if not name:
            return cls.default
        if not isinstance(name, str):
            raise SchemaError(f"A {cls.kind} name must be a string, got {name!r}")
        fn = cls._entries.get(_lookup_key(name))
        if fn is None:
            logger.debug("Unknown %s '%s', falling back to Blank", cls.kind, name)
            return cls.default
        return fn

    @classmethod
    def invoke(cls, name: str | None, value: Any) -> Any:
        """Resolve ``name`` and apply it to ``value``."""
        return cls.resolve(name)(value)

    @classmethod
    def is_registered(cls, name: str) -> bool:
        """Check if a name is registered (after canonicalization)."""
        return _lookup_key(name) in cls._entries

    @classmethod
    def list_registered(cls) -> list[str]:
        """List all registered canonical names."""
        return sorted(cls._names.values())

    @classmethod
    def clear(cls) -> None:
        """Clear all registrations, built-ins included. Primarily for testing."""
        cls._entries.clear()
        cls._names.clear()
