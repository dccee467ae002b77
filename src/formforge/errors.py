"""Exception types for formforge.

Validation failures are not exceptions: they are reported through
``ErrorEntry`` objects on the engine. The errors below are developer-time
problems (bad registrations, malformed schemas, unusable data sources).
"""


class FormForgeError(Exception):
    """Base class for all formforge errors."""


class SchemaError(FormForgeError):
    """A field or validator definition is malformed.

    Raised at validation time, e.g. when a pattern validator was registered
    without a pattern.
    """


class SchemaLoadError(FormForgeError):
    """A form schema file could not be read or parsed."""


class RegistrationError(FormForgeError):
    """A validator or formatter could not be registered."""


class DuplicateNameError(RegistrationError):
    """The canonical name is already taken in the registry."""

    def __init__(self, kind: str, name: str):
        self.kind = kind
        self.name = name
        super().__init__(
            f"You cannot override {kind}s, please choose another name than '{name}'"
        )


class BadDefinitionError(RegistrationError):
    """The definition does not provide a usable single-argument callable."""

    def __init__(self, kind: str, name: str, method: str):
        self.kind = kind
        self.name = name
        self.method = method
        super().__init__(
            f"New {kind} '{name}' must be a single-argument callable "
            f"or implement a '{method}' method"
        )


class DataSourceError(FormForgeError):
    """A dotted path cannot be written into the data source."""
