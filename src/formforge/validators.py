"""Built-in validators and the validator registry.

A validator is any single-argument predicate ``(value) -> bool``, or an
object exposing ``validate(value) -> bool``. The built-in set:

- Blank: always valid (also the fallback for unknown names)
- Integer, Float: numbers, or strings with a leading number ("12abc" is an Integer)
- String: runtime type is exactly ``str``
- Date: date/datetime objects, finite timestamps, parseable date strings
- Hexadecimal, Email, Phone, Url, HexColor, UrlChars: string + pattern

Usage:
    from formforge.validators import ValidatorRegistry, RegExpValidator

    ValidatorRegistry.register("ZipCode", RegExpValidator(r"^\\d{5}$"))
    ValidatorRegistry.invoke("zip_code", "75001")  # True
"""

import math
import re
from dataclasses import dataclass
from datetime import date
from typing import Any

from dateutil import parser as date_parser

from formforge.errors import SchemaError
from formforge.numeric import to_number
from formforge.registry import NamedRegistry


# =============================================================================
# Patterns
# =============================================================================

HEXADECIMAL_PATTERN = re.compile(r"^[0-9A-F]+$")

EMAIL_PATTERN = re.compile(r"^([a-z0-9_.-]+)@([\da-z.-]+)\.([a-z.]{2,6})$")

PHONE_PATTERN = re.compile(r"^\+?(?:[0-9] ?){6,14}[0-9]$")

URL_PATTERN = re.compile(r"^(https?://)?([\da-z.-]+)\.([a-z.]{2,6})([/\w .-]*)/?$")

HEX_COLOR_PATTERN = re.compile(r"^#([a-f0-9]{6}|[a-f0-9]{3})$")

URL_CHARS_PATTERN = re.compile(r"\w*", re.ASCII)


# =============================================================================
# Predicates
# =============================================================================


def validate_blank(value: Any) -> bool:
    return True


def validate_integer(value: Any) -> bool:
    parsed = to_number(value)
    return parsed is not None and math.isfinite(parsed) and parsed.is_integer()


def validate_float(value: Any) -> bool:
    return to_number(value) is not None


def validate_string(value: Any) -> bool:
    return type(value) is str


def validate_date(value: Any) -> bool:
    """True for dates, finite epoch timestamps and parseable date strings."""
    if isinstance(value, date):
        return True
    if isinstance(value, bool) or value is None:
        return False
    if isinstance(value, (int, float)):
        return math.isfinite(value)
    if not isinstance(value, str) or not value.strip():
        return False
    try:
        date_parser.parse(value)
    except (ValueError, OverflowError):
        return False
    return True


@dataclass(frozen=True)
class RegExpValidator:
    """String validator that also requires a full pattern match.

    Non-strings are rejected before the pattern is consulted. A validator
    built without a pattern raises ``SchemaError`` when used on a string.
    """

    pattern: re.Pattern | str | None = None

    def validate(self, value: Any) -> bool:
        if not validate_string(value):
            return False
        if self.pattern is None:
            raise SchemaError("Validator must contain a 'pattern' property")
        return re.fullmatch(self.pattern, value) is not None


hexadecimal = RegExpValidator(HEXADECIMAL_PATTERN)
email = RegExpValidator(EMAIL_PATTERN)
phone = RegExpValidator(PHONE_PATTERN)
url = RegExpValidator(URL_PATTERN)
hex_color = RegExpValidator(HEX_COLOR_PATTERN)
url_chars = RegExpValidator(URL_CHARS_PATTERN)


def validate_hexadecimal(value: Any) -> bool:
    return hexadecimal.validate(value)


# =============================================================================
# Registry
# =============================================================================


class ValidatorRegistry(NamedRegistry):
    """Process-wide registry of validators.

    Example:
        ValidatorRegistry.register("Even", lambda value: int(value) % 2 == 0)
        ValidatorRegistry.invoke("even", "4")  # True
        ValidatorRegistry.invoke("unknown", None)  # True (Blank)
    """

    kind = "validator"
    method = "validate"
    default = staticmethod(validate_blank)

    _entries = {}
    _names = {}


BUILTIN_VALIDATORS: dict[str, Any] = {
    "Blank": validate_blank,
    "Integer": validate_integer,
    "Float": validate_float,
    "String": validate_string,
    "Date": validate_date,
    "Hexadecimal": hexadecimal,
    "Email": email,
    "Phone": phone,
    "Url": url,
    "HexColor": hex_color,
    "UrlChars": url_chars,
}


def register_builtin_validators() -> None:
    """Register the built-in validators. Safe to call more than once."""
    for name, definition in BUILTIN_VALIDATORS.items():
        if not ValidatorRegistry.is_registered(name):
            ValidatorRegistry.register(name, definition)


register_builtin_validators()
