"""Built-in formatters and the formatter registry.

A formatter is any single-argument transform ``(value) -> value``, or an
object exposing ``format(value)``. Formatters never raise on bad input:
when a value cannot be transformed it is returned unchanged.
"""

import re
from typing import Any

from formforge.latinize import latinize
from formforge.numeric import is_falsy, parse_float_prefix, parse_int_prefix
from formforge.registry import NamedRegistry
from formforge.validators import validate_hexadecimal

SLUG_SEPARATOR = "_"

_NON_WORD = re.compile(r"\W", re.ASCII)


def format_blank(value: Any) -> Any:
    return value


def format_string(value: Any) -> str:
    return "" if value is None else str(value)


def format_upper_case(value: Any) -> Any:
    return value if is_falsy(value) else format_string(value).upper()


def format_lower_case(value: Any) -> Any:
    return value if is_falsy(value) else format_string(value).lower()


def format_integer(value: Any) -> Any:
    if is_falsy(value):
        return 0
    if isinstance(value, bool):
        return value
    parsed = parse_int_prefix(value)
    return parsed if parsed is not None else value


def format_float(value: Any) -> Any:
    if is_falsy(value):
        return 0
    if isinstance(value, bool):
        return value
    parsed = parse_float_prefix(str(value).replace(",", ".", 1))
    return parsed if parsed is not None else value


def format_hex_color(value: Any) -> Any:
    """Prefix valid hexadecimal colors with ``#``.

    ``"2572EB"`` becomes ``"#2572EB"``; already-prefixed values and
    non-hexadecimal input are returned unchanged.
    """
    if is_falsy(value):
        return ""
    text = format_string(value)
    if text.startswith("#"):
        return value
    return "#" + text if validate_hexadecimal(text.upper()) else value


def format_url_chars(value: Any) -> Any:
    """Turn a string into a URL-safe slug (``"Crème brûlée"`` -> ``"creme_brulee"``)."""
    if not isinstance(value, str):
        return value
    slug = latinize(value).replace(" ", SLUG_SEPARATOR)
    return _NON_WORD.sub("", slug).lower()


class FormatterRegistry(NamedRegistry):
    """Process-wide registry of formatters.

    Example:
        FormatterRegistry.register("Trim", str.strip)
        FormatterRegistry.invoke("trim", "  a  ")  # "a"
        FormatterRegistry.invoke("unknown", 42)  # 42 (Blank)
    """

    kind = "formatter"
    method = "format"
    default = staticmethod(format_blank)

    _entries = {}
    _names = {}


BUILTIN_FORMATTERS: dict[str, Any] = {
    "Blank": format_blank,
    "String": format_string,
    "UpperCase": format_upper_case,
    "LowerCase": format_lower_case,
    "Integer": format_integer,
    "Float": format_float,
    "HexColor": format_hex_color,
    "UrlChars": format_url_chars,
}


def register_builtin_formatters() -> None:
    """Register the built-in formatters. Safe to call more than once."""
    for name, definition in BUILTIN_FORMATTERS.items():
        if not FormatterRegistry.is_registered(name):
            FormatterRegistry.register(name, definition)


register_builtin_formatters()
