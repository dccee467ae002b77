"""Leading-number parsing shared by the numeric validators and formatters.

Both parsers read the longest numeric prefix of ``str(value)`` after leading
whitespace, so ``"12abc"`` gives ``12`` and ``"3.5kg"`` gives ``3.5``. Only
ASCII digits count.
"""

import math
import re
from typing import Any

_INT_PREFIX = re.compile(r"[+-]?\d+", re.ASCII)
_FLOAT_PREFIX = re.compile(
    r"[+-]?(?:Infinity|\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?)",
    re.ASCII,
)


def parse_int_prefix(value: Any) -> int | None:
    """Parse the leading base-10 integer of ``str(value)``.

    ``"12abc"`` gives ``12``; ``"abc"`` gives ``None``.
    """
    match = _INT_PREFIX.match(str(value).lstrip())
    return int(match.group(0)) if match else None


def parse_float_prefix(value: Any) -> float | None:
    """Parse the leading decimal number of ``str(value)``, or return None."""
    match = _FLOAT_PREFIX.match(str(value).lstrip())
    if not match:
        return None
    return float(match.group(0).replace("Infinity", "inf"))


def to_number(value: Any) -> float | None:
    """Read ``value`` as a float the way the numeric validators see it.

    Numbers are taken as-is, anything else goes through
    :func:`parse_float_prefix`. Bools, None and NaN give None.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    parsed = float(value) if isinstance(value, float) else parse_float_prefix(value)
    if parsed is None or math.isnan(parsed):
        return None
    return parsed


def is_falsy(value: Any) -> bool:
    """Falsy test that also treats NaN as empty."""
    return not value or (isinstance(value, float) and math.isnan(value))
