# utils/parsing.py

import re
from typing import Any

# leading numeric prefix, same acceptance rules as a browser's parseFloat
_FLOAT_PREFIX = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")
_INT_PREFIX = re.compile(r"^\s*[+-]?\d+")


def parse_float(value: Any) -> float:
    """
    Lenient float parsing for form input.

    "12.5" -> 12.5, "12abc" -> 12.0, "" / None / "abc" -> 0.0
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value) if value == value else 0.0

    match = _FLOAT_PREFIX.match(str(value))
    if not match:
        return 0.0
    return float(match.group(0))


def parse_int(value: Any) -> int:
    """
    Lenient integer parsing; fractional parts are truncated ("10.7" -> 10).
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, float):
        return int(value) if value == value else 0
    if isinstance(value, int):
        return value

    match = _INT_PREFIX.match(str(value))
    if not match:
        return 0
    return int(match.group(0))


def to_display_str(value: Any) -> str:
    """
    Text shown in an input box for a stored numeric value. Zero and missing
    values render as an empty box.
    """
    if value is None or value == "" or value == 0:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
