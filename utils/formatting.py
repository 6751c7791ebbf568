# utils/formatting.py

from datetime import date, datetime
from typing import Any, Optional

from utils.parsing import parse_float


def format_rupee(n: Any) -> str:
    """
    Format an amount for display with the rupee sign and two decimals.
    Example: 1234567.5 -> "₹1,234,567.50"
    """
    return f"₹{parse_float(n):,.2f}"


def format_date(value: Any, fmt: str = "%d %b %Y") -> str:
    d = to_date(value)
    return d.strftime(fmt) if d else "-"


def to_date(value: Any) -> Optional[date]:
    """
    Reduce a date, datetime or ISO-8601 string to its calendar date.
    The time-of-day and any UTC offset are dropped, not converted.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def to_date_str(value: Any) -> str:
    d = to_date(value)
    return d.isoformat() if d else ""
