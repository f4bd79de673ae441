"""Calendar-date primitives.

All dates are timezone-naive civil dates (:class:`datetime.date`).  Text
crosses the boundary in a fixed ``YYYY-MM-DD`` form only.
"""

from __future__ import annotations

import re
from datetime import date, timedelta
from enum import Enum

from cyclekit.engine.errors import InvalidDateFormat


# Strict shape check; date.fromisoformat() also accepts "20240101" on 3.11+
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class DateOrder(str, Enum):
    before = "before"
    same = "same"
    after = "after"


def parse_date(text: str) -> date:
    """Parse ``YYYY-MM-DD`` text into a date.

    Args:
        text: Date string, e.g. ``"2024-01-01"``.

    Returns:
        The parsed date.

    Raises:
        InvalidDateFormat: If the text does not match the pattern or is not
            a real calendar date (e.g. ``"2024-02-30"``).
    """
    if not isinstance(text, str) or not _DATE_RE.match(text):
        raise InvalidDateFormat(text)
    try:
        return date.fromisoformat(text)
    except ValueError as exc:
        raise InvalidDateFormat(text) from exc


def format_date(value: date) -> str:
    """Format a date as ``YYYY-MM-DD``."""
    return value.isoformat()


def add_days(value: date, n: int) -> date:
    """Return ``value`` shifted by ``n`` whole days (``n`` may be negative).

    Raises OverflowError when the result falls outside ``date.min``..``date.max``.
    """
    return value + timedelta(days=n)


def days_between(a: date, b: date) -> int:
    """Return ``b - a`` in whole days; negative when ``b`` is before ``a``."""
    return (b - a).days


def compare_dates(a: date, b: date) -> DateOrder:
    """Return where ``a`` sits relative to ``b``."""
    if a < b:
        return DateOrder.before
    if a > b:
        return DateOrder.after
    return DateOrder.same
