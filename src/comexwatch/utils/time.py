"""Calendar-date helpers.

All record dates are calendar dates. A stored value such as ``2024-05-01`` or
``2024-05-01T00:00:00Z`` always means 1 May 2024, independent of the local
time zone of the process reading it.
"""

import re
from datetime import date, datetime, timezone
from typing import Optional

# Bare date, or a date followed by a time part ("T09:30:00Z", " 09:30")
_ISO_DATE = re.compile(r"(\d{4}-\d{2}-\d{2})(?:[T ]\d{2}:\d{2}\S*)?")


def today_utc() -> date:
    """Current calendar date in UTC."""
    return datetime.now(timezone.utc).date()


def resolve_today(value: Optional[date] = None) -> date:
    """Reference date for a run: the given day with any time part dropped, else today in UTC."""
    if value is None:
        return today_utc()
    if isinstance(value, datetime):
        return value.date()
    return value


def parse_calendar_date(value: object) -> Optional[date]:
    """
    Parse a stored calendar date.

    Accepts ``date``/``datetime`` objects and ISO strings with an optional
    time part. Only the ``YYYY-MM-DD`` part of a string is used; anything
    other than a time after it makes the value unparseable.

    Returns:
        The date, or None if the value is empty or cannot be parsed.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    match = _ISO_DATE.fullmatch(text)
    if match is None:
        return None
    try:
        return datetime.strptime(match.group(1), "%Y-%m-%d").date()
    except ValueError:
        return None


def days_between(start: date, end: date) -> int:
    """Whole days from ``start`` to ``end`` (negative when ``end`` is earlier)."""
    return (end - start).days
