from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Union

DateLike = Union[date, datetime, str]


def today_utc() -> date:
    """Return the current calendar date in UTC."""
    return datetime.now(timezone.utc).date()


def parse_rfc3339(value: str) -> datetime:
    """
    Parse RFC3339 timestamp string into tz-aware UTC datetime.

    Accepts strings like:
      - 2025-01-01T12:34:56Z
      - 2025-01-01T12:34:56.123Z
      - 2025-01-01T12:34:56+09:00
    """
    if not isinstance(value, str) or not value:
        raise ValueError("RFC3339 value must be a non-empty string")

    s = value.strip()
    # Python's fromisoformat doesn't accept 'Z' in 3.9/3.10, so normalize.
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"

    dt = datetime.fromisoformat(s)  # raises ValueError if invalid
    if dt.tzinfo is None:
        raise ValueError("naive datetime is not allowed; timezone-aware required")
    return dt.astimezone(timezone.utc)


def to_calendar_date(value: DateLike) -> date:
    """
    Convert a shoot date to a calendar date.

    - date: returned as-is.
    - datetime: tz-aware values are converted to UTC first; naive values are
      taken at face value.
    - str: "YYYY-MM-DD" or an RFC3339 timestamp.

    Raises:
        ValueError: if the string cannot be parsed.
        TypeError: for any other type.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        s = value.strip()
        if len(s) == 10:
            return date.fromisoformat(s)
        return parse_rfc3339(s).date()
    raise TypeError("shoot date must be a date, datetime or ISO-8601 string")
