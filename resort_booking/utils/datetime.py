"""Date and time helpers shared by writers and the pricing calculator."""

from __future__ import annotations

from datetime import date, datetime, timezone
from math import ceil

SECONDS_PER_DAY = 24 * 60 * 60


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-aware datetime.

    Used for created_at/updated_at values written by the application so
    every stored timestamp carries tzinfo.
    """
    return datetime.now(timezone.utc)


def days_between(start: date | datetime, end: date | datetime) -> int:
    """
    Whole days from start to end, rounding any partial day up.

    Plain dates are treated as midnight. Mixing a date with a datetime is
    allowed; the date is promoted to midnight of the same tzinfo.

    Example:
        >>> days_between(date(2024, 1, 15), date(2024, 1, 18))
        3
        >>> days_between(datetime(2024, 1, 15, 14), datetime(2024, 1, 16, 11))
        1
    """
    start_dt = _as_datetime(start, end)
    end_dt = _as_datetime(end, start)
    return ceil((end_dt - start_dt).total_seconds() / SECONDS_PER_DAY)


def _as_datetime(value: date | datetime, other: date | datetime) -> datetime:
    if isinstance(value, datetime):
        return value
    tzinfo = other.tzinfo if isinstance(other, datetime) else None
    return datetime(value.year, value.month, value.day, tzinfo=tzinfo)
