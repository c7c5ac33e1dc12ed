"""Pure date-range helpers for vacation requests and the team calendar."""

from __future__ import annotations

from calendar import monthrange
from datetime import date

from vacation_tracker.common.exceptions import InvalidRangeException


def inclusive_day_count(start: date, end: date) -> int:
    """Number of calendar days from *start* to *end*, both ends included.

    Raises InvalidRangeException when *start* falls after *end*.
    """
    if start > end:
        raise InvalidRangeException(start, end)
    return (end - start).days + 1


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last day of the given month."""
    _, last_day = monthrange(year, month)
    return date(year, month, 1), date(year, month, last_day)


def covers(start: date, end: date, day: date) -> bool:
    return start <= day <= end
