"""Request validator — field presence, date ordering and forward-dating rules."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime
from typing import Any, Optional, Union
from zoneinfo import ZoneInfo

from pydantic import ValidationError

from vacation_tracker.common.exceptions import (
    InvalidRangeException,
    MissingFieldException,
    PastDateException,
)
from vacation_tracker.config import settings
from vacation_tracker.vacation.calendar_math import inclusive_day_count
from vacation_tracker.vacation.schemas import ValidatedCandidate, VacationRequestCreate


def local_today() -> date:
    """Current date in the configured time zone."""
    return datetime.now(ZoneInfo(settings.TIMEZONE)).date()


def _parse(raw: Mapping[str, Any]) -> VacationRequestCreate:
    """Coerce a raw mapping; unreadable values count as missing fields."""
    try:
        return VacationRequestCreate.model_validate(raw)
    except ValidationError as exc:
        messages: dict[str, list[str]] = {}
        for err in exc.errors():
            name = str(err["loc"][0]) if err["loc"] else "unknown"
            messages.setdefault(name, []).append(err["msg"])
        fields = [name for name in VacationRequestCreate.model_fields if name in messages]
        raise MissingFieldException(fields or list(messages), messages) from exc


def validate(
    candidate: Union[VacationRequestCreate, Mapping[str, Any]],
    *,
    today: Optional[date] = None,
) -> ValidatedCandidate:
    """Check a submitted request and resolve its day count.

    Order of checks: missing fields, then date ordering, then past start.
    The boundary for the past-date rule is *today*, inclusive.
    """
    if isinstance(candidate, Mapping):
        candidate = _parse(candidate)

    reason = (candidate.reason or "").strip()
    missing = [
        name
        for name, value in (
            ("start_date", candidate.start_date),
            ("end_date", candidate.end_date),
            ("reason", reason),
        )
        if not value
    ]
    if missing:
        raise MissingFieldException(missing)

    if candidate.start_date > candidate.end_date:
        raise InvalidRangeException(candidate.start_date, candidate.end_date)

    today = today or local_today()
    if candidate.start_date < today:
        raise PastDateException(candidate.start_date, today)

    return ValidatedCandidate(
        start_date=candidate.start_date,
        end_date=candidate.end_date,
        reason=reason,
        days_requested=inclusive_day_count(candidate.start_date, candidate.end_date),
    )
