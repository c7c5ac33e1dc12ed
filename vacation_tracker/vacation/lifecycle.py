"""Request lifecycle — the pending → approved | denied | cancelled state machine.

Every function here is pure: it takes the current request entity plus the
acting identity and returns a new entity (or a creation payload). Persisting
the result is the repository's job; ``transition_patch`` extracts exactly the
columns a status change writes.

    pending ──approve──▶ approved
       │ ────deny─────▶ denied
       └─────cancel───▶ cancelled
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from vacation_tracker.auth.schemas import SessionIdentity
from vacation_tracker.common.constants import RequestStatus
from vacation_tracker.common.exceptions import (
    ForbiddenException,
    InvalidTransitionException,
)
from vacation_tracker.vacation.schemas import ValidatedCandidate, VacationRequestOut

INITIAL_STATUS = RequestStatus.pending

# event → target status; every event starts from INITIAL_STATUS
TRANSITIONS: dict[str, RequestStatus] = {
    "approve": RequestStatus.approved,
    "deny": RequestStatus.denied,
    "cancel": RequestStatus.cancelled,
}

TRANSITION_FIELDS = frozenset({"status", "approved_by", "manager_notes", "updated_at"})


def _utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; stored values are always UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _stamp(request: VacationRequestOut, now: Optional[datetime]) -> datetime:
    now = _utc(now or datetime.now(timezone.utc))
    return max(now, _utc(request.created_at))


def _ensure_pending(request: VacationRequestOut, event: str) -> None:
    if request.status != INITIAL_STATUS:
        raise InvalidTransitionException(request.status, event)


# ── Create ──────────────────────────────────────────────────────────

def create(
    candidate: ValidatedCandidate,
    owner_id: str,
    *,
    now: Optional[datetime] = None,
) -> dict[str, Any]:
    """Build the creation payload for a validated candidate."""
    now = _utc(now or datetime.now(timezone.utc))
    return {
        "employee_id": owner_id,
        "start_date": candidate.start_date,
        "end_date": candidate.end_date,
        "days_requested": candidate.days_requested,
        "reason": candidate.reason,
        "status": INITIAL_STATUS,
        "created_at": now,
        "updated_at": now,
    }


# ── Review (administrator) ──────────────────────────────────────────

def _review(
    request: VacationRequestOut,
    actor: SessionIdentity,
    event: str,
    note: Optional[str],
    now: Optional[datetime],
) -> VacationRequestOut:
    if not actor.is_admin:
        raise ForbiddenException(f"Only administrators can {event} vacation requests.")
    _ensure_pending(request, event)
    return request.model_copy(
        update={
            "status": TRANSITIONS[event],
            "approved_by": actor.id,
            "manager_notes": note,
            "updated_at": _stamp(request, now),
        }
    )


def approve(
    request: VacationRequestOut,
    actor: SessionIdentity,
    *,
    note: Optional[str] = None,
    now: Optional[datetime] = None,
) -> VacationRequestOut:
    return _review(request, actor, "approve", note, now)


def deny(
    request: VacationRequestOut,
    actor: SessionIdentity,
    *,
    note: Optional[str] = None,
    now: Optional[datetime] = None,
) -> VacationRequestOut:
    return _review(request, actor, "deny", note, now)


# ── Cancel (owner) ──────────────────────────────────────────────────

def cancel(
    request: VacationRequestOut,
    actor: SessionIdentity,
    *,
    now: Optional[datetime] = None,
) -> VacationRequestOut:
    if request.employee_id != actor.id:
        raise ForbiddenException("You can only cancel your own vacation requests.")
    _ensure_pending(request, "cancel")
    return request.model_copy(
        update={
            "status": TRANSITIONS["cancel"],
            "updated_at": _stamp(request, now),
        }
    )


def transition_patch(request: VacationRequestOut) -> dict[str, Any]:
    """Columns to write when persisting a transitioned request."""
    return request.model_dump(include=set(TRANSITION_FIELDS))
