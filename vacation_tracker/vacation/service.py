"""Vacation service layer — the async adapter between HTTP and the pure core.

Business logic lives in the pure modules:
  - validator   → field, range and past-date checks
  - lifecycle   → pending → approved | denied | cancelled
  - balance     → used / pending / remaining days
  - calendar_math

This layer fetches what those functions need through the repository, feeds
it in, and persists what comes back.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date, datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from vacation_tracker.auth.schemas import SessionIdentity
from vacation_tracker.common.constants import CALENDAR_STATUSES, RequestStatus
from vacation_tracker.common.pagination import (
    PaginatedResponse,
    PaginationParams,
    paginate,
)
from vacation_tracker.database import store_errors
from vacation_tracker.employees.models import Employee
from vacation_tracker.vacation import lifecycle
from vacation_tracker.vacation.balance import compute_balance, count_by_status
from vacation_tracker.vacation.calendar_math import covers, month_bounds
from vacation_tracker.vacation.models import VacationRequest
from vacation_tracker.vacation.repository import (
    VacationRequestRepository,
    order_clause,
    to_entity,
)
from vacation_tracker.vacation.schemas import (
    BalanceOut,
    CalendarEntry,
    CalendarOut,
    MyRequestsOut,
    VacationRequestCreate,
    VacationRequestOut,
)
from vacation_tracker.vacation.validator import validate

logger = logging.getLogger(__name__)


# ═════════════════════════════════════════════════════════════════════
# VacationService
# ═════════════════════════════════════════════════════════════════════


class VacationService:
    """Async vacation operations: submit, review, cancel, history, balance, calendar."""

    # ─────────────────────────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    def _matches(request: VacationRequestOut, search: str) -> bool:
        term = search.strip().lower()
        return term in request.reason.lower() or term in request.status.value

    @staticmethod
    def _calendar_entry(request: VacationRequestOut) -> CalendarEntry:
        return CalendarEntry(
            id=request.id,
            employee=request.employee,
            start_date=request.start_date,
            end_date=request.end_date,
            days_requested=request.days_requested,
            status=request.status,
        )

    @staticmethod
    async def _transition(
        db: AsyncSession,
        request_id: uuid.UUID,
        actor: SessionIdentity,
        event: str,
        *,
        note: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> VacationRequestOut:
        repo = VacationRequestRepository(db)
        current = await repo.get(request_id)

        if event == "cancel":
            updated = lifecycle.cancel(current, actor, now=now)
        elif event == "approve":
            updated = lifecycle.approve(current, actor, note=note, now=now)
        else:
            updated = lifecycle.deny(current, actor, note=note, now=now)

        result = await repo.update(
            request_id,
            lifecycle.transition_patch(updated),
            expected_status=current.status,
            event=event,
        )
        logger.info(
            "Vacation request %s: %s → %s",
            event,
            current.status.value,
            result.status.value,
            extra={
                "request_id": str(request_id),
                "actor_id": actor.id,
                "employee_id": result.employee_id,
            },
        )
        return result

    # ─────────────────────────────────────────────────────────────────
    # Submit
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    async def submit_request(
        db: AsyncSession,
        owner_id: str,
        data: VacationRequestCreate,
        *,
        today: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> VacationRequestOut:
        """Validate a candidate and store it as a pending request."""
        candidate = validate(data, today=today)
        payload = lifecycle.create(candidate, owner_id, now=now)

        created = await VacationRequestRepository(db).create(payload)
        logger.info(
            "Vacation request submitted for %d day(s)",
            created.days_requested,
            extra={"request_id": str(created.id), "employee_id": owner_id},
        )
        return created

    # ─────────────────────────────────────────────────────────────────
    # Review / cancel
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    async def approve_request(
        db: AsyncSession,
        request_id: uuid.UUID,
        actor: SessionIdentity,
        *,
        note: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> VacationRequestOut:
        return await VacationService._transition(
            db, request_id, actor, "approve", note=note, now=now,
        )

    @staticmethod
    async def deny_request(
        db: AsyncSession,
        request_id: uuid.UUID,
        actor: SessionIdentity,
        *,
        note: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> VacationRequestOut:
        return await VacationService._transition(
            db, request_id, actor, "deny", note=note, now=now,
        )

    @staticmethod
    async def cancel_request(
        db: AsyncSession,
        request_id: uuid.UUID,
        actor: SessionIdentity,
        *,
        now: Optional[datetime] = None,
    ) -> VacationRequestOut:
        return await VacationService._transition(
            db, request_id, actor, "cancel", now=now,
        )

    # ─────────────────────────────────────────────────────────────────
    # Listing
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    async def get_my_requests(
        db: AsyncSession,
        employee_id: str,
        *,
        status: Optional[RequestStatus] = None,
        search: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> MyRequestsOut:
        """Own history, newest first. Counts cover the whole history."""
        requests = await VacationRequestRepository(db).list(employee_id=employee_id)

        filtered = [
            r for r in requests
            if (status is None or r.status == status)
            and (not search or VacationService._matches(r, search))
        ]
        if limit is not None:
            filtered = filtered[:limit]

        return MyRequestsOut(
            data=filtered,
            counts=count_by_status(requests),
            total=len(requests),
        )

    @staticmethod
    async def get_pending_requests(db: AsyncSession) -> list[VacationRequestOut]:
        """Pending requests across all employees, oldest first."""
        return await VacationRequestRepository(db).list(
            status=RequestStatus.pending, order_by="created_at",
        )

    @staticmethod
    async def list_requests(
        db: AsyncSession,
        params: PaginationParams,
        *,
        status: Optional[RequestStatus] = None,
        employee_id: Optional[str] = None,
    ) -> PaginatedResponse:
        """Every request, paginated, for the admin view."""
        query = select(VacationRequest).order_by(order_clause("-created_at"))
        if status:
            query = query.where(VacationRequest.status == status)
        if employee_id:
            query = query.where(VacationRequest.employee_id == employee_id)

        with store_errors("vacation_requests.paginate"):
            return await paginate(
                db,
                query,
                params,
                options=[selectinload(VacationRequest.employee)],
                transform=to_entity,
            )

    # ─────────────────────────────────────────────────────────────────
    # Balance
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    async def get_balance(db: AsyncSession, employee: Employee) -> BalanceOut:
        requests = await VacationRequestRepository(db).list(employee_id=employee.id)
        return compute_balance(employee, requests)

    # ─────────────────────────────────────────────────────────────────
    # Team Calendar
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    async def get_team_calendar(
        db: AsyncSession,
        year: int,
        month: int,
        *,
        selected_date: Optional[date] = None,
    ) -> CalendarOut:
        """Approved and pending requests overlapping the month.

        With *selected_date*, also the entries covering that day.
        """
        month_start, month_end = month_bounds(year, month)
        requests = await VacationRequestRepository(db).list(
            statuses=CALENDAR_STATUSES,
            overlapping=(month_start, month_end),
            order_by="start_date",
        )
        entries = [VacationService._calendar_entry(r) for r in requests]

        selected: list[CalendarEntry] = []
        if selected_date is not None:
            selected = [
                e for e in entries if covers(e.start_date, e.end_date, selected_date)
            ]

        return CalendarOut(
            month=month,
            year=year,
            entries=entries,
            total_entries=len(entries),
            selected_date=selected_date,
            selected_entries=selected,
        )
