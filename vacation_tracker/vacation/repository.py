"""Vacation request repository — list / get / create / update over async SQLAlchemy.

Returns ``VacationRequestOut`` entities so nothing above this layer touches
ORM rows. Status changes go through ``update(..., expected_status=...)``,
which writes only if the row still holds the expected status; this is the
optimistic-concurrency guard against two reviewers acting on one request.
"""

from __future__ import annotations

import uuid
from datetime import date
from typing import Any, Iterable, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from vacation_tracker.common.constants import RequestStatus
from vacation_tracker.common.exceptions import (
    InvalidTransitionException,
    NotFoundException,
)
from vacation_tracker.database import store_errors
from vacation_tracker.vacation.models import VacationRequest
from vacation_tracker.vacation.schemas import EmployeeBrief, VacationRequestOut

_SORTABLE = {"created_at", "updated_at", "start_date", "end_date", "days_requested"}


def to_entity(row: VacationRequest) -> VacationRequestOut:
    """Build VacationRequestOut from a row whose employee is eager-loaded."""
    out = VacationRequestOut(
        id=row.id,
        employee_id=row.employee_id,
        start_date=row.start_date,
        end_date=row.end_date,
        days_requested=row.days_requested,
        reason=row.reason,
        status=row.status,
        manager_notes=row.manager_notes,
        approved_by=row.approved_by,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )
    if row.employee is not None:
        out.employee = EmployeeBrief.from_employee(row.employee)
    return out


def order_clause(order_by: str):
    """``"-created_at"`` → created_at DESC; unknown columns are rejected."""
    descending = order_by.startswith("-")
    col_name = order_by.lstrip("-")
    if col_name not in _SORTABLE:
        raise ValueError(f"Cannot order vacation requests by '{col_name}'.")
    col = getattr(VacationRequest, col_name)
    return col.desc() if descending else col.asc()


class VacationRequestRepository:
    """Record store for vacation requests, bound to one session."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    def base_query(self):
        return select(VacationRequest).options(selectinload(VacationRequest.employee))

    async def list(
        self,
        *,
        employee_id: Optional[str] = None,
        status: Optional[RequestStatus] = None,
        statuses: Optional[Iterable[RequestStatus]] = None,
        overlapping: Optional[tuple[date, date]] = None,
        order_by: str = "-created_at",
        limit: Optional[int] = None,
    ) -> list[VacationRequestOut]:
        query = self.base_query().order_by(order_clause(order_by))

        if employee_id:
            query = query.where(VacationRequest.employee_id == employee_id)
        if status:
            query = query.where(VacationRequest.status == status)
        if statuses is not None:
            query = query.where(VacationRequest.status.in_(list(statuses)))
        if overlapping is not None:
            range_start, range_end = overlapping
            query = query.where(
                VacationRequest.start_date <= range_end,
                VacationRequest.end_date >= range_start,
            )
        if limit is not None:
            query = query.limit(limit)

        with store_errors("vacation_requests.list"):
            result = await self.db.execute(query)
            return [to_entity(r) for r in result.scalars().all()]

    async def get(self, request_id: uuid.UUID) -> VacationRequestOut:
        query = (
            self.base_query()
            .where(VacationRequest.id == request_id)
            .execution_options(populate_existing=True)
        )
        with store_errors("vacation_requests.get"):
            result = await self.db.execute(query)
            row = result.scalars().first()
        if row is None:
            raise NotFoundException("VacationRequest", str(request_id))
        return to_entity(row)

    async def create(self, payload: dict[str, Any]) -> VacationRequestOut:
        row = VacationRequest(**payload)
        with store_errors("vacation_requests.create"):
            self.db.add(row)
            await self.db.flush()
        return await self.get(row.id)

    async def update(
        self,
        request_id: uuid.UUID,
        patch: dict[str, Any],
        *,
        expected_status: Optional[RequestStatus] = None,
        event: str = "update",
    ) -> VacationRequestOut:
        """Apply *patch*; with *expected_status*, only if the row still has it.

        *event* names the attempted change in the InvalidTransition raised
        when the status guard fails.
        """
        stmt = (
            update(VacationRequest)
            .where(VacationRequest.id == request_id)
            .values(**patch)
            .execution_options(synchronize_session=False)
        )
        if expected_status is not None:
            stmt = stmt.where(VacationRequest.status == expected_status)

        with store_errors("vacation_requests.update"):
            result = await self.db.execute(stmt)

        if result.rowcount == 0:
            # Either gone, or another writer moved it out of expected_status
            current = await self.get(request_id)
            raise InvalidTransitionException(current.status, event)
        return await self.get(request_id)
