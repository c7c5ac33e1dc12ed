"""Vacation router — submit, review, cancel, history, balance, team calendar.

All endpoints require authentication. Review and org-wide listing endpoints
require the admin role; cancel is restricted to the request owner by the
lifecycle itself.
"""


import uuid
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from vacation_tracker.auth.dependencies import (
    get_current_employee,
    get_current_identity,
    require_admin,
)
from vacation_tracker.auth.schemas import SessionIdentity
from vacation_tracker.common.constants import RequestStatus
from vacation_tracker.common.pagination import PaginatedResponse, PaginationParams
from vacation_tracker.common.rate_limit import limiter
from vacation_tracker.database import get_db
from vacation_tracker.employees.models import Employee
from vacation_tracker.vacation.schemas import (
    BalanceOut,
    CalendarOut,
    MyRequestsOut,
    ReviewRequest,
    VacationRequestCreate,
    VacationRequestOut,
)
from vacation_tracker.vacation.service import VacationService
from vacation_tracker.vacation.validator import local_today

router = APIRouter(prefix="", tags=["vacation"])


# ── POST /requests ──────────────────────────────────────────────────

@router.post("/requests", response_model=VacationRequestOut, status_code=201)
@limiter.limit("30/minute")
async def submit_request(
    request: Request,
    body: VacationRequestCreate,
    employee: Employee = Depends(get_current_employee),
    db: AsyncSession = Depends(get_db),
):
    """Submit a vacation request. Validates fields, date order and start date."""
    return await VacationService.submit_request(db, employee.id, body)


# ── GET /requests/mine ──────────────────────────────────────────────

@router.get("/requests/mine", response_model=MyRequestsOut)
async def my_requests(
    status: Optional[RequestStatus] = Query(None),
    search: Optional[str] = Query(None, max_length=200, description="Matches reason or status"),
    limit: Optional[int] = Query(None, ge=1, le=500),
    employee: Employee = Depends(get_current_employee),
    db: AsyncSession = Depends(get_db),
):
    """The caller's requests, newest first, with per-status counts."""
    return await VacationService.get_my_requests(
        db, employee.id, status=status, search=search, limit=limit,
    )


# ── GET /requests/pending ───────────────────────────────────────────

@router.get("/requests/pending", response_model=list[VacationRequestOut])
async def pending_requests(
    admin: SessionIdentity = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Requests awaiting review across all employees, oldest first."""
    return await VacationService.get_pending_requests(db)


# ── GET /requests ───────────────────────────────────────────────────

@router.get("/requests", response_model=PaginatedResponse[VacationRequestOut])
async def list_requests(
    status: Optional[RequestStatus] = Query(None),
    employee_id: Optional[str] = Query(None),
    pagination: PaginationParams = Depends(),
    admin: SessionIdentity = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """All requests, paginated (admin)."""
    return await VacationService.list_requests(
        db, pagination, status=status, employee_id=employee_id,
    )


# ── POST /requests/{id}/approve ─────────────────────────────────────

@router.post("/requests/{request_id}/approve", response_model=VacationRequestOut)
async def approve_request(
    request_id: uuid.UUID,
    body: Optional[ReviewRequest] = None,
    admin: SessionIdentity = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Approve a pending request."""
    return await VacationService.approve_request(
        db, request_id, admin, note=body.note if body else None,
    )


# ── POST /requests/{id}/deny ────────────────────────────────────────

@router.post("/requests/{request_id}/deny", response_model=VacationRequestOut)
async def deny_request(
    request_id: uuid.UUID,
    body: Optional[ReviewRequest] = None,
    admin: SessionIdentity = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Deny a pending request."""
    return await VacationService.deny_request(
        db, request_id, admin, note=body.note if body else None,
    )


# ── POST /requests/{id}/cancel ──────────────────────────────────────

@router.post("/requests/{request_id}/cancel", response_model=VacationRequestOut)
async def cancel_request(
    request_id: uuid.UUID,
    identity: SessionIdentity = Depends(get_current_identity),
    employee: Employee = Depends(get_current_employee),
    db: AsyncSession = Depends(get_db),
):
    """Withdraw one of the caller's own pending requests."""
    return await VacationService.cancel_request(db, request_id, identity)


# ── GET /balance ────────────────────────────────────────────────────

@router.get("/balance", response_model=BalanceOut)
async def get_balance(
    employee: Employee = Depends(get_current_employee),
    db: AsyncSession = Depends(get_db),
):
    """Used, pending and remaining days for the caller."""
    return await VacationService.get_balance(db, employee)


# ── GET /calendar ───────────────────────────────────────────────────

@router.get("/calendar", response_model=CalendarOut)
async def team_calendar(
    year: Optional[int] = Query(None, ge=1900, le=9999),
    month: Optional[int] = Query(None, ge=1, le=12),
    day: Optional[date] = Query(None, description="Select the events on this date"),
    identity: SessionIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    """Approved and pending requests overlapping a month; defaults to the current one."""
    today = local_today()
    return await VacationService.get_team_calendar(
        db,
        year or today.year,
        month or today.month,
        selected_date=day,
    )
