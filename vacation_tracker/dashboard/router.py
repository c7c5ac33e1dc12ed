"""Dashboard router — read-only endpoints for the dashboard widgets.

``/me`` is available to every authenticated employee; ``/admin`` requires
the admin role.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from vacation_tracker.auth.dependencies import get_current_employee, require_admin
from vacation_tracker.auth.schemas import SessionIdentity
from vacation_tracker.dashboard.schemas import AdminDashboardOut, EmployeeDashboardOut
from vacation_tracker.dashboard.service import DashboardService
from vacation_tracker.database import get_db
from vacation_tracker.employees.models import Employee

router = APIRouter()


# ── GET /me ─────────────────────────────────────────────────────────

@router.get("/me", response_model=EmployeeDashboardOut)
async def employee_dashboard(
    employee: Employee = Depends(get_current_employee),
    db: AsyncSession = Depends(get_db),
):
    """Balance, per-status counts and the most recent requests."""
    return await DashboardService.get_employee_dashboard(db, employee)


# ── GET /admin ──────────────────────────────────────────────────────

@router.get("/admin", response_model=AdminDashboardOut)
async def admin_dashboard(
    admin: SessionIdentity = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Pending request count and org-wide usage summary."""
    return await DashboardService.get_admin_dashboard(db)
