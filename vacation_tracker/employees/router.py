"""Employees router — own profile, admin employee list with balances."""


from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from vacation_tracker.auth.dependencies import get_current_employee, require_admin
from vacation_tracker.auth.schemas import SessionIdentity
from vacation_tracker.database import get_db
from vacation_tracker.employees.models import Employee
from vacation_tracker.employees.schemas import EmployeeBalanceOut, EmployeeOut
from vacation_tracker.employees.service import EmployeeService

router = APIRouter(prefix="", tags=["employees"])


# ── GET /me ─────────────────────────────────────────────────────────

@router.get("/me", response_model=EmployeeOut)
async def get_me(
    employee: Employee = Depends(get_current_employee),
):
    """The caller's employee record, created on first login."""
    return EmployeeOut.model_validate(employee)


# ── GET / — admin list ──────────────────────────────────────────────

@router.get("", response_model=list[EmployeeBalanceOut])
async def list_employees(
    search: Optional[str] = Query(None, max_length=200, description="Name or email"),
    department: Optional[str] = Query(None),
    admin: SessionIdentity = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Employees with their current balance (admin)."""
    return await EmployeeService.list_with_balances(
        db, search=search, department=department,
    )
