"""Dashboard service — read-only aggregation over employees and requests.

All methods are static async, following the project convention. Figures are
derived by the pure balance functions from one fetch per table.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from vacation_tracker.common.constants import RequestStatus
from vacation_tracker.config import settings
from vacation_tracker.dashboard.schemas import AdminDashboardOut, EmployeeDashboardOut
from vacation_tracker.employees.models import Employee
from vacation_tracker.employees.service import EmployeeService
from vacation_tracker.vacation.balance import (
    compute_balance,
    count_by_status,
    summarize_usage,
)
from vacation_tracker.vacation.repository import VacationRequestRepository
from vacation_tracker.vacation.schemas import EmployeeBrief, VacationRequestOut


class DashboardService:
    """Async dashboard aggregation."""

    # ═════════════════════════════════════════════════════════════════
    # GET /me
    # ═════════════════════════════════════════════════════════════════

    @staticmethod
    async def get_employee_dashboard(
        db: AsyncSession,
        employee: Employee,
        *,
        recent_limit: Optional[int] = None,
    ) -> EmployeeDashboardOut:
        if recent_limit is None:
            recent_limit = settings.RECENT_REQUESTS_LIMIT

        # Newest first
        requests = await VacationRequestRepository(db).list(employee_id=employee.id)
        return EmployeeDashboardOut(
            employee=EmployeeBrief.from_employee(employee),
            balance=compute_balance(employee, requests),
            counts=count_by_status(requests),
            recent_requests=requests[:recent_limit],
        )

    # ═════════════════════════════════════════════════════════════════
    # GET /admin
    # ═════════════════════════════════════════════════════════════════

    @staticmethod
    async def get_admin_dashboard(db: AsyncSession) -> AdminDashboardOut:
        """Pending queue size and usage across every employee."""
        employees = await EmployeeService.list_employees(db)

        requests = await VacationRequestRepository(db).list()
        by_employee: dict[str, list[VacationRequestOut]] = defaultdict(list)
        for r in requests:
            by_employee[r.employee_id].append(r)

        balances = [compute_balance(emp, by_employee[emp.id]) for emp in employees]
        return AdminDashboardOut(
            pending_requests=sum(1 for r in requests if r.status == RequestStatus.pending),
            usage=summarize_usage(balances),
        )
