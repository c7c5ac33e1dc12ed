"""Employee service — first-login provisioning and the admin employee list."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from vacation_tracker.auth.schemas import SessionIdentity
from vacation_tracker.common.exceptions import ConflictError
from vacation_tracker.config import settings
from vacation_tracker.database import store_errors
from vacation_tracker.employees.models import Employee
from vacation_tracker.employees.schemas import EmployeeBalanceOut
from vacation_tracker.vacation.balance import compute_balance
from vacation_tracker.vacation.repository import VacationRequestRepository
from vacation_tracker.vacation.schemas import EmployeeBrief

logger = logging.getLogger(__name__)


class EmployeeService:
    """Async employee operations."""

    @staticmethod
    async def get_or_create(
        db: AsyncSession,
        identity: SessionIdentity,
    ) -> Employee:
        """Return the employee for *identity*, creating it on first login.

        A concurrent first login for the same identity is resolved by
        re-fetching the row the other request inserted. An email already
        held by another identity raises ConflictError.
        """
        with store_errors("employees.get"):
            employee = await db.get(Employee, identity.id)
        if employee is not None:
            return employee

        now = datetime.now(timezone.utc)
        employee = Employee(
            id=identity.id,
            email=identity.email,
            display_name=identity.display_name,
            department=identity.department,
            total_days_per_year=settings.DEFAULT_DAYS_PER_YEAR,
            created_at=now,
            updated_at=now,
        )
        db.add(employee)
        try:
            with store_errors("employees.create"):
                await db.flush()
        except IntegrityError:
            await db.rollback()
            with store_errors("employees.get"):
                existing = await db.get(Employee, identity.id)
            if existing is not None:
                return existing
            raise ConflictError("email", identity.email)

        logger.info(
            "Provisioned employee on first login",
            extra={"employee_id": identity.id, "email": identity.email},
        )
        return employee

    @staticmethod
    async def list_employees(
        db: AsyncSession,
        *,
        search: Optional[str] = None,
        department: Optional[str] = None,
    ) -> list[Employee]:
        """Employees matching a name/email search and a department filter."""
        query = select(Employee).order_by(Employee.display_name, Employee.email)
        if search:
            pattern = f"%{search.lower()}%"
            query = query.where(
                or_(
                    func.lower(Employee.display_name).like(pattern),
                    func.lower(Employee.email).like(pattern),
                )
            )
        if department:
            query = query.where(Employee.department == department)

        with store_errors("employees.list"):
            result = await db.execute(query)
            return list(result.scalars().all())

    @staticmethod
    async def list_with_balances(
        db: AsyncSession,
        *,
        search: Optional[str] = None,
        department: Optional[str] = None,
    ) -> list[EmployeeBalanceOut]:
        """Admin panel: each matching employee with a freshly computed balance."""
        employees = await EmployeeService.list_employees(
            db, search=search, department=department,
        )
        repo = VacationRequestRepository(db)

        rows: list[EmployeeBalanceOut] = []
        for emp in employees:
            requests = await repo.list(employee_id=emp.id)
            rows.append(
                EmployeeBalanceOut(
                    employee=EmployeeBrief.from_employee(emp),
                    balance=compute_balance(emp, requests),
                )
            )
        return rows
