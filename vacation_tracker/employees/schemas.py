"""Employee Pydantic v2 schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from vacation_tracker.vacation.schemas import BalanceOut, EmployeeBrief


class EmployeeOut(BaseModel):
    """Full employee representation."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    display_name: Optional[str] = None
    department: Optional[str] = None
    total_days_per_year: int
    created_at: datetime
    updated_at: datetime


class EmployeeBalanceOut(BaseModel):
    """Admin panel row: who, and where their allocation stands."""

    employee: EmployeeBrief
    balance: BalanceOut
