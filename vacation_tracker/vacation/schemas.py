"""Vacation Pydantic v2 schemas — request / response validation.

Naming conventions:
  - *Create / *Request  → request bodies (write)
  - *Out                → response bodies (read)
  - *Brief              → compact embedded representations
"""

from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from vacation_tracker.common.constants import RequestStatus


# ═════════════════════════════════════════════════════════════════════
# Embedded / shared
# ═════════════════════════════════════════════════════════════════════


class EmployeeBrief(BaseModel):
    """Minimal employee info embedded in vacation responses."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    display_name: Optional[str] = None
    department: Optional[str] = None

    @classmethod
    def from_employee(cls, employee) -> EmployeeBrief:
        return cls(
            id=employee.id,
            email=employee.email,
            display_name=employee.label,
            department=employee.department,
        )


# ═════════════════════════════════════════════════════════════════════
# Vacation Request — Create
# ═════════════════════════════════════════════════════════════════════


class VacationRequestCreate(BaseModel):
    """Payload for submitting a vacation request.

    Fields are optional at the schema level so that absent values surface as
    a MissingField problem from the validator rather than a generic 422.
    """

    start_date: Optional[date] = Field(None, description="First day off (inclusive)")
    end_date: Optional[date] = Field(None, description="Last day off (inclusive)")
    reason: Optional[str] = Field(None, max_length=1000, description="Reason for the request")


class ValidatedCandidate(BaseModel):
    """A candidate that passed validation, with its day count resolved."""

    model_config = ConfigDict(frozen=True)

    start_date: date
    end_date: date
    reason: str
    days_requested: int


# ═════════════════════════════════════════════════════════════════════
# Vacation Request — Response
# ═════════════════════════════════════════════════════════════════════


class VacationRequestOut(BaseModel):
    """Full vacation request."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    employee_id: str
    start_date: date
    end_date: date
    days_requested: int
    reason: str
    status: RequestStatus
    manager_notes: Optional[str] = None
    approved_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    # Enriched by service
    employee: Optional[EmployeeBrief] = None


class StatusCounts(BaseModel):
    """Number of requests per status."""

    all: int = 0
    pending: int = 0
    approved: int = 0
    denied: int = 0
    cancelled: int = 0


class MyRequestsOut(BaseModel):
    """Own request history, filtered, with counts over the unfiltered set."""

    data: list[VacationRequestOut]
    counts: StatusCounts
    total: int = 0


# ═════════════════════════════════════════════════════════════════════
# Review (approve / deny)
# ═════════════════════════════════════════════════════════════════════


class ReviewRequest(BaseModel):
    """Payload for approving or denying a request."""

    note: Optional[str] = Field(None, max_length=500)


# ═════════════════════════════════════════════════════════════════════
# Balance
# ═════════════════════════════════════════════════════════════════════


class BalanceOut(BaseModel):
    """Derived day counts for one employee."""

    total_days: int
    used_days: int
    pending_days: int
    remaining_days: int
    usage_percent: int

    @computed_field
    @property
    def is_over_allocated(self) -> bool:
        return self.remaining_days < 0


class UsageSummary(BaseModel):
    """Aggregate usage across employees."""

    total_employees: int = 0
    total_vacation_days: int = 0
    average_usage_percent: int = 0


# ═════════════════════════════════════════════════════════════════════
# Team Calendar
# ═════════════════════════════════════════════════════════════════════


class CalendarEntry(BaseModel):
    """One request drawn on the team calendar."""

    id: uuid.UUID
    employee: EmployeeBrief
    start_date: date
    end_date: date
    days_requested: int
    status: RequestStatus


class CalendarOut(BaseModel):
    """Team calendar for a given month."""

    month: int
    year: int
    entries: list[CalendarEntry]
    total_entries: int = 0
    selected_date: Optional[date] = None
    selected_entries: list[CalendarEntry] = Field(default_factory=list)
