"""Dashboard Pydantic v2 schemas — response models for the dashboard endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field

from vacation_tracker.vacation.schemas import (
    BalanceOut,
    EmployeeBrief,
    StatusCounts,
    UsageSummary,
    VacationRequestOut,
)


# ═════════════════════════════════════════════════════════════════════
# GET /me
# ═════════════════════════════════════════════════════════════════════


class EmployeeDashboardOut(BaseModel):
    """Stat cards and recent activity for the signed-in employee."""

    employee: EmployeeBrief
    balance: BalanceOut
    counts: StatusCounts
    recent_requests: list[VacationRequestOut] = Field(
        default_factory=list,
        description="Newest requests first",
    )


# ═════════════════════════════════════════════════════════════════════
# GET /admin
# ═════════════════════════════════════════════════════════════════════


class AdminDashboardOut(BaseModel):
    """Org-wide figures for the admin panel."""

    pending_requests: int = Field(..., description="Requests with status=pending")
    usage: UsageSummary
