"""Enums and constants for the vacation tracker."""

from __future__ import annotations

import enum


# ── Auth / Roles ────────────────────────────────────────────────────

class UserRole(str, enum.Enum):
    employee = "employee"
    admin = "admin"


# ── Vacation requests ───────────────────────────────────────────────

class RequestStatus(str, enum.Enum):
    pending = "pending"
    approved = "approved"
    denied = "denied"
    cancelled = "cancelled"


# Statuses a request can never leave
TERMINAL_STATUSES: frozenset[RequestStatus] = frozenset(
    {RequestStatus.approved, RequestStatus.denied, RequestStatus.cancelled}
)

# Statuses shown on the team calendar
CALENDAR_STATUSES: tuple[RequestStatus, ...] = (
    RequestStatus.approved,
    RequestStatus.pending,
)


# ── Misc constants ──────────────────────────────────────────────────

MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 50
