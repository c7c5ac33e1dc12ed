"""Common module — shared utilities for the vacation tracker."""

from vacation_tracker.common.constants import (
    CALENDAR_STATUSES,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    TERMINAL_STATUSES,
    RequestStatus,
    UserRole,
)
from vacation_tracker.common.exceptions import (
    AppException,
    ConflictError,
    ForbiddenException,
    InvalidRangeException,
    InvalidTransitionException,
    MissingFieldException,
    NotFoundException,
    PastDateException,
    RepositoryUnavailableException,
    register_exception_handlers,
)
from vacation_tracker.common.pagination import (
    PaginatedResponse,
    PaginationMeta,
    PaginationParams,
    paginate,
)

__all__ = [
    # Constants / Enums
    "RequestStatus",
    "UserRole",
    "CALENDAR_STATUSES",
    "TERMINAL_STATUSES",
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    # Exceptions
    "AppException",
    "ConflictError",
    "ForbiddenException",
    "InvalidRangeException",
    "InvalidTransitionException",
    "MissingFieldException",
    "NotFoundException",
    "PastDateException",
    "RepositoryUnavailableException",
    "register_exception_handlers",
    # Pagination
    "PaginatedResponse",
    "PaginationMeta",
    "PaginationParams",
    "paginate",
]
