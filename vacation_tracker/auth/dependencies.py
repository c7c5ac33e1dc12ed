"""Auth dependencies — session identity from the bearer JWT, admin enforcement.

Tokens are issued by the external identity provider; this module only
verifies them and maps the claims onto a ``SessionIdentity``.
"""

from __future__ import annotations

from fastapi import Depends, Request
from fastapi.exceptions import HTTPException
from jose import ExpiredSignatureError, JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from vacation_tracker.auth.schemas import SessionIdentity
from vacation_tracker.common.constants import UserRole
from vacation_tracker.common.exceptions import ForbiddenException
from vacation_tracker.config import settings
from vacation_tracker.database import get_db
from vacation_tracker.employees.models import Employee
from vacation_tracker.employees.service import EmployeeService


def _extract_bearer(request: Request) -> str:
    """Extract Bearer token from Authorization header."""
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Missing or invalid Authorization header.")
    return auth_header[7:]


# ── Core dependencies ───────────────────────────────────────────────

async def get_current_identity(request: Request) -> SessionIdentity:
    """Validate the JWT and return the authenticated identity."""
    token = _extract_bearer(request)

    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
        )
    except ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token has expired.")
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid token.")

    subject = payload.get("sub")
    email = payload.get("email")
    if not subject or not email:
        raise HTTPException(status_code=401, detail="Token is missing identity claims.")

    try:
        role = UserRole(payload.get("role", UserRole.employee.value))
    except ValueError:
        role = UserRole.employee

    return SessionIdentity(
        id=str(subject),
        email=email,
        display_name=payload.get("name"),
        department=payload.get("department"),
        role=role,
    )


async def get_current_employee(
    identity: SessionIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
) -> Employee:
    """The caller's employee record, created on first login."""
    return await EmployeeService.get_or_create(db, identity)


# ── Role-based dependency ───────────────────────────────────────────

async def require_admin(
    identity: SessionIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
) -> SessionIdentity:
    """Reject callers that are not administrators.

    Admins are provisioned like everyone else, since reviews record the
    reviewer as an employee reference.
    """
    if not identity.is_admin:
        raise ForbiddenException(
            detail=f"Role '{identity.role.value}' is not permitted. Required: ['admin'].",
        )
    await EmployeeService.get_or_create(db, identity)
    return identity
