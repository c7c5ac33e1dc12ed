"""Auth Pydantic schemas — the identity handed over by the session provider."""


from typing import Optional

from pydantic import BaseModel

from vacation_tracker.common.constants import UserRole


class SessionIdentity(BaseModel):
    """Authenticated caller, decoded from the bearer token."""

    id: str
    email: str
    display_name: Optional[str] = None
    department: Optional[str] = None
    role: UserRole = UserRole.employee

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.admin
