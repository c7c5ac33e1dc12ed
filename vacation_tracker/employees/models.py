"""Employee ORM model."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vacation_tracker.database import Base

if TYPE_CHECKING:
    from vacation_tracker.vacation.models import VacationRequest


class Employee(Base):
    __tablename__ = "employees"

    # Identity id issued by the session provider
    id: Mapped[str] = mapped_column(sa.String(128), primary_key=True)
    email: Mapped[str] = mapped_column(sa.String(255), unique=True, nullable=False)
    display_name: Mapped[Optional[str]] = mapped_column(sa.String(255))
    department: Mapped[Optional[str]] = mapped_column(sa.String(100))
    total_days_per_year: Mapped[int] = mapped_column(
        sa.Integer, nullable=False, server_default=sa.text("25")
    )
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), server_default=sa.func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), server_default=sa.func.now()
    )

    # Relationships
    vacation_requests: Mapped[list["VacationRequest"]] = relationship(
        back_populates="employee",
        foreign_keys="VacationRequest.employee_id",
    )

    @property
    def label(self) -> str:
        """Display name, or the local part of the email when none is known."""
        return self.display_name or self.email.split("@", 1)[0]
