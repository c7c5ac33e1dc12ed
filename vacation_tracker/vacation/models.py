"""Vacation ORM model: VacationRequest."""

from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Optional

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vacation_tracker.common.constants import RequestStatus
from vacation_tracker.database import Base
from vacation_tracker.employees.models import Employee


class VacationRequest(Base):
    __tablename__ = "vacation_requests"
    __table_args__ = (
        sa.CheckConstraint("start_date <= end_date", name="ck_vacation_request_range"),
        sa.CheckConstraint("days_requested >= 1", name="ck_vacation_request_days"),
        sa.Index("ix_vacation_requests_employee_status", "employee_id", "status"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    employee_id: Mapped[str] = mapped_column(
        sa.String(128), sa.ForeignKey("employees.id"), nullable=False
    )
    start_date: Mapped[date] = mapped_column(sa.Date, nullable=False)
    end_date: Mapped[date] = mapped_column(sa.Date, nullable=False)
    days_requested: Mapped[int] = mapped_column(sa.Integer, nullable=False)
    reason: Mapped[str] = mapped_column(sa.Text, nullable=False)
    status: Mapped[RequestStatus] = mapped_column(
        sa.Enum(RequestStatus, name="request_status"),
        nullable=False,
        default=RequestStatus.pending,
    )
    manager_notes: Mapped[Optional[str]] = mapped_column(sa.Text)
    approved_by: Mapped[Optional[str]] = mapped_column(
        sa.String(128), sa.ForeignKey("employees.id")
    )
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), nullable=False
    )

    # Relationships
    employee: Mapped[Employee] = relationship(
        back_populates="vacation_requests", foreign_keys=[employee_id]
    )
