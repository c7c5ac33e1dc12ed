"""Shared test fixtures — async DB, client, auth helpers, factories.

Uses SQLite + aiosqlite for fast isolated tests without PostgreSQL.
"""

from __future__ import annotations

import os

# Set test settings before any other import touches pydantic-settings
os.environ.setdefault("JWT_SECRET", "test-secret-for-ci-do-not-use-in-production")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")
os.environ.setdefault("ENVIRONMENT", "test")

import uuid
from datetime import date, datetime, timedelta, timezone
from typing import AsyncGenerator, Optional

import pytest
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from vacation_tracker.common.constants import RequestStatus, UserRole
from vacation_tracker.config import settings
from vacation_tracker.database import Base, get_db
from vacation_tracker.employees.models import Employee
from vacation_tracker.main import create_app
from vacation_tracker.vacation.models import VacationRequest

# ── SQLite compat: compile PG-specific types ────────────────────────

from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.ext.compiler import compiles


@compiles(PG_UUID, "sqlite")
def _uuid_sqlite(element, compiler, **kw):
    return "CHAR(36)"


# ── Test database (SQLite in-memory) ────────────────────────────────

TEST_DATABASE_URL = "sqlite+aiosqlite://"

engine = create_async_engine(
    TEST_DATABASE_URL,
    echo=False,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestSessionFactory = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False,
)


@pytest.fixture(autouse=True)
async def _setup_db():
    """Create all tables before each test, drop after."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture(autouse=True)
def _reset_rate_limiter():
    """Reset rate limiter storage between tests to prevent cross-test interference."""
    from vacation_tracker.common.rate_limit import limiter

    limiter.reset()
    yield


async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
    async with TestSessionFactory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── FastAPI test client ─────────────────────────────────────────────

@pytest.fixture
async def app():
    """Create a fresh app instance with DB dependency overridden."""
    application = create_app()
    application.dependency_overrides[get_db] = _override_get_db
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client wired to the test app."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# ── Database session (for direct DB operations in tests) ────────────

@pytest.fixture
async def db() -> AsyncGenerator[AsyncSession, None]:
    async with TestSessionFactory() as session:
        yield session
        await session.commit()


# ── Dates ───────────────────────────────────────────────────────────

def future(days: int) -> date:
    """A date *days* ahead of today, safe from the past-date rule."""
    return date.today() + timedelta(days=days)


# ── Model factories ─────────────────────────────────────────────────

def _make_employee(
    *,
    employee_id: Optional[str] = None,
    email: Optional[str] = None,
    display_name: Optional[str] = "Test User",
    department: Optional[str] = "Engineering",
    total_days_per_year: int = 25,
) -> dict:
    employee_id = employee_id or f"user-{uuid.uuid4().hex[:8]}"
    return dict(
        id=employee_id,
        email=email or f"{employee_id}@example.com",
        display_name=display_name,
        department=department,
        total_days_per_year=total_days_per_year,
        created_at=datetime.now(timezone.utc),
        updated_at=datetime.now(timezone.utc),
    )


def _make_request(
    employee_id: str,
    *,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    days_requested: Optional[int] = None,
    reason: str = "Family trip",
    status: RequestStatus = RequestStatus.pending,
    created_at: Optional[datetime] = None,
) -> dict:
    start_date = start_date or future(30)
    end_date = end_date or start_date + timedelta(days=4)
    created_at = created_at or datetime.now(timezone.utc)
    return dict(
        id=uuid.uuid4(),
        employee_id=employee_id,
        start_date=start_date,
        end_date=end_date,
        days_requested=days_requested or (end_date - start_date).days + 1,
        reason=reason,
        status=status,
        created_at=created_at,
        updated_at=created_at,
    )


async def _seed_employee(db: AsyncSession, **kwargs) -> Employee:
    emp = Employee(**_make_employee(**kwargs))
    db.add(emp)
    await db.flush()
    return emp


async def _seed_request(
    db: AsyncSession,
    employee_id: str,
    **kwargs,
) -> VacationRequest:
    req = VacationRequest(**_make_request(employee_id, **kwargs))
    db.add(req)
    await db.flush()
    return req


@pytest.fixture
async def test_employee(db) -> Employee:
    """An employee with the default 25-day allocation."""
    emp = await _seed_employee(db, employee_id="emp-1", email="ana@example.com", display_name="Ana")
    await db.commit()
    return emp


@pytest.fixture
async def test_admin(db) -> Employee:
    emp = await _seed_employee(
        db, employee_id="admin-1", email="boss@example.com", display_name="Boss",
    )
    await db.commit()
    return emp


# ── Auth helpers ────────────────────────────────────────────────────

def create_access_token(
    identity_id: str,
    email: Optional[str] = None,
    role: UserRole = UserRole.employee,
    name: Optional[str] = None,
    department: Optional[str] = None,
    expired: bool = False,
) -> str:
    """Generate a JWT the way the identity provider would."""
    if expired:
        exp = datetime.now(timezone.utc) - timedelta(hours=1)
    else:
        exp = datetime.now(timezone.utc) + timedelta(hours=1)
    payload = {
        "sub": identity_id,
        "email": email or f"{identity_id}@example.com",
        "role": role.value,
        "exp": exp,
    }
    if name is not None:
        payload["name"] = name
    if department is not None:
        payload["department"] = department
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def _auth_headers(
    identity_id: str,
    email: Optional[str] = None,
    role: UserRole = UserRole.employee,
    name: Optional[str] = None,
    department: Optional[str] = None,
) -> dict[str, str]:
    token = create_access_token(
        identity_id, email=email, role=role, name=name, department=department,
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(test_employee) -> dict[str, str]:
    """Bearer headers for test_employee."""
    return _auth_headers(test_employee.id, email=test_employee.email, name="Ana")


@pytest.fixture
def admin_headers(test_admin) -> dict[str, str]:
    """Bearer headers for test_admin, carrying the admin role."""
    return _auth_headers(
        test_admin.id, email=test_admin.email, role=UserRole.admin, name="Boss",
    )
