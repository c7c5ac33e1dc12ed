"""Async SQLAlchemy engine and session management."""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import (
    DisconnectionError,
    InterfaceError,
    OperationalError,
    TimeoutError as PoolTimeoutError,
)
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from vacation_tracker.common.exceptions import RepositoryUnavailableException
from vacation_tracker.config import settings

logger = logging.getLogger(__name__)

# Failures meaning "the store is unreachable", as opposed to bad data
STORE_UNAVAILABLE_ERRORS = (
    OperationalError,
    InterfaceError,
    DisconnectionError,
    PoolTimeoutError,
    OSError,
)

# Async engine for FastAPI
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.ENVIRONMENT == "development",
    pool_pre_ping=True,
)

# Async session factory
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """Translate connectivity failures into RepositoryUnavailableException.

    Usage::

        with store_errors("vacation_requests.list"):
            result = await db.execute(query)
    """
    try:
        yield
    except STORE_UNAVAILABLE_ERRORS as exc:
        logger.error("Record store unavailable during %s: %s", operation, exc)
        raise RepositoryUnavailableException() from exc


async def create_tables() -> None:
    """Create any missing tables (used on startup when AUTO_CREATE_TABLES is set)."""
    import vacation_tracker.employees.models  # noqa: F401
    import vacation_tracker.vacation.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db() -> AsyncSession:
    """FastAPI dependency: yield an async database session."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
