"""Persistence: async engine, session factory, and Base for SQLAlchemy ORM.

Schema is managed by Alembic migrations (taskdesk/infrastructure/persistence/migrations).

Engine and session factory are created lazily on first use (get_db /
get_db_transactional) so import does not trigger Settings validation.
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from taskdesk.core.config import get_settings

logger = logging.getLogger(__name__)

# Set by _ensure_engine() on first use; avoids get_settings() at import time.
engine: Any = None
AsyncSessionLocal: async_sessionmaker[AsyncSession] | None = None


def _ensure_engine() -> None:
    """Create engine and AsyncSessionLocal on first use."""
    global engine, AsyncSessionLocal
    if AsyncSessionLocal is not None:
        return
    settings = get_settings()
    engine_args: dict[str, Any] = {"echo": settings.database_echo}
    if "postgresql" in settings.database_url:
        engine_args.update(
            pool_pre_ping=True,
            pool_size=settings.db_pool_size if settings.db_pool_size is not None else 10,
            max_overflow=(
                settings.db_max_overflow if settings.db_max_overflow is not None else 20
            ),
            pool_recycle=3600,
            connect_args={
                "command_timeout": (
                    settings.db_command_timeout
                    if settings.db_command_timeout is not None
                    else 60
                )
            },
        )
    engine = create_async_engine(settings.database_url, **engine_args)
    AsyncSessionLocal = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy declarative models."""


async def get_db():
    """Database session dependency for read operations.

    Does not commit; use get_db_transactional for writes.
    Yields a session and closes it on exit.
    """
    _ensure_engine()
    assert AsyncSessionLocal is not None
    async with AsyncSessionLocal() as session:
        yield session


async def get_db_transactional():
    """Database session dependency for write operations.

    Begins a transaction, commits on success, rolls back on exception.
    Use for POST, PUT, PATCH, DELETE endpoints.
    """
    _ensure_engine()
    assert AsyncSessionLocal is not None
    async with AsyncSessionLocal() as session:
        async with session.begin():
            yield session
