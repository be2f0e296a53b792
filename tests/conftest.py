"""Pytest configuration and fixtures for taskdesk.

Environment is set before any taskdesk import so Settings validate against an
in-memory SQLite database. Each test gets a fresh database built from ORM
metadata; HTTP tests run the app over ASGI with the session dependencies
pointed at that database.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ["RATE_LIMIT_ENABLED"] = "false"

from collections.abc import AsyncIterator  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from taskdesk.application.dtos.profile import ProfileCreate, ProfileResult  # noqa: E402
from taskdesk.core.config import get_settings  # noqa: E402
from taskdesk.domain.enums import Role  # noqa: E402

get_settings.cache_clear()

from taskdesk.infrastructure.persistence import models  # noqa: E402,F401
from taskdesk.infrastructure.persistence.database import (  # noqa: E402
    Base,
    get_db,
    get_db_transactional,
)
from taskdesk.infrastructure.persistence.repositories import (  # noqa: E402
    ProfileRepository,
)
from taskdesk.main import app  # noqa: E402

from tests.factories import EMPLOYEE_PASSWORD, MANAGER_PASSWORD, bearer_for  # noqa: E402


@pytest.fixture
async def db_session() -> AsyncIterator[AsyncSession]:
    """Session on a fresh in-memory database with all tables created."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = async_sessionmaker(
        bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )
    async with session_factory() as session:
        yield session
        await session.rollback()
    await engine.dispose()


@pytest.fixture
async def manager(db_session: AsyncSession) -> ProfileResult:
    return await ProfileRepository(db_session).create_profile(
        ProfileCreate(
            username="boss",
            password=MANAGER_PASSWORD,
            full_name="Maria Manager",
            role=Role.MANAGER,
        )
    )


@pytest.fixture
async def employee(db_session: AsyncSession) -> ProfileResult:
    return await ProfileRepository(db_session).create_profile(
        ProfileCreate(
            username="emp",
            password=EMPLOYEE_PASSWORD,
            full_name="Eve Employee",
        )
    )


@pytest.fixture
async def other_employee(db_session: AsyncSession) -> ProfileResult:
    return await ProfileRepository(db_session).create_profile(
        ProfileCreate(
            username="other",
            password=EMPLOYEE_PASSWORD,
            full_name="Adam Other",
        )
    )


@pytest.fixture
def manager_headers(manager: ProfileResult) -> dict[str, str]:
    return bearer_for(manager)


@pytest.fixture
def employee_headers(employee: ProfileResult) -> dict[str, str]:
    return bearer_for(employee)


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app, sharing the test session."""

    async def _override_db() -> AsyncIterator[AsyncSession]:
        yield db_session

    app.dependency_overrides[get_db] = _override_db
    app.dependency_overrides[get_db_transactional] = _override_db
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()
