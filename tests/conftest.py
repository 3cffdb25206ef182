"""
StudentInfo API — Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixtures:
    ├── mock_db_session:    AsyncMock session for service unit tests
    ├── sample_student:     a persisted-looking Student row
    ├── db_engine:          in-memory SQLite engine with the schema created
    ├── test_client:        HTTPX AsyncClient wired to the app, sessions from db_engine
    └── add_students:       helper that inserts students through the API
"""

import os
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

# Settings are read at import time; set them before importing studentinfo
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from studentinfo.database import Base, get_db_session
from studentinfo.models.student import Student


@pytest.fixture
def mock_db_session():
    """
    Mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = student
        result = await student_service.get_student_by_id(mock_db_session, 1)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_student():
    now = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)
    return Student(
        id=7,
        name="Ann",
        class_="5A",
        is_active=0,
        created_at=now,
        updated_at=now,
        age=10,
    )


@pytest_asyncio.fixture
async def db_engine():
    """
    In-memory SQLite engine holding the studentinfo schema.

    StaticPool keeps one connection, so every session sees the same database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def test_client(db_engine):
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    get_db_session is overridden with one that hands out sessions on the
    test engine and keeps the commit/rollback behaviour of the real one.
    """
    from studentinfo.main import app

    session_factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def add_students(test_client):
    """Returns a coroutine that inserts students via POST /api/addstudent."""

    async def _add(*students):
        for body in students:
            response = await test_client.post("/api/addstudent", json=body)
            assert response.status_code == 200

    return _add
