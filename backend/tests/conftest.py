"""
LivDaily Backend — Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the whole suite.
How:   Environment variables are set before any livdaily import so the
       settings singleton, the engine and the Gemini client all come up in
       test mode.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session:   AsyncMock standing in for AsyncSession (unit tests)
    ├── db_engine:         fresh in-memory SQLite schema per test
    ├── session_factory:   async_sessionmaker bound to db_engine
    ├── test_client:       HTTPX AsyncClient on the app, DB dependency overridden
    ├── auth_headers:      bearer header for a fresh anonymous user
    └── admin_headers:     bearer header for a user promoted to admin
"""

import os
import uuid

# Must run before livdaily.config is imported anywhere
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["GEMINI_API_KEY"] = "test-key-not-real"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["RATE_LIMIT_REQUESTS"] = "100000"

from typing import Dict  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import update  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from livdaily.database import Base, get_db_session  # noqa: E402
from livdaily.models import User  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Unit-test fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    A mock AsyncSession.

    Usage:
        mock_db_session.get.return_value = entry
        await journal_service.delete_entry(mock_db_session, user_id, entry.id)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.delete = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    # begin_nested() is used as `async with`; __aexit__ must not swallow errors
    savepoint = MagicMock()
    savepoint.__aenter__ = AsyncMock()
    savepoint.__aexit__ = AsyncMock(return_value=False)
    session.begin_nested = MagicMock(return_value=savepoint)
    return session


# ══════════════════════════════════════════════════════════════════════════
# API-test fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    # StaticPool keeps one connection so the in-memory database survives
    # across sessions
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
async def session_factory(db_engine):
    return async_sessionmaker(db_engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    HTTPX AsyncClient talking to the FastAPI app in-process.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
    """
    from livdaily.main import app

    async def override_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


async def sign_in_anonymous(client: AsyncClient) -> Dict[str, str]:
    """Create an anonymous user and return its session payload (camelCase keys)."""
    response = await client.post("/v1/auth/anonymous")
    assert response.status_code == 201
    return response.json()


def bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def auth_headers(test_client):
    session = await sign_in_anonymous(test_client)
    return bearer(session["token"])


@pytest_asyncio.fixture
async def admin_headers(test_client, session_factory):
    session = await sign_in_anonymous(test_client)
    async with session_factory() as db:
        await db.execute(
            update(User)
            .where(User.id == uuid.UUID(session["userId"]))
            .values(role="admin")
        )
        await db.commit()
    return bearer(session["token"])
