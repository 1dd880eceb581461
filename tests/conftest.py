"""
Daily Diet Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Each test gets its own in-memory SQLite database (aiosqlite), so tests
       never share rows. HTTP tests run the real FastAPI app through httpx's
       ASGITransport with `get_db_session` overridden to use that database.

Fixture Hierarchy (all function-scoped):
    ├── engine: isolated in-memory engine with the schema created
    ├── db_session: AsyncSession bound to `engine` (service tests)
    ├── mock_db_session: AsyncMock session for failure paths
    ├── test_app / test_client: app + HTTPX AsyncClient bound to `engine`
    └── register_user: registers a user over HTTP, returns its auth headers
"""

import os

# Override settings for testing BEFORE any dailydiet imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import AsyncGenerator, Callable, Dict, Optional
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

import dailydiet.models  # noqa: F401  (registers tables on Base.metadata)
from dailydiet.database import Base, build_engine, build_session_factory, get_db_session
from dailydiet.main import create_app


@pytest_asyncio.fixture
async def engine():
    engine = build_engine("sqlite+aiosqlite://")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine) -> AsyncGenerator[AsyncSession, None]:
    """A session on the isolated database; services flush, the test reads back."""
    factory = build_session_factory(engine)
    async with factory() as session:
        yield session


@pytest.fixture
def mock_db_session():
    """
    A mock async database session for forcing storage failures.

    Usage:
        mock_db_session.execute.side_effect = OperationalError(...)
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
def test_app(engine):
    app = create_app()
    factory = build_session_factory(engine)

    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    return app


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    HTTPX AsyncClient talking to the app in-process.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


def session_cookie_value(set_cookie: str) -> str:
    """Extract the sessionId value from a Set-Cookie header."""
    first = set_cookie.split(";", 1)[0]
    name, _, value = first.partition("=")
    assert name.strip() == "sessionId"
    return value.strip()


def auth(token: str) -> Dict[str, str]:
    """Request headers that present `token` as the session cookie."""
    return {"Cookie": f"sessionId={token}"}


@pytest.fixture
def register_user(test_client) -> Callable:
    """
    Register a user over HTTP and return request headers carrying its session.

    The client's cookie jar is cleared afterwards so each request states
    explicitly which user it acts as.
    """

    async def _register(email: Optional[str] = None, username: str = "Tester") -> Dict[str, str]:
        email = email or f"{uuid4().hex[:8]}@example.com"
        response = await test_client.post("/users", json={"username": username, "email": email})
        assert response.status_code == 201, response.text
        token = session_cookie_value(response.headers["set-cookie"])
        test_client.cookies.clear()
        return auth(token)

    return _register
