"""
ProfileDesk Backend — Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   API tests build a fresh app with `create_app(Settings(...))` on a
       per-test SQLite file (aiosqlite), create the schema explicitly and
       talk to it through httpx's ASGITransport. Service unit tests use a
       mocked AsyncSession.

Fixture Hierarchy:
    Function-scoped:
    ├── settings:          Settings pointing at tmp_path/test.db
    ├── app:               FastAPI app with its schema created
    ├── test_client:       HTTPX AsyncClient bound to `app`
    ├── mock_db_session:   AsyncMock session (no real DB)
    └── sample_png_bytes:  10 KB of PNG-signed bytes
"""

import os
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set before any profiledesk import; the module-level app in
# profiledesk.main reads the environment on import
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["JWT_SECRET"] = "test-secret-not-real"
os.environ["LOG_LEVEL"] = "WARNING"

from profiledesk.config import Settings  # noqa: E402
from profiledesk.main import create_app  # noqa: E402

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        jwt_secret="test-secret-not-real",
        jwt_expires="1d",
        environment="test",
        log_level="WARNING",
        db_create_all=True,
    )


@pytest_asyncio.fixture
async def app(settings):
    """
    A FastAPI app with its tables created.

    ASGITransport does not run the lifespan, so the schema is created and
    the engine disposed here.
    """
    application = create_app(settings)
    context = application.state.context
    await context.create_schema()
    yield application
    await context.dispose()


@pytest_asyncio.fixture
async def test_client(app) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTPX AsyncClient talking to `app` in-process.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def mock_db_session():
    """
    A MagicMock that simulates AsyncSession behavior.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = row
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.get = AsyncMock()
    session.add = MagicMock()
    session.add_all = MagicMock()
    return session


@pytest.fixture
def sample_png_bytes() -> bytes:
    """10 KB of bytes starting with the PNG signature; nothing decodes them."""
    body = bytes(range(256)) * 40
    return PNG_SIGNATURE + body[: 10 * 1024 - len(PNG_SIGNATURE)]
