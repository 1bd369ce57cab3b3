"""
RetroBoard Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: Mock AsyncSession (service unit tests, no DB)
    ├── database:        Database on a fresh temporary SQLite file, tables created
    ├── test_client:     HTTPX AsyncClient wired to create_app(database)
    ├── registered_user: A user created through POST /register
    └── board:           A board owned by registered_user
"""

import os
import tempfile

# Settings are read at import time; point them away from ./data.sqlite3
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="retroboard_test_"), "default.sqlite3"
)
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from retroboard.database import Database
from retroboard.main import create_app


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_login_no_match(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = None
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
    return session


@pytest_asyncio.fixture
async def database(tmp_path):
    """A Database on its own SQLite file, schema created, disposed after the test."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'test.sqlite3'}", echo=False)
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def test_client(database):
    """
    Async HTTP client talking to an app bound to the `database` fixture.

    ASGITransport does not run the lifespan, which is why `database` creates
    the tables itself.
    """
    app = create_app(database=database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def registered_user(test_client):
    response = await test_client.post(
        "/register", json={"email": "alice@example.com", "password": "s3cret"}
    )
    assert response.status_code == 200
    return response.json()


@pytest_asyncio.fixture
async def board(test_client, registered_user):
    response = await test_client.post(
        "/boards", json={"userId": registered_user["id"], "title": "Sprint 1"}
    )
    assert response.status_code == 200
    return response.json()
