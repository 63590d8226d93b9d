"""
FormBuilder Backend - Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: Mock database session (no real DB needed)
    ├── db_result:       Builds the object a mocked `execute` returns
    ├── test_client:     HTTPX AsyncClient against the app on in-memory SQLite
    └── register_account: Registers a user through the API, returns headers
"""

import os

# Override settings for testing BEFORE any formbuilder imports, since
# formbuilder.config builds its settings singleton at import time.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["TOKEN_SECRET"] = "test-secret-0123456789-abcdefghijklmnop"
os.environ["BCRYPT_ROUNDS"] = "4"  # Minimum cost; hashing speed is irrelevant here
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests

from typing import Any, AsyncGenerator, Dict, List, Optional  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Mocked Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    What:    An AsyncMock that simulates AsyncSession behavior.
    How:     Mocks execute, flush, commit, rollback, delete and close; `add`
             is synchronous on a real session so it is a plain MagicMock.

    Usage:
        async def test_get_form(mock_db_session, db_result):
            mock_db_session.execute.return_value = db_result(form)
            result = await form_service.get_form(mock_db_session, form.id)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def db_result():
    """
    Factory for the Result object returned by `await session.execute(...)`.

    `db_result(obj)` answers scalar_one_or_none() with obj;
    `db_result(rows=[...])` answers scalars().all() with the list.
    """

    def _make(one: Any = None, rows: Optional[List[Any]] = None) -> MagicMock:
        result = MagicMock()
        result.scalar_one_or_none.return_value = one
        result.scalars.return_value.all.return_value = list(rows or [])
        return result

    return _make


# ══════════════════════════════════════════════════════════════════════════
# API Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client() -> AsyncGenerator[AsyncClient, None]:
    """
    Provides an async HTTP test client for endpoint testing.

    What:    HTTPX AsyncClient configured to talk to our FastAPI app.
    How:     Creates the schema in the shared in-memory SQLite database,
             routes requests through ASGITransport (no server, no lifespan),
             then drops everything so each test starts empty.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from formbuilder.database import Base, create_all, engine
    from formbuilder.main import app

    await create_all()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def register_account(test_client):
    """
    Registers an account through POST /register.

    Returns an async callable producing the Authorization headers for the
    new account.
    """

    async def _register(username: str = "alice", password: str = "s3cret") -> Dict[str, str]:
        response = await test_client.post(
            "/register", json={"username": username, "password": password}
        )
        assert response.status_code == 201, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _register
