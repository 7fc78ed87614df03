"""
Postboard Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for service-level error paths
    ├── hasher / clock / token_service: fast bcrypt + controllable time
    ├── db_engine / db_session: throw-away SQLite database (aiosqlite)
    ├── app: create_app() wired to the SQLite database via dependency_overrides
    ├── client: HTTPX AsyncClient talking to the app through ASGITransport
    └── register_and_login: helper returning auth headers for a new user
"""

import os

# Must happen BEFORE any postboard import: settings and the module-level app
# are built at import time.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-secret-not-for-production"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import AsyncGenerator, Awaitable, Callable, Dict  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

import postboard.models  # noqa: E402,F401
from postboard.auth.passwords import PasswordHasher  # noqa: E402
from postboard.auth.tokens import TokenService  # noqa: E402
from postboard.config import Settings  # noqa: E402
from postboard.database import Base, get_db_session  # noqa: E402
from postboard.main import create_app  # noqa: E402

TEST_SECRET = "test-secret-not-for-production"


class FakeClock:
    """Stand-in for time.time that only moves when told to."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ══════════════════════════════════════════════════════════════════════════
# Unit-level fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = user
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
def hasher() -> PasswordHasher:
    # Minimum work factor keeps the suite fast
    return PasswordHasher(rounds=4)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def token_service(clock) -> TokenService:
    return TokenService(secret=TEST_SECRET, clock=clock)


# ══════════════════════════════════════════════════════════════════════════
# Database fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """Fresh SQLite file per test with all tables created."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'postboard.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


# ══════════════════════════════════════════════════════════════════════════
# Application fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def app(db_engine, clock):
    """
    The real application, with its session dependency pointed at the test
    database and its token service driven by the fake clock.
    """
    test_settings = Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        jwt_secret=TEST_SECRET,
        bcrypt_rounds=4,
        log_level="WARNING",
    )
    application = create_app(test_settings)
    application.state.token_service = TokenService(secret=TEST_SECRET, clock=clock)

    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_session() -> AsyncGenerator[AsyncSession, None]:
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    application.dependency_overrides[get_db_session] = override_session
    return application


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """
    Usage:
        async def test_list(client):
            response = await client.get("/posts")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def register_and_login(client) -> Callable[..., Awaitable[Dict[str, str]]]:
    """Register a user, log in, and return an Authorization header dict."""

    async def _register_and_login(username: str, password: str = "secret1") -> Dict[str, str]:
        response = await client.post(
            "/users",
            json={"username": username, "email": f"{username}@x.com", "password": password},
        )
        assert response.status_code == 200, response.text
        response = await client.post("/login", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _register_and_login
