"""Global pytest fixtures for testing."""

import contextlib
import itertools
import os
from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import dotenv
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool, StaticPool

from marquee_api.dependencies import get_redis_pool
from marquee_api.main import app
from marquee_database import Base
from marquee_database.models import Entry, EntryType
from marquee_database.session import get_session

with contextlib.suppress(OSError):
    dotenv.load_dotenv()


class MockArqRedis:
    """In-memory stand-in for the ArqRedis pool used by rate limiting."""

    def __init__(self):
        self._store: dict[str, Any] = {}
        self._ttl: dict[str, int] = {}

    async def incr(self, key: str) -> int:
        next_count = int(self._store.get(key, 0)) + 1
        self._store[key] = next_count
        return next_count

    async def set(
        self, key: str, value: Any, ex: int | None = None, nx: bool = False
    ) -> bool | None:
        if nx and key in self._store:
            return None
        self._store[key] = value
        if ex is not None:
            self._ttl[key] = ex
        return True

    async def get(self, key: str) -> Any:
        return self._store.get(key)

    async def ttl(self, key: str) -> int:
        return self._ttl.get(key, -1)

    def reset(self) -> None:
        """Reset all in-memory redis state."""
        self._store.clear()
        self._ttl.clear()


# Global mock redis instance for testing
mock_redis = MockArqRedis()

# Test database URL - defaults to a private in-memory SQLite database per test
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")

# Safety check: ensure tests never run against a non-test server database
if not TEST_DATABASE_URL.startswith("sqlite") and (
    "_test" not in TEST_DATABASE_URL and "/test" not in TEST_DATABASE_URL
):
    raise RuntimeError(
        f"Safety check failed: TEST_DATABASE_URL must point to a test database "
        f"(name should contain 'test'). Current: {TEST_DATABASE_URL}"
    )


@pytest_asyncio.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create test database engine with a fresh schema."""
    if TEST_DATABASE_URL.startswith("sqlite"):
        # One shared connection keeps the in-memory database alive
        engine = create_async_engine(
            TEST_DATABASE_URL,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    else:
        engine = create_async_engine(TEST_DATABASE_URL, poolclass=NullPool)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for one test."""
    session_factory = async_sessionmaker(
        bind=test_engine, class_=AsyncSession, expire_on_commit=False
    )
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test HTTP client with database and redis overrides."""

    async def override_get_session():
        yield db_session

    async def override_get_redis_pool():
        return mock_redis

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_redis_pool] = override_get_redis_pool

    # Reset mock redis state before each test
    mock_redis.reset()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def test_mock_redis() -> MockArqRedis:
    """Provide access to the mock redis instance for testing."""
    return mock_redis


@pytest_asyncio.fixture
async def entry_factory(
    db_session: AsyncSession,
) -> Callable[..., Awaitable[Entry]]:
    """
    Factory inserting entries with strictly increasing created_at.

    Each call is one minute newer than the previous, starting 2024-01-01,
    so the newest entry is always the last one created.
    """
    counter = itertools.count()
    base_time = datetime(2024, 1, 1, tzinfo=UTC)

    async def _create(**overrides: Any) -> Entry:
        n = next(counter)
        values: dict[str, Any] = {
            "title": f"Entry {n:03d}",
            "type": EntryType.MOVIE,
            "director": "Director",
            "budget": "$1M",
            "location": "Los Angeles",
            "duration": "120 min",
            "year": "2020",
            "created_at": base_time + timedelta(minutes=n),
        }
        values.update(overrides)
        entry = Entry(**values)
        db_session.add(entry)
        await db_session.commit()
        await db_session.refresh(entry)
        return entry

    return _create
