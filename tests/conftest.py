"""
Snippetbox — Test Configuration (conftest.py)
==============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── clock: Movable UTC clock injected into SnippetStore
    ├── session_factory: async_sessionmaker over a fresh in-memory SQLite DB
    ├── store: SnippetStore bound to session_factory and clock
    ├── schemaless_session_factory: real SQLite engine with no tables created
    ├── failing_session_factory: factory whose sessions raise OperationalError
    ├── mock_store: AsyncMock-backed SnippetStore stand-in
    └── test_client / make_client: HTTPX AsyncClient against the FastAPI app
"""

import os
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Override settings BEFORE any snippetbox import creates the settings singleton
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"

from snippetbox.database import Base, engine_options  # noqa: E402
from snippetbox.main import create_app  # noqa: E402
from snippetbox.models.snippet import Snippet  # noqa: E402,F401
from snippetbox.services.snippet_store import SnippetStore  # noqa: E402


class FakeClock:
    """Callable clock for SnippetStore; tests move it forward explicitly."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 1, 15, 12, 0, 0, tzinfo=timezone.utc))


@pytest_asyncio.fixture
async def session_factory():
    """
    Session factory over an in-memory SQLite database with the schema created.

    StaticPool keeps the single in-memory connection alive across sessions.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        **engine_options(),
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def schemaless_session_factory():
    """
    Same engine options, but no tables: every statement fails inside the
    real driver ("no such table"), so error messages are genuine.
    """
    engine = create_async_engine("sqlite+aiosqlite://", **engine_options())

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def store(session_factory, clock):
    return SnippetStore(session_factory, clock=clock)


@pytest.fixture
def failing_session_factory():
    """
    A session factory whose sessions fail every statement.

    Usage:
        store = SnippetStore(failing_session_factory)
        with pytest.raises(StorageError):
            await store.latest()
    """
    error = OperationalError("SELECT 1", {}, Exception("connection refused"))

    session = AsyncMock()
    session.execute = AsyncMock(side_effect=error)
    session.flush = AsyncMock(side_effect=error)
    session.add = MagicMock()
    session.__aenter__.return_value = session
    session.__aexit__.return_value = False

    transaction = AsyncMock()
    transaction.__aexit__.return_value = False
    session.begin = MagicMock(return_value=transaction)

    return MagicMock(return_value=session)


@pytest.fixture
def mock_store():
    """SnippetStore stand-in for route tests that only check HTTP behaviour."""
    store = MagicMock(spec=SnippetStore)
    store.insert = AsyncMock(return_value=1)
    store.get = AsyncMock()
    store.latest = AsyncMock(return_value=[])
    store.ping = AsyncMock(return_value=None)
    return store


@pytest.fixture
def make_client():
    """
    Build an AsyncClient for an app serving the given store.

    Usage:
        async with make_client(mock_store) as client:
            response = await client.get("/")

    raise_app_exceptions=False returns the 500 response for an unhandled
    exception instead of re-raising it in the test.
    """
    def _make(app_store, raise_app_exceptions=True):
        app = create_app(store=app_store)
        transport = ASGITransport(app=app, raise_app_exceptions=raise_app_exceptions)
        return AsyncClient(transport=transport, base_url="http://test")
    return _make


@pytest_asyncio.fixture
async def test_client(make_client, store):
    """HTTPX AsyncClient for an app backed by the in-memory SQLite store."""
    async with make_client(store) as client:
        yield client
