"""
Snippetbox — Database Engine & Session Factory
===============================================

What:  Async SQLAlchemy engine, session factory, declarative base, and the
       startup connectivity check.
Why:   Centralizes all database connection logic in one place.
How:   Creates an async engine with connection pooling. The session factory is
       handed to SnippetStore, which opens one short-lived session per call.
When:  Engine is created at module import; sessions are created per operation.

Connection Pooling Strategy:
    pool_size=10:      Persistent connections for normal load
    max_overflow=5:    Temporary connections for traffic spikes
    pool_pre_ping:     Validates connections before use (catches stale connections)
    pool_recycle=3600: Recycles connections every hour
    hide_parameters:   SQL errors never render bound values (snippet text)

    SQLite URLs (used by the test suite) skip the sizing options because
    SQLAlchemy picks a non-queue pool for them.
"""

import logging
from typing import Any, Dict

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    stop_after_attempt,
    wait_exponential,
)

from snippetbox.config import settings

logger = logging.getLogger(__name__)


def engine_options() -> Dict[str, Any]:
    options: Dict[str, Any] = {
        "pool_pre_ping": settings.db_pool_pre_ping,
        # Echo SQL only when debugging; it is very noisy otherwise
        "echo": settings.log_level == "DEBUG",
        # Bound values are snippet text; keep them out of error messages and logs
        "hide_parameters": True,
    }
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_recycle=3600,
        )
    return options


# ── Engine Configuration ──────────────────────────────────────────────────
engine: AsyncEngine = create_async_engine(settings.database_url, **engine_options())

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: snippet attributes stay readable after the session
# that loaded them has committed and closed.
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, which Alembic reads for migrations.
    """
    pass


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def wait_for_database(target: AsyncEngine = engine) -> None:
    """
    Verify the database is reachable before serving traffic.

    What:  Runs SELECT 1, retrying with exponential backoff.
    When:  Called once during application startup (lifespan handler).
    Raises the last connection error when every attempt fails.
    """
    async for attempt in AsyncRetrying(
        stop=stop_after_attempt(settings.db_connect_attempts),
        wait=wait_exponential(multiplier=1, max=settings.db_connect_max_wait),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    ):
        with attempt:
            async with target.connect() as conn:
                await conn.execute(text("SELECT 1"))
    logger.info("Database connection established")


async def dispose_engine() -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
