"""
Snippetbox — Snippet Store (Data Access)
=========================================

What:  Insert / Get / Latest over the `snippets` table.
Why:   Keeps every SQL statement in one place, independent of HTTP concerns.
How:   Wraps the shared async session factory (the connection pool) handed in
       by the application factory. Each operation opens its own session and
       runs a single statement, so concurrent requests share nothing but the
       pool.
Who:   Called by the page and API route handlers.

Error Handling Strategy:
    - "No live row" on get() → NotFoundError (404 upstream)
    - Any database failure     → StorageError, chained to the driver error
    - One ERROR line per failure, without title or content; the traceback is
      logged once, by the StorageError handler in main.py
    The store never validates input and never retries; the caller validates
    through SnippetCreateForm and the pool/driver owns timeouts.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, List

from sqlalchemy import desc, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from snippetbox.exceptions import NotFoundError, StorageError
from snippetbox.models.snippet import Snippet
from snippetbox.schemas.snippet import SnippetResponse

logger = logging.getLogger(__name__)

LATEST_LIMIT = 10

# snippets.id is a 32-bit INTEGER column
MAX_SNIPPET_ID = 2_147_483_647

# Connection failures can surface as OSError before SQLAlchemy wraps them
DATABASE_ERRORS = (SQLAlchemyError, OSError)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def describe_error(e: BaseException) -> str:
    """
    Error type plus the driver's own message.

    str() of a SQLAlchemy StatementError appends the SQL and its bound
    parameters, which here are snippet text, so only .orig is rendered.
    """
    orig = getattr(e, "orig", None)
    return f"{type(e).__name__}: {orig if orig is not None else e}"


class SnippetStore:
    """
    Data-access object for snippets.

    Args:
        session_factory: async_sessionmaker bound to the application engine
        clock: returns the current UTC time; replaced in tests to move time
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        clock: Callable[[], datetime] = utc_now,
    ):
        self._session_factory = session_factory
        self._clock = clock

    async def insert(self, title: str, content: str, expires_days: int) -> int:
        """
        Store a new snippet and return its id.

        created_at is the current UTC time and expires_at is created_at plus
        expires_days days; both are computed once so the invariant
        expires_at > created_at holds exactly.

        Raises:
            StorageError: the write failed
        """
        created_at = self._clock()
        snippet = Snippet(
            title=title,
            content=content,
            created_at=created_at,
            expires_at=created_at + timedelta(days=expires_days),
        )
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    session.add(snippet)
                    await session.flush()  # Assigns the auto-increment id
                    snippet_id = snippet.id
        except DATABASE_ERRORS as e:
            logger.error(
                "Database error inserting snippet (expires_days=%d): %s",
                expires_days,
                describe_error(e),
            )
            raise StorageError(
                message="Could not save the snippet. Please try again.",
                operation="insert",
                context={"expires_days": expires_days, "error_type": type(e).__name__},
            ) from e

        logger.info("Snippet %d created, expires in %d days", snippet_id, expires_days)
        return snippet_id

    async def get(self, snippet_id: int) -> SnippetResponse:
        """
        Return the snippet with this id if it has not expired.

        Query plan:
            SELECT ... FROM snippets WHERE id = :id AND expires_at > :now

        Raises:
            NotFoundError: no row with this id, or the row has expired
            StorageError: the query failed
        """
        if not 1 <= snippet_id <= MAX_SNIPPET_ID:
            raise NotFoundError(resource="snippet", resource_id=str(snippet_id))

        now = self._clock()
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(Snippet).where(
                        Snippet.id == snippet_id,
                        Snippet.expires_at > now,
                    )
                )
                snippet = result.scalar_one_or_none()
        except DATABASE_ERRORS as e:
            logger.error("Database error fetching snippet %s: %s", snippet_id, describe_error(e))
            raise StorageError(
                message="Could not retrieve the snippet. Please try again.",
                operation="get",
                context={"snippet_id": snippet_id, "error_type": type(e).__name__},
            ) from e

        if snippet is None:
            raise NotFoundError(resource="snippet", resource_id=str(snippet_id))

        return SnippetResponse.model_validate(snippet)

    async def latest(self) -> List[SnippetResponse]:
        """
        Return up to LATEST_LIMIT unexpired snippets, newest first.

        Query plan:
            SELECT ... FROM snippets WHERE expires_at > :now
            ORDER BY created_at DESC, id DESC LIMIT 10
            → idx_snippets_created_at

        An empty list means no live snippets; it is not an error.
        """
        now = self._clock()
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(Snippet)
                    .where(Snippet.expires_at > now)
                    .order_by(desc(Snippet.created_at), desc(Snippet.id))
                    .limit(LATEST_LIMIT)
                )
                snippets = list(result.scalars().all())
        except DATABASE_ERRORS as e:
            logger.error("Database error listing latest snippets: %s", describe_error(e))
            raise StorageError(
                message="Could not retrieve snippets. Please try again.",
                operation="latest",
                context={"error_type": type(e).__name__},
            ) from e

        return [SnippetResponse.model_validate(s) for s in snippets]

    async def ping(self) -> None:
        """Run SELECT 1 through the pool; raises StorageError when unreachable."""
        try:
            async with self._session_factory() as session:
                await session.execute(text("SELECT 1"))
        except DATABASE_ERRORS as e:
            raise StorageError(
                message="Database is unreachable",
                operation="ping",
                context={"error_type": type(e).__name__},
            ) from e
