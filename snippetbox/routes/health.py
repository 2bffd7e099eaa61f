"""
Snippetbox — Health Check Route
================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Pings the database through the SnippetStore's pool.

    Status levels:
    - healthy:   database reachable (HTTP 200)
    - unhealthy: database unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response

from snippetbox import __version__
from snippetbox.dependencies import get_snippet_store
from snippetbox.exceptions import StorageError
from snippetbox.schemas.snippet import HealthResponse
from snippetbox.services.snippet_store import SnippetStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    response: Response,
    store: SnippetStore = Depends(get_snippet_store),
) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        await store.ping()
    except StorageError as e:
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = 503
        logger.warning("Health check: database unreachable: %s", e.__cause__ or e)

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
