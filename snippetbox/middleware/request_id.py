"""
Snippetbox — Request ID Middleware
===================================

What:  Assigns an id to each incoming request and echoes it in the response.
Why:   Every log line and error body for one request shares the same id, so a
       user-reported error can be matched to the server-side stack trace.
How:   Reuses a client-supplied X-Request-ID or generates a short UUID, stores
       it in a ContextVar and in request.state, and sets the response header.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Middleware that tags each request with a correlation id."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
