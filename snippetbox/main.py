"""
Snippetbox — FastAPI Application Factory
=========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn snippetbox.main:app) or the `snippetbox`
       console script.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────┐ ┌──────────┐ ┌────────┐  │
    │  │  Req ID  │→│ Logging  │→│ Security │→│  GZip  │  │
    │  └──────────┘ └──────────┘ └──────────┘ └────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌──────────────┐ ┌─────────────┐  │
    │  │ HTML pages   │ │ /api/snippets│ │ GET /health │  │
    │  └──────────────┘ └──────────────┘ └─────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ Storage→500  │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, wait for the database (with retries)
    Shutdown: dispose the engine (close all pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from fastapi.staticfiles import StaticFiles

from snippetbox import __version__
from snippetbox.config import settings
from snippetbox.database import async_session_factory, dispose_engine, wait_for_database
from snippetbox.exceptions import (
    NotFoundError,
    SnippetboxError,
    StorageError,
    ValidationError,
)
from snippetbox.middleware.logging import RequestLoggingMiddleware
from snippetbox.middleware.request_id import RequestIDMiddleware, request_id_var
from snippetbox.middleware.security_headers import (
    SecurityHeadersMiddleware,
    apply_security_headers,
)
from snippetbox.rendering import STATIC_DIR
from snippetbox.routes import health, pages, snippets
from snippetbox.services.snippet_store import SnippetStore

logger = logging.getLogger(__name__)

# Paths whose errors are reported as JSON; everything else is a browser page
JSON_PATH_PREFIXES = ("/api/", "/health")


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, then a database ping. A database that stays unreachable
    after the configured attempts aborts startup.
    Shutdown: dispose the engine.
    """
    setup_logging()
    logger.info("Snippetbox %s starting up...", __version__)

    try:
        await wait_for_database()
    except Exception as e:
        logger.error("Database unreachable, refusing to start: %s", str(e))
        raise

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Snippetbox shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _wants_json(request: Request) -> bool:
    return request.url.path.startswith(JSON_PATH_PREFIXES)


def error_response(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    text: str = "",
) -> Response:
    """
    JSON error body for API paths; plain status text for pages.

    `text` is what browsers see, e.g. "Not Found". It never carries internal
    details.
    """
    if not _wants_json(request):
        return PlainTextResponse(text or message, status_code=status_code)

    content: Dict[str, Any] = {
        "error": error,
        "message": message,
        "request_id": request_id_var.get(""),
    }
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP responses.

    Handler hierarchy:
        ValidationError   → 400 Bad Request
        NotFoundError     → 404 Not Found
        StorageError      → 500 Internal Server Error
        SnippetboxError   → 500 Internal Server Error
        Exception         → 500 Internal Server Error (logged with stack trace)

    Internal details (SQL, driver messages, stack traces) are logged
    server-side only.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.info("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return error_response(
            request,
            400,
            "validation_error",
            exc.message,
            details={"field_errors": exc.field_errors},
            text="Bad Request",
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return error_response(request, 404, "not_found", exc.message, text="Not Found")

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        logger.error(
            "[%s] Storage error during %s %s: %s | Context: %s",
            request_id_var.get(""),
            request.method,
            request.url.path,
            exc.message,
            exc.context,
            exc_info=exc,
        )
        return error_response(
            request,
            500,
            "server_error",
            "An internal error occurred. Please try again later.",
            text="Internal Server Error",
        )

    @app.exception_handler(SnippetboxError)
    async def handle_app_error(request: Request, exc: SnippetboxError):
        logger.error(
            "[%s] Application error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return error_response(
            request,
            500,
            "server_error",
            "An internal error occurred. Please try again later.",
            text="Internal Server Error",
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Catch-all: stack trace to the log, generic 500 to the client.

        Starlette runs this handler outside the user middleware, so the
        security headers and request id are added here.
        """
        rid = getattr(request.state, "request_id", "") or request_id_var.get("")
        logger.error(
            "[%s] Unexpected error: %s (method=%s uri=%s)",
            rid,
            str(exc),
            request.method,
            request.url.path,
            exc_info=exc,
        )
        response = error_response(
            request,
            500,
            "internal_server_error",
            "An unexpected error occurred. Please try again later.",
            text="Internal Server Error",
        )
        if rid:
            response.headers["X-Request-ID"] = rid
        return apply_security_headers(response)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(store: Optional[SnippetStore] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store: SnippetStore to serve from. Defaults to one bound to the
               application's connection pool.
    """
    app = FastAPI(
        title="Snippetbox",
        description="Create, store and view short text snippets that expire.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.snippets = store or SnippetStore(async_session_factory)

    # Middleware executes in REVERSE order of addition (last added runs first)
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
    app.include_router(pages.router)
    app.include_router(snippets.router)
    app.include_router(health.router)

    return app


app = create_app()


def run() -> None:
    """Console-script entry point: serve the app with uvicorn."""
    uvicorn.run(
        "snippetbox.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )
