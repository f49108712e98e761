"""
VRCX Companion API — FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes middleware registration, route mounting, error mapping
       and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (`uvicorn vrcx_api.main:app`) or the `vrcx-api` script.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                          │
    │                                                          │
    │  Middleware:  Request ID → Access Log → GZip → CORS       │
    │                                                          │
    │  Routes (by API_PROFILE):                                 │
    │    legacy: /healthz  /api/notes  /api/favorites/*         │
    │            /api/feed/recent                               │
    │    v1:     /health   /v1/ping    /v1/users                │
    │                                                          │
    │  Exception Handlers:                                      │
    │    ValidationError / RequestValidationError → 400 (empty) │
    │    StorageError → 500 text/plain "<operation> failed"     │
    │    Exception    → 500 text/plain                          │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Open the connection pool (unless a Database was injected)
    3. Create the profile's tables if missing; failure is fatal
       (ConfigurationError aborts startup)

    Shutdown:
    1. Dispose the engine (close pooled connections), if this app opened it
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import PlainTextResponse, Response

from vrcx_api import __version__
from vrcx_api.config import Settings, settings as default_settings
from vrcx_api.database import Database
from vrcx_api.exceptions import StorageError, ValidationError
from vrcx_api.middleware.logging import RequestLoggingMiddleware
from vrcx_api.middleware.request_id import RequestIDMiddleware, request_id_var
from vrcx_api.models import tables_for_profile
from vrcx_api.routes import favorites, feed, health, notes, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: 2025-03-01T18:04:05 [INFO] vrcx_api.access: GET /api/notes 200 3.1ms [ab12cd34] from 10.0.0.5
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers are chatty at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Open the pool and ensure the schema on startup; release the pool on shutdown.

    An injected Database (tests, embedding) is used as-is and left open on
    shutdown: whoever created it owns it.
    """
    app_settings: Settings = app.state.settings
    setup_logging(app_settings.log_level)
    logger.info("VRCX Companion API %s starting (profile=%s)", __version__, app_settings.api_profile)

    owns_database = app.state.database is None
    if owns_database:
        app.state.database = Database.from_settings(app_settings)

    # ConfigurationError propagates: the server must not start without its tables
    await app.state.database.create_schema(tables_for_profile(app_settings))

    logger.info("Server ready at http://%s:%d", app_settings.backend_host, app_settings.backend_port)

    yield

    logger.info("VRCX Companion API shutting down...")
    if owns_database:
        await app.state.database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to HTTP responses.

        ValidationError         → 400, empty body
        RequestValidationError  → 400, empty body (bad JSON, wrong field types)
        StorageError            → 500, text/plain "<operation> failed"
        Exception (fallback)    → 500, text/plain "internal server error"

    Driver messages and SQL never reach the client; they are logged with the
    request ID instead.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s | Context: %s", rid, exc.message, exc.context)
        return Response(status_code=400)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        logger.warning(
            "[%s] Malformed request to %s %s: %d error(s)",
            rid,
            request.method,
            request.url.path,
            len(exc.errors()),
        )
        return Response(status_code=400)

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        rid = request_id_var.get("")
        logger.error("[%s] Storage error in '%s' | Context: %s", rid, exc.operation, exc.context)
        return PlainTextResponse(exc.message, status_code=500)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return PlainTextResponse("internal server error", status_code=500)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    app_settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Settings to use (defaults to the environment-loaded singleton)
        database:     Pre-built Database to serve from; when omitted, lifespan
                      opens one from app_settings.database_url

    The route surfaces mounted depend on app_settings.api_profile.
    """
    app_settings = app_settings or default_settings

    app = FastAPI(
        title="VRCX Companion API",
        description="Memos, favorites, activity feed and users over a relational store.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.database = database

    # Middleware executes in REVERSE order of addition
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    if app_settings.serves_legacy:
        app.include_router(health.legacy_router)
        app.include_router(notes.router)
        app.include_router(favorites.router)
        app.include_router(feed.router)
    if app_settings.serves_v1:
        app.include_router(health.router)
        app.include_router(users.router)

    return app


def run() -> None:
    """Console entry point: serve the default app with uvicorn."""
    import uvicorn

    uvicorn.run(
        "vrcx_api.main:app",
        host=default_settings.backend_host,
        port=default_settings.backend_port,
        log_level=default_settings.log_level.lower(),
    )


app = create_app()
