"""
RetroBoard Backend — FastAPI Application Factory
==================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app(database) returns a configured FastAPI
       instance bound to one explicitly constructed Database store.
Who:   Called by uvicorn (uvicorn retroboard.main:app), by the `retroboard`
       console script, and by the test suite with a temporary database.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────┐ ┌──────────┐ ┌────────┐  │
    │  │  CORS    │→│ Req ID   │→│ Logging  │→│ Errors │  │
    │  └──────────┘ └──────────┘ └──────────┘ └────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  /register /login /boards /boards/{id}[/notes/..]   │
    │  /health                                            │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ 400 │ 401 │ 404 │ 409 │ 413 │ 500 → {error}  │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → create missing tables → log listening address
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from retroboard import __version__
from retroboard.config import settings
from retroboard.database import Database
from retroboard.exceptions import RetroBoardError
from retroboard.middleware.cors import PermissiveCORSMiddleware
from retroboard.middleware.errors import UnhandledErrorMiddleware, error_response
from retroboard.middleware.logging import RequestLoggingMiddleware
from retroboard.middleware.request_id import RequestIDMiddleware, request_id_var
from retroboard.routes import auth, boards, health, notes

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup, before any other initialization.
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
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    database: Database = app.state.database

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("RetroBoard Backend starting up...")

    # Same effect as CREATE TABLE IF NOT EXISTS; Alembic manages later changes
    await database.create_all()

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("RetroBoard Backend shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        RetroBoardError subclasses → their own status_code (400/401/404/409/413/500)
        RequestValidationError     → 400 (malformed path/query parameters)
        Starlette HTTPException    → same status; 405 is reported as 404 so
                                     every unmatched request looks alike
        Exception (fallback)       → 500, generic message. Faults raised by
                                     handlers are already answered by
                                     UnhandledErrorMiddleware; this one only
                                     sees failures in the middleware itself

    Security: handlers NEVER expose internal details (stack traces, SQL,
    constraint names) in the API response. Details are logged server-side.
    """

    @app.exception_handler(RetroBoardError)
    async def handle_app_error(request: Request, exc: RetroBoardError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
        else:
            logger.warning("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0]["msg"] if errors else "Invalid request"
        return error_response(400, message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (404, 405):
            return error_response(404, "Not Found")
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Catch-all for truly unexpected errors.

        Stack trace is logged server-side ONLY (never in response).
        """
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return error_response(500, "Server Error")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        database: The store to serve from. Defaults to a Database built from
                  settings.database_url. Tests pass one backed by a temp file.
    """
    app = FastAPI(
        title="RetroBoard API",
        description="Retrospective boards with Start / Stop / Continue columns.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.database = database or Database()

    # Middleware executes in REVERSE order of addition:
    # added Errors → Logging → RequestID → CORS,
    # runs CORS → RequestID → Logging → Errors
    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(PermissiveCORSMiddleware)

    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(boards.router)
    app.include_router(notes.router)
    app.include_router(health.router)

    return app


# uvicorn expects `retroboard.main:app` to be importable
app = create_app()


def run() -> None:
    """Console-script entry point: serve `app` with uvicorn."""
    import uvicorn

    uvicorn.run(
        "retroboard.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )
