"""
FormBuilder Backend - FastAPI Application Factory
==================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Imported by uvicorn (`formbuilder.main:app`) and by the test suite.

Application Architecture:
    ┌──────────────────────────────────────────────────────┐
    │                    FastAPI App                       │
    │                                                      │
    │  Middleware Chain:                                   │
    │  ┌──────────┐ ┌──────────┐ ┌──────┐ ┌──────┐         │
    │  │  Req ID  │→│ Logging  │→│ GZip │→│ CORS │         │
    │  └──────────┘ └──────────┘ └──────┘ └──────┘         │
    │                                                      │
    │  Routes:                                             │
    │  accounts  │  forms (bearer + public read)  │        │
    │  responses (public)  │  health                       │
    │                                                      │
    │  Exception Handlers:                                 │
    │  Conflict→400 │ Credentials/Unauthorized→401 │       │
    │  Forbidden→403 │ NotFound→404 │ Database/other→500   │
    └──────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, check security settings, create tables
              when running on SQLite (PostgreSQL uses Alembic migrations)
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from formbuilder import __version__
from formbuilder.config import settings
from formbuilder.database import create_all, dispose_engine
from formbuilder.exceptions import (
    ConflictError,
    DatabaseError,
    ForbiddenError,
    FormBuilderError,
    InvalidCredentialsError,
    NotFoundError,
    UnauthorizedError,
)
from formbuilder.middleware.logging import RequestLoggingMiddleware
from formbuilder.middleware.request_id import RequestIDMiddleware, request_id_var
from formbuilder.routes import accounts, forms, health, responses

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout,
    at settings.log_level. Called once during startup, before anything
    else logs.
    """
    log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Access lines come from RequestLoggingMiddleware instead.
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("FormBuilder Backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Keep serving; a development setup runs with the defaults.
        logger.error("Configuration error: %s", str(e))

    if settings.is_sqlite:
        await create_all()
        logger.info("SQLite schema ensured")

    logger.info("CORS origin: %s", settings.client_web)
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("FormBuilder Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(
    status_code: int,
    error: str,
    message: str,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": error,
            "message": message,
            "request_id": request_id_var.get(""),
        },
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        ConflictError            → 400
        InvalidCredentialsError  → 401
        UnauthorizedError        → 401 (+ WWW-Authenticate: Bearer)
        ForbiddenError           → 403
        NotFoundError            → 404
        DatabaseError            → 500
        FormBuilderError (base)  → 500
        Exception (fallback)     → 500

    Responses never include stack traces or `exc.context`; those are logged.
    """

    @app.exception_handler(ConflictError)
    async def handle_conflict(request: Request, exc: ConflictError):
        logger.info("[%s] Conflict: %s", request_id_var.get(""), exc.message)
        return _error_response(400, "conflict", exc.message)

    @app.exception_handler(InvalidCredentialsError)
    async def handle_invalid_credentials(request: Request, exc: InvalidCredentialsError):
        logger.info(
            "[%s] Login rejected: %s", request_id_var.get(""), exc.context.get("reason")
        )
        return _error_response(401, "invalid_credentials", exc.message)

    @app.exception_handler(UnauthorizedError)
    async def handle_unauthorized(request: Request, exc: UnauthorizedError):
        logger.info(
            "[%s] Unauthorized: %s", request_id_var.get(""), exc.context.get("reason")
        )
        return _error_response(
            401, "unauthorized", exc.message, headers={"WWW-Authenticate": "Bearer"}
        )

    @app.exception_handler(ForbiddenError)
    async def handle_forbidden(request: Request, exc: ForbiddenError):
        logger.warning("[%s] Forbidden: %s", request_id_var.get(""), exc.context)
        return _error_response(403, "forbidden", exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error_response(404, "not_found", exc.message)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return _error_response(
            500, "server_error", "An internal error occurred. Please try again later."
        )

    @app.exception_handler(FormBuilderError)
    async def handle_app_error(request: Request, exc: FormBuilderError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return _error_response(500, "server_error", exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return _error_response(
            500,
            "internal_server_error",
            "An unexpected error occurred. Please try again or contact support.",
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """Assemble middleware, exception handlers and routers into a new app."""
    app = FastAPI(
        title="FormBuilder API",
        description=(
            "Backend for a form builder: accounts, dynamic forms, public sharing "
            "and response collection."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → GZip → CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.client_web],
        allow_methods=settings.cors_methods,
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(accounts.router)
    app.include_router(forms.router)
    app.include_router(responses.router)
    app.include_router(health.router)

    return app


app = create_app()
