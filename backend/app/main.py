"""
MindfulSpace Backend — FastAPI Application Factory
====================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() validates configuration, builds the Database, the
       password hasher, the token service and the auth service, stores them
       on app.state, then registers middleware, exception handlers and routes.
Who:   uvicorn (`uvicorn app.main:app`) and the test suite, which passes its
       own Database to create_app().

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                         │
    │                                                          │
    │  Middleware:   [Request ID] → [Access Log]               │
    │                                                          │
    │  Routes (/api): auth · profile/users · journal ·         │
    │                 mood/gratitude · friends/support ·       │
    │                 stats/achievements · health              │
    │                                                          │
    │  Exception Handlers:                                     │
    │   Validation→400  Auth→401  NotFound→404  Conflict→409   │
    │   Dependency/Transient/Database→500  Exception→500       │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, probe the database (retried); if it stays
              unreachable, startup fails and nothing is served.
    Shutdown: dispose the engine (close pooled connections).
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app import __version__
from app.config import settings
from app.database import Database
from app.exceptions import (
    AuthError,
    ConflictError,
    DatabaseError,
    DependencyError,
    MindfulSpaceError,
    NotFoundError,
    TransientError,
    ValidationError,
)
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.routes import auth, health, journal, social, stats, users, wellness
from app.security import PasswordHasher, TokenService
from app.services.auth_service import AuthService

logger = logging.getLogger(__name__)

GENERIC_STORE_MESSAGE = "An internal error occurred. Please try again later."


# ══════════════════════════════════════════════════════════════════════════
# Structured Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once at startup.

    Format: 2024-01-15T12:00:00 [INFO] app.services.journal_service: ...
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Per-request/per-query chatter from libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    database: Database = app.state.database

    logger.info("=" * 60)
    logger.info("MindfulSpace Backend %s starting (%s)", __version__, settings.environment)

    # Raises DependencyError after the last attempt; uvicorn then exits
    await database.wait_until_ready(settings.db_boot_attempts)
    logger.info("Database reachable")
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("MindfulSpace Backend shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(error: str, message: str, details: Optional[dict] = None) -> dict:
    body = {"error": error, "message": message, "request_id": request_id_var.get("")}
    if details:
        body["details"] = details
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map the exception taxonomy onto HTTP responses.

        ValidationError, RequestValidationError → 400
        AuthError                               → 401 (+ WWW-Authenticate)
        NotFoundError                           → 404
        ConflictError                           → 409
        DependencyError / TransientError /
        DatabaseError / other app errors        → 500, generic message
        Exception                               → 500, generic message

    Store failures never expose driver messages or SQL; those are logged.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.info("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return JSONResponse(
            status_code=400,
            content=_error_body("validation_error", exc.message, exc.context),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        message = first.get("msg", "Invalid request")
        if field:
            message = f"{field}: {message}"
        return JSONResponse(
            status_code=400,
            content=_error_body("validation_error", message, {"field": field} if field else None),
        )

    @app.exception_handler(AuthError)
    async def handle_auth_error(request: Request, exc: AuthError):
        return JSONResponse(
            status_code=401,
            content=_error_body("auth_error", exc.message),
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content=_error_body("not_found", exc.message))

    @app.exception_handler(ConflictError)
    async def handle_conflict(request: Request, exc: ConflictError):
        return JSONResponse(status_code=409, content=_error_body("conflict", exc.message))

    @app.exception_handler(TransientError)
    async def handle_transient(request: Request, exc: TransientError):
        logger.warning("[%s] Transient store error | Context: %s", request_id_var.get(""), exc.context)
        return JSONResponse(
            status_code=500,
            content=_error_body("transient_error", "The service is busy. Please retry shortly."),
        )

    @app.exception_handler(DependencyError)
    async def handle_dependency(request: Request, exc: DependencyError):
        logger.error("[%s] Store unavailable | Context: %s", request_id_var.get(""), exc.context)
        return JSONResponse(
            status_code=500,
            content=_error_body("server_error", GENERIC_STORE_MESSAGE),
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error("[%s] Database error: %s | Context: %s", request_id_var.get(""), exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content=_error_body("server_error", GENERIC_STORE_MESSAGE),
        )

    @app.exception_handler(MindfulSpaceError)
    async def handle_app_error(request: Request, exc: MindfulSpaceError):
        logger.error("[%s] %s: %s", request_id_var.get(""), type(exc).__name__, exc.message)
        return JSONResponse(
            status_code=500,
            content=_error_body("server_error", GENERIC_STORE_MESSAGE),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("[%s] Unexpected error: %s", request_id_var.get(""), exc, exc_info=True)
        return JSONResponse(
            status_code=500,
            content=_error_body(
                "internal_server_error",
                "An unexpected error occurred. Please try again later.",
            ),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Build the application.

    Args:
        database: use this Database instead of one built from settings
                  (tests pass a SQLite-backed instance).

    Raises:
        ValueError: production configuration is incomplete.
    """
    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.critical("Configuration error: %s", e)
        raise

    app = FastAPI(
        title="MindfulSpace API",
        description=(
            "Wellness journaling backend: accounts, journal entries, daily moods, "
            "gratitude notes, friends, support and achievements."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Shared Components ─────────────────────────────────────────────────
    hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    tokens = TokenService.from_settings(settings)
    app.state.database = database or Database.from_settings(settings)
    app.state.password_hasher = hasher
    app.state.token_service = tokens
    app.state.auth_service = AuthService(
        hasher,
        tokens,
        password_min_length=settings.password_min_length,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → routes
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(journal.router)
    app.include_router(wellness.router)
    app.include_router(social.router)
    app.include_router(stats.router)

    return app


app = create_app()
