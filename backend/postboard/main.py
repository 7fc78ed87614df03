"""
Postboard Backend — FastAPI Application Factory
===================================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes middleware registration, exception handlers, route
       mounting, dependency wiring and lifecycle management in one place.
How:   Factory pattern: create_app(settings) returns a configured FastAPI
       instance. The token service and password hasher are built here from
       settings and stored on app.state, so nothing downstream reads
       configuration from module globals.
Who:   uvicorn (`uvicorn postboard.main:app` or `python -m postboard`) and
       the test suite.

Lifecycle:
    Startup:
    1. Initialize logging
    2. Verify the database is reachable; abort startup if it is not

    Shutdown:
    1. Dispose database engine (close all connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from postboard import __version__
from postboard.auth.passwords import PasswordHasher
from postboard.auth.tokens import TokenService
from postboard.config import Settings, settings as default_settings
from postboard.database import check_database_connection, dispose_engine
from postboard.exceptions import DatabaseError, PostboardError
from postboard.middleware.logging import RequestLoggingMiddleware
from postboard.middleware.request_id import RequestIDMiddleware, request_id_var
from postboard.routes import comments, health, posts, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party libraries that log every operation
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: configure logging, then fail fast if the database is down.
    Shutdown: dispose the engine.
    """
    cfg: Settings = app.state.settings
    setup_logging(cfg.log_level)
    logger.info("Postboard %s starting up...", __version__)

    try:
        await check_database_connection()
    except Exception as e:
        logger.critical("Database is unreachable at startup: %s", str(e))
        raise RuntimeError("Database is unreachable; refusing to start") from e

    logger.info("Database connection verified")
    logger.info("Server ready at http://%s:%d", cfg.host, cfg.port)

    yield

    logger.info("Postboard shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(message: str, code: str) -> dict:
    return {"error": message, "code": code, "requestId": request_id_var.get("")}


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to HTTP responses.

    Handler hierarchy:
        PostboardError subclasses → their own status_code
            ValidationError / ConflictError → 400
            AuthenticationError             → 401
            ForbiddenError                  → 403
            NotFoundError                   → 404
            DatabaseError                   → 500 ("Server error")
        RequestValidationError → 400 (FastAPI would answer 422)
        Exception (fallback)   → 500

    Security: responses never include stack traces, SQL, or exception context;
    those are logged server-side.
    """

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error("[%s] Database error: %s | Context: %s",
                     request_id_var.get(""), exc.message, exc.context)
        return JSONResponse(status_code=500, content=_error_body("Server error", exc.code))

    @app.exception_handler(PostboardError)
    async def handle_postboard_error(request: Request, exc: PostboardError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
        else:
            logger.info("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.message, exc.code),
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        # Non-object JSON bodies, non-string fields, missing body
        errors = exc.errors()
        logger.info("[%s] Malformed request: %d error(s)", request_id_var.get(""), len(errors))
        return JSONResponse(
            status_code=400,
            content=_error_body("Invalid request body", "validation_error"),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("[%s] Unexpected error: %s", request_id_var.get(""), str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=_error_body("Server error", "internal_server_error"),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Raises ValueError when required configuration (JWT_SECRET) is missing,
    so a misconfigured server never starts issuing tokens.
    """
    cfg = app_settings or default_settings
    cfg.validate_required_for_production()

    app = FastAPI(
        title="Postboard API",
        description="Users, blog posts and comments behind bearer-token authentication.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Process-wide, read-only services ─────────────────────────────────
    app.state.settings = cfg
    app.state.token_service = TokenService(
        secret=cfg.jwt_secret.get_secret_value(),
        expiry_seconds=cfg.jwt_expiry_seconds,
    )
    app.state.password_hasher = PasswordHasher(rounds=cfg.bcrypt_rounds)

    # ── Middleware (last added = first to execute) ────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins_list,
        allow_credentials=False,     # bearer tokens, no cookies
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(users.router)
    app.include_router(posts.router)
    app.include_router(comments.router)
    app.include_router(health.router)

    return app


# uvicorn expects `postboard.main:app` to be importable
app = create_app()
