"""
Postboard Backend — Database Session Management
==================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
Why:   Centralizes all database connection logic in one place.
How:   Creates an async engine with connection pooling, provides a session
       dependency that auto-commits on success and auto-rolls-back on error.
Who:   Used by route handlers via FastAPI's dependency injection system.
When:  Engine is created at module import; sessions are created per-request.

Connection Pooling Strategy:
    pool_size / max_overflow come from settings. SQLite (used by the test
    suite) gets SQLAlchemy's default pool because its pool classes reject
    the sizing arguments.
"""

import logging
from typing import Any, AsyncGenerator, Dict

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from postboard.config import Settings, settings

logger = logging.getLogger(__name__)


def build_engine(cfg: Settings) -> AsyncEngine:
    """Create an async engine for the configured database URL."""
    kwargs: Dict[str, Any] = {"echo": cfg.log_level == "DEBUG"}
    if not cfg.is_sqlite:
        kwargs.update(
            pool_size=cfg.db_pool_size,
            max_overflow=cfg.db_max_overflow,
            pool_pre_ping=cfg.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return create_async_engine(cfg.database_url, **kwargs)


# ── Engine & Session Factory ──────────────────────────────────────────────
engine = build_engine(settings)

# expire_on_commit=False: attributes stay readable after the request commits
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models share this metadata object; Alembic reads it for
    --autogenerate and the test suite uses it for create_all().
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler
        3. On success: commits the transaction
        4. On error: rolls back and re-raises for the exception handlers
        5. Always: closes the session (returns connection to pool)

    Tests replace this dependency through `app.dependency_overrides`.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def check_database_connection(db_engine: AsyncEngine = engine) -> None:
    """
    What:  Runs `SELECT 1` against the database.
    When:  Application startup (lifespan) and the /health probe.
    Raises whatever the driver raises when the database is unreachable.
    """
    async with db_engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def dispose_engine() -> None:
    """Gracefully closes all connections in the pool (application shutdown)."""
    await engine.dispose()
