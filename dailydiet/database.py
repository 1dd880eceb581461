"""
Daily Diet Backend — Database Session Management
==================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
Why:   Centralizes all database connection logic in one place.
How:   Builds an async engine with connection pooling, provides a session
       dependency that commits on success and rolls back on error.
Who:   Used by route handlers via FastAPI's dependency injection system.
When:  Engine is created on first use; sessions are created per-request.

Storage handle:
    No service touches the engine directly. Every service call receives an
    `AsyncSession` argument, and routes obtain it from `get_db_session`.
    Tests replace that dependency (app.dependency_overrides) with a session
    bound to an isolated in-memory engine built by `build_engine`.

Connection Pooling Strategy (PostgreSQL):
    pool_size / max_overflow from settings
    pool_pre_ping:     Validates connections before use
    pool_recycle=3600: Recycles connections every hour
"""

import logging
from typing import AsyncGenerator, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from dailydiet.config import settings
from dailydiet.exceptions import DatabaseError

logger = logging.getLogger(__name__)


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """
    Create an async engine configured for the given URL.

    SQLite URLs get a StaticPool so an in-memory database survives across
    sessions of the same engine; pool sizing only applies to server databases.
    """
    if database_url.startswith("sqlite"):
        return create_async_engine(
            database_url,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
            echo=echo,
        )
    return create_async_engine(
        database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        pool_recycle=3600,
        echo=echo,
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: ORM objects stay readable after the request commits
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def get_engine() -> AsyncEngine:
    """Return the process-wide engine, creating it on first use."""
    global _engine, _session_factory
    if _engine is None:
        _engine = build_engine(settings.database_url, echo=settings.log_level == "DEBUG")
        _session_factory = build_session_factory(_engine)
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    get_engine()
    return _session_factory


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models inherit from this class so they share one metadata object,
    which Alembic reads for migrations and tests use for `create_all`.
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
        4. On error: rolls back the transaction
        5. Always: closes the session (returns connection to pool)

    The commit here runs after the response is sent, so handlers that write
    call `commit_session` themselves.

    Example usage in a route:
        @router.get("/meals")
        async def list_meals(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def commit_session(session: AsyncSession) -> None:
    """
    Commit the request's transaction before the response is built.

    Mutating handlers call this last, so a failed commit reaches the client
    as a 500. The dependency's own commit afterwards has nothing to flush.

    Raises:
        DatabaseError: the commit failed; the transaction is rolled back
    """
    try:
        await session.commit()
    except SQLAlchemyError as e:
        logger.error("Database error committing transaction: %s", str(e), exc_info=True)
        await session.rollback()
        raise DatabaseError(
            message="Could not save your changes. Please try again.",
            context={"error_type": type(e).__name__},
        )


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine() -> None:
    """Close all pooled connections; called on application shutdown."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _session_factory = None
