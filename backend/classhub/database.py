"""
ClassHub Backend — Database Session Management
================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   Creates an async engine, provides a session dependency that commits on
       success and rolls back on error.
Who:   Used by route handlers and dependencies via FastAPI's Depends().
When:  Engine is created at module import; sessions are created per-request.

Transaction Boundary:
    A request's whole middleware chain shares one session. Creating a
    classroom, linking it to its teacher and students, and appending a quiz
    or attendance to a classroom's history are therefore committed together.
    If any step raises, nothing from that request is persisted.
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from classhub.config import settings


def _engine_options() -> Dict[str, Any]:
    """Pool sizing for server databases; SQLite uses the driver's default pool."""
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(settings.database_url, **_engine_options())

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: response models are built from ORM objects after
# the session has flushed; attributes must stay readable without a reload.
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object used by Alembic and by the test suite's
    `create_all`.
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the dependency chain and the route handler
        3. On success: commits the transaction
        4. On error: rolls back the transaction
        5. Always: closes the session

    FastAPI caches this dependency per request, so authorization checks and
    the handler see the same session (and the same transaction).
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
async def dispose_engine() -> None:
    """Closes every pooled connection; called from the lifespan shutdown."""
    await engine.dispose()
