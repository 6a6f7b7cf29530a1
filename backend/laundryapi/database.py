"""
Laundry API Backend: Database Session Management
==================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
Why:   Centralizes all store connection logic in one place.
How:   Creates an async engine over the SQLite file, enables foreign-key
       enforcement on every new connection, and provides a session
       dependency that commits on success and rolls back on error.
Who:   Used by route handlers via FastAPI's dependency injection system.
When:  Engine is created at module import (it connects lazily, on first
       use); sessions are created per request.

Store handle lifecycle:
    - One engine per process. Creating it does not open a connection.
    - Each request acquires a session through get_db_session() and the
      session is always closed when the request finishes.
    - The lifespan handler calls dispose_engine() on shutdown.
"""

from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from laundryapi.config import settings


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ships with foreign keys off; it is a per-connection pragma
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """
    Create an async engine with foreign-key enforcement.

    What:  Wraps create_async_engine() and registers the connect hook.
    Why:   Referential checks on transactions (unknown customer, product
           still referenced) are reported by the store, so every pooled
           connection must have the pragma set.
    Who:   The module-level `engine` below and the test suite, which builds
           its own engine per test against a temporary file.
    """
    new_engine = create_async_engine(database_url, echo=echo)
    event.listen(new_engine.sync_engine, "connect", _enable_foreign_keys)
    return new_engine


# ── Engine Configuration ──────────────────────────────────────────────────
# Echo SQL only when running at DEBUG level
engine = build_engine(settings.database_url, echo=settings.log_level == "DEBUG")

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: rows stay readable after the request's commit
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All table definitions register with this metadata so that
    create_schema() can build the whole schema in one call.
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler
        3. On success: commits whatever the service left uncommitted
           (write services commit themselves, before building the response)
        4. On error: rolls back, then re-raises for the exception handlers
        5. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/products")
        async def list_products(db: AsyncSession = Depends(get_db_session)):
            ...
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
async def create_schema(bind: AsyncEngine = engine) -> None:
    """
    What:  Creates every table registered on Base.metadata if missing.
    When:  Called during application startup, and by the test fixtures.
    Why:   The store is a local SQLite file; there is no migration step.
    """
    # Importing the models registers their tables on Base.metadata
    from laundryapi import models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
