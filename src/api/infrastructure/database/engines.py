"""Database engine creation for async SQLAlchemy.

This module provides the factory for the application's async engine and the
schema bootstrap used at startup. PostgreSQL (asyncpg) and SQLite (aiosqlite)
URLs are both accepted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from infrastructure.database.models import Base

if TYPE_CHECKING:
    from infrastructure.settings import DatabaseSettings

__all__ = [
    "create_engine",
    "create_schema",
    "engine_options",
]


def engine_options(settings: DatabaseSettings) -> dict[str, Any]:
    """Build keyword arguments for create_async_engine.

    SQLite manages its own pooling, so pool sizing is only applied to
    server databases. SQL echo is configured through logging, not here.

    Args:
        settings: Database connection settings

    Returns:
        Keyword arguments for the engine factory
    """
    options: dict[str, Any] = {}
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.pool_size,
            max_overflow=0,  # No overflow - strict pool limit
            pool_pre_ping=True,  # Verify connections before using
        )
    return options


def create_engine(settings: DatabaseSettings) -> AsyncEngine:
    """Create the async engine for all store operations.

    Args:
        settings: Database connection settings

    Returns:
        Configured async engine
    """
    return create_async_engine(settings.url, **engine_options(settings))


async def create_schema(engine: AsyncEngine) -> int:
    """Create any missing tables registered on the declarative base.

    ORM model modules must be imported before calling this so their
    tables are registered on ``Base.metadata``.

    Args:
        engine: Engine to run DDL on

    Returns:
        Number of tables known to the metadata
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    return len(Base.metadata.tables)
