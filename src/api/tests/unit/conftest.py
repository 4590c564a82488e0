"""Unit test fixtures backed by an in-memory SQLite database."""

from typing import AsyncGenerator

import pytest_asyncio
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

import pantheon.infrastructure.models  # noqa: F401  (registers tables)
from infrastructure.database.engines import create_schema

SQLITE_MEMORY_URL = "sqlite+aiosqlite://"


def create_memory_engine() -> AsyncEngine:
    """Create an engine whose every connection is the same in-memory database."""
    return create_async_engine(
        SQLITE_MEMORY_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Provide an engine with the full schema created."""
    engine = create_memory_engine()
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Provide a session on the in-memory database.

    Tests open their own transactions with ``session.begin()``.
    """
    async with async_sessionmaker(engine, expire_on_commit=False)() as session:
        yield session
