"""Database dependency injection for FastAPI.

Provides the process-wide storage handle (engine + sessionmaker) and a
request-scoped async session. The handle is created lazily on first use and
released by ``close_database_connections`` at shutdown.
"""

from __future__ import annotations

import threading
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from infrastructure.database.engines import create_engine
from infrastructure.observability import DefaultDatabaseProbe
from infrastructure.settings import get_database_settings

# Module-level probe for observability
_probe = DefaultDatabaseProbe()

# Module-level engine instance (created on first use)
_engine: AsyncEngine | None = None

# Module-level sessionmaker instance (created with the engine)
_sessionmaker: async_sessionmaker[AsyncSession] | None = None

# Thread lock for safe engine initialization
_engine_lock = threading.Lock()


def get_engine() -> AsyncEngine:
    """Get the database engine (singleton).

    Creates engine on first call and caches for subsequent calls.
    Uses double-check locking for thread-safe initialization.
    Also creates and caches the sessionmaker for efficient session creation.

    Returns:
        Configured async engine
    """
    global _engine, _sessionmaker
    if _engine is None:
        with _engine_lock:
            # Double-check after acquiring lock
            if _engine is None:
                settings = get_database_settings()
                _engine = create_engine(settings)
                _sessionmaker = async_sessionmaker(
                    _engine,
                    expire_on_commit=False,
                    class_=AsyncSession,
                )
                _probe.engine_created(
                    url=settings.connection_string,
                    pool_size=settings.pool_size,
                )
    return _engine


def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    """Get the sessionmaker bound to the engine singleton."""
    get_engine()
    assert _sessionmaker is not None
    return _sessionmaker


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide a session for one request (FastAPI dependency).

    The session is configured to NOT auto-commit. Callers must explicitly
    manage transactions using `async with session.begin()`.

    Yields:
        AsyncSession for database operations
    """
    async with get_sessionmaker()() as session:
        yield session


async def close_database_connections() -> None:
    """Dispose the engine.

    Should be called on application shutdown to properly cleanup connections.
    Also resets the sessionmaker to allow reinitialization.
    """
    global _engine, _sessionmaker

    if _engine is not None:
        await _engine.dispose()
        _probe.engine_disposed()
        _engine = None
        _sessionmaker = None
