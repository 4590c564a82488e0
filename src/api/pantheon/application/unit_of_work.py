"""Unit of work wrapping the request session.

Every service call runs in its own transaction on the request's session,
bounded by the configured storage timeout.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.exceptions import StorageTimeoutError


class UnitOfWork:
    """Serialized, time-bounded transactions on one AsyncSession.

    GraphQL resolves sibling fields concurrently, but an AsyncSession must
    only be used by one coroutine at a time. Transactions opened through
    the same UnitOfWork therefore run one after another.

    Transactions must not be nested.
    """

    def __init__(self, session: AsyncSession, timeout_seconds: float):
        """Initialize with the request session.

        Args:
            session: Session shared by every service of the request
            timeout_seconds: Upper bound for a single transaction
        """
        self._session = session
        self._timeout_seconds = timeout_seconds
        self._lock = asyncio.Lock()

    @property
    def session(self) -> AsyncSession:
        """The session repositories should be built on."""
        return self._session

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        """Run the block in a transaction, committing on success.

        Raises:
            StorageTimeoutError: If the block does not finish in time; the
                transaction is rolled back
        """
        async with self._lock:
            try:
                async with asyncio.timeout(self._timeout_seconds):
                    async with self._session.begin():
                        yield self._session
            except TimeoutError as e:
                raise StorageTimeoutError(
                    f"Storage call exceeded {self._timeout_seconds}s",
                    timeout_seconds=self._timeout_seconds,
                ) from e
