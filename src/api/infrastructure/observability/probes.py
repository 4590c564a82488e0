"""Domain probes for infrastructure observability.

Domain probes provide a high-level instrumentation API oriented around
domain semantics, keeping infrastructure code clean and testable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class DatabaseProbe(Protocol):
    """Domain probe for database engine observability.

    This probe captures domain-significant events related to the storage
    handle's lifecycle without exposing logging implementation details.
    """

    def engine_created(self, url: str, pool_size: int) -> None:
        """Record that an async engine was created."""
        ...

    def schema_created(self, table_count: int) -> None:
        """Record that the table schema was ensured at startup."""
        ...

    def engine_disposed(self) -> None:
        """Record that the engine was disposed on shutdown."""
        ...

    def health_check_failed(self, error: Exception) -> None:
        """Record that the storage health check failed."""
        ...

    def with_context(self, context: ObservationContext) -> DatabaseProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultDatabaseProbe:
    """Default implementation of DatabaseProbe using structlog.

    Supports observation context for including request-scoped metadata
    with all log events.
    """

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultDatabaseProbe:
        """Create a new probe with observation context bound."""
        return DefaultDatabaseProbe(logger=self._logger, context=context)

    def engine_created(self, url: str, pool_size: int) -> None:
        """Record that an async engine was created."""
        self._logger.info(
            "database_engine_created",
            url=url,
            pool_size=pool_size,
            **self._get_context_kwargs(),
        )

    def schema_created(self, table_count: int) -> None:
        """Record that the table schema was ensured at startup."""
        self._logger.info(
            "database_schema_created",
            table_count=table_count,
            **self._get_context_kwargs(),
        )

    def engine_disposed(self) -> None:
        """Record that the engine was disposed on shutdown."""
        self._logger.info(
            "database_engine_disposed",
            **self._get_context_kwargs(),
        )

    def health_check_failed(self, error: Exception) -> None:
        """Record that the storage health check failed."""
        self._logger.error(
            "database_health_check_failed",
            error=str(error),
            **self._get_context_kwargs(),
        )
