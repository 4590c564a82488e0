"""Protocol for abode and emblem application service observability.

Abodes and emblems share one probe shape; each service binds its entity
name ("abode" or "emblem") when the probe is created.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class CatalogServiceProbe(Protocol):
    """Domain probe for abode and emblem service operations."""

    def created(self, entity_id: str, name: str) -> None:
        """Record that an entity was created."""
        ...

    def updated(self, entity_id: str) -> None:
        """Record that an entity was updated."""
        ...

    def deleted(self, entity_id: str, references_cleared: int) -> None:
        """Record that an entity was deleted along with god references to it."""
        ...

    def operation_failed(
        self, operation: str, error: str, entity_id: str | None = None
    ) -> None:
        """Record that an operation failed."""
        ...

    def with_context(self, context: ObservationContext) -> CatalogServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultCatalogServiceProbe:
    """Default implementation of CatalogServiceProbe using structlog.

    Events are named ``<entity>_created``, ``<entity>_deleted`` and so on.
    """

    def __init__(
        self,
        entity: str,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._entity = entity
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultCatalogServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultCatalogServiceProbe(
            self._entity, logger=self._logger, context=context
        )

    def created(self, entity_id: str, name: str) -> None:
        self._logger.info(
            f"{self._entity}_created",
            entity_id=entity_id,
            name=name,
            **self._get_context_kwargs(),
        )

    def updated(self, entity_id: str) -> None:
        self._logger.info(
            f"{self._entity}_updated",
            entity_id=entity_id,
            **self._get_context_kwargs(),
        )

    def deleted(self, entity_id: str, references_cleared: int) -> None:
        self._logger.info(
            f"{self._entity}_deleted",
            entity_id=entity_id,
            references_cleared=references_cleared,
            **self._get_context_kwargs(),
        )

    def operation_failed(
        self, operation: str, error: str, entity_id: str | None = None
    ) -> None:
        self._logger.error(
            f"{self._entity}_operation_failed",
            operation=operation,
            error=error,
            entity_id=entity_id,
            **self._get_context_kwargs(),
        )
