"""Protocol for god application service observability.

Defines the interface for domain probes that capture application-level
domain events for god service operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class GodServiceProbe(Protocol):
    """Domain probe for god application service operations."""

    def god_created(self, god_id: str, name: str, type: str) -> None:
        """Record that a god was created."""
        ...

    def god_updated(self, god_id: str, fields: list[str]) -> None:
        """Record that a god's own fields were updated."""
        ...

    def god_deleted(self, god_id: str, relations_removed: int) -> None:
        """Record that a god and its relations were deleted."""
        ...

    def relative_added(
        self, god_id: str, relative_id: str, relationship: str, created: bool
    ) -> None:
        """Record an add-relative call; ``created`` is False for repeats."""
        ...

    def relative_removed(
        self, god_id: str, relative_id: str, relationship: str, removed: bool
    ) -> None:
        """Record a remove-relative call; ``removed`` is False if absent."""
        ...

    def emblem_associated(self, god_id: str, emblem_id: str) -> None:
        """Record that an emblem was associated with a god."""
        ...

    def emblem_dissociated(self, god_id: str, emblem_id: str) -> None:
        """Record that an emblem association was removed."""
        ...

    def abode_assigned(
        self, god_id: str, abode_id: str, previous_abode_id: str | None
    ) -> None:
        """Record that a god moved to an abode."""
        ...

    def domain_added(self, god_id: str, domain: str) -> None:
        """Record that a domain was added to a god."""
        ...

    def domain_removed(self, god_id: str, domain: str) -> None:
        """Record that a domain was removed from a god."""
        ...

    def operation_failed(self, operation: str, error: str, **ids: str) -> None:
        """Record that a god operation failed."""
        ...

    def with_context(self, context: ObservationContext) -> GodServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultGodServiceProbe:
    """Default implementation of GodServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultGodServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultGodServiceProbe(logger=self._logger, context=context)

    def god_created(self, god_id: str, name: str, type: str) -> None:
        """Record that a god was created."""
        self._logger.info(
            "god_created",
            god_id=god_id,
            name=name,
            type=type,
            **self._get_context_kwargs(),
        )

    def god_updated(self, god_id: str, fields: list[str]) -> None:
        """Record that a god's own fields were updated."""
        self._logger.info(
            "god_updated",
            god_id=god_id,
            fields=fields,
            **self._get_context_kwargs(),
        )

    def god_deleted(self, god_id: str, relations_removed: int) -> None:
        """Record that a god and its relations were deleted."""
        self._logger.info(
            "god_deleted",
            god_id=god_id,
            relations_removed=relations_removed,
            **self._get_context_kwargs(),
        )

    def relative_added(
        self, god_id: str, relative_id: str, relationship: str, created: bool
    ) -> None:
        self._logger.info(
            "god_relative_added",
            god_id=god_id,
            relative_id=relative_id,
            relationship=relationship,
            created=created,
            **self._get_context_kwargs(),
        )

    def relative_removed(
        self, god_id: str, relative_id: str, relationship: str, removed: bool
    ) -> None:
        self._logger.info(
            "god_relative_removed",
            god_id=god_id,
            relative_id=relative_id,
            relationship=relationship,
            removed=removed,
            **self._get_context_kwargs(),
        )

    def emblem_associated(self, god_id: str, emblem_id: str) -> None:
        self._logger.info(
            "god_emblem_associated",
            god_id=god_id,
            emblem_id=emblem_id,
            **self._get_context_kwargs(),
        )

    def emblem_dissociated(self, god_id: str, emblem_id: str) -> None:
        self._logger.info(
            "god_emblem_dissociated",
            god_id=god_id,
            emblem_id=emblem_id,
            **self._get_context_kwargs(),
        )

    def abode_assigned(
        self, god_id: str, abode_id: str, previous_abode_id: str | None
    ) -> None:
        self._logger.info(
            "god_abode_assigned",
            god_id=god_id,
            abode_id=abode_id,
            previous_abode_id=previous_abode_id,
            **self._get_context_kwargs(),
        )

    def domain_added(self, god_id: str, domain: str) -> None:
        self._logger.info(
            "god_domain_added",
            god_id=god_id,
            domain=domain,
            **self._get_context_kwargs(),
        )

    def domain_removed(self, god_id: str, domain: str) -> None:
        self._logger.info(
            "god_domain_removed",
            god_id=god_id,
            domain=domain,
            **self._get_context_kwargs(),
        )

    def operation_failed(self, operation: str, error: str, **ids: str) -> None:
        """Record that a god operation failed."""
        self._logger.error(
            "god_operation_failed",
            operation=operation,
            error=error,
            **ids,
            **self._get_context_kwargs(),
        )
