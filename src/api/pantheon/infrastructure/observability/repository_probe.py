"""Domain probe for Pantheon repository operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to god, relation, abode and emblem
persistence.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class GodRepositoryProbe(Protocol):
    """Domain probe for god repository operations."""

    def god_saved(self, god_id: str, version: int, emblem_count: int) -> None:
        """Record that a god was successfully saved."""
        ...

    def god_retrieved(self, god_id: str) -> None:
        """Record that a god was retrieved."""
        ...

    def god_not_found(self, god_id: str) -> None:
        """Record that a god was not found."""
        ...

    def god_deleted(self, god_id: str) -> None:
        """Record that a god was deleted."""
        ...

    def stale_version_detected(
        self, god_id: str, expected: int | None, actual: int | None
    ) -> None:
        """Record that a save lost an optimistic concurrency check."""
        ...

    def with_context(self, context: ObservationContext) -> GodRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class RelationRepositoryProbe(Protocol):
    """Domain probe for relation edge operations."""

    def edge_added(self, god_id: str, relative_id: str, kind: str) -> None:
        """Record that a new edge was stored."""
        ...

    def edge_already_present(self, god_id: str, relative_id: str, kind: str) -> None:
        """Record that an add found the edge already stored."""
        ...

    def edge_removed(self, god_id: str, relative_id: str, kind: str) -> None:
        """Record that an edge was deleted."""
        ...

    def edges_cleared(self, god_id: str, count: int) -> None:
        """Record that every edge of a god was deleted."""
        ...

    def with_context(self, context: ObservationContext) -> RelationRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class CatalogRepositoryProbe(Protocol):
    """Domain probe for abode and emblem repository operations.

    ``entity`` is "abode" or "emblem".
    """

    def entity_saved(self, entity: str, entity_id: str) -> None:
        """Record that an abode or emblem was saved."""
        ...

    def entity_not_found(self, entity: str, entity_id: str) -> None:
        """Record that an abode or emblem was not found."""
        ...

    def entity_deleted(self, entity: str, entity_id: str, detached: int) -> None:
        """Record that an abode or emblem was deleted.

        ``detached`` counts the god references cleaned up with it.
        """
        ...

    def with_context(self, context: ObservationContext) -> CatalogRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class _StructlogProbe:
    """Shared structlog plumbing for the default probes."""

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


class DefaultGodRepositoryProbe(_StructlogProbe):
    """Default implementation of GodRepositoryProbe using structlog."""

    def with_context(self, context: ObservationContext) -> DefaultGodRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultGodRepositoryProbe(logger=self._logger, context=context)

    def god_saved(self, god_id: str, version: int, emblem_count: int) -> None:
        self._logger.info(
            "god_saved",
            god_id=god_id,
            version=version,
            emblem_count=emblem_count,
            **self._get_context_kwargs(),
        )

    def god_retrieved(self, god_id: str) -> None:
        self._logger.debug(
            "god_retrieved",
            god_id=god_id,
            **self._get_context_kwargs(),
        )

    def god_not_found(self, god_id: str) -> None:
        self._logger.debug(
            "god_not_found",
            god_id=god_id,
            **self._get_context_kwargs(),
        )

    def god_deleted(self, god_id: str) -> None:
        self._logger.info(
            "god_deleted",
            god_id=god_id,
            **self._get_context_kwargs(),
        )

    def stale_version_detected(
        self, god_id: str, expected: int | None, actual: int | None
    ) -> None:
        self._logger.warning(
            "god_stale_version_detected",
            god_id=god_id,
            expected_version=expected,
            actual_version=actual,
            **self._get_context_kwargs(),
        )


class DefaultRelationRepositoryProbe(_StructlogProbe):
    """Default implementation of RelationRepositoryProbe using structlog."""

    def with_context(
        self, context: ObservationContext
    ) -> DefaultRelationRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultRelationRepositoryProbe(logger=self._logger, context=context)

    def edge_added(self, god_id: str, relative_id: str, kind: str) -> None:
        self._logger.info(
            "relation_edge_added",
            god_id=god_id,
            relative_id=relative_id,
            kind=kind,
            **self._get_context_kwargs(),
        )

    def edge_already_present(self, god_id: str, relative_id: str, kind: str) -> None:
        self._logger.debug(
            "relation_edge_already_present",
            god_id=god_id,
            relative_id=relative_id,
            kind=kind,
            **self._get_context_kwargs(),
        )

    def edge_removed(self, god_id: str, relative_id: str, kind: str) -> None:
        self._logger.info(
            "relation_edge_removed",
            god_id=god_id,
            relative_id=relative_id,
            kind=kind,
            **self._get_context_kwargs(),
        )

    def edges_cleared(self, god_id: str, count: int) -> None:
        self._logger.info(
            "relation_edges_cleared",
            god_id=god_id,
            count=count,
            **self._get_context_kwargs(),
        )


class DefaultCatalogRepositoryProbe(_StructlogProbe):
    """Default implementation of CatalogRepositoryProbe using structlog."""

    def with_context(
        self, context: ObservationContext
    ) -> DefaultCatalogRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultCatalogRepositoryProbe(logger=self._logger, context=context)

    def entity_saved(self, entity: str, entity_id: str) -> None:
        self._logger.info(
            f"{entity}_saved",
            entity_id=entity_id,
            **self._get_context_kwargs(),
        )

    def entity_not_found(self, entity: str, entity_id: str) -> None:
        self._logger.debug(
            f"{entity}_not_found",
            entity_id=entity_id,
            **self._get_context_kwargs(),
        )

    def entity_deleted(self, entity: str, entity_id: str, detached: int) -> None:
        self._logger.info(
            f"{entity}_deleted",
            entity_id=entity_id,
            detached=detached,
            **self._get_context_kwargs(),
        )
