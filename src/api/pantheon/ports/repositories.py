"""Repository protocols (ports) for the Pantheon bounded context.

Repository protocols define the interface for persisting and retrieving
aggregates. Implementations live in ``pantheon.infrastructure``.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from pantheon.domain.aggregates import Abode, Emblem, God
from pantheon.domain.value_objects import (
    AbodeId,
    EmblemId,
    GodId,
    RelationEdge,
    Relationship,
)


@runtime_checkable
class IGodRepository(Protocol):
    """Repository for God aggregate persistence.

    Returns God aggregates with domains, abode reference and emblem
    references hydrated. Relations are handled by IRelationRepository.
    """

    async def save(self, god: God) -> None:
        """Persist a god aggregate (insert or update).

        Syncs the god's emblem associations and bumps its version.

        Raises:
            ConcurrentModificationError: If the stored version differs from
                the version the aggregate was read at
        """
        ...

    async def get_by_id(self, god_id: GodId) -> God | None:
        """Retrieve a god by id, or None if it does not exist."""
        ...

    async def get_many(self, god_ids: Sequence[GodId]) -> list[God]:
        """Retrieve gods by id, preserving the order of ``god_ids``.

        Ids that do not resolve are skipped.
        """
        ...

    async def list_all(self) -> list[God]:
        """List all gods ordered by creation time."""
        ...

    async def delete(self, god_id: GodId) -> bool:
        """Delete a god and its emblem associations.

        Returns:
            True if deleted, False if not found
        """
        ...


@runtime_checkable
class IRelationRepository(Protocol):
    """Repository for relation edges between gods.

    Each relation is stored once; the parents/children/siblings views are
    computed from the stored edges.
    """

    async def add(self, edge: RelationEdge) -> bool:
        """Store an edge if not already present.

        Returns:
            True if a new edge was stored, False if it already existed
        """
        ...

    async def remove(self, edge: RelationEdge) -> bool:
        """Delete an edge if present.

        Returns:
            True if an edge was deleted, False if it was absent
        """
        ...

    async def exists(self, edge: RelationEdge) -> bool:
        """Check whether an edge is stored."""
        ...

    async def related_ids(
        self, god_id: GodId, relationship: Relationship
    ) -> list[GodId]:
        """List the ids of god_id's relatives of a kind, in insertion order."""
        ...

    async def remove_all_for(self, god_id: GodId) -> int:
        """Delete every edge touching god_id.

        Returns:
            Number of edges deleted
        """
        ...


@runtime_checkable
class IAbodeRepository(Protocol):
    """Repository for Abode aggregate persistence."""

    async def save(self, abode: Abode) -> None:
        """Persist an abode (insert or update)."""
        ...

    async def get_by_id(self, abode_id: AbodeId) -> Abode | None:
        """Retrieve an abode by id, or None if it does not exist."""
        ...

    async def list_all(self) -> list[Abode]:
        """List all abodes ordered by creation time."""
        ...

    async def delete(self, abode_id: AbodeId) -> int | None:
        """Delete an abode and detach it from every god living there.

        Returns:
            Number of gods detached, or None if the abode was not found
        """
        ...


@runtime_checkable
class IEmblemRepository(Protocol):
    """Repository for Emblem aggregate persistence."""

    async def save(self, emblem: Emblem) -> None:
        """Persist an emblem (insert or update)."""
        ...

    async def get_by_id(self, emblem_id: EmblemId) -> Emblem | None:
        """Retrieve an emblem by id, or None if it does not exist."""
        ...

    async def get_many(self, emblem_ids: Sequence[EmblemId]) -> list[Emblem]:
        """Retrieve emblems by id, preserving the order of ``emblem_ids``."""
        ...

    async def list_all(self) -> list[Emblem]:
        """List all emblems ordered by creation time."""
        ...

    async def delete(self, emblem_id: EmblemId) -> int | None:
        """Delete an emblem and its associations with gods.

        Returns:
            Number of associations removed, or None if the emblem was not found
        """
        ...
