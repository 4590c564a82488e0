"""SQLAlchemy implementation of IRelationRepository.

Each relation is one row in ``god_relations``. Parent/child views are the
two directions of a ``parent`` row; siblings are read from either end of a
``sibling`` row. Because both sides of a relation read the same row, the
lists can never disagree.
"""

from __future__ import annotations

from sqlalchemy import case, delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.statements import insert_ignoring_conflicts
from pantheon.domain.value_objects import EdgeKind, GodId, RelationEdge, Relationship
from pantheon.infrastructure.models import GodRelationModel
from pantheon.infrastructure.observability import (
    DefaultRelationRepositoryProbe,
    RelationRepositoryProbe,
)
from pantheon.ports.repositories import IRelationRepository


class RelationRepository(IRelationRepository):
    """Repository for relation edges between gods."""

    def __init__(
        self,
        session: AsyncSession,
        probe: RelationRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultRelationRepositoryProbe()

    async def add(self, edge: RelationEdge) -> bool:
        """Store an edge unless it already exists.

        Concurrent adds of the same edge both succeed; only one row is kept.
        """
        inserted = await insert_ignoring_conflicts(
            self._session,
            GodRelationModel.__table__,
            {
                "god_id": edge.god_id.value,
                "relative_id": edge.relative_id.value,
                "kind": edge.kind.value,
            },
        )

        if inserted:
            self._probe.edge_added(
                edge.god_id.value, edge.relative_id.value, edge.kind.value
            )
        else:
            self._probe.edge_already_present(
                edge.god_id.value, edge.relative_id.value, edge.kind.value
            )
        return inserted

    async def remove(self, edge: RelationEdge) -> bool:
        stmt = (
            delete(GodRelationModel)
            .where(*self._matches(edge))
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)

        removed = bool(result.rowcount)
        if removed:
            self._probe.edge_removed(
                edge.god_id.value, edge.relative_id.value, edge.kind.value
            )
        return removed

    async def exists(self, edge: RelationEdge) -> bool:
        stmt = select(GodRelationModel.seq).where(*self._matches(edge)).limit(1)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def related_ids(
        self, god_id: GodId, relationship: Relationship
    ) -> list[GodId]:
        """List god_id's relatives of one kind in insertion order.

        Args:
            god_id: The god whose relation list is read
            relationship: Which list (parents, children or siblings)

        Returns:
            Ids of the relatives
        """
        gid = god_id.value

        if relationship is Relationship.PARENT:
            stmt = select(GodRelationModel.relative_id).where(
                GodRelationModel.god_id == gid,
                GodRelationModel.kind == EdgeKind.PARENT.value,
            )
        elif relationship is Relationship.CHILD:
            stmt = select(GodRelationModel.god_id).where(
                GodRelationModel.relative_id == gid,
                GodRelationModel.kind == EdgeKind.PARENT.value,
            )
        else:
            # Sibling rows are canonically ordered, so god_id may be either end
            other_end = case(
                (GodRelationModel.god_id == gid, GodRelationModel.relative_id),
                else_=GodRelationModel.god_id,
            )
            stmt = select(other_end).where(
                GodRelationModel.kind == EdgeKind.SIBLING.value,
                or_(
                    GodRelationModel.god_id == gid,
                    GodRelationModel.relative_id == gid,
                ),
            )

        result = await self._session.execute(stmt.order_by(GodRelationModel.seq))
        return [GodId(value=value) for value in result.scalars().all()]

    async def remove_all_for(self, god_id: GodId) -> int:
        """Delete every edge in which god_id appears at either end.

        Returns:
            Number of edges deleted
        """
        stmt = (
            delete(GodRelationModel)
            .where(
                or_(
                    GodRelationModel.god_id == god_id.value,
                    GodRelationModel.relative_id == god_id.value,
                )
            )
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)

        count = result.rowcount or 0
        self._probe.edges_cleared(god_id.value, count)
        return count

    @staticmethod
    def _matches(edge: RelationEdge) -> tuple:
        return (
            GodRelationModel.god_id == edge.god_id.value,
            GodRelationModel.relative_id == edge.relative_id.value,
            GodRelationModel.kind == edge.kind.value,
        )
