"""SQLAlchemy implementation of IGodRepository.

God metadata and domains live in the ``gods`` table; emblem associations
live in ``god_emblems`` and are hydrated in association order. Relations
are handled separately by RelationRepository.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import UTC, datetime
from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from infrastructure.database.statements import insert_ignoring_conflicts
from pantheon.domain.aggregates import God
from pantheon.domain.value_objects import AbodeId, EmblemId, GodId, GodType
from pantheon.infrastructure.models import GodEmblemModel, GodModel
from pantheon.infrastructure.observability import (
    DefaultGodRepositoryProbe,
    GodRepositoryProbe,
)
from pantheon.ports.exceptions import ConcurrentModificationError
from pantheon.ports.repositories import IGodRepository


class GodRepository(IGodRepository):
    """Repository persisting God aggregates with their emblem associations.

    Every save bumps the row version. A save whose aggregate was read at an
    older version than the one stored raises ConcurrentModificationError
    instead of overwriting the newer row.
    """

    def __init__(
        self,
        session: AsyncSession,
        probe: GodRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultGodRepositoryProbe()

    async def save(self, god: God) -> None:
        """Persist god metadata and sync its emblem associations.

        Args:
            god: The God aggregate to persist

        Raises:
            ConcurrentModificationError: If the god was changed since it was read
        """
        model = await self._get_model(god.id.value)

        if model is None:
            model = GodModel(id=god.id.value)
            self._session.add(model)
        elif god.version is not None and model.version != god.version:
            self._probe.stale_version_detected(
                god.id.value, expected=god.version, actual=model.version
            )
            raise ConcurrentModificationError("god", god.id.value)
        else:
            # Always issue an UPDATE so the version check runs and bumps
            model.updated_at = datetime.now(UTC)

        model.name = god.name
        model.type = god.type.value
        model.description = god.description
        model.domains = list(god.domains)
        model.abode_id = god.abode_id.value if god.abode_id else None

        try:
            await self._session.flush()
        except StaleDataError as e:
            self._probe.stale_version_detected(
                god.id.value, expected=god.version, actual=None
            )
            raise ConcurrentModificationError("god", god.id.value) from e

        await self._sync_emblems(god)

        god.version = model.version
        self._probe.god_saved(god.id.value, model.version, len(god.emblem_ids))

    async def get_by_id(self, god_id: GodId) -> God | None:
        """Fetch a god with its emblem references.

        Args:
            god_id: The unique identifier of the god

        Returns:
            The God aggregate, or None if not found
        """
        model = await self._get_model(god_id.value)

        if model is None:
            self._probe.god_not_found(god_id.value)
            return None

        emblems = await self._hydrate_emblems([model.id])
        self._probe.god_retrieved(god_id.value)
        return self._to_domain(model, emblems[model.id])

    async def get_many(self, god_ids: Sequence[GodId]) -> list[God]:
        """Fetch several gods in one query, preserving the requested order.

        Args:
            god_ids: Ids to look up; unknown ids are skipped

        Returns:
            God aggregates in the order of ``god_ids``
        """
        if not god_ids:
            return []

        ids = [g.value for g in god_ids]
        stmt = (
            select(GodModel)
            .where(GodModel.id.in_(ids))
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        models = {m.id: m for m in result.scalars().all()}

        emblems = await self._hydrate_emblems(list(models))
        return [
            self._to_domain(models[god_id], emblems[god_id])
            for god_id in ids
            if god_id in models
        ]

    async def list_all(self) -> list[God]:
        """List every god ordered by creation time.

        Returns:
            List of God aggregates with emblem references loaded
        """
        stmt = (
            select(GodModel)
            .order_by(GodModel.created_at, GodModel.id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        models = result.scalars().all()

        emblems = await self._hydrate_emblems([m.id for m in models])
        return [self._to_domain(m, emblems[m.id]) for m in models]

    async def delete(self, god_id: GodId) -> bool:
        """Delete a god and its emblem associations.

        Relation edges must be removed through the relation repository
        before the god row goes away.

        Args:
            god_id: The god to delete

        Returns:
            True if deleted, False if not found
        """
        model = await self._get_model(god_id.value)

        if model is None:
            self._probe.god_not_found(god_id.value)
            return False

        await self._session.execute(
            delete(GodEmblemModel).where(GodEmblemModel.god_id == god_id.value)
        )
        await self._session.delete(model)
        await self._session.flush()

        self._probe.god_deleted(god_id.value)
        return True

    async def _get_model(self, god_id: str) -> GodModel | None:
        stmt = (
            select(GodModel)
            .where(GodModel.id == god_id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def _hydrate_emblems(self, god_ids: list[str]) -> dict[str, list[EmblemId]]:
        """Load emblem references for the given gods in association order.

        Args:
            god_ids: Gods to load associations for

        Returns:
            Mapping of god id to its emblem ids (empty list when none)
        """
        emblems: dict[str, list[EmblemId]] = defaultdict(list)
        if not god_ids:
            return emblems

        stmt = (
            select(GodEmblemModel.god_id, GodEmblemModel.emblem_id)
            .where(GodEmblemModel.god_id.in_(god_ids))
            .order_by(GodEmblemModel.seq)
        )
        result = await self._session.execute(stmt)
        for god_id, emblem_id in result.all():
            emblems[god_id].append(EmblemId(value=emblem_id))
        return emblems

    async def _sync_emblems(self, god: God) -> None:
        """Sync god_emblems rows with the aggregate's emblem references.

        Args:
            god: The god whose associations to sync
        """
        current = (await self._hydrate_emblems([god.id.value]))[god.id.value]

        current_keys = {e.value for e in current}
        desired_keys = {e.value for e in god.emblem_ids}

        # Insert in aggregate order so seq reflects association order
        for emblem_id in god.emblem_ids:
            if emblem_id.value not in current_keys:
                await insert_ignoring_conflicts(
                    self._session,
                    GodEmblemModel.__table__,
                    {"god_id": god.id.value, "emblem_id": emblem_id.value},
                )

        removed = current_keys - desired_keys
        if removed:
            await self._session.execute(
                delete(GodEmblemModel).where(
                    GodEmblemModel.god_id == god.id.value,
                    GodEmblemModel.emblem_id.in_(sorted(removed)),
                )
            )

    @staticmethod
    def _to_domain(model: GodModel, emblem_ids: list[EmblemId]) -> God:
        return God(
            id=GodId(value=model.id),
            name=model.name,
            type=GodType(model.type),
            description=model.description,
            domains=list(model.domains),
            abode_id=AbodeId(value=model.abode_id) if model.abode_id else None,
            emblem_ids=list(emblem_ids),
            version=model.version,
        )
