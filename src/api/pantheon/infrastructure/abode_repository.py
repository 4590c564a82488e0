"""SQLAlchemy implementation of IAbodeRepository."""

from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from pantheon.domain.aggregates import Abode
from pantheon.domain.value_objects import AbodeId
from pantheon.infrastructure.models import AbodeModel, GodModel
from pantheon.infrastructure.observability import (
    CatalogRepositoryProbe,
    DefaultCatalogRepositoryProbe,
)
from pantheon.ports.repositories import IAbodeRepository


class AbodeRepository(IAbodeRepository):
    """Repository for Abode aggregates."""

    def __init__(
        self,
        session: AsyncSession,
        probe: CatalogRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultCatalogRepositoryProbe()

    async def save(self, abode: Abode) -> None:
        model = await self._get_model(abode.id.value)

        if model:
            model.name = abode.name
            model.coordinates = abode.coordinates
        else:
            model = AbodeModel(
                id=abode.id.value,
                name=abode.name,
                coordinates=abode.coordinates,
            )
            self._session.add(model)

        await self._session.flush()
        self._probe.entity_saved("abode", abode.id.value)

    async def get_by_id(self, abode_id: AbodeId) -> Abode | None:
        model = await self._get_model(abode_id.value)

        if model is None:
            self._probe.entity_not_found("abode", abode_id.value)
            return None
        return self._to_domain(model)

    async def list_all(self) -> list[Abode]:
        stmt = select(AbodeModel).order_by(AbodeModel.created_at, AbodeModel.id)
        result = await self._session.execute(stmt)
        return [self._to_domain(m) for m in result.scalars().all()]

    async def delete(self, abode_id: AbodeId) -> int | None:
        """Delete an abode, leaving every god that lived there without one.

        Detaching bumps each affected god's version so stale copies of those
        gods cannot be saved back with the old abode.

        Args:
            abode_id: The abode to delete

        Returns:
            Number of gods detached, or None if the abode was not found
        """
        model = await self._get_model(abode_id.value)

        if model is None:
            self._probe.entity_not_found("abode", abode_id.value)
            return None

        resident_ids = (
            await self._session.execute(
                select(GodModel.id).where(GodModel.abode_id == abode_id.value)
            )
        ).scalars().all()

        if resident_ids:
            # God reads always refresh from the row, so no session sync needed
            await self._session.execute(
                update(GodModel)
                .where(GodModel.id.in_(resident_ids))
                .values(abode_id=None, version=GodModel.version + 1)
                .execution_options(synchronize_session=False)
            )
        detached = len(resident_ids)

        await self._session.delete(model)
        await self._session.flush()

        self._probe.entity_deleted("abode", abode_id.value, detached)
        return detached

    async def _get_model(self, abode_id: str) -> AbodeModel | None:
        stmt = select(AbodeModel).where(AbodeModel.id == abode_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _to_domain(model: AbodeModel) -> Abode:
        return Abode(
            id=AbodeId(value=model.id),
            name=model.name,
            coordinates=model.coordinates,
        )
