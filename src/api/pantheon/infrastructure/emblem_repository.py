"""SQLAlchemy implementation of IEmblemRepository."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from pantheon.domain.aggregates import Emblem
from pantheon.domain.value_objects import EmblemId
from pantheon.infrastructure.models import EmblemModel, GodEmblemModel
from pantheon.infrastructure.observability import (
    CatalogRepositoryProbe,
    DefaultCatalogRepositoryProbe,
)
from pantheon.ports.repositories import IEmblemRepository


class EmblemRepository(IEmblemRepository):
    """Repository for Emblem aggregates."""

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

    async def save(self, emblem: Emblem) -> None:
        model = await self._get_model(emblem.id.value)

        if model:
            model.name = emblem.name
        else:
            model = EmblemModel(id=emblem.id.value, name=emblem.name)
            self._session.add(model)

        await self._session.flush()
        self._probe.entity_saved("emblem", emblem.id.value)

    async def get_by_id(self, emblem_id: EmblemId) -> Emblem | None:
        model = await self._get_model(emblem_id.value)

        if model is None:
            self._probe.entity_not_found("emblem", emblem_id.value)
            return None
        return self._to_domain(model)

    async def get_many(self, emblem_ids: Sequence[EmblemId]) -> list[Emblem]:
        if not emblem_ids:
            return []

        ids = [e.value for e in emblem_ids]
        stmt = select(EmblemModel).where(EmblemModel.id.in_(ids))
        result = await self._session.execute(stmt)
        models = {m.id: m for m in result.scalars().all()}

        return [self._to_domain(models[i]) for i in ids if i in models]

    async def list_all(self) -> list[Emblem]:
        stmt = select(EmblemModel).order_by(EmblemModel.created_at, EmblemModel.id)
        result = await self._session.execute(stmt)
        return [self._to_domain(m) for m in result.scalars().all()]

    async def delete(self, emblem_id: EmblemId) -> int | None:
        """Delete an emblem and drop it from every god that carried it.

        Args:
            emblem_id: The emblem to delete

        Returns:
            Number of associations removed, or None if the emblem was not found
        """
        model = await self._get_model(emblem_id.value)

        if model is None:
            self._probe.entity_not_found("emblem", emblem_id.value)
            return None

        result = await self._session.execute(
            delete(GodEmblemModel)
            .where(GodEmblemModel.emblem_id == emblem_id.value)
            .execution_options(synchronize_session=False)
        )
        removed = result.rowcount or 0

        await self._session.delete(model)
        await self._session.flush()

        self._probe.entity_deleted("emblem", emblem_id.value, removed)
        return removed

    async def _get_model(self, emblem_id: str) -> EmblemModel | None:
        stmt = select(EmblemModel).where(EmblemModel.id == emblem_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _to_domain(model: EmblemModel) -> Emblem:
        return Emblem(id=EmblemId(value=model.id), name=model.name)
