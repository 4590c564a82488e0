"""Emblem application service for the Pantheon bounded context."""

from __future__ import annotations

from pantheon.application.observability import (
    CatalogServiceProbe,
    DefaultCatalogServiceProbe,
)
from pantheon.application.services._validation import validated_input
from pantheon.application.unit_of_work import UnitOfWork
from pantheon.domain.aggregates import Emblem
from pantheon.domain.value_objects import EmblemId
from pantheon.ports.exceptions import NotFoundError
from pantheon.ports.repositories import IEmblemRepository


class EmblemService:
    """Application service for emblem management."""

    def __init__(
        self,
        uow: UnitOfWork,
        emblem_repository: IEmblemRepository,
        probe: CatalogServiceProbe | None = None,
    ):
        """Initialize EmblemService with dependencies.

        Args:
            uow: Unit of work over the request session
            emblem_repository: Repository for emblem persistence
            probe: Optional domain probe for observability
        """
        self._uow = uow
        self._emblem_repository = emblem_repository
        self._probe = probe or DefaultCatalogServiceProbe("emblem")

    async def list_emblems(self) -> list[Emblem]:
        async with self._uow.transaction():
            return await self._emblem_repository.list_all()

    async def get_emblem(self, emblem_id: EmblemId) -> Emblem | None:
        async with self._uow.transaction():
            return await self._emblem_repository.get_by_id(emblem_id)

    async def create_emblem(self, name: str) -> Emblem:
        """Create an emblem.

        Raises:
            ValidationFailedError: If the name is blank
        """
        try:
            with validated_input():
                emblem = Emblem.create(name=name)

            async with self._uow.transaction():
                await self._emblem_repository.save(emblem)

            self._probe.created(emblem.id.value, emblem.name)
            return emblem

        except Exception as e:
            self._probe.operation_failed("create_emblem", str(e))
            raise

    async def update_emblem(
        self, emblem_id: EmblemId, name: str | None = None
    ) -> Emblem:
        """Rename an emblem; a None name leaves it unchanged.

        Raises:
            NotFoundError: If the emblem does not exist
            ValidationFailedError: If the name is blank
        """
        try:
            async with self._uow.transaction():
                emblem = await self._emblem_repository.get_by_id(emblem_id)
                if emblem is None:
                    raise NotFoundError("emblem", emblem_id.value)

                if name is not None:
                    with validated_input():
                        emblem.rename(name)
                    await self._emblem_repository.save(emblem)

            self._probe.updated(emblem_id.value)
            return emblem

        except Exception as e:
            self._probe.operation_failed("update_emblem", str(e), emblem_id.value)
            raise

    async def delete_emblem(self, emblem_id: EmblemId) -> Emblem:
        """Delete an emblem and remove it from every god that carried it.

        Returns:
            The emblem as it was before deletion

        Raises:
            NotFoundError: If the emblem does not exist
        """
        try:
            async with self._uow.transaction():
                emblem = await self._emblem_repository.get_by_id(emblem_id)
                if emblem is None:
                    raise NotFoundError("emblem", emblem_id.value)
                removed = await self._emblem_repository.delete(emblem_id) or 0

            self._probe.deleted(emblem_id.value, references_cleared=removed)
            return emblem

        except Exception as e:
            self._probe.operation_failed("delete_emblem", str(e), emblem_id.value)
            raise
