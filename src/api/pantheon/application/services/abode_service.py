"""Abode application service for the Pantheon bounded context."""

from __future__ import annotations

from pantheon.application.observability import (
    CatalogServiceProbe,
    DefaultCatalogServiceProbe,
)
from pantheon.application.services._validation import validated_input
from pantheon.application.unit_of_work import UnitOfWork
from pantheon.domain.aggregates import Abode
from pantheon.domain.value_objects import AbodeId
from pantheon.ports.exceptions import NotFoundError
from pantheon.ports.repositories import IAbodeRepository


class AbodeService:
    """Application service for abode management."""

    def __init__(
        self,
        uow: UnitOfWork,
        abode_repository: IAbodeRepository,
        probe: CatalogServiceProbe | None = None,
    ):
        """Initialize AbodeService with dependencies.

        Args:
            uow: Unit of work over the request session
            abode_repository: Repository for abode persistence
            probe: Optional domain probe for observability
        """
        self._uow = uow
        self._abode_repository = abode_repository
        self._probe = probe or DefaultCatalogServiceProbe("abode")

    async def list_abodes(self) -> list[Abode]:
        async with self._uow.transaction():
            return await self._abode_repository.list_all()

    async def get_abode(self, abode_id: AbodeId) -> Abode | None:
        async with self._uow.transaction():
            return await self._abode_repository.get_by_id(abode_id)

    async def create_abode(self, name: str, coordinates: str | None = None) -> Abode:
        """Create an abode.

        Raises:
            ValidationFailedError: If the name is blank
        """
        try:
            with validated_input():
                abode = Abode.create(name=name, coordinates=coordinates)

            async with self._uow.transaction():
                await self._abode_repository.save(abode)

            self._probe.created(abode.id.value, abode.name)
            return abode

        except Exception as e:
            self._probe.operation_failed("create_abode", str(e))
            raise

    async def update_abode(
        self,
        abode_id: AbodeId,
        name: str | None = None,
        coordinates: str | None = None,
    ) -> Abode:
        """Apply a sparse update to an abode.

        Raises:
            NotFoundError: If the abode does not exist
            ValidationFailedError: If a supplied name is blank
        """
        try:
            async with self._uow.transaction():
                abode = await self._abode_repository.get_by_id(abode_id)
                if abode is None:
                    raise NotFoundError("abode", abode_id.value)

                with validated_input():
                    abode.update(name=name, coordinates=coordinates)
                await self._abode_repository.save(abode)

            self._probe.updated(abode_id.value)
            return abode

        except Exception as e:
            self._probe.operation_failed("update_abode", str(e), abode_id.value)
            raise

    async def delete_abode(self, abode_id: AbodeId) -> Abode:
        """Delete an abode; gods that lived there are left without an abode.

        Returns:
            The abode as it was before deletion

        Raises:
            NotFoundError: If the abode does not exist
        """
        try:
            async with self._uow.transaction():
                abode = await self._abode_repository.get_by_id(abode_id)
                if abode is None:
                    raise NotFoundError("abode", abode_id.value)
                detached = await self._abode_repository.delete(abode_id) or 0

            self._probe.deleted(abode_id.value, references_cleared=detached)
            return abode

        except Exception as e:
            self._probe.operation_failed("delete_abode", str(e), abode_id.value)
            raise
