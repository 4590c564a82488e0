"""God application service for the Pantheon bounded context.

Orchestrates god lifecycle, relations between gods and the god's
associations with abodes and emblems.
"""

from __future__ import annotations

from pantheon.application.observability import DefaultGodServiceProbe, GodServiceProbe
from pantheon.application.services._validation import validated_input
from pantheon.application.unit_of_work import UnitOfWork
from pantheon.domain.aggregates import Abode, Emblem, God
from pantheon.domain.value_objects import (
    AbodeId,
    EdgeKind,
    EmblemId,
    GodId,
    GodType,
    RelationEdge,
    Relationship,
)
from pantheon.ports.exceptions import NotFoundError, ValidationFailedError
from pantheon.ports.repositories import (
    IAbodeRepository,
    IEmblemRepository,
    IGodRepository,
    IRelationRepository,
)


class GodService:
    """Application service for gods and their relations.

    Each public method runs as one unit of work. Relations are stored as
    single edges, so adding "B is a parent of A" is immediately visible as
    "A is a child of B" without a second write.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        god_repository: IGodRepository,
        relation_repository: IRelationRepository,
        abode_repository: IAbodeRepository,
        emblem_repository: IEmblemRepository,
        probe: GodServiceProbe | None = None,
    ):
        """Initialize GodService with dependencies.

        Args:
            uow: Unit of work over the request session
            god_repository: Repository for god persistence
            relation_repository: Repository for relation edges
            abode_repository: Repository used to resolve abode references
            emblem_repository: Repository used to resolve emblem references
            probe: Optional domain probe for observability
        """
        self._uow = uow
        self._god_repository = god_repository
        self._relation_repository = relation_repository
        self._abode_repository = abode_repository
        self._emblem_repository = emblem_repository
        self._probe = probe or DefaultGodServiceProbe()

    async def list_gods(self) -> list[God]:
        """List every god ordered by creation time."""
        async with self._uow.transaction():
            return await self._god_repository.list_all()

    async def get_god(self, god_id: GodId) -> God | None:
        """Get a god by ID.

        Returns:
            The God aggregate, or None if the id does not resolve
        """
        async with self._uow.transaction():
            return await self._god_repository.get_by_id(god_id)

    async def create_god(
        self,
        name: str,
        type: GodType | str,
        description: str | None = None,
    ) -> God:
        """Create a god with no domains, relations, emblems or abode.

        Args:
            name: Display name
            type: "god" or "goddess", case-insensitive
            description: Optional free text

        Returns:
            The created God aggregate

        Raises:
            ValidationFailedError: If the name is blank or the type is unknown
        """
        try:
            with validated_input():
                god = God.create(name=name, type=type, description=description)

            async with self._uow.transaction():
                await self._god_repository.save(god)

            self._probe.god_created(
                god_id=god.id.value, name=god.name, type=god.type.value
            )
            return god

        except Exception as e:
            self._probe.operation_failed("create_god", str(e))
            raise

    async def update_god(
        self,
        god_id: GodId,
        name: str | None = None,
        type: GodType | str | None = None,
        description: str | None = None,
    ) -> God:
        """Apply a sparse update to a god's own fields.

        Fields passed as None are left untouched.

        Raises:
            NotFoundError: If the god does not exist
            ValidationFailedError: If a supplied name is blank or type unknown
            ConcurrentModificationError: If the god changed concurrently
        """
        try:
            async with self._uow.transaction():
                god = await self._require_god(god_id)
                with validated_input():
                    fields = god.update(name=name, type=type, description=description)
                if fields:
                    await self._god_repository.save(god)

            self._probe.god_updated(god_id.value, fields)
            return god

        except Exception as e:
            self._probe.operation_failed("update_god", str(e), god_id=god_id.value)
            raise

    async def delete_god(self, god_id: GodId) -> God:
        """Delete a god together with its relations and emblem associations.

        Every other god that listed it as a relative loses that entry.

        Returns:
            The god as it was before deletion

        Raises:
            NotFoundError: If the god does not exist
        """
        try:
            async with self._uow.transaction():
                god = await self._require_god(god_id)
                removed = await self._relation_repository.remove_all_for(god_id)
                await self._god_repository.delete(god_id)

            self._probe.god_deleted(god_id.value, relations_removed=removed)
            return god

        except Exception as e:
            self._probe.operation_failed("delete_god", str(e), god_id=god_id.value)
            raise

    async def add_relative(
        self,
        god_id: GodId,
        relative_id: GodId,
        relationship: Relationship | str,
    ) -> God:
        """Record that relative_id is the <relationship> of god_id.

        The inverse view (child for parent, sibling for sibling) follows
        automatically. Adding an existing relation is a no-op.

        Args:
            god_id: God whose relation list is addressed
            relative_id: The relative
            relationship: parent, child or sibling (plural names accepted)

        Returns:
            The god identified by god_id

        Raises:
            NotFoundError: If either god does not exist
            ValidationFailedError: If the relationship is unknown, the ids are
                equal, or the relation contradicts an existing parent relation
        """
        try:
            with validated_input():
                relation = _parse_relationship(relationship)
                edge = RelationEdge.for_relationship(god_id, relative_id, relation)

            async with self._uow.transaction():
                god = await self._require_god(god_id)
                await self._require_god(relative_id)

                # A cannot be both parent and child of B
                if edge.kind is EdgeKind.PARENT:
                    if await self._relation_repository.exists(edge.reversed()):
                        raise ValidationFailedError(
                            f"God {edge.god_id} is already a parent of "
                            f"{edge.relative_id}"
                        )

                created = await self._relation_repository.add(edge)

            self._probe.relative_added(
                god_id.value, relative_id.value, relation.value, created=created
            )
            return god

        except Exception as e:
            self._probe.operation_failed(
                "add_relative",
                str(e),
                god_id=god_id.value,
                relative_id=relative_id.value,
            )
            raise

    async def remove_relative(
        self,
        god_id: GodId,
        relative_id: GodId,
        relationship: Relationship | str,
    ) -> God:
        """Remove "relative_id is the <relationship> of god_id".

        Removing a relation that does not exist is a no-op.

        Returns:
            The god identified by god_id

        Raises:
            NotFoundError: If either god does not exist
            ValidationFailedError: If the relationship is unknown or the ids
                are equal
        """
        try:
            with validated_input():
                relation = _parse_relationship(relationship)
                edge = RelationEdge.for_relationship(god_id, relative_id, relation)

            async with self._uow.transaction():
                god = await self._require_god(god_id)
                await self._require_god(relative_id)
                removed = await self._relation_repository.remove(edge)

            self._probe.relative_removed(
                god_id.value, relative_id.value, relation.value, removed=removed
            )
            return god

        except Exception as e:
            self._probe.operation_failed(
                "remove_relative",
                str(e),
                god_id=god_id.value,
                relative_id=relative_id.value,
            )
            raise

    async def get_relatives(
        self, god_id: GodId, relationship: Relationship | str
    ) -> list[God]:
        """Get the parents, children or siblings of a god as full records.

        An unknown god has no relatives.

        Raises:
            ValidationFailedError: If the relationship is unknown
        """
        with validated_input():
            relation = _parse_relationship(relationship)

        async with self._uow.transaction():
            ids = await self._relation_repository.related_ids(god_id, relation)
            return await self._god_repository.get_many(ids)

    async def add_emblem(self, god_id: GodId, emblem_id: EmblemId) -> God:
        """Associate an emblem with a god; repeating the call is a no-op.

        Raises:
            NotFoundError: If the god or the emblem does not exist
        """
        try:
            async with self._uow.transaction():
                god = await self._require_god(god_id)
                if await self._emblem_repository.get_by_id(emblem_id) is None:
                    raise NotFoundError("emblem", emblem_id.value)

                added = god.add_emblem(emblem_id)
                if added:
                    await self._god_repository.save(god)

            if added:
                self._probe.emblem_associated(god_id.value, emblem_id.value)
            return god

        except Exception as e:
            self._probe.operation_failed(
                "add_emblem", str(e), god_id=god_id.value, emblem_id=emblem_id.value
            )
            raise

    async def remove_emblem(self, god_id: GodId, emblem_id: EmblemId) -> God:
        """Drop an emblem association; a missing association is a no-op.

        Raises:
            NotFoundError: If the god does not exist
        """
        try:
            async with self._uow.transaction():
                god = await self._require_god(god_id)
                removed = god.remove_emblem(emblem_id)
                if removed:
                    await self._god_repository.save(god)

            if removed:
                self._probe.emblem_dissociated(god_id.value, emblem_id.value)
            return god

        except Exception as e:
            self._probe.operation_failed(
                "remove_emblem",
                str(e),
                god_id=god_id.value,
                emblem_id=emblem_id.value,
            )
            raise

    async def get_emblems(self, god_id: GodId) -> list[Emblem]:
        """Get the emblems of a god in association order.

        An unknown god has no emblems.
        """
        async with self._uow.transaction():
            god = await self._god_repository.get_by_id(god_id)
            if god is None:
                return []
            return await self._emblem_repository.get_many(god.emblem_ids)

    async def update_abode(self, god_id: GodId, abode_id: AbodeId) -> God:
        """Move a god to an abode, replacing any previous one.

        Raises:
            NotFoundError: If the god or the abode does not exist
            ConcurrentModificationError: If the god changed concurrently
        """
        try:
            async with self._uow.transaction():
                god = await self._require_god(god_id)
                if await self._abode_repository.get_by_id(abode_id) is None:
                    raise NotFoundError("abode", abode_id.value)

                previous = god.move_to(abode_id)
                await self._god_repository.save(god)

            self._probe.abode_assigned(
                god_id.value,
                abode_id.value,
                previous_abode_id=previous.value if previous else None,
            )
            return god

        except Exception as e:
            self._probe.operation_failed(
                "update_abode", str(e), god_id=god_id.value, abode_id=abode_id.value
            )
            raise

    async def get_abode(self, god_id: GodId) -> Abode | None:
        """Get the abode of a god, or None if it has none."""
        async with self._uow.transaction():
            god = await self._god_repository.get_by_id(god_id)
            if god is None or god.abode_id is None:
                return None
            return await self._abode_repository.get_by_id(god.abode_id)

    async def add_domain(self, god_id: GodId, domain: str) -> God:
        """Add a domain to a god; an existing domain is not duplicated.

        Raises:
            NotFoundError: If the god does not exist
            ValidationFailedError: If the domain is blank
        """
        try:
            async with self._uow.transaction():
                god = await self._require_god(god_id)
                with validated_input():
                    added = god.add_domain(domain)
                if added:
                    await self._god_repository.save(god)

            if added:
                self._probe.domain_added(god_id.value, domain.strip())
            return god

        except Exception as e:
            self._probe.operation_failed("add_domain", str(e), god_id=god_id.value)
            raise

    async def remove_domain(self, god_id: GodId, domain: str) -> God:
        """Remove a domain from a god; an absent domain is a no-op.

        Raises:
            NotFoundError: If the god does not exist
        """
        try:
            async with self._uow.transaction():
                god = await self._require_god(god_id)
                removed = god.remove_domain(domain)
                if removed:
                    await self._god_repository.save(god)

            if removed:
                self._probe.domain_removed(god_id.value, domain.strip())
            return god

        except Exception as e:
            self._probe.operation_failed("remove_domain", str(e), god_id=god_id.value)
            raise

    async def _require_god(self, god_id: GodId) -> God:
        god = await self._god_repository.get_by_id(god_id)
        if god is None:
            raise NotFoundError("god", god_id.value)
        return god


def _parse_relationship(value: Relationship | str) -> Relationship:
    if isinstance(value, Relationship):
        return value
    return Relationship.parse(value)
