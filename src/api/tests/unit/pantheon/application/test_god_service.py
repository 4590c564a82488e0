"""Unit tests for GodService with mocked repositories."""

from unittest.mock import AsyncMock, MagicMock, create_autospec

import pytest

from pantheon.application.observability import GodServiceProbe
from pantheon.application.services.god_service import GodService
from pantheon.application.unit_of_work import UnitOfWork
from pantheon.domain.aggregates import Abode, Emblem, God
from pantheon.domain.value_objects import (
    AbodeId,
    EmblemId,
    GodId,
    RelationEdge,
    Relationship,
)
from pantheon.ports.exceptions import (
    ConcurrentModificationError,
    NotFoundError,
    ValidationFailedError,
)
from pantheon.ports.repositories import (
    IAbodeRepository,
    IEmblemRepository,
    IGodRepository,
    IRelationRepository,
)


@pytest.fixture
def mock_session():
    """Create mock async session with transaction support."""
    session = AsyncMock()
    mock_transaction = MagicMock()
    mock_transaction.__aenter__ = AsyncMock(return_value=None)
    mock_transaction.__aexit__ = AsyncMock(return_value=None)
    session.begin = MagicMock(return_value=mock_transaction)
    return session


@pytest.fixture
def god_repository():
    return create_autospec(IGodRepository, instance=True)


@pytest.fixture
def relation_repository():
    return create_autospec(IRelationRepository, instance=True)


@pytest.fixture
def abode_repository():
    return create_autospec(IAbodeRepository, instance=True)


@pytest.fixture
def emblem_repository():
    return create_autospec(IEmblemRepository, instance=True)


@pytest.fixture
def mock_probe():
    """Create mock god service probe."""
    return create_autospec(GodServiceProbe, instance=True)


@pytest.fixture
def service(
    mock_session,
    god_repository,
    relation_repository,
    abode_repository,
    emblem_repository,
    mock_probe,
):
    """Create GodService with mock dependencies."""
    return GodService(
        uow=UnitOfWork(mock_session, timeout_seconds=5),
        god_repository=god_repository,
        relation_repository=relation_repository,
        abode_repository=abode_repository,
        emblem_repository=emblem_repository,
        probe=mock_probe,
    )


@pytest.fixture
def zeus() -> God:
    return God.create(name="Zeus", type="god")


@pytest.fixture
def hera() -> God:
    return God.create(name="Hera", type="goddess")


def stored(god_repository, *gods: God) -> None:
    """Make the mocked god repository resolve the given gods by id."""
    by_id = {g.id: g for g in gods}

    async def get_by_id(god_id):
        return by_id.get(god_id)

    god_repository.get_by_id.side_effect = get_by_id


class TestGodServiceInit:
    """Tests for GodService initialization."""

    def test_uses_default_probe_when_not_provided(
        self, mock_session, god_repository, relation_repository
    ):
        service = GodService(
            uow=UnitOfWork(mock_session, timeout_seconds=5),
            god_repository=god_repository,
            relation_repository=relation_repository,
            abode_repository=create_autospec(IAbodeRepository, instance=True),
            emblem_repository=create_autospec(IEmblemRepository, instance=True),
        )

        assert service._probe is not None


class TestCreateGod:
    """Tests for create_god."""

    @pytest.mark.asyncio
    async def test_creates_and_saves(self, service, god_repository, mock_probe):
        god = await service.create_god(name="Zeus", type="god", description="")

        god_repository.save.assert_awaited_once_with(god)
        mock_probe.god_created.assert_called_once_with(
            god_id=god.id.value, name="Zeus", type="god"
        )

    @pytest.mark.asyncio
    async def test_invalid_type_is_validation_failure(
        self, service, god_repository, mock_probe
    ):
        with pytest.raises(ValidationFailedError, match="Invalid god type"):
            await service.create_god(name="Kronos", type="titan")

        god_repository.save.assert_not_called()
        mock_probe.operation_failed.assert_called_once()

    @pytest.mark.asyncio
    async def test_blank_name_is_validation_failure(self, service):
        with pytest.raises(ValidationFailedError):
            await service.create_god(name="  ", type="god")


class TestUpdateGod:
    """Tests for update_god."""

    @pytest.mark.asyncio
    async def test_updates_only_supplied_fields(self, service, god_repository, zeus):
        zeus.add_domain("sky")
        stored(god_repository, zeus)

        result = await service.update_god(zeus.id, description="X")

        assert result.description == "X"
        assert result.name == "Zeus"
        assert result.domains == ["sky"]
        god_repository.save.assert_awaited_once_with(zeus)

    @pytest.mark.asyncio
    async def test_no_fields_skips_save(self, service, god_repository, zeus):
        stored(god_repository, zeus)

        await service.update_god(zeus.id)

        god_repository.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_god_raises_not_found(self, service, god_repository):
        stored(god_repository)

        with pytest.raises(NotFoundError):
            await service.update_god(GodId.generate(), name="Zeus")

    @pytest.mark.asyncio
    async def test_concurrent_modification_propagates(
        self, service, god_repository, zeus, mock_probe
    ):
        stored(god_repository, zeus)
        god_repository.save.side_effect = ConcurrentModificationError(
            "god", zeus.id.value
        )

        with pytest.raises(ConcurrentModificationError):
            await service.update_god(zeus.id, name="Jupiter")

        mock_probe.operation_failed.assert_called_once()


class TestDeleteGod:
    """Tests for delete_god."""

    @pytest.mark.asyncio
    async def test_removes_relations_then_god(
        self, service, god_repository, relation_repository, zeus, mock_probe
    ):
        stored(god_repository, zeus)
        relation_repository.remove_all_for.return_value = 3

        result = await service.delete_god(zeus.id)

        assert result is zeus
        relation_repository.remove_all_for.assert_awaited_once_with(zeus.id)
        god_repository.delete.assert_awaited_once_with(zeus.id)
        mock_probe.god_deleted.assert_called_once_with(
            zeus.id.value, relations_removed=3
        )

    @pytest.mark.asyncio
    async def test_missing_god_raises_not_found(
        self, service, god_repository, relation_repository
    ):
        stored(god_repository)

        with pytest.raises(NotFoundError):
            await service.delete_god(GodId.generate())

        relation_repository.remove_all_for.assert_not_called()


class TestAddRelative:
    """Tests for add_relative."""

    @pytest.mark.asyncio
    async def test_adds_parent_edge(
        self, service, god_repository, relation_repository, zeus, hera, mock_probe
    ):
        stored(god_repository, zeus, hera)
        relation_repository.exists.return_value = False
        relation_repository.add.return_value = True

        result = await service.add_relative(zeus.id, hera.id, "parent")

        assert result is zeus
        relation_repository.add.assert_awaited_once_with(
            RelationEdge.for_relationship(zeus.id, hera.id, Relationship.PARENT)
        )
        mock_probe.relative_added.assert_called_once_with(
            zeus.id.value, hera.id.value, "parent", created=True
        )

    @pytest.mark.asyncio
    async def test_accepts_plural_relationship_names(
        self, service, god_repository, relation_repository, zeus, hera
    ):
        stored(god_repository, zeus, hera)
        relation_repository.add.return_value = True

        await service.add_relative(zeus.id, hera.id, "Siblings")

        relation_repository.add.assert_awaited_once_with(
            RelationEdge.for_relationship(zeus.id, hera.id, Relationship.SIBLING)
        )

    @pytest.mark.asyncio
    async def test_missing_relative_raises_not_found(
        self, service, god_repository, relation_repository, zeus
    ):
        stored(god_repository, zeus)
        missing = GodId.generate()

        with pytest.raises(NotFoundError) as exc_info:
            await service.add_relative(zeus.id, missing, "sibling")

        assert exc_info.value.entity_id == missing.value
        relation_repository.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_self_relation_is_validation_failure(
        self, service, relation_repository, zeus
    ):
        with pytest.raises(ValidationFailedError, match="own relative"):
            await service.add_relative(zeus.id, zeus.id, "sibling")

        relation_repository.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_relationship_is_validation_failure(
        self, service, zeus, hera
    ):
        with pytest.raises(ValidationFailedError, match="Invalid relationship"):
            await service.add_relative(zeus.id, hera.id, "cousin")

    @pytest.mark.asyncio
    async def test_contradicting_parent_edge_rejected(
        self, service, god_repository, relation_repository, zeus, hera
    ):
        """A god cannot be both parent and child of the same god."""
        stored(god_repository, zeus, hera)
        relation_repository.exists.return_value = True

        with pytest.raises(ValidationFailedError, match="already a parent"):
            await service.add_relative(zeus.id, hera.id, "child")

        relation_repository.add.assert_not_called()


class TestRemoveRelative:
    """Tests for remove_relative."""

    @pytest.mark.asyncio
    async def test_removing_absent_edge_is_not_an_error(
        self, service, god_repository, relation_repository, zeus, hera, mock_probe
    ):
        stored(god_repository, zeus, hera)
        relation_repository.remove.return_value = False

        result = await service.remove_relative(zeus.id, hera.id, "sibling")

        assert result is zeus
        mock_probe.relative_removed.assert_called_once_with(
            zeus.id.value, hera.id.value, "sibling", removed=False
        )


class TestGetRelatives:
    """Tests for get_relatives."""

    @pytest.mark.asyncio
    async def test_resolves_ids_to_gods(
        self, service, god_repository, relation_repository, zeus, hera
    ):
        relation_repository.related_ids.return_value = [hera.id]
        god_repository.get_many.return_value = [hera]

        result = await service.get_relatives(zeus.id, Relationship.SIBLING)

        assert result == [hera]
        relation_repository.related_ids.assert_awaited_once_with(
            zeus.id, Relationship.SIBLING
        )
        god_repository.get_many.assert_awaited_once_with([hera.id])


class TestEmblems:
    """Tests for emblem association."""

    @pytest.mark.asyncio
    async def test_add_emblem_saves_once(
        self, service, god_repository, emblem_repository, zeus
    ):
        thunderbolt = Emblem.create("Thunderbolt")
        stored(god_repository, zeus)
        emblem_repository.get_by_id.return_value = thunderbolt

        await service.add_emblem(zeus.id, thunderbolt.id)
        await service.add_emblem(zeus.id, thunderbolt.id)

        assert zeus.emblem_ids == [thunderbolt.id]
        god_repository.save.assert_awaited_once_with(zeus)

    @pytest.mark.asyncio
    async def test_add_unknown_emblem_raises_not_found(
        self, service, god_repository, emblem_repository, zeus
    ):
        stored(god_repository, zeus)
        emblem_repository.get_by_id.return_value = None

        with pytest.raises(NotFoundError, match="Emblem"):
            await service.add_emblem(zeus.id, EmblemId.generate())

    @pytest.mark.asyncio
    async def test_remove_absent_emblem_is_noop(self, service, god_repository, zeus):
        stored(god_repository, zeus)

        await service.remove_emblem(zeus.id, EmblemId.generate())

        god_repository.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_get_emblems_of_unknown_god_is_empty(self, service, god_repository):
        stored(god_repository)

        assert await service.get_emblems(GodId.generate()) == []


class TestAbode:
    """Tests for update_abode and get_abode."""

    @pytest.mark.asyncio
    async def test_update_abode_replaces_previous(
        self, service, god_repository, abode_repository, zeus, mock_probe
    ):
        crete = AbodeId.generate()
        zeus.move_to(crete)
        olympus = Abode.create(name="Olympus", coordinates="0,0")
        stored(god_repository, zeus)
        abode_repository.get_by_id.return_value = olympus

        result = await service.update_abode(zeus.id, olympus.id)

        assert result.abode_id == olympus.id
        mock_probe.abode_assigned.assert_called_once_with(
            zeus.id.value, olympus.id.value, previous_abode_id=crete.value
        )

    @pytest.mark.asyncio
    async def test_update_abode_requires_existing_abode(
        self, service, god_repository, abode_repository, zeus
    ):
        stored(god_repository, zeus)
        abode_repository.get_by_id.return_value = None

        with pytest.raises(NotFoundError, match="Abode"):
            await service.update_abode(zeus.id, AbodeId.generate())

        god_repository.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_get_abode_of_homeless_god_is_none(
        self, service, god_repository, abode_repository, zeus
    ):
        stored(god_repository, zeus)

        assert await service.get_abode(zeus.id) is None
        abode_repository.get_by_id.assert_not_called()


class TestDomains:
    """Tests for add_domain and remove_domain."""

    @pytest.mark.asyncio
    async def test_add_domain_twice_saves_once(self, service, god_repository, zeus):
        stored(god_repository, zeus)

        await service.add_domain(zeus.id, "sun")
        await service.add_domain(zeus.id, "sun")

        assert zeus.domains == ["sun"]
        god_repository.save.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_blank_domain_is_validation_failure(
        self, service, god_repository, zeus
    ):
        stored(god_repository, zeus)

        with pytest.raises(ValidationFailedError):
            await service.add_domain(zeus.id, "   ")

    @pytest.mark.asyncio
    async def test_remove_absent_domain_is_noop(self, service, god_repository, zeus):
        zeus.add_domain("sun")
        stored(god_repository, zeus)

        result = await service.remove_domain(zeus.id, "nonexistent")

        assert result.domains == ["sun"]
        god_repository.save.assert_not_called()
