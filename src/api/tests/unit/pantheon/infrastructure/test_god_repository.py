"""Unit tests for GodRepository against an in-memory SQLite database."""

from unittest.mock import MagicMock

import pytest
import pytest_asyncio

from pantheon.domain.aggregates import Emblem, God
from pantheon.domain.value_objects import EmblemId, GodId, GodType
from pantheon.infrastructure.emblem_repository import EmblemRepository
from pantheon.infrastructure.god_repository import GodRepository
from pantheon.ports.exceptions import ConcurrentModificationError
from pantheon.ports.repositories import IGodRepository


@pytest.fixture
def mock_probe():
    """Create mock repository probe."""
    return MagicMock()


@pytest.fixture
def repository(session, mock_probe):
    return GodRepository(session=session, probe=mock_probe)


@pytest_asyncio.fixture
async def emblems(session):
    """Persist two emblems to associate with gods."""
    thunderbolt = Emblem.create("Thunderbolt")
    eagle = Emblem.create("Eagle")
    repo = EmblemRepository(session=session, probe=MagicMock())
    async with session.begin():
        await repo.save(thunderbolt)
        await repo.save(eagle)
    return thunderbolt, eagle


class TestProtocolCompliance:
    """Tests for protocol compliance."""

    def test_implements_protocol(self, repository):
        """Repository should implement IGodRepository protocol."""
        assert isinstance(repository, IGodRepository)


class TestSave:
    """Tests for saving gods."""

    @pytest.mark.asyncio
    async def test_save_new_god_sets_version(self, session, repository, mock_probe):
        god = God.create(name="Zeus", type="god", description="Sky father")

        async with session.begin():
            await repository.save(god)

        assert god.version == 1
        mock_probe.god_saved.assert_called_once_with(god.id.value, 1, 0)

    @pytest.mark.asyncio
    async def test_round_trips_fields(self, session, repository):
        god = God.create(name="Apollo", type="god", description="Archer")
        god.add_domain("sun")
        god.add_domain("music")

        async with session.begin():
            await repository.save(god)
        async with session.begin():
            loaded = await repository.get_by_id(god.id)

        assert loaded is not None
        assert loaded.name == "Apollo"
        assert loaded.type is GodType.GOD
        assert loaded.description == "Archer"
        assert loaded.domains == ["sun", "music"]
        assert loaded.abode_id is None

    @pytest.mark.asyncio
    async def test_each_save_bumps_version(self, session, repository):
        god = God.create(name="Zeus", type="god")
        async with session.begin():
            await repository.save(god)

        god.add_domain("sky")
        async with session.begin():
            await repository.save(god)

        assert god.version == 2

    @pytest.mark.asyncio
    async def test_stale_version_raises_conflict(
        self, session, repository, mock_probe
    ):
        """A save based on an outdated read must not overwrite newer data."""
        god = God.create(name="Zeus", type="god")
        async with session.begin():
            await repository.save(god)

        async with session.begin():
            first = await repository.get_by_id(god.id)
            second = await repository.get_by_id(god.id)

        first.add_domain("sky")
        async with session.begin():
            await repository.save(first)

        second.add_domain("thunder")
        with pytest.raises(ConcurrentModificationError):
            async with session.begin():
                await repository.save(second)

        mock_probe.stale_version_detected.assert_called_once_with(
            god.id.value, expected=1, actual=2
        )
        async with session.begin():
            stored = await repository.get_by_id(god.id)
        assert stored.domains == ["sky"]

    @pytest.mark.asyncio
    async def test_emblems_sync_in_association_order(
        self, session, repository, emblems
    ):
        thunderbolt, eagle = emblems
        god = God.create(name="Zeus", type="god")
        god.add_emblem(eagle.id)
        god.add_emblem(thunderbolt.id)

        async with session.begin():
            await repository.save(god)
        async with session.begin():
            loaded = await repository.get_by_id(god.id)

        assert loaded.emblem_ids == [eagle.id, thunderbolt.id]

    @pytest.mark.asyncio
    async def test_removed_emblems_are_deleted(self, session, repository, emblems):
        thunderbolt, eagle = emblems
        god = God.create(name="Zeus", type="god")
        god.add_emblem(thunderbolt.id)
        god.add_emblem(eagle.id)
        async with session.begin():
            await repository.save(god)

        god.remove_emblem(thunderbolt.id)
        async with session.begin():
            await repository.save(god)
        async with session.begin():
            loaded = await repository.get_by_id(god.id)

        assert loaded.emblem_ids == [eagle.id]


class TestReads:
    """Tests for get_by_id, get_many and list_all."""

    @pytest.mark.asyncio
    async def test_get_by_id_returns_none_when_missing(
        self, session, repository, mock_probe
    ):
        missing = GodId.generate()

        async with session.begin():
            result = await repository.get_by_id(missing)

        assert result is None
        mock_probe.god_not_found.assert_called_once_with(missing.value)

    @pytest.mark.asyncio
    async def test_get_many_preserves_requested_order(self, session, repository):
        zeus = God.create(name="Zeus", type="god")
        hera = God.create(name="Hera", type="goddess")
        async with session.begin():
            await repository.save(zeus)
            await repository.save(hera)

        async with session.begin():
            result = await repository.get_many([hera.id, GodId.generate(), zeus.id])

        assert [g.name for g in result] == ["Hera", "Zeus"]

    @pytest.mark.asyncio
    async def test_get_many_with_no_ids(self, session, repository):
        async with session.begin():
            assert await repository.get_many([]) == []

    @pytest.mark.asyncio
    async def test_list_all_returns_every_god(self, session, repository):
        names = ["Zeus", "Hera", "Poseidon"]
        async with session.begin():
            for name in names:
                await repository.save(God.create(name=name, type="god"))

        async with session.begin():
            gods = await repository.list_all()

        assert sorted(g.name for g in gods) == sorted(names)


class TestDelete:
    """Tests for deleting gods."""

    @pytest.mark.asyncio
    async def test_delete_removes_god_and_emblem_rows(
        self, session, repository, emblems, mock_probe
    ):
        thunderbolt, _ = emblems
        god = God.create(name="Zeus", type="god")
        god.add_emblem(thunderbolt.id)
        async with session.begin():
            await repository.save(god)

        async with session.begin():
            deleted = await repository.delete(god.id)

        assert deleted is True
        mock_probe.god_deleted.assert_called_once_with(god.id.value)
        async with session.begin():
            assert await repository.get_by_id(god.id) is None

    @pytest.mark.asyncio
    async def test_delete_missing_returns_false(self, session, repository):
        async with session.begin():
            assert await repository.delete(GodId.generate()) is False

    @pytest.mark.asyncio
    async def test_unknown_emblem_ids_are_not_hydrated_for_other_gods(
        self, session, repository, emblems
    ):
        """Associations belong to one god only."""
        thunderbolt, _ = emblems
        zeus = God.create(name="Zeus", type="god")
        zeus.add_emblem(thunderbolt.id)
        hera = God.create(name="Hera", type="goddess")
        async with session.begin():
            await repository.save(zeus)
            await repository.save(hera)

        async with session.begin():
            loaded = await repository.get_by_id(hera.id)

        assert loaded.emblem_ids == []
        assert EmblemId(value=thunderbolt.id.value) not in loaded.emblem_ids
