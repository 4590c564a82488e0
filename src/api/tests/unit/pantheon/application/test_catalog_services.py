"""Unit tests for AbodeService and EmblemService."""

from unittest.mock import AsyncMock, MagicMock, create_autospec

import pytest

from pantheon.application.observability import (
    CatalogServiceProbe,
    DefaultCatalogServiceProbe,
)
from pantheon.application.services import AbodeService, EmblemService
from pantheon.application.unit_of_work import UnitOfWork
from pantheon.domain.aggregates import Abode, Emblem
from pantheon.domain.value_objects import AbodeId, EmblemId
from pantheon.ports.exceptions import NotFoundError, ValidationFailedError
from pantheon.ports.repositories import IAbodeRepository, IEmblemRepository


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
def uow(mock_session):
    return UnitOfWork(mock_session, timeout_seconds=5)


@pytest.fixture
def mock_probe():
    """Create mock catalog service probe."""
    return create_autospec(CatalogServiceProbe, instance=True)


@pytest.fixture
def abode_repository():
    return create_autospec(IAbodeRepository, instance=True)


@pytest.fixture
def emblem_repository():
    return create_autospec(IEmblemRepository, instance=True)


@pytest.fixture
def abode_service(uow, abode_repository, mock_probe):
    return AbodeService(uow=uow, abode_repository=abode_repository, probe=mock_probe)


@pytest.fixture
def emblem_service(uow, emblem_repository, mock_probe):
    return EmblemService(
        uow=uow, emblem_repository=emblem_repository, probe=mock_probe
    )


class TestAbodeService:
    """Tests for AbodeService."""

    def test_default_probe_is_scoped_to_abodes(self, uow, abode_repository):
        service = AbodeService(uow=uow, abode_repository=abode_repository)

        assert isinstance(service._probe, DefaultCatalogServiceProbe)

    @pytest.mark.asyncio
    async def test_create_abode(self, abode_service, abode_repository, mock_probe):
        abode = await abode_service.create_abode(name="Olympus", coordinates=" 0,0 ")

        assert abode.coordinates == "0,0"
        abode_repository.save.assert_awaited_once_with(abode)
        mock_probe.created.assert_called_once_with(abode.id.value, "Olympus")

    @pytest.mark.asyncio
    async def test_create_blank_name_fails_validation(
        self, abode_service, abode_repository
    ):
        with pytest.raises(ValidationFailedError):
            await abode_service.create_abode(name="")

        abode_repository.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_keeps_unsupplied_fields(
        self, abode_service, abode_repository
    ):
        olympus = Abode.create(name="Olympus", coordinates="0,0")
        abode_repository.get_by_id.return_value = olympus

        result = await abode_service.update_abode(olympus.id, name="Mount Olympus")

        assert result.name == "Mount Olympus"
        assert result.coordinates == "0,0"
        abode_repository.save.assert_awaited_once_with(olympus)

    @pytest.mark.asyncio
    async def test_update_missing_raises_not_found(
        self, abode_service, abode_repository, mock_probe
    ):
        abode_repository.get_by_id.return_value = None
        missing = AbodeId.generate()

        with pytest.raises(NotFoundError):
            await abode_service.update_abode(missing, name="Olympus")

        mock_probe.operation_failed.assert_called_once()

    @pytest.mark.asyncio
    async def test_delete_reports_detached_gods(
        self, abode_service, abode_repository, mock_probe
    ):
        olympus = Abode.create(name="Olympus")
        abode_repository.get_by_id.return_value = olympus
        abode_repository.delete.return_value = 12

        result = await abode_service.delete_abode(olympus.id)

        assert result is olympus
        mock_probe.deleted.assert_called_once_with(
            olympus.id.value, references_cleared=12
        )

    @pytest.mark.asyncio
    async def test_delete_missing_raises_not_found(
        self, abode_service, abode_repository
    ):
        abode_repository.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await abode_service.delete_abode(AbodeId.generate())

        abode_repository.delete.assert_not_called()


class TestEmblemService:
    """Tests for EmblemService."""

    @pytest.mark.asyncio
    async def test_create_emblem(self, emblem_service, emblem_repository, mock_probe):
        emblem = await emblem_service.create_emblem("Trident")

        emblem_repository.save.assert_awaited_once_with(emblem)
        mock_probe.created.assert_called_once_with(emblem.id.value, "Trident")

    @pytest.mark.asyncio
    async def test_rename_emblem(self, emblem_service, emblem_repository):
        trident = Emblem.create("Trident")
        emblem_repository.get_by_id.return_value = trident

        result = await emblem_service.update_emblem(trident.id, name="Golden Trident")

        assert result.name == "Golden Trident"
        emblem_repository.save.assert_awaited_once_with(trident)

    @pytest.mark.asyncio
    async def test_delete_missing_raises_not_found(
        self, emblem_service, emblem_repository, mock_probe
    ):
        emblem_repository.get_by_id.return_value = None
        missing = EmblemId.generate()

        with pytest.raises(NotFoundError) as exc_info:
            await emblem_service.delete_emblem(missing)

        assert exc_info.value.entity == "emblem"
        mock_probe.operation_failed.assert_called_once()
