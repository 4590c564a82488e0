"""Dependency injection for the Pantheon bounded context.

Composes the request session with repositories, probes and services.
FastAPI caches each dependency per request, so every service of one
request shares the same session and unit of work.
"""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
from ulid import ULID

from infrastructure.database.dependencies import get_session
from infrastructure.observability import ObservationContext
from infrastructure.settings import DatabaseSettings, get_database_settings
from pantheon.application.observability import (
    CatalogServiceProbe,
    DefaultCatalogServiceProbe,
    DefaultGodServiceProbe,
    GodServiceProbe,
)
from pantheon.application.services import AbodeService, EmblemService, GodService
from pantheon.application.unit_of_work import UnitOfWork
from pantheon.infrastructure.abode_repository import AbodeRepository
from pantheon.infrastructure.emblem_repository import EmblemRepository
from pantheon.infrastructure.god_repository import GodRepository
from pantheon.infrastructure.observability import (
    DefaultCatalogRepositoryProbe,
    DefaultGodRepositoryProbe,
    DefaultRelationRepositoryProbe,
)
from pantheon.infrastructure.relation_repository import RelationRepository


async def get_observation_context(request: Request) -> ObservationContext:
    """Get the observation context for the current request.

    Uses the client's X-Request-ID header when present so events can be
    correlated with upstream logs; otherwise generates one. The GraphQL
    operationName, when the client names its operation, is attached too.
    """
    request_id = request.headers.get("x-request-id") or str(ULID())
    context = ObservationContext(request_id=request_id)

    operation = await _graphql_operation_name(request)
    return context.with_operation(operation) if operation else context


async def _graphql_operation_name(request: Request) -> str | None:
    # GET carries the operation in the query string, POST in the JSON body.
    # Starlette caches the body, so the GraphQL view can still read it.
    if request.method == "GET":
        return request.query_params.get("operationName")
    if not request.headers.get("content-type", "").startswith("application/json"):
        return None
    try:
        payload = await request.json()
    except ValueError:
        # Malformed bodies are reported by the GraphQL view itself
        return None
    name = payload.get("operationName") if isinstance(payload, dict) else None
    return name if isinstance(name, str) else None


def get_unit_of_work(
    session: Annotated[AsyncSession, Depends(get_session)],
    settings: Annotated[DatabaseSettings, Depends(get_database_settings)],
) -> UnitOfWork:
    """Get the request's UnitOfWork.

    Args:
        session: Request-scoped async session
        settings: Database settings providing the storage timeout
    """
    return UnitOfWork(session, timeout_seconds=settings.statement_timeout_seconds)


def get_god_repository(
    uow: Annotated[UnitOfWork, Depends(get_unit_of_work)],
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> GodRepository:
    return GodRepository(
        session=uow.session,
        probe=DefaultGodRepositoryProbe().with_context(context),
    )


def get_relation_repository(
    uow: Annotated[UnitOfWork, Depends(get_unit_of_work)],
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> RelationRepository:
    return RelationRepository(
        session=uow.session,
        probe=DefaultRelationRepositoryProbe().with_context(context),
    )


def get_abode_repository(
    uow: Annotated[UnitOfWork, Depends(get_unit_of_work)],
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> AbodeRepository:
    return AbodeRepository(
        session=uow.session,
        probe=DefaultCatalogRepositoryProbe().with_context(context),
    )


def get_emblem_repository(
    uow: Annotated[UnitOfWork, Depends(get_unit_of_work)],
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> EmblemRepository:
    return EmblemRepository(
        session=uow.session,
        probe=DefaultCatalogRepositoryProbe().with_context(context),
    )


def get_god_service_probe(
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> GodServiceProbe:
    """Get GodServiceProbe bound to the request context."""
    return DefaultGodServiceProbe().with_context(context)


def get_abode_service_probe(
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> CatalogServiceProbe:
    """Get the abode service probe bound to the request context."""
    return DefaultCatalogServiceProbe("abode").with_context(context)


def get_emblem_service_probe(
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> CatalogServiceProbe:
    """Get the emblem service probe bound to the request context."""
    return DefaultCatalogServiceProbe("emblem").with_context(context)


def get_god_service(
    uow: Annotated[UnitOfWork, Depends(get_unit_of_work)],
    god_repo: Annotated[GodRepository, Depends(get_god_repository)],
    relation_repo: Annotated[RelationRepository, Depends(get_relation_repository)],
    abode_repo: Annotated[AbodeRepository, Depends(get_abode_repository)],
    emblem_repo: Annotated[EmblemRepository, Depends(get_emblem_repository)],
    probe: Annotated[GodServiceProbe, Depends(get_god_service_probe)],
) -> GodService:
    """Get GodService instance.

    Args:
        uow: Unit of work shared by every service of the request
        god_repo: God repository (shares session via FastAPI dependency caching)
        relation_repo: Relation edge repository
        abode_repo: Abode repository for resolving abode references
        emblem_repo: Emblem repository for resolving emblem references
        probe: God service probe for observability

    Returns:
        GodService instance
    """
    return GodService(
        uow=uow,
        god_repository=god_repo,
        relation_repository=relation_repo,
        abode_repository=abode_repo,
        emblem_repository=emblem_repo,
        probe=probe,
    )


def get_abode_service(
    uow: Annotated[UnitOfWork, Depends(get_unit_of_work)],
    abode_repo: Annotated[AbodeRepository, Depends(get_abode_repository)],
    probe: Annotated[CatalogServiceProbe, Depends(get_abode_service_probe)],
) -> AbodeService:
    """Get AbodeService instance."""
    return AbodeService(uow=uow, abode_repository=abode_repo, probe=probe)


def get_emblem_service(
    uow: Annotated[UnitOfWork, Depends(get_unit_of_work)],
    emblem_repo: Annotated[EmblemRepository, Depends(get_emblem_repository)],
    probe: Annotated[CatalogServiceProbe, Depends(get_emblem_service_probe)],
) -> EmblemService:
    """Get EmblemService instance."""
    return EmblemService(uow=uow, emblem_repository=emblem_repo, probe=probe)
