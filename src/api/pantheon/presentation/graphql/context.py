"""Per-request GraphQL context."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from strawberry.fastapi import BaseContext

from infrastructure.settings import Settings, get_settings
from pantheon.application.services import AbodeService, EmblemService, GodService
from pantheon.dependencies import (
    get_abode_service,
    get_emblem_service,
    get_god_service,
)


class PantheonContext(BaseContext):
    """Services available to resolvers for the duration of one request.

    All services share the request's unit of work.
    """

    def __init__(
        self,
        gods: GodService,
        abodes: AbodeService,
        emblems: EmblemService,
        settings: Settings,
    ):
        super().__init__()
        self.gods = gods
        self.abodes = abodes
        self.emblems = emblems
        self.settings = settings

    def clamp_depth(self, requested: int | None) -> int:
        """Resolve a requested relative depth against the configured limits."""
        if requested is None:
            return self.settings.default_relative_depth
        return max(0, min(requested, self.settings.max_relative_depth))


async def get_graphql_context(
    gods: Annotated[GodService, Depends(get_god_service)],
    abodes: Annotated[AbodeService, Depends(get_abode_service)],
    emblems: Annotated[EmblemService, Depends(get_emblem_service)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> PantheonContext:
    """Build the GraphQL context (FastAPI dependency)."""
    return PantheonContext(
        gods=gods,
        abodes=abodes,
        emblems=emblems,
        settings=settings,
    )
