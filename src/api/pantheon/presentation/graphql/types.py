"""GraphQL object types for gods, abodes and emblems.

Nested fields (abode, emblems, parents, children, siblings) are resolved
lazily through the services at query time. Each God node remembers how many
more levels of relatives it may expand; asking for relatives past that
point is rejected instead of walking the graph without bound. Relative
fields are nullable so a rejected expansion nulls only that field and
leaves the rest of the result intact.
"""

from typing import List, Optional

import strawberry
from graphql import GraphQLError
from strawberry.types import Info

from pantheon.domain.aggregates import Abode, Emblem, God
from pantheon.domain.value_objects import GodId, Relationship
from pantheon.presentation.graphql.context import PantheonContext
from pantheon.presentation.graphql.errors import domain_errors


@strawberry.type(name="Abode")
class AbodeNode:
    id: strawberry.ID
    name: str
    coordinates: str

    @classmethod
    def from_domain(cls, abode: Abode) -> "AbodeNode":
        return cls(
            id=strawberry.ID(abode.id.value),
            name=abode.name,
            coordinates=abode.coordinates,
        )


@strawberry.type(name="Emblem")
class EmblemNode:
    id: strawberry.ID
    name: str

    @classmethod
    def from_domain(cls, emblem: Emblem) -> "EmblemNode":
        return cls(id=strawberry.ID(emblem.id.value), name=emblem.name)


@strawberry.type(name="God")
class GodNode:
    """A god with lazily resolved associations and relatives."""

    id: strawberry.ID
    name: str
    type: str
    description: str
    domains: List[str]
    relative_depth: strawberry.Private[int]

    @classmethod
    def from_domain(cls, god: God, relative_depth: int) -> "GodNode":
        """Project a God aggregate.

        Args:
            god: The aggregate to project
            relative_depth: Levels of parents/children/siblings this node may
                still expand
        """
        return cls(
            id=strawberry.ID(god.id.value),
            name=god.name,
            type=god.type.value,
            description=god.description,
            domains=list(god.domains),
            relative_depth=relative_depth,
        )

    @strawberry.field
    async def abode(self, info: Info[PantheonContext, None]) -> Optional[AbodeNode]:
        with domain_errors():
            abode = await info.context.gods.get_abode(GodId(value=self.id))
        return AbodeNode.from_domain(abode) if abode else None

    @strawberry.field
    async def emblems(self, info: Info[PantheonContext, None]) -> List[EmblemNode]:
        with domain_errors():
            emblems = await info.context.gods.get_emblems(GodId(value=self.id))
        return [EmblemNode.from_domain(e) for e in emblems]

    @strawberry.field
    async def parents(
        self, info: Info[PantheonContext, None]
    ) -> Optional[List["GodNode"]]:
        return await self._relatives(info, Relationship.PARENT)

    @strawberry.field
    async def children(
        self, info: Info[PantheonContext, None]
    ) -> Optional[List["GodNode"]]:
        return await self._relatives(info, Relationship.CHILD)

    @strawberry.field
    async def siblings(
        self, info: Info[PantheonContext, None]
    ) -> Optional[List["GodNode"]]:
        return await self._relatives(info, Relationship.SIBLING)

    async def _relatives(
        self, info: Info[PantheonContext, None], relationship: Relationship
    ) -> List["GodNode"]:
        if self.relative_depth <= 0:
            limit = info.context.settings.max_relative_depth
            raise GraphQLError(
                "Relative depth exceeded; request a larger relativeDepth "
                f"(at most {limit}) on the root query",
                extensions={"code": "VALIDATION_FAILED"},
            )

        with domain_errors():
            gods = await info.context.gods.get_relatives(
                GodId(value=self.id), relationship
            )
        return [GodNode.from_domain(g, self.relative_depth - 1) for g in gods]
