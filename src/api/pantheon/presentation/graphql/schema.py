"""GraphQL schema for the Pantheon API.

Usage:
    query {
        god(id: "01J...", relativeDepth: 2) {
            name
            abode { name }
            parents { name children { name } }
        }
    }

    mutation {
        addGodRelative(godId: "01J...", relativeId: "01J...", relationship: "parent") {
            name
            parents { name }
        }
    }
"""

from typing import List, Optional

import strawberry
from strawberry.fastapi import GraphQLRouter
from strawberry.types import Info

from pantheon.domain.aggregates import God
from pantheon.domain.value_objects import AbodeId, EmblemId, GodId
from pantheon.presentation.graphql.context import PantheonContext, get_graphql_context
from pantheon.presentation.graphql.errors import domain_errors, parse_id
from pantheon.presentation.graphql.types import AbodeNode, EmblemNode, GodNode

Ctx = Info[PantheonContext, None]


# =============================================================================
# QUERIES
# =============================================================================


@strawberry.type
class Query:
    @strawberry.field(description="All gods, oldest first")
    async def gods(
        self, info: Ctx, relative_depth: Optional[int] = None
    ) -> List[GodNode]:
        depth = info.context.clamp_depth(relative_depth)
        with domain_errors():
            gods = await info.context.gods.list_gods()
        return [GodNode.from_domain(g, depth) for g in gods]

    @strawberry.field(description="A god by id, or null if it does not exist")
    async def god(
        self, info: Ctx, id: strawberry.ID, relative_depth: Optional[int] = None
    ) -> Optional[GodNode]:
        depth = info.context.clamp_depth(relative_depth)
        with domain_errors():
            god = await info.context.gods.get_god(parse_id(GodId.from_string, id))
        return GodNode.from_domain(god, depth) if god else None

    @strawberry.field
    async def abodes(self, info: Ctx) -> List[AbodeNode]:
        with domain_errors():
            abodes = await info.context.abodes.list_abodes()
        return [AbodeNode.from_domain(a) for a in abodes]

    @strawberry.field
    async def abode(self, info: Ctx, id: strawberry.ID) -> Optional[AbodeNode]:
        with domain_errors():
            abode = await info.context.abodes.get_abode(
                parse_id(AbodeId.from_string, id)
            )
        return AbodeNode.from_domain(abode) if abode else None

    @strawberry.field
    async def emblems(self, info: Ctx) -> List[EmblemNode]:
        with domain_errors():
            emblems = await info.context.emblems.list_emblems()
        return [EmblemNode.from_domain(e) for e in emblems]

    @strawberry.field
    async def emblem(self, info: Ctx, id: strawberry.ID) -> Optional[EmblemNode]:
        with domain_errors():
            emblem = await info.context.emblems.get_emblem(
                parse_id(EmblemId.from_string, id)
            )
        return EmblemNode.from_domain(emblem) if emblem else None


# =============================================================================
# MUTATIONS
# =============================================================================


def _god_node(info: Ctx, god: God, relative_depth: Optional[int]) -> GodNode:
    return GodNode.from_domain(god, info.context.clamp_depth(relative_depth))


@strawberry.type
class Mutation:
    # --- gods ---------------------------------------------------------------

    @strawberry.mutation
    async def new_god(
        self,
        info: Ctx,
        name: str,
        type: str,
        description: Optional[str] = None,
        relative_depth: Optional[int] = None,
    ) -> GodNode:
        with domain_errors():
            god = await info.context.gods.create_god(
                name=name, type=type, description=description
            )
        return _god_node(info, god, relative_depth)

    @strawberry.mutation(description="Update only the fields that are supplied")
    async def update_god(
        self,
        info: Ctx,
        id: strawberry.ID,
        name: Optional[str] = None,
        type: Optional[str] = None,
        description: Optional[str] = None,
        relative_depth: Optional[int] = None,
    ) -> GodNode:
        with domain_errors():
            god = await info.context.gods.update_god(
                parse_id(GodId.from_string, id),
                name=name,
                type=type,
                description=description,
            )
        return _god_node(info, god, relative_depth)

    @strawberry.mutation(description="Delete a god and every relation touching it")
    async def delete_god(
        self, info: Ctx, id: strawberry.ID, relative_depth: Optional[int] = None
    ) -> GodNode:
        with domain_errors():
            god = await info.context.gods.delete_god(parse_id(GodId.from_string, id))
        return _god_node(info, god, relative_depth)

    @strawberry.mutation(
        description="Make relativeId the parent, child or sibling of godId"
    )
    async def add_god_relative(
        self,
        info: Ctx,
        god_id: strawberry.ID,
        relative_id: strawberry.ID,
        relationship: str,
        relative_depth: Optional[int] = None,
    ) -> GodNode:
        with domain_errors():
            god = await info.context.gods.add_relative(
                parse_id(GodId.from_string, god_id),
                parse_id(GodId.from_string, relative_id),
                relationship,
            )
        return _god_node(info, god, relative_depth)

    @strawberry.mutation
    async def remove_god_relative(
        self,
        info: Ctx,
        god_id: strawberry.ID,
        relative_id: strawberry.ID,
        relationship: str,
        relative_depth: Optional[int] = None,
    ) -> GodNode:
        with domain_errors():
            god = await info.context.gods.remove_relative(
                parse_id(GodId.from_string, god_id),
                parse_id(GodId.from_string, relative_id),
                relationship,
            )
        return _god_node(info, god, relative_depth)

    @strawberry.mutation
    async def add_god_emblem(
        self,
        info: Ctx,
        god_id: strawberry.ID,
        emblem_id: strawberry.ID,
        relative_depth: Optional[int] = None,
    ) -> GodNode:
        with domain_errors():
            god = await info.context.gods.add_emblem(
                parse_id(GodId.from_string, god_id),
                parse_id(EmblemId.from_string, emblem_id),
            )
        return _god_node(info, god, relative_depth)

    @strawberry.mutation
    async def remove_god_emblem(
        self,
        info: Ctx,
        god_id: strawberry.ID,
        emblem_id: strawberry.ID,
        relative_depth: Optional[int] = None,
    ) -> GodNode:
        with domain_errors():
            god = await info.context.gods.remove_emblem(
                parse_id(GodId.from_string, god_id),
                parse_id(EmblemId.from_string, emblem_id),
            )
        return _god_node(info, god, relative_depth)

    @strawberry.mutation
    async def update_god_abode(
        self,
        info: Ctx,
        god_id: strawberry.ID,
        abode_id: strawberry.ID,
        relative_depth: Optional[int] = None,
    ) -> GodNode:
        with domain_errors():
            god = await info.context.gods.update_abode(
                parse_id(GodId.from_string, god_id),
                parse_id(AbodeId.from_string, abode_id),
            )
        return _god_node(info, god, relative_depth)

    @strawberry.mutation
    async def add_god_domain(
        self,
        info: Ctx,
        god_id: strawberry.ID,
        domain: str,
        relative_depth: Optional[int] = None,
    ) -> GodNode:
        with domain_errors():
            god = await info.context.gods.add_domain(
                parse_id(GodId.from_string, god_id), domain
            )
        return _god_node(info, god, relative_depth)

    @strawberry.mutation
    async def remove_god_domain(
        self,
        info: Ctx,
        god_id: strawberry.ID,
        domain: str,
        relative_depth: Optional[int] = None,
    ) -> GodNode:
        with domain_errors():
            god = await info.context.gods.remove_domain(
                parse_id(GodId.from_string, god_id), domain
            )
        return _god_node(info, god, relative_depth)

    # --- abodes -------------------------------------------------------------

    @strawberry.mutation
    async def new_abode(
        self, info: Ctx, name: str, coordinates: Optional[str] = None
    ) -> AbodeNode:
        with domain_errors():
            abode = await info.context.abodes.create_abode(
                name=name, coordinates=coordinates
            )
        return AbodeNode.from_domain(abode)

    @strawberry.mutation(description="Delete an abode; its gods keep no abode")
    async def delete_abode(self, info: Ctx, id: strawberry.ID) -> AbodeNode:
        with domain_errors():
            abode = await info.context.abodes.delete_abode(
                parse_id(AbodeId.from_string, id)
            )
        return AbodeNode.from_domain(abode)

    @strawberry.mutation
    async def update_abode(
        self,
        info: Ctx,
        id: strawberry.ID,
        name: Optional[str] = None,
        coordinates: Optional[str] = None,
    ) -> AbodeNode:
        with domain_errors():
            abode = await info.context.abodes.update_abode(
                parse_id(AbodeId.from_string, id),
                name=name,
                coordinates=coordinates,
            )
        return AbodeNode.from_domain(abode)

    # --- emblems ------------------------------------------------------------

    @strawberry.mutation
    async def new_emblem(self, info: Ctx, name: str) -> EmblemNode:
        with domain_errors():
            emblem = await info.context.emblems.create_emblem(name=name)
        return EmblemNode.from_domain(emblem)

    @strawberry.mutation(description="Delete an emblem and drop it from every god")
    async def delete_emblem(self, info: Ctx, id: strawberry.ID) -> EmblemNode:
        with domain_errors():
            emblem = await info.context.emblems.delete_emblem(
                parse_id(EmblemId.from_string, id)
            )
        return EmblemNode.from_domain(emblem)

    @strawberry.mutation
    async def update_emblem(
        self, info: Ctx, id: strawberry.ID, name: Optional[str] = None
    ) -> EmblemNode:
        with domain_errors():
            emblem = await info.context.emblems.update_emblem(
                parse_id(EmblemId.from_string, id), name=name
            )
        return EmblemNode.from_domain(emblem)


schema = strawberry.Schema(query=Query, mutation=Mutation)


def get_graphql_router() -> GraphQLRouter:
    """Get the GraphQL router to mount in FastAPI."""
    return GraphQLRouter(schema, context_getter=get_graphql_context)
