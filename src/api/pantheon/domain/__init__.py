"""Domain layer for the Pantheon bounded context."""

from pantheon.domain.value_objects import (
    AbodeId,
    EdgeKind,
    EmblemId,
    GodId,
    GodType,
    RelationEdge,
    Relationship,
)

__all__ = [
    "AbodeId",
    "EdgeKind",
    "EmblemId",
    "GodId",
    "GodType",
    "RelationEdge",
    "Relationship",
]
