"""Value objects for the Pantheon domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from ulid import ULID


@dataclass(frozen=True)
class GodId:
    """Identifier for a God aggregate.

    Uses ULID for sortability and distribution-friendly generation.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> GodId:
        """Generate a new GodId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> GodId:
        """Create GodId from string value.

        Args:
            value: ULID string

        Returns:
            GodId instance

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid GodId: {value}") from e

        return cls(value=value)


@dataclass(frozen=True)
class AbodeId:
    """Identifier for an Abode aggregate."""

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> AbodeId:
        """Generate a new AbodeId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> AbodeId:
        """Create AbodeId from string value.

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid AbodeId: {value}") from e

        return cls(value=value)


@dataclass(frozen=True)
class EmblemId:
    """Identifier for an Emblem aggregate."""

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> EmblemId:
        """Generate a new EmblemId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> EmblemId:
        """Create EmblemId from string value.

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid EmblemId: {value}") from e

        return cls(value=value)


class GodType(StrEnum):
    """Kind of deity."""

    GOD = "god"
    GODDESS = "goddess"

    @classmethod
    def parse(cls, value: str) -> GodType:
        """Parse a god type, ignoring case and surrounding whitespace.

        Raises:
            ValueError: If value is neither "god" nor "goddess"
        """
        normalized = value.strip().lower()
        try:
            return cls(normalized)
        except ValueError as e:
            allowed = ", ".join(t.value for t in cls)
            raise ValueError(
                f"Invalid god type '{value}'. Expected one of: {allowed}"
            ) from e


class Relationship(StrEnum):
    """Relation of a relative as seen from a God."""

    PARENT = "parent"
    CHILD = "child"
    SIBLING = "sibling"

    @classmethod
    def parse(cls, value: str) -> Relationship:
        """Parse a relationship name.

        Accepts the singular names and the plural relation-list names
        ("parents", "children", "siblings"), ignoring case.

        Raises:
            ValueError: If value names no known relationship
        """
        normalized = value.strip().lower()
        normalized = _PLURALS.get(normalized, normalized)
        try:
            return cls(normalized)
        except ValueError as e:
            allowed = ", ".join(r.value for r in cls)
            raise ValueError(
                f"Invalid relationship '{value}'. Expected one of: {allowed}"
            ) from e


_PLURALS = {
    "parents": "parent",
    "children": "child",
    "siblings": "sibling",
}


class EdgeKind(StrEnum):
    """Kind of a stored relation edge.

    Only two kinds are persisted: a child/parent pair is one ``PARENT`` edge
    and a sibling pair is one ``SIBLING`` edge. Children are the inverse view
    of parent edges.
    """

    PARENT = "parent"
    SIBLING = "sibling"


@dataclass(frozen=True)
class RelationEdge:
    """A single stored relation between two gods.

    For ``PARENT`` edges, ``relative_id`` is a parent of ``god_id``.
    ``SIBLING`` edges are undirected and kept in canonical order
    (smaller id first) so each pair has exactly one representation.
    """

    god_id: GodId
    relative_id: GodId
    kind: EdgeKind

    @classmethod
    def for_relationship(
        cls, god_id: GodId, relative_id: GodId, relationship: Relationship
    ) -> RelationEdge:
        """Build the stored edge for "relative_id is the <relationship> of god_id".

        Args:
            god_id: The God whose relation list is addressed
            relative_id: The relative being referenced
            relationship: Role of the relative from god_id's point of view

        Raises:
            ValueError: If god_id and relative_id are the same God
        """
        if god_id == relative_id:
            raise ValueError("A god cannot be its own relative")

        if relationship is Relationship.PARENT:
            return cls(god_id=god_id, relative_id=relative_id, kind=EdgeKind.PARENT)
        if relationship is Relationship.CHILD:
            return cls(god_id=relative_id, relative_id=god_id, kind=EdgeKind.PARENT)

        first, second = sorted((god_id, relative_id), key=lambda g: g.value)
        return cls(god_id=first, relative_id=second, kind=EdgeKind.SIBLING)

    def reversed(self) -> RelationEdge:
        """The edge with both endpoints swapped.

        For a parent edge this is the contradicting edge (child as parent of
        its own parent); sibling edges are returned unchanged.
        """
        if self.kind is EdgeKind.SIBLING:
            return self
        return RelationEdge(
            god_id=self.relative_id, relative_id=self.god_id, kind=self.kind
        )
