"""God aggregate for the Pantheon context."""

from __future__ import annotations

from dataclasses import dataclass, field

from pantheon.domain.aggregates._validation import require_name
from pantheon.domain.value_objects import AbodeId, EmblemId, GodId, GodType


@dataclass
class God:
    """God aggregate holding a deity's own fields and associations.

    Family relations (parents, children, siblings) are not part of the
    aggregate: they are stored as relation edges and read through the
    relation repository, so both endpoints always agree.

    Business rules:
    - Domains are unique and kept in insertion order
    - Emblems are unique and kept in insertion order
    - At most one abode; assigning a new one replaces the old

    ``version`` is the optimistic concurrency counter of the persisted row
    (``None`` until first saved).
    """

    id: GodId
    name: str
    type: GodType
    description: str = ""
    domains: list[str] = field(default_factory=list)
    abode_id: AbodeId | None = None
    emblem_ids: list[EmblemId] = field(default_factory=list)
    version: int | None = None

    @classmethod
    def create(
        cls,
        name: str,
        type: GodType | str,
        description: str | None = None,
    ) -> God:
        """Factory method for creating a new god.

        The new god has no domains, emblems, abode, or relatives.

        Args:
            name: Display name
            type: "god" or "goddess" (case-insensitive)
            description: Free text, empty when omitted

        Raises:
            ValueError: If the name is blank or the type is unknown
        """
        return cls(
            id=GodId.generate(),
            name=require_name(name, "God"),
            type=_coerce_type(type),
            description=description or "",
        )

    def update(
        self,
        name: str | None = None,
        type: GodType | str | None = None,
        description: str | None = None,
    ) -> list[str]:
        """Apply a sparse update; ``None`` leaves a field untouched.

        Returns:
            Names of the fields that were supplied

        Raises:
            ValueError: If a supplied name is blank or type is unknown
        """
        changed: list[str] = []
        if name is not None:
            self.name = require_name(name, "God")
            changed.append("name")
        if type is not None:
            self.type = _coerce_type(type)
            changed.append("type")
        if description is not None:
            self.description = description
            changed.append("description")
        return changed

    def add_domain(self, domain: str) -> bool:
        """Add a domain if not already present.

        Returns:
            True if the domain was added, False if it was already there

        Raises:
            ValueError: If the domain is blank
        """
        normalized = domain.strip()
        if not normalized:
            raise ValueError("Domain must not be blank")
        if normalized in self.domains:
            return False
        self.domains.append(normalized)
        return True

    def remove_domain(self, domain: str) -> bool:
        """Remove a domain if present.

        Returns:
            True if the domain was removed, False if it was absent
        """
        normalized = domain.strip()
        if normalized not in self.domains:
            return False
        self.domains = [d for d in self.domains if d != normalized]
        return True

    def add_emblem(self, emblem_id: EmblemId) -> bool:
        """Associate an emblem if not already associated.

        Returns:
            True if the emblem was added, False if it was already there
        """
        if emblem_id in self.emblem_ids:
            return False
        self.emblem_ids.append(emblem_id)
        return True

    def remove_emblem(self, emblem_id: EmblemId) -> bool:
        """Drop an emblem association if present.

        Returns:
            True if the emblem was removed, False if it was absent
        """
        if emblem_id not in self.emblem_ids:
            return False
        self.emblem_ids = [e for e in self.emblem_ids if e != emblem_id]
        return True

    def move_to(self, abode_id: AbodeId) -> AbodeId | None:
        """Set the god's abode, replacing any previous one.

        Returns:
            The previous abode id, if any
        """
        previous = self.abode_id
        self.abode_id = abode_id
        return previous


def _coerce_type(value: GodType | str) -> GodType:
    if isinstance(value, GodType):
        return value
    return GodType.parse(value)
