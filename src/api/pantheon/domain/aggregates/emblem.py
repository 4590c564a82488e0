"""Emblem aggregate for the Pantheon context."""

from __future__ import annotations

from dataclasses import dataclass

from pantheon.domain.aggregates._validation import require_name
from pantheon.domain.value_objects import EmblemId


@dataclass
class Emblem:
    """A symbol associated with gods (thunderbolt, peacock, trident...)."""

    id: EmblemId
    name: str

    @classmethod
    def create(cls, name: str) -> Emblem:
        """Factory method for creating a new emblem with a generated id.

        Raises:
            ValueError: If the name is blank
        """
        return cls(id=EmblemId.generate(), name=require_name(name, "Emblem"))

    def rename(self, new_name: str) -> None:
        """Rename the emblem.

        Raises:
            ValueError: If the name is blank
        """
        self.name = require_name(new_name, "Emblem")
