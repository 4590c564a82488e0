"""Abode aggregate for the Pantheon context."""

from __future__ import annotations

from dataclasses import dataclass

from pantheon.domain.aggregates._validation import require_name
from pantheon.domain.value_objects import AbodeId


@dataclass
class Abode:
    """A place where gods dwell.

    Coordinates are free-form text (e.g. "40.08,22.35" or "above the clouds").
    """

    id: AbodeId
    name: str
    coordinates: str = ""

    @classmethod
    def create(cls, name: str, coordinates: str | None = None) -> Abode:
        """Factory method for creating a new abode with a generated id.

        Raises:
            ValueError: If the name is blank
        """
        return cls(
            id=AbodeId.generate(),
            name=require_name(name, "Abode"),
            coordinates=(coordinates or "").strip(),
        )

    def update(self, name: str | None = None, coordinates: str | None = None) -> None:
        """Apply a sparse update; ``None`` leaves a field untouched.

        Raises:
            ValueError: If a supplied name is blank
        """
        if name is not None:
            self.name = require_name(name, "Abode")
        if coordinates is not None:
            self.coordinates = coordinates.strip()
