"""Domain aggregates for the Pantheon context.

Aggregates are the core business objects containing state and business logic.
They enforce invariants and business rules without depending on infrastructure.
"""

from pantheon.domain.aggregates.abode import Abode
from pantheon.domain.aggregates.emblem import Emblem
from pantheon.domain.aggregates.god import God

__all__ = [
    "Abode",
    "Emblem",
    "God",
]
