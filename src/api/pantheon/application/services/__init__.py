"""Application services for the Pantheon bounded context.

Application services orchestrate domain aggregates and repositories to
fulfill use cases. They are the "front door" to the Pantheon context.
"""

from pantheon.application.services.abode_service import AbodeService
from pantheon.application.services.emblem_service import EmblemService
from pantheon.application.services.god_service import GodService

__all__ = [
    "AbodeService",
    "EmblemService",
    "GodService",
]
