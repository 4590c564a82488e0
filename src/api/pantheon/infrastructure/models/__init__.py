"""SQLAlchemy ORM models for the Pantheon bounded context.

These models map to database tables and are used by repository implementations.
Importing this package registers every table on ``Base.metadata``.
"""

from pantheon.infrastructure.models.abode import AbodeModel
from pantheon.infrastructure.models.emblem import EmblemModel
from pantheon.infrastructure.models.god import GodEmblemModel, GodModel
from pantheon.infrastructure.models.relation import GodRelationModel

__all__ = [
    "AbodeModel",
    "EmblemModel",
    "GodEmblemModel",
    "GodModel",
    "GodRelationModel",
]
