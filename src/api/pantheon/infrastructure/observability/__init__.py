"""Domain probes for Pantheon repositories."""

from pantheon.infrastructure.observability.repository_probe import (
    CatalogRepositoryProbe,
    DefaultCatalogRepositoryProbe,
    DefaultGodRepositoryProbe,
    DefaultRelationRepositoryProbe,
    GodRepositoryProbe,
    RelationRepositoryProbe,
)

__all__ = [
    "CatalogRepositoryProbe",
    "DefaultCatalogRepositoryProbe",
    "DefaultGodRepositoryProbe",
    "DefaultRelationRepositoryProbe",
    "GodRepositoryProbe",
    "RelationRepositoryProbe",
]
