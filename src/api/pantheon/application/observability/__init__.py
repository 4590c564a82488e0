"""Domain-Oriented Observability for the Pantheon application layer.

Probes for application service operations.
"""

from pantheon.application.observability.catalog_service_probe import (
    CatalogServiceProbe,
    DefaultCatalogServiceProbe,
)
from pantheon.application.observability.god_service_probe import (
    DefaultGodServiceProbe,
    GodServiceProbe,
)

__all__ = [
    "CatalogServiceProbe",
    "DefaultCatalogServiceProbe",
    "GodServiceProbe",
    "DefaultGodServiceProbe",
]
