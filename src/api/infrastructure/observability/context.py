"""Observation context for domain-oriented observability.

Observation contexts collect and manage contextual metadata for instrumentation,
following the Domain Oriented Observability pattern.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Immutable context containing metadata for observability.

    Captures request-scoped metadata that should be included with all
    instrumentation events, so events emitted while serving one GraphQL
    request can be correlated.

    Attributes:
        request_id: Unique identifier for the current request/operation.
        operation: GraphQL operation name (if the client sent one).

    Example:
        context = ObservationContext(request_id="req-123").with_operation("AddRelative")
        probe = DefaultGodServiceProbe().with_context(context)
    """

    request_id: str | None = None
    operation: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for logging.

        Only includes non-None values to keep logs clean.
        """
        result: dict[str, Any] = {}
        if self.request_id is not None:
            result["request_id"] = self.request_id
        if self.operation is not None:
            result["operation"] = self.operation
        return result

    def with_operation(self, operation: str) -> ObservationContext:
        """Create a new context with the operation name set."""
        return ObservationContext(request_id=self.request_id, operation=operation)
