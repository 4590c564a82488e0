"""Translation of domain failures into GraphQL errors.

Every error reaching a client carries ``extensions.code``:

- NOT_FOUND: a referenced id does not resolve
- VALIDATION_FAILED: missing or malformed input
- CONFLICT: the record changed concurrently; re-read and retry
- STORAGE_ERROR: the store failed or timed out
- INTERNAL_ERROR: anything else (details are logged, not returned)
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator, TypeVar

import structlog
from graphql import GraphQLError
from sqlalchemy.exc import SQLAlchemyError

from infrastructure.database.exceptions import DatabaseError, StorageTimeoutError
from pantheon.domain.value_objects import AbodeId, EmblemId, GodId
from pantheon.ports.exceptions import (
    ConcurrentModificationError,
    NotFoundError,
    ValidationFailedError,
)

logger = structlog.get_logger()

IdT = TypeVar("IdT", GodId, AbodeId, EmblemId)


@contextmanager
def domain_errors() -> Iterator[None]:
    """Re-raise exceptions from the services as coded GraphQLErrors."""
    try:
        yield
    except GraphQLError:
        raise
    except NotFoundError as e:
        raise GraphQLError(
            str(e),
            extensions={"code": "NOT_FOUND", "entity": e.entity, "id": e.entity_id},
        ) from e
    except ValidationFailedError as e:
        raise GraphQLError(str(e), extensions={"code": "VALIDATION_FAILED"}) from e
    except ConcurrentModificationError as e:
        raise GraphQLError(
            str(e),
            extensions={"code": "CONFLICT", "entity": e.entity, "id": e.entity_id},
        ) from e
    except StorageTimeoutError as e:
        raise GraphQLError(
            "Storage did not respond in time",
            extensions={"code": "STORAGE_ERROR", "timeoutSeconds": e.timeout_seconds},
        ) from e
    except (DatabaseError, SQLAlchemyError) as e:
        logger.error("graphql_storage_error", error=str(e))
        raise GraphQLError("Storage error", extensions={"code": "STORAGE_ERROR"}) from e
    except Exception as e:
        logger.exception("graphql_unexpected_error")
        raise GraphQLError(
            "Internal server error", extensions={"code": "INTERNAL_ERROR"}
        ) from e


def parse_id(factory: Callable[[str], IdT], value: str) -> IdT:
    """Parse an id argument, reporting malformed ids as validation failures.

    Args:
        factory: ``GodId.from_string``, ``AbodeId.from_string`` or
            ``EmblemId.from_string``
        value: Raw argument value

    Raises:
        ValidationFailedError: If the value is not a valid ULID
    """
    try:
        return factory(value)
    except ValueError as e:
        raise ValidationFailedError(str(e)) from e
