"""Input validation helpers shared by the Pantheon services."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from pantheon.ports.exceptions import ValidationFailedError


@contextmanager
def validated_input() -> Iterator[None]:
    """Re-raise ValueErrors from aggregates as ValidationFailedError."""
    try:
        yield
    except ValidationFailedError:
        raise
    except ValueError as e:
        raise ValidationFailedError(str(e)) from e
