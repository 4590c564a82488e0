"""Database infrastructure - shared storage primitives."""

from infrastructure.database.exceptions import (
    DatabaseError,
    StorageTimeoutError,
)

__all__ = [
    "DatabaseError",
    "StorageTimeoutError",
]
