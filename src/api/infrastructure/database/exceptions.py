"""Storage exceptions shared by all bounded contexts."""


class DatabaseError(Exception):
    """Base exception for database operations."""

    pass


class StorageTimeoutError(DatabaseError):
    """Raised when a unit of work exceeds the configured storage timeout."""

    def __init__(self, message: str, timeout_seconds: float | None = None):
        super().__init__(message)
        self.timeout_seconds = timeout_seconds
