"""Domain exceptions for the Pantheon bounded context.

These exceptions represent domain-level errors raised by repositories and
application services. The presentation layer translates them into
structured GraphQL errors.
"""


class NotFoundError(Exception):
    """Raised when a referenced id has no corresponding record.

    Attributes:
        entity: Kind of record that was looked up ("god", "abode", "emblem")
        entity_id: The id that did not resolve
    """

    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity.capitalize()} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class ValidationFailedError(ValueError):
    """Raised when a required argument is missing or malformed.

    Subclasses ValueError so aggregate validation errors (plain ValueError)
    and service validation errors are handled the same way.
    """

    pass


class ConcurrentModificationError(Exception):
    """Raised when a record changed between being read and being written.

    Indicates that another request updated the same god concurrently; the
    caller may re-read and retry.
    """

    def __init__(self, entity: str, entity_id: str):
        super().__init__(
            f"{entity.capitalize()} {entity_id} was modified concurrently"
        )
        self.entity = entity
        self.entity_id = entity_id
