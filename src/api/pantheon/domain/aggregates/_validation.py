"""Field validation shared by the Pantheon aggregates."""

MAX_NAME_LENGTH = 255


def require_name(name: str, entity: str) -> str:
    """Return the trimmed name, rejecting blank or oversized values.

    Raises:
        ValueError: If the name is blank or longer than 255 characters
    """
    trimmed = name.strip() if name is not None else ""
    if not trimmed:
        raise ValueError(f"{entity} name must not be blank")
    if len(trimmed) > MAX_NAME_LENGTH:
        raise ValueError(
            f"{entity} name must be at most {MAX_NAME_LENGTH} characters"
        )
    return trimmed
