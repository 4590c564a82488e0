"""Infrastructure layer for the Pantheon bounded context."""
