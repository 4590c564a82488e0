"""Application layer for the Pantheon bounded context."""
