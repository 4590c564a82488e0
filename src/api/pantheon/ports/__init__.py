"""Ports (interfaces) for the Pantheon bounded context."""
