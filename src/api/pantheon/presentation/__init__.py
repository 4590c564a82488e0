"""Presentation layer for the Pantheon bounded context."""
