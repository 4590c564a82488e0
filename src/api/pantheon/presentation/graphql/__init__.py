"""GraphQL API for gods, abodes and emblems."""

from pantheon.presentation.graphql.schema import get_graphql_router, schema

__all__ = ["get_graphql_router", "schema"]
