"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from sqlalchemy import text

import pantheon.infrastructure.models  # noqa: F401  (registers tables)
from infrastructure.database.dependencies import (
    close_database_connections,
    get_engine,
)
from infrastructure.database.engines import create_schema
from infrastructure.logging import configure_logging
from infrastructure.observability import DefaultDatabaseProbe
from infrastructure.settings import get_database_settings, get_settings
from infrastructure.version import __version__
from pantheon.presentation.graphql import get_graphql_router

_probe = DefaultDatabaseProbe()


@asynccontextmanager
async def pantheon_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration
    - Table creation on the lazily created engine
    - Engine disposal on shutdown
    """
    configure_logging(
        debug=get_settings().debug,
        sql_echo=get_database_settings().echo,
    )

    table_count = await create_schema(get_engine())
    _probe.schema_created(table_count)

    yield

    await close_database_connections()


app = FastAPI(
    title=get_settings().app_name,
    description="Relationship graph of gods, their abodes and emblems",
    version=__version__,
    lifespan=pantheon_lifespan,
)

# Include Pantheon bounded context GraphQL endpoint
app.include_router(get_graphql_router(), prefix="/graphql")


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}


@app.get("/health/db")
async def health_db() -> dict:
    """Check database connection health.

    Runs ``SELECT 1`` on the engine and reports the outcome.
    """
    try:
        async with get_engine().connect() as conn:
            await conn.execute(text("SELECT 1"))

        return {"status": "ok", "connected": True}
    except Exception as e:
        _probe.health_check_failed(e)
        return {
            "status": "error",
            "connected": False,
            "error": str(e),
        }


def run() -> None:
    """Run the API with uvicorn (``pantheon-api`` console script)."""
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)
