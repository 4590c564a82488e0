"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import make_url


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        PANTHEON_DB_URL: SQLAlchemy async URL (default: sqlite+aiosqlite:///./pantheon.db)
        PANTHEON_DB_POOL_SIZE: Connections kept in the pool (default: 5)
        PANTHEON_DB_ECHO: Log every SQL statement (default: false)
        PANTHEON_DB_STATEMENT_TIMEOUT_SECONDS: Per-call storage timeout (default: 5.0)
    """

    model_config = SettingsConfigDict(
        env_prefix="PANTHEON_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    url: str = Field(
        default="sqlite+aiosqlite:///./pantheon.db",
        description="SQLAlchemy async database URL",
    )
    pool_size: int = Field(
        default=5,
        description="Connections kept in the pool",
        ge=1,
        le=100,
    )
    echo: bool = Field(default=False, description="Log SQL statements")
    statement_timeout_seconds: float = Field(
        default=5.0,
        description="Upper bound for a single unit of work against the store",
        gt=0,
    )

    @property
    def is_sqlite(self) -> bool:
        """Whether the configured backend is SQLite."""
        return make_url(self.url).get_backend_name() == "sqlite"

    @property
    def connection_string(self) -> str:
        """Render the URL with the password masked (for logging)."""
        return make_url(self.url).render_as_string(hide_password=True)


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections.

    Environment variables:
        PANTHEON_APP_NAME: Application name
        PANTHEON_DEBUG: Debug mode
        PANTHEON_HOST: Interface the server binds to (default: 0.0.0.0)
        PANTHEON_PORT: Port the server listens on (default: 8000)
        PANTHEON_MAX_RELATIVE_DEPTH: Hard cap on nested relative expansion
        PANTHEON_DEFAULT_RELATIVE_DEPTH: Expansion depth when a query does not ask
    """

    model_config = SettingsConfigDict(
        env_prefix="PANTHEON_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="Pantheon API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    # Server binding used by the pantheon-api entry point
    host: str = Field(default="0.0.0.0", description="Interface to bind")
    port: int = Field(default=8000, description="Port to listen on", ge=1, le=65535)

    max_relative_depth: int = Field(
        default=3,
        description="Maximum levels of parents/children/siblings expansion",
        ge=1,
        le=10,
    )
    default_relative_depth: int = Field(
        default=1,
        description="Levels of relative expansion when not requested explicitly",
        ge=1,
    )

    @model_validator(mode="after")
    def validate_relative_depth(self) -> "Settings":
        """Validate default depth <= max depth."""
        if self.default_relative_depth > self.max_relative_depth:
            raise ValueError(
                f"default_relative_depth ({self.default_relative_depth}) must be <= "
                f"max_relative_depth ({self.max_relative_depth})"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()
