"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Everything configurable comes from environment variables or .env (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults work out-of-the-box: SQLite file next to the process, local env
    - log_level/log_format default to None: the env profile decides unless overridden
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Environment: local | dev | prod (unknown → prod)
    env: str = "local"

    # Database
    database_url: str = "sqlite+aiosqlite:///./forms.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres URLs come as postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_auto_create: bool = True

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 8082
    http_idle_timeout_seconds: int = 60
    shutdown_timeout_seconds: int = 10
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability (None → derived from env)
    log_level: str | None = None
    log_format: str | None = None


@lru_cache
def get_settings() -> Settings:
    return Settings()
