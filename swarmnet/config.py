"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All settings come from environment variables or .env (never hardcoded secrets)
    - get_settings() is cached (lru_cache) — single instance per process
    - task_policy() is derived from settings, so core rules never read the environment

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all settings: works out-of-the-box with docker-compose
    - Task guards on by default; permissionless mode leaves every transition open
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from swarmnet.core.domain_types import Identity
from swarmnet.core.task_lifecycle import TaskPolicy


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://swarm:swarm@db:5432/swarmnet"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Token
    token_decimals: int = Field(9, ge=0, le=255)

    # Task lifecycle
    enforce_task_guards: bool = True
    dispatcher_identities: list[str] = []

    # API
    cors_origins: list[str] = ["http://localhost:3000"]
    max_page_size: int = 100

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    def task_policy(self) -> TaskPolicy:
        return TaskPolicy(
            enforce_guards=self.enforce_task_guards,
            dispatchers=frozenset(Identity(d) for d in self.dispatcher_identities),
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
