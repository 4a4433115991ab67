"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - remote_base_url never ends with a slash (endpoints are joined as "/employees")

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - LEAVESYS_ prefix: settings do not collide with other services in the same env
    - remote_timeout_seconds=None: the core adds no timeout, httpx's default applies
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="LEAVESYS_", case_sensitive=False,
    )

    # RemoteStore
    remote_base_url: str = "http://localhost:3000"
    remote_timeout_seconds: float | None = None

    @field_validator("remote_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    # Sync
    refresh_epoch_fencing: bool = True
    upcoming_limit: int = 5

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
