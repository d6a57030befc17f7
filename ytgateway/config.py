"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache), single instance per process
    - A zero timeout or zero output cap disables that limit

Design Decisions:
    - Defaults provided for every setting: works out-of-the-box with yt-dlp on PATH
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Extractor
    extractor_binary: str = "yt-dlp"
    extractor_timeout_seconds: float = Field(120.0, ge=0)
    extractor_max_output_bytes: int = Field(32 * 1024 * 1024, ge=0)
    search_provider: str = "ytsearch"

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def timeout_or_none(self) -> float | None:
        return self.extractor_timeout_seconds or None

    @property
    def output_cap_or_none(self) -> int | None:
        return self.extractor_max_output_bytes or None


@lru_cache
def get_settings() -> Settings:
    return Settings()
