"""
Configuration management for the Watchman organizer.

Uses pydantic-settings to load configuration from environment variables
and .env files.
"""

import os
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Logging
    log_level: str = "INFO"

    # Worker Configuration
    worker_count: Optional[int] = Field(default=None, ge=1)
    hash_chunk_size: int = Field(default=8192, ge=1)  # bytes per read

    # Watch Configuration
    watch_debounce_seconds: float = Field(default=0.5, ge=0)
    watch_poll_interval: float = Field(default=1.0, gt=0)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    def get_worker_count(self) -> int:
        """Resolve the hashing pool size, defaulting to the CPU count."""
        if self.worker_count is not None:
            return self.worker_count
        return os.cpu_count() or 1


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
