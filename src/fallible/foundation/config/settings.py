"""Environment-based configuration using pydantic-settings.

Example:
    >>> from fallible.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.pool.thread_name_prefix
    'fallible-runner'
    >>> settings.retry.honor_delay
    False

    # Or with environment variables:
    # FALLIBLE_POOL_MAX_WORKERS=16
    # FALLIBLE_RETRY_HONOR_DELAY=true
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, PositiveInt
from pydantic_settings import BaseSettings, SettingsConfigDict


class PoolSettings(BaseSettings):
    """Shared worker pool configuration."""

    model_config = SettingsConfigDict(
        env_prefix="FALLIBLE_POOL_",
        extra="ignore",
    )

    thread_name_prefix: str = Field(default="fallible-runner", min_length=1)
    max_workers: PositiveInt | None = Field(
        default=None,
        description="Worker cap; None leaves sizing to ThreadPoolExecutor",
    )


class RetrySettings(BaseSettings):
    """Retry loop behavior shared by all runners."""

    model_config = SettingsConfigDict(
        env_prefix="FALLIBLE_RETRY_",
        extra="ignore",
    )

    honor_delay: bool = Field(
        default=False,
        description="Actually sleep for the configured retry delay",
    )


class FallibleSettings(BaseSettings):
    """Root settings, loaded from FALLIBLE_* environment variables and .env."""

    model_config = SettingsConfigDict(
        env_prefix="FALLIBLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    pool: PoolSettings = Field(default_factory=PoolSettings)
    retry: RetrySettings = Field(default_factory=RetrySettings)


@lru_cache(maxsize=1)
def get_settings() -> FallibleSettings:
    """Get the global settings instance (cached)."""
    return FallibleSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache so the next get_settings() re-reads the environment."""
    get_settings.cache_clear()
