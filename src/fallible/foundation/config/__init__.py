"""Configuration management via pydantic-settings."""

from .settings import (
    FallibleSettings,
    PoolSettings,
    RetrySettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "FallibleSettings",
    "PoolSettings",
    "RetrySettings",
    "get_settings",
    "clear_settings_cache",
]
