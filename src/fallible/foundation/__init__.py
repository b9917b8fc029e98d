"""Foundation layer: errors, configuration and small composable helpers."""

from .config import FallibleSettings, clear_settings_cache, get_settings
from .errors import (
    ConfigurationError,
    FallibleError,
    InvalidAccessError,
    PropagatedError,
    SubmissionError,
    matches_kind,
)
from .procedure import Procedure

__all__ = [
    # Errors
    "FallibleError", "ConfigurationError", "InvalidAccessError",
    "PropagatedError", "SubmissionError", "matches_kind",
    # Config
    "FallibleSettings", "get_settings", "clear_settings_cache",
    # Helpers
    "Procedure",
]
