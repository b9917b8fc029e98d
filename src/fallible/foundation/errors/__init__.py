"""Error taxonomy for fallible.

- FallibleError: base class of all package exceptions
- ConfigurationError: invalid retry configuration, raised before any attempt
- InvalidAccessError: wrong accessor used on a Result
- PropagatedError/SubmissionError: failures carried across the worker pool
- matches_kind: is-a relation for retry and dispatch matching
"""

from .errors import (
    ConfigurationError,
    FallibleError,
    InvalidAccessError,
    PropagatedError,
    SubmissionError,
    matches_kind,
)

__all__ = [
    "FallibleError",
    "ConfigurationError",
    "InvalidAccessError",
    "PropagatedError",
    "SubmissionError",
    "matches_kind",
]
