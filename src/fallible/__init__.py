"""fallible - retry-governed execution with Result-valued outcomes.

Runs a zero-argument operation under a declarative retry policy and reports
the outcome as a Success or Failure value instead of raising. Lifecycle
hooks observe each stage, and the returned Result composes with map,
flat_map, on_error and run.

Quick Start:
    >>> from fallible import Runner, TimeUnit
    >>>
    >>> result = (
    ...     Runner[dict]()
    ...     .retry_on(ConnectionError, TimeoutError)
    ...     .with_retries(3)
    ...     .with_retry_delay(200, TimeUnit.MILLISECONDS)
    ...     .on_failure(lambda err: print(f"giving up: {err}"))
    ...     .run(lambda: {"status": "ok"})
    ... )
    >>> result.is_success()
    True

Recovering by exception class (first matching entry wins):
    >>> from fallible import Failure, Success
    >>> Failure(KeyError("id")).on_error(
    ...     {LookupError: lambda e: Success("missing")},
    ...     lambda e: Success("unknown"),
    ... ).value
    'missing'

Background execution on the shared worker pool:
    >>> Runner[int]().run_in_pool(lambda: 42).value
    42
"""

from __future__ import annotations

__version__ = "0.1.0"

# Errors
from .foundation.errors import (
    ConfigurationError,
    FallibleError,
    InvalidAccessError,
    PropagatedError,
    SubmissionError,
    matches_kind,
)

# Settings
from .foundation.config import FallibleSettings, clear_settings_cache, get_settings

# Helpers
from .foundation.procedure import Procedure

# Result algebra
from .monads import Failure, Result, Success

# Runner and collaborators
from .runtime import (
    ComparisonOperator,
    Hooks,
    RetryPolicy,
    Runner,
    TimeUnit,
    WorkerPool,
    always_false,
    always_true,
    get_worker_pool,
    numeric,
    retry_on,
    submit_and_wait,
)

__all__ = [
    # Version
    "__version__",
    # Runner
    "Runner",
    "Hooks",
    # Result
    "Result",
    "Success",
    "Failure",
    # Retry
    "RetryPolicy",
    "TimeUnit",
    "ComparisonOperator",
    "retry_on",
    "always_true",
    "always_false",
    "numeric",
    # Concurrency
    "WorkerPool",
    "get_worker_pool",
    "submit_and_wait",
    # Errors
    "FallibleError",
    "ConfigurationError",
    "InvalidAccessError",
    "PropagatedError",
    "SubmissionError",
    "matches_kind",
    # Settings
    "FallibleSettings",
    "get_settings",
    "clear_settings_cache",
    # Helpers
    "Procedure",
]
