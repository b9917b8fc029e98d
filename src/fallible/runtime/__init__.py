"""Runtime layer: the retry-governed runner and its collaborators.

- Runner/Hooks: configure and execute a fallible operation
- retry: RetryPolicy, TimeUnit and retry predicates
- concurrency: shared worker pool for off-thread attempts
"""

from .concurrency import WorkerPool, get_worker_pool, submit_and_wait
from .retry import (
    ComparisonOperator,
    RetryPolicy,
    TimeUnit,
    always_false,
    always_true,
    numeric,
    retry_on,
)
from .runner import Hooks, Runner

__all__ = [
    # Runner
    "Runner", "Hooks",
    # Retry
    "RetryPolicy", "TimeUnit", "ComparisonOperator",
    "always_true", "always_false", "retry_on", "numeric",
    # Concurrency
    "WorkerPool", "get_worker_pool", "submit_and_wait",
]
