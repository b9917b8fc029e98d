"""Retry policies and predicates for runners.

Example:
    >>> from fallible.runtime.retry import RetryPolicy, retry_on
    >>> policy = RetryPolicy(
    ...     enabled=True,
    ...     max_retries=3,
    ...     predicate=retry_on(TimeoutError, ConnectionError),
    ... )
    >>> policy.allows(ConnectionResetError(), attempt=0)
    True
"""

from .policy import MAX_RETRIES, MIN_RETRIES, RetryPolicy, TimeUnit
from .predicates import (
    ComparisonOperator,
    always_false,
    always_true,
    numeric,
    retry_on,
)

__all__ = [
    # Policy
    "RetryPolicy",
    "TimeUnit",
    "MIN_RETRIES",
    "MAX_RETRIES",
    # Predicates
    "ComparisonOperator",
    "always_true",
    "always_false",
    "retry_on",
    "numeric",
]
