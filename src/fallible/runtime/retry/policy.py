"""Retry policy configuration for runners.

A RetryPolicy is the frozen, validated snapshot of the retry settings a
Runner accumulates through its builder calls. Validation happens once,
when the snapshot is taken at the start of a run.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Callable, Self

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    model_validator,
)

from .predicates import ComparisonOperator, always_false, numeric

MIN_RETRIES = 1
MAX_RETRIES = 10

_retries_in_range = numeric(ComparisonOperator.BTW, MIN_RETRIES, MAX_RETRIES)


class TimeUnit(StrEnum):
    """Unit of a retry delay."""
    NANOSECONDS = "ns"
    MICROSECONDS = "us"
    MILLISECONDS = "ms"
    SECONDS = "s"
    MINUTES = "min"
    HOURS = "h"
    DAYS = "d"

    def to_seconds(self, amount: float) -> float:
        return amount * _SECONDS_PER_UNIT[self]


_SECONDS_PER_UNIT: dict[TimeUnit, float] = {
    TimeUnit.NANOSECONDS: 1e-9,
    TimeUnit.MICROSECONDS: 1e-6,
    TimeUnit.MILLISECONDS: 1e-3,
    TimeUnit.SECONDS: 1.0,
    TimeUnit.MINUTES: 60.0,
    TimeUnit.HOURS: 3600.0,
    TimeUnit.DAYS: 86400.0,
}


class RetryPolicy(BaseModel):
    """Validated retry configuration.

    Attributes:
        enabled: Whether failures may be retried at all
        max_retries: Retries after the first attempt, 1 to 10 (required when enabled)
        predicate: Decides whether an error is retryable
        delay: Wait between attempts, in ``delay_unit``; zero or negative means no wait
        delay_unit: Unit of ``delay``; None means no wait

    Example:
        >>> from fallible.runtime.retry import retry_on
        >>> policy = RetryPolicy(enabled=True, max_retries=3, predicate=retry_on(TimeoutError))
        >>> policy.allows(TimeoutError(), attempt=2)
        True
        >>> policy.allows(TimeoutError(), attempt=3)
        False
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
        extra="forbid",
        revalidate_instances="never",
    )

    enabled: bool = False
    max_retries: StrictInt | None = None
    predicate: Callable[[BaseException], bool] | None = Field(
        default_factory=always_false, exclude=True, repr=False,
    )
    delay: float = 0
    delay_unit: TimeUnit | None = None

    @model_validator(mode="after")
    def _check_enabled(self) -> Self:
        if not self.enabled:
            return self
        if self.predicate is None:
            raise ValueError("Retryable predicate cannot be None.")
        if self.max_retries is None:
            raise ValueError("Retry count cannot be None.")
        if not _retries_in_range(self.max_retries):
            raise ValueError(
                f"Retry count must be between {MIN_RETRIES} and {MAX_RETRIES}, got {self.max_retries}."
            )
        return self

    @property
    def delay_seconds(self) -> float:
        """Configured wait in seconds, 0.0 when no unit or no positive delay is set."""
        if self.delay_unit is None or self.delay <= 0:
            return 0.0
        return self.delay_unit.to_seconds(self.delay)

    def is_retryable(self, error: BaseException) -> bool:
        """Whether ``error`` qualifies for another attempt, ignoring the budget.

        Only ``Exception`` subclasses are eligible; KeyboardInterrupt, SystemExit
        and other BaseException-only kinds never are.
        """
        if not self.enabled or not isinstance(error, Exception):
            return False
        return bool(self.predicate(error))  # type: ignore[misc]

    def allows(self, error: BaseException, attempt: int) -> bool:
        """Whether attempt ``attempt`` (0-indexed) that failed with ``error`` is retried."""
        return self.is_retryable(error) and attempt < self.max_retries  # type: ignore[operator]
