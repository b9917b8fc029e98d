"""Retry-governed execution of fallible operations.

A Runner is configured through chained builder calls, then ``run`` invokes a
zero-argument operation, retrying failures the policy accepts, and returns
the outcome as a Result. Operation failures never escape ``run``.

Example:
    >>> attempts = []
    >>> def flaky() -> int:
    ...     attempts.append(1)
    ...     if len(attempts) < 4:
    ...         raise TimeoutError("upstream slow")
    ...     return len(attempts)
    >>>
    >>> result = (
    ...     Runner[int]()
    ...     .retry_on(TimeoutError)
    ...     .with_retries(5)
    ...     .on_retry(lambda n, err: print(f"Retry {n}: {err}"))
    ...     .run(flaky)
    ...     .map(lambda x: x * 10)
    ... )
    Retry 0: upstream slow
    Retry 1: upstream slow
    Retry 2: upstream slow
    >>> result.value
    40
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Generic, TypeVar

from pydantic import ValidationError

from fallible.foundation.config import get_settings
from fallible.foundation.errors import ConfigurationError, PropagatedError
from fallible.monads import Failure, Result, Success

from .concurrency import get_worker_pool, submit_and_wait
from .retry import RetryPolicy, TimeUnit, always_false, retry_on

if TYPE_CHECKING:
    from concurrent.futures import Executor

T = TypeVar("T")

logger = logging.getLogger("fallible.runner")


@dataclass(frozen=True, slots=True)
class Hooks(Generic[T]):
    """Lifecycle callbacks of a run. Every hook is optional.

    Attributes:
        before_start: Runs once before the first attempt
        on_success: Receives the value of the successful attempt
        on_failure: Receives the error that ended the run
        on_retry: Receives (attempt, error) before the next attempt starts
        on_each_attempt: Receives (value, None) or (None, error) after every attempt
    """

    before_start: Callable[[], object] | None = None
    on_success: Callable[[T], object] | None = None
    on_failure: Callable[[BaseException], object] | None = None
    on_retry: Callable[[int, BaseException], object] | None = None
    on_each_attempt: Callable[[T | None, BaseException | None], object] | None = None


class Runner(Generic[T]):
    """Builder and executor for a retried, Result-returning operation.

    Builder calls mutate the runner and return it. ``run`` freezes the current
    configuration into a RetryPolicy and Hooks, validates it, and holds that
    snapshot for the whole run, so a runner can be reused.
    """

    def __init__(self) -> None:
        self._retry_enabled = False
        self._max_retries: int | None = None
        self._predicate: Callable[[BaseException], bool] | None = always_false()
        self._delay: float = 0
        self._delay_unit: TimeUnit | None = None
        self._before_start: Callable[[], object] | None = None
        self._on_success: Callable[[T], object] | None = None
        self._on_failure: Callable[[BaseException], object] | None = None
        self._on_retry: Callable[[int, BaseException], object] | None = None
        self._on_each_attempt: Callable[[T | None, BaseException | None], object] | None = None

    # ─────────────────────────────────────────────────────────────────
    # Hooks
    # ─────────────────────────────────────────────────────────────────

    def before_start(self, procedure: Callable[[], object]) -> Runner[T]:
        self._before_start = procedure
        return self

    def on_success(self, callback: Callable[[T], object]) -> Runner[T]:
        self._on_success = callback
        return self

    def on_failure(self, callback: Callable[[BaseException], object]) -> Runner[T]:
        self._on_failure = callback
        return self

    def on_retry(self, callback: Callable[[int, BaseException], object]) -> Runner[T]:
        self._on_retry = callback
        return self

    def on_each_attempt(self, callback: Callable[[T | None, BaseException | None], object]) -> Runner[T]:
        self._on_each_attempt = callback
        return self

    # ─────────────────────────────────────────────────────────────────
    # Retry configuration
    # ─────────────────────────────────────────────────────────────────

    def retry_on(self, *kinds: type[BaseException]) -> Runner[T]:
        """Enable retry for errors that are instances of ``kinds``."""
        self._retry_enabled = True
        self._predicate = retry_on(*kinds)
        return self

    def with_retries(self, count: int | None) -> Runner[T]:
        """Enable retry with up to ``count`` retries after the first attempt."""
        self._retry_enabled = True
        self._max_retries = count
        return self

    def with_retry_predicate(self, predicate: Callable[[BaseException], bool] | None) -> Runner[T]:
        self._retry_enabled = True
        self._predicate = predicate
        return self

    def with_retry_enabled(self, enable: bool | None) -> Runner[T]:
        """Switch retry on or off; anything but ``True`` turns it off."""
        self._retry_enabled = enable is True
        return self

    def with_retry_delay(self, duration: float, unit: TimeUnit | None) -> Runner[T]:
        """Set the wait between attempts.

        The wait is zero-length unless ``FALLIBLE_RETRY_HONOR_DELAY`` is set.
        """
        self._delay = duration
        self._delay_unit = unit
        return self

    # ─────────────────────────────────────────────────────────────────
    # Execution
    # ─────────────────────────────────────────────────────────────────

    def run(self, operation: Callable[[], T], pool: Executor | None = None) -> Result[T]:
        """Run ``operation`` under the configured retry policy.

        Args:
            operation: Zero-argument callable to execute
            pool: Optional executor each attempt is submitted to; the call
                still blocks until the attempt completes

        Returns:
            Success with the value of the first successful attempt, or Failure
            with the error that ended the run.

        Raises:
            ConfigurationError: Invalid retry configuration (before any attempt).
        """
        start = time.perf_counter()
        policy = self._policy()
        hooks = self._hooks()
        if hooks.before_start is not None:
            hooks.before_start()

        attempt = 0
        while True:
            try:
                value = operation() if pool is None else submit_and_wait(pool, operation)
            except BaseException as exc:  # noqa: BLE001 - every failure becomes a Failure
                error = PropagatedError.unwrap(exc)
            else:
                logger.debug("Attempt %d succeeded", attempt)
                if hooks.on_success is not None:
                    hooks.on_success(value)
                if hooks.on_each_attempt is not None:
                    hooks.on_each_attempt(value, None)
                return Success(value, _elapsed_ms(start))

            if hooks.on_each_attempt is not None:
                hooks.on_each_attempt(None, error)
            if not policy.allows(error, attempt):
                logger.debug("Attempt %d failed, not retrying: %r", attempt, error)
                if hooks.on_failure is not None:
                    hooks.on_failure(error)
                return Failure(error, _elapsed_ms(start))

            logger.debug("Attempt %d failed, retry %d/%d: %r", attempt, attempt + 1, policy.max_retries, error)
            if hooks.on_retry is not None:
                hooks.on_retry(attempt, error)
            self._pause(policy)
            attempt += 1

    def run_in_pool(self, operation: Callable[[], T]) -> Result[T]:
        """Run ``operation`` with every attempt on the shared worker pool."""
        return self.run(operation, get_worker_pool())

    # ─────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────

    def _policy(self) -> RetryPolicy:
        try:
            return RetryPolicy(
                enabled=self._retry_enabled,
                max_retries=self._max_retries,
                predicate=self._predicate,
                delay=self._delay,
                delay_unit=self._delay_unit,
            )
        except ValidationError as exc:
            raise ConfigurationError(_first_message(exc)) from exc

    def _hooks(self) -> Hooks[T]:
        return Hooks(
            before_start=self._before_start,
            on_success=self._on_success,
            on_failure=self._on_failure,
            on_retry=self._on_retry,
            on_each_attempt=self._on_each_attempt,
        )

    @staticmethod
    def _pause(policy: RetryPolicy) -> None:
        if policy.delay_unit is None or policy.delay <= 0:
            return
        seconds = policy.delay_seconds if get_settings().retry.honor_delay else 0.0
        time.sleep(seconds)


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


def _first_message(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    # model_validator errors arrive as "Value error, <message>"
    return errors[0]["msg"].removeprefix("Value error, ")
