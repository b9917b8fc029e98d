"""Tests for retry predicates and RetryPolicy validation."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from fallible.runtime.retry import (
    MAX_RETRIES,
    MIN_RETRIES,
    ComparisonOperator,
    RetryPolicy,
    TimeUnit,
    always_false,
    always_true,
    numeric,
    retry_on,
)


# ═════════════════════════════════════════════════════════════════════════════
# Predicates
# ═════════════════════════════════════════════════════════════════════════════


def test_constant_predicates() -> None:
    assert always_true()(ValueError())
    assert not always_false()(ValueError())


def test_retry_on_matches_class_and_subclasses() -> None:
    predicate = retry_on(OSError, KeyError)

    assert predicate(OSError())
    assert predicate(FileNotFoundError())
    assert predicate(KeyError("k"))
    assert not predicate(LookupError())
    assert not predicate(ValueError())


def test_retry_on_without_kinds_never_matches() -> None:
    assert not retry_on()(Exception())


@pytest.mark.parametrize(
    ("operator", "number", "expected"),
    [
        (ComparisonOperator.LT, 4, True),
        (ComparisonOperator.LT, 5, False),
        (ComparisonOperator.GT, 6, True),
        (ComparisonOperator.GT, 5, False),
        (ComparisonOperator.LTE, 5, True),
        (ComparisonOperator.LTE, 6, False),
        (ComparisonOperator.GTE, 5, True),
        (ComparisonOperator.GTE, 4.9, False),
        (ComparisonOperator.EQ, 5.0, True),
        (ComparisonOperator.EQ, 4, False),
        (ComparisonOperator.NE, 4, True),
        (ComparisonOperator.NE, 5, False),
    ],
)
def test_numeric_single_reference(operator: ComparisonOperator, number: float, expected: bool) -> None:
    assert numeric(operator, 5)(number) is expected


def test_numeric_between_is_inclusive() -> None:
    in_range = numeric(ComparisonOperator.BTW, MIN_RETRIES, MAX_RETRIES)

    assert [in_range(n) for n in (0, 1, 5, 10, 11)] == [False, True, True, True, False]


@pytest.mark.parametrize(
    ("operator", "values"),
    [
        (ComparisonOperator.LT, ()),
        (ComparisonOperator.GT, (None,)),
        (ComparisonOperator.BTW, (1,)),
        (ComparisonOperator.BTW, (1, None)),
    ],
)
def test_numeric_rejects_missing_values(operator: ComparisonOperator, values: tuple) -> None:
    with pytest.raises(ValueError, match="valid values"):
        numeric(operator, *values)


# ═════════════════════════════════════════════════════════════════════════════
# RetryPolicy
# ═════════════════════════════════════════════════════════════════════════════


def test_policy_defaults_disable_retry() -> None:
    policy = RetryPolicy()

    assert not policy.enabled
    assert policy.max_retries is None
    assert not policy.is_retryable(ValueError())
    assert policy.delay_seconds == 0.0


def test_disabled_policy_skips_range_check() -> None:
    assert RetryPolicy(enabled=False, max_retries=99).max_retries == 99


@pytest.mark.parametrize("max_retries", [MIN_RETRIES, 5, MAX_RETRIES])
def test_enabled_policy_accepts_range(max_retries: int) -> None:
    assert RetryPolicy(enabled=True, max_retries=max_retries).max_retries == max_retries


@pytest.mark.parametrize("max_retries", [None, 0, 11, True])
def test_enabled_policy_rejects(max_retries: object) -> None:
    with pytest.raises(ValidationError):
        RetryPolicy(enabled=True, max_retries=max_retries)


def test_enabled_policy_requires_predicate() -> None:
    with pytest.raises(ValidationError, match="predicate cannot be None"):
        RetryPolicy(enabled=True, max_retries=3, predicate=None)


def test_policy_rejects_non_callable_predicate() -> None:
    with pytest.raises(ValidationError):
        RetryPolicy(enabled=True, max_retries=3, predicate="ValueError")


def test_policy_is_frozen() -> None:
    policy = RetryPolicy(enabled=True, max_retries=3)

    with pytest.raises(ValidationError):
        policy.max_retries = 4  # type: ignore[misc]


def test_policy_allows_within_budget() -> None:
    policy = RetryPolicy(enabled=True, max_retries=2, predicate=retry_on(TimeoutError))

    assert policy.allows(TimeoutError(), 0)
    assert policy.allows(TimeoutError(), 1)
    assert not policy.allows(TimeoutError(), 2)
    assert not policy.allows(ValueError(), 0)


def test_policy_never_retries_base_exceptions() -> None:
    policy = RetryPolicy(enabled=True, max_retries=2, predicate=always_true())

    assert not policy.is_retryable(KeyboardInterrupt())
    assert not policy.is_retryable(SystemExit())
    assert policy.is_retryable(RuntimeError())


@pytest.mark.parametrize(
    ("delay", "unit", "seconds"),
    [
        (2, TimeUnit.SECONDS, 2.0),
        (500, TimeUnit.MILLISECONDS, 0.5),
        (3, TimeUnit.MINUTES, 180.0),
        (1, TimeUnit.HOURS, 3600.0),
        (1.5, TimeUnit.SECONDS, 1.5),
        (5, None, 0.0),
        (0, TimeUnit.SECONDS, 0.0),
        (-1, TimeUnit.SECONDS, 0.0),
    ],
)
def test_delay_seconds(delay: float, unit: TimeUnit | None, seconds: float) -> None:
    assert RetryPolicy(delay=delay, delay_unit=unit).delay_seconds == pytest.approx(seconds)


def test_negative_delay_means_no_wait() -> None:
    policy = RetryPolicy(enabled=True, max_retries=2, delay=-1, delay_unit=TimeUnit.SECONDS)

    assert policy.delay == -1
    assert policy.delay_seconds == 0.0


def test_time_unit_accepts_string_values() -> None:
    assert RetryPolicy(delay=1, delay_unit="ms").delay_unit is TimeUnit.MILLISECONDS
