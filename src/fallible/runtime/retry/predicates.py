"""Predicate builders for retry decisions and bound checks."""

from __future__ import annotations

from enum import StrEnum
from typing import Callable

from fallible.foundation.errors import matches_kind


class ComparisonOperator(StrEnum):
    """Operators understood by ``numeric``. BTW is inclusive on both ends."""
    LT = "<"
    GT = ">"
    LTE = "<="
    GTE = ">="
    EQ = "=="
    NE = "!="
    BTW = "between"


def always_true() -> Callable[[object], bool]:
    return lambda _: True


def always_false() -> Callable[[object], bool]:
    return lambda _: False


def retry_on(*kinds: type[BaseException]) -> Callable[[BaseException], bool]:
    """Predicate matching errors that are instances of any of ``kinds``.

    With no kinds the predicate never matches.

    Example:
        >>> retryable = retry_on(TimeoutError, ConnectionError)
        >>> retryable(ConnectionResetError())
        True
        >>> retryable(ValueError())
        False
    """
    return lambda error: matches_kind(error, *kinds)


def numeric(operator: ComparisonOperator, *values: float) -> Callable[[float], bool]:
    """Predicate comparing a number against reference ``values``.

    All operators use the first value; BTW also needs a second one as the
    upper bound.

    Raises:
        ValueError: Missing or None reference values.

    Example:
        >>> in_range = numeric(ComparisonOperator.BTW, 1, 10)
        >>> in_range(10), in_range(11)
        (True, False)
    """
    if not values or any(v is None for v in values):
        raise ValueError("Please provide valid values.")
    ref = float(values[0])
    match operator:
        case ComparisonOperator.LT: return lambda n: float(n) < ref
        case ComparisonOperator.GT: return lambda n: float(n) > ref
        case ComparisonOperator.LTE: return lambda n: float(n) <= ref
        case ComparisonOperator.GTE: return lambda n: float(n) >= ref
        case ComparisonOperator.EQ: return lambda n: float(n) == ref
        case ComparisonOperator.NE: return lambda n: float(n) != ref
        case ComparisonOperator.BTW:
            if len(values) < 2:
                raise ValueError("Please provide valid values.")
            upper = float(values[1])
            return lambda n: ref <= float(n) <= upper
        case _:
            raise ValueError(f"Invalid operator used: {operator}")
