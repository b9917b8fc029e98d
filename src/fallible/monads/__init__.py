"""Result type for outcome-as-value error handling.

Example:
    >>> from fallible.monads import Failure, Result, Success
    >>>
    >>> def parse(raw: str) -> Result[int]:
    ...     try:
    ...         return Success(int(raw))
    ...     except ValueError as exc:
    ...         return Failure(exc)
    >>>
    >>> parse("20").map(lambda x: x + 1).value
    21
    >>> parse("x").on_error(lambda e: Success(0)).value
    0
"""

from .result import Failure, Result, Success

__all__ = [
    "Result",
    "Success",
    "Failure",
]
