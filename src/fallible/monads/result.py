"""Two-variant outcome type with timing-aware combinators.

A Result is either a Success carrying the computed value or a Failure
carrying the captured exception. Both carry the elapsed time in
milliseconds since the run that produced them started.

Combinators:
- map: transform the value, adding the transformation's cost to the duration
- flat_map: chain a step that itself returns a Result
- on_error: recover from a failure, optionally dispatching on exception class
- run: fold both variants into a plain value
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import (
    TYPE_CHECKING,
    Callable,
    Generic,
    NoReturn,
    TypeVar,
    overload,
)

from fallible.foundation.errors import InvalidAccessError, matches_kind

if TYPE_CHECKING:
    from collections.abc import Iterator

T = TypeVar("T")  # Success type
R = TypeVar("R")  # Mapped success type


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


class Result(ABC, Generic[T]):
    """Outcome of a fallible computation: Success or Failure.

    Construct through ``Success``, ``Failure`` or ``Result.of``. Instances are
    immutable; every combinator returns a new Result or the receiver itself.

    Examples:
        >>> result = Result.of(21, None, duration=3)
        >>> result.map(lambda x: x * 2).value
        42

        >>> failed = Result.of(None, ValueError("bad input"), duration=3)
        >>> failed.map(lambda x: x * 2).error
        ValueError('bad input')

        Pattern matching:
        >>> match Success(5, 0):
        ...     case Success(value, _):
        ...         print(value)
        ...     case Failure(error, _):
        ...         print(error)
        5
    """

    __slots__ = ("_duration",)

    def __init__(self, duration: int) -> None:
        self._duration = duration

    # ─────────────────────────────────────────────────────────────────
    # Inspection
    # ─────────────────────────────────────────────────────────────────

    @abstractmethod
    def is_success(self) -> bool: ...

    def is_failure(self) -> bool:
        return not self.is_success()

    @property
    @abstractmethod
    def value(self) -> T: ...

    @property
    @abstractmethod
    def error(self) -> BaseException: ...

    @property
    def duration(self) -> int:
        """Elapsed milliseconds since the producing run started."""
        return self._duration

    # ─────────────────────────────────────────────────────────────────
    # Combinators
    # ─────────────────────────────────────────────────────────────────

    @abstractmethod
    def run(
        self,
        on_success: Callable[[T], R],
        on_failure: Callable[[Failure[T]], R],
    ) -> R:
        """Fold into a plain value.

        ``on_failure`` receives the Failure itself, so it can look at both the
        error and the accumulated duration.
        """

    @abstractmethod
    def map(self, fn: Callable[[T], R]) -> Result[R]:
        """Transform a Success value; the cost of ``fn`` is added to the duration.

        A Failure is returned unchanged, error and duration included.
        """

    @abstractmethod
    def flat_map(self, fn: Callable[[T], Result[R]]) -> Result[R]:
        """Chain a step returning a Result.

        The Result produced by ``fn`` is returned as is, with its own duration.
        """

    @overload
    def on_error(self, handler: Callable[[BaseException], Result[R]]) -> Result[R]: ...

    @overload
    def on_error(
        self,
        handler: Mapping[type[BaseException], Callable[[BaseException], Result[R]]] | None,
        default: Callable[[BaseException], Result[R]],
    ) -> Result[R]: ...

    def on_error(self, handler, default=None):  # type: ignore[no-untyped-def]
        """Recover from a Failure; a Success passes through.

        With a single callable, the callable receives the error. With a
        mapping of exception classes to handlers, the first entry (in
        iteration order) whose class matches the error handles it; when
        nothing matches, or the mapping is empty or None, ``default`` does.

        Raises:
            ValueError: mapping form used without a ``default`` handler.
            TypeError: ``default`` given with a single callable handler.

        Example:
            >>> failed = Failure(KeyError("id"), 0)
            >>> recovered = failed.on_error(
            ...     {LookupError: lambda e: Success("lookup", 0)},
            ...     lambda e: Success("other", 0),
            ... )
            >>> recovered.value
            'lookup'
        """
        if handler is None or isinstance(handler, Mapping):
            if default is None:
                raise ValueError("Default error callback cannot be None.")
            return self._recover(lambda error: _dispatch(error, handler or {}, default))
        if default is not None:
            raise TypeError("A default error callback is only used with a handler mapping.")
        return self._recover(handler)

    @abstractmethod
    def _recover(self, fn: Callable[[BaseException], Result[R]]) -> Result[R]: ...

    # ─────────────────────────────────────────────────────────────────
    # Construction
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    def of(value: T | None = None, error: BaseException | None = None, duration: int = 0) -> Result[T]:
        """Build a Failure when ``error`` is given, otherwise a Success.

        When both are given the error wins.
        """
        if error is not None:
            return Failure(error, duration)
        return Success(value, duration)  # type: ignore[arg-type]

    # ─────────────────────────────────────────────────────────────────
    # Dunder Methods
    # ─────────────────────────────────────────────────────────────────

    def __bool__(self) -> bool:
        return self.is_success()

    def __iter__(self) -> Iterator[T]:
        """Yield the value of a Success, nothing for a Failure."""
        if self.is_success():
            yield self.value


def _dispatch(
    error: BaseException,
    table: Mapping[type[BaseException], Callable[[BaseException], Result[R]]],
    default: Callable[[BaseException], Result[R]],
) -> Result[R]:
    # first match wins; callers control specificity through ordering
    for kind, handler in table.items():
        if matches_kind(error, kind):
            return handler(error)
    return default(error)


class Success(Result[T]):
    """Successful outcome holding ``value``."""

    __slots__ = ("_value",)
    __match_args__ = ("value", "duration")

    def __init__(self, value: T, duration: int = 0) -> None:
        super().__init__(duration)
        self._value = value

    def is_success(self) -> bool:
        return True

    @property
    def value(self) -> T:
        return self._value

    @property
    def error(self) -> NoReturn:
        raise InvalidAccessError("Exceptions do not exist in case of success scenarios.")

    def run(self, on_success: Callable[[T], R], on_failure: Callable[[Failure[T]], R]) -> R:
        return on_success(self._value)

    def map(self, fn: Callable[[T], R]) -> Result[R]:
        start = time.perf_counter()
        output = fn(self._value)
        return Success(output, self._duration + _elapsed_ms(start))

    def flat_map(self, fn: Callable[[T], Result[R]]) -> Result[R]:
        return fn(self._value)

    def _recover(self, fn: Callable[[BaseException], Result[R]]) -> Result[R]:
        return self  # type: ignore[return-value]

    def __repr__(self) -> str:
        return f"Success({self._value!r}, duration={self._duration})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        return isinstance(other, Success) and (self._value, self._duration) == (other._value, other._duration)

    def __hash__(self) -> int:
        return hash((True, self._value, self._duration))


class Failure(Result[T]):
    """Failed outcome holding the captured ``error``."""

    __slots__ = ("_error",)
    __match_args__ = ("error", "duration")

    def __init__(self, error: BaseException, duration: int = 0) -> None:
        super().__init__(duration)
        self._error = error

    def is_success(self) -> bool:
        return False

    @property
    def value(self) -> NoReturn:
        raise InvalidAccessError("Result is not fetched for failure scenarios.")

    @property
    def error(self) -> BaseException:
        return self._error

    def run(self, on_success: Callable[[T], R], on_failure: Callable[[Failure[T]], R]) -> R:
        return on_failure(self)

    def map(self, fn: Callable[[T], R]) -> Result[R]:
        return self  # type: ignore[return-value]

    def flat_map(self, fn: Callable[[T], Result[R]]) -> Result[R]:
        return self  # type: ignore[return-value]

    def _recover(self, fn: Callable[[BaseException], Result[R]]) -> Result[R]:
        return fn(self._error)

    def __repr__(self) -> str:
        return f"Failure({self._error!r}, duration={self._duration})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        return isinstance(other, Failure) and self._error is other._error and self._duration == other._duration

    def __hash__(self) -> int:
        return hash((False, id(self._error), self._duration))
