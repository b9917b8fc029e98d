"""Exception taxonomy for fallible.

Operation failures are never raised from the runner; they travel inside
Failure results. The classes here cover the cases that do escape:
misconfiguration, misuse of a Result accessor, and failures carried
across the worker pool boundary.
"""

from __future__ import annotations

from typing import Self


class FallibleError(Exception):
    """Base class for every exception raised by fallible itself."""


class ConfigurationError(FallibleError, ValueError):
    """Invalid or incomplete retry configuration.

    Raised by ``Runner.run`` before the operation is invoked. The pydantic
    ``ValidationError`` that detected the problem is chained as ``__cause__``.
    """


class InvalidAccessError(FallibleError, AttributeError):
    """Value read from a Failure, or error read from a Success."""


class PropagatedError(FallibleError, RuntimeError):
    """Runtime failure wrapping the exception that actually occurred.

    Worker pool threads re-raise operation failures wrapped in this type so
    they surface through the future instead of dying with the thread.
    """

    __slots__ = ("cause",)

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(str(cause) or type(cause).__name__)
        self.__cause__ = cause

    def propagated_by(self) -> BaseException:
        """Original exception carried by this wrapper."""
        return self.cause

    @classmethod
    def unwrap(cls, error: BaseException) -> BaseException:
        """Strip one wrapper layer, returning other errors unchanged."""
        return error.cause if isinstance(error, cls) else error


class SubmissionError(PropagatedError):
    """The worker pool rejected or cancelled a submitted attempt."""

    @classmethod
    def from_exc(cls, exc: BaseException) -> Self:
        return cls(exc)


def matches_kind(error: BaseException, *kinds: type[BaseException]) -> bool:
    """Whether ``error`` is an instance of any of ``kinds`` (class or subclass).

    This is the single is-a relation used for retry matching and for the
    ``on_error`` dispatch table.

    Example:
        >>> matches_kind(KeyError("k"), LookupError)
        True
        >>> matches_kind(ValueError("v"), KeyError, TypeError)
        False
    """
    return any(isinstance(error, kind) for kind in kinds)
