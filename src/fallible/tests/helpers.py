"""Test doubles shared across test modules."""

from __future__ import annotations


class Flaky:
    """Operation failing with ``error`` for the first ``failures`` calls, then returning the call count."""

    def __init__(self, failures: int, error: type[BaseException] = ConnectionError) -> None:
        self.failures = failures
        self.error = error
        self.calls = 0

    def __call__(self) -> int:
        self.calls += 1
        if self.calls <= self.failures:
            raise self.error(f"attempt {self.calls} failed")
        return self.calls
