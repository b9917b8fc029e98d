"""Zero-argument side-effecting steps that compose in sequence."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True, slots=True)
class Procedure:
    """Callable wrapper for a no-argument, no-result action.

    Example:
        >>> calls = []
        >>> connect = Procedure(lambda: calls.append("connect"))
        >>> setup = connect.and_then(lambda: calls.append("migrate"))
        >>> setup()
        >>> calls
        ['connect', 'migrate']
    """

    action: Callable[[], object]

    def __call__(self) -> None:
        self.action()

    def and_then(self, after: Callable[[], object]) -> Procedure:
        """Run this procedure, then ``after``."""
        def chained() -> None:
            self.action()
            after()
        return Procedure(chained)

    def compose(self, before: Callable[[], object]) -> Procedure:
        """Run ``before``, then this procedure."""
        def chained() -> None:
            before()
            self.action()
        return Procedure(chained)
