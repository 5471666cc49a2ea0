"""
Check result types reported by the engine at the end of a run.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Outcome(Enum):
    """Final outcome of a property check."""

    PASSED = "passed"
    FALSIFIED = "falsified"

    def is_failed(self) -> bool:
        """Check if the outcome is a failure."""
        return self == Outcome.FALSIFIED


@dataclass(frozen=True)
class CheckResult:
    """
    Result of one property check.

    For a falsified property ``original_args`` holds the first failing
    arguments, ``shrunk_args`` the minimal ones after shrinking, and
    ``exception`` the error raised by the property body (None when the body
    returned False).
    """

    outcome: Outcome
    num_tests: int
    num_shrinks: int = 0
    size: int = 0
    original_args: tuple[Any, ...] = ()
    shrunk_args: tuple[Any, ...] = ()
    exception: BaseException | None = None
    seed: int | None = None

    @property
    def is_failed(self) -> bool:
        """Check if the property was falsified."""
        return self.outcome.is_failed()

    @classmethod
    def passed(cls, num_tests: int, size: int = 0, seed: int | None = None) -> "CheckResult":
        """Create a passed result."""
        return cls(outcome=Outcome.PASSED, num_tests=num_tests, size=size, seed=seed)

    @classmethod
    def falsified(
        cls,
        num_tests: int,
        num_shrinks: int,
        size: int,
        original_args: tuple[Any, ...],
        shrunk_args: tuple[Any, ...],
        exception: BaseException | None = None,
        seed: int | None = None,
    ) -> "CheckResult":
        """Create a falsified result."""
        return cls(
            outcome=Outcome.FALSIFIED,
            num_tests=num_tests,
            num_shrinks=num_shrinks,
            size=size,
            original_args=original_args,
            shrunk_args=shrunk_args,
            exception=exception,
            seed=seed,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert result to dictionary representation."""
        return {
            "outcome": self.outcome.value,
            "num_tests": self.num_tests,
            "num_shrinks": self.num_shrinks,
            "size": self.size,
            "seed": self.seed,
            "exception": repr(self.exception) if self.exception is not None else None,
        }
