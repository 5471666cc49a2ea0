"""
Shared protocol types for structural typing across runners.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .result import CheckResult

EveryCallback = Callable[[int, Sequence[Any]], str]
EveryShrinkCallback = Callable[[Sequence[Any]], str]


@runtime_checkable
class Runner(Protocol):
    """Run-event sink notified by the engine while a property is checked.

    Structural typing lets the default console runner, the tracing
    decorator and test doubles be used interchangeably.
    """

    def on_start_fixture(self, name: str) -> None: ...

    def on_arguments(self, num_test: int, args: Sequence[Any], every: EveryCallback) -> None: ...

    def on_shrink(self, args: Sequence[Any], every_shrink: EveryShrinkCallback) -> None: ...

    def on_finished(self, name: str, result: CheckResult) -> None: ...


@runtime_checkable
class TraceListener(Protocol):
    """Receiver of the generated/tested/timer calls made by instrumented test code."""

    def on_trace_generated(self, additional: str | None) -> None: ...

    def on_trace_tested(self, additional: str | None) -> None: ...

    def on_trace_timer(self, additional: str | None) -> None: ...
