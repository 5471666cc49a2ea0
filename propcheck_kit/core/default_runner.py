"""
Default console runner for the engine.

Prints the per-trial ``every`` output, the per-shrink ``every_shrink``
output and a final report using the engine's own value representation.
"""

import logging
from collections.abc import Callable, Sequence
from typing import Any

from hypothesis.vendor.pretty import pretty

from ..errors import PropertyFalsifiedError
from ..utilities.formatters import format_exception, pluralize
from .result import CheckResult
from .types import EveryCallback, EveryShrinkCallback

logger = logging.getLogger(__name__)


class DefaultRunner:
    """
    Console runner used when no other runner is configured.

    In throwing mode a falsified result raises PropertyFalsifiedError from
    on_finished instead of printing the report.
    """

    def __init__(
        self,
        raise_on_failure: bool = False,
        quiet_on_success: bool = False,
        writer: Callable[[str], None] | None = None,
    ):
        """
        Initialize default runner.

        Args:
            raise_on_failure: Raise PropertyFalsifiedError for falsified properties
            quiet_on_success: Do not print anything for passed properties
            writer: Output sink, defaults to print
        """
        self.raise_on_failure = raise_on_failure
        self.quiet_on_success = quiet_on_success
        self.writer = writer or print

    def __repr__(self) -> str:
        return (
            f"DefaultRunner(raise_on_failure={self.raise_on_failure}, "
            f"quiet_on_success={self.quiet_on_success})"
        )

    def on_start_fixture(self, name: str) -> None:
        logger.debug(f"Starting property check {name!r}")

    def on_arguments(self, num_test: int, args: Sequence[Any], every: EveryCallback) -> None:
        text = every(num_test, args)
        if text:
            self.writer(text)

    def on_shrink(self, args: Sequence[Any], every_shrink: EveryShrinkCallback) -> None:
        text = every_shrink(args)
        if text:
            self.writer(text)

    def on_finished(self, name: str, result: CheckResult) -> None:
        prefix = f"{name}-" if name else ""

        if not result.is_failed:
            logger.info(f"Property check {name!r} passed after {result.num_tests} tests")
            if not self.quiet_on_success:
                self.writer(f"{prefix}Ok, passed {pluralize(result.num_tests, 'test')}.")
            return

        message = prefix + format_failure_report(result)
        logger.info(f"Property check {name!r} falsified after {result.num_tests} tests")

        if self.raise_on_failure:
            raise PropertyFalsifiedError(message) from result.exception

        self.writer(message)


def format_failure_report(result: CheckResult) -> str:
    """
    Format a falsified result using the engine's pretty printer.

    Args:
        result: Falsified check result

    Returns:
        Multi-line report with original and shrunk arguments
    """
    seed_part = f" and seed of {result.seed}" if result.seed is not None else ""
    lines = [
        f"Falsifiable, after {pluralize(result.num_tests, 'test')} "
        f"({pluralize(result.num_shrinks, 'shrink')})",
        f"Last step was invoked with size of {result.size}{seed_part}:",
        "Original:",
        *(pretty(arg) for arg in result.original_args),
        "Shrunk:",
        *(pretty(arg) for arg in result.shrunk_args),
    ]
    if result.exception is not None:
        lines.append("with exception:")
        lines.append(format_exception(result.exception))
    return "\n".join(lines)
