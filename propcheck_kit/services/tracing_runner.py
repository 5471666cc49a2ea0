"""
Tracing runner decorator for property checks.

Wraps the engine's runner, forwards every run event to it, and adds trace
lines, diagnostics from instrumented test code and a failure report with
the shrunk counterexample rendered in notation form.
"""

import logging
import threading
from collections.abc import Callable, Sequence
from contextlib import ExitStack
from typing import Any

from ..core.result import CheckResult
from ..core.types import EveryCallback, EveryShrinkCallback, Runner
from ..notation.config import NotationConfig
from ..notation.serializer import NotationSerializer
from ..utilities.constants import DEFAULT_MAX_TEST, REPORTER_INTERVAL_SECONDS
from ..utilities.formatters import format_elapsed_ms, format_exception, pluralize
from ..utilities.timing import Stopwatch
from .runner_config import RunnerConfig
from .time_reporter import ActivityMonitor, ElapsedTimeReporter

logger = logging.getLogger(__name__)


class TracingRunner:
    """
    Runner decorator with tracing and notation failure reports.

    Transparently forwards run events to the wrapped runner while keeping
    its own counters and timers. A runner serves exactly one check: it is
    closed when the run finishes.
    """

    def __init__(
        self,
        runner_implementation: Runner,
        runner_config: RunnerConfig | None = None,
        notation_config: NotationConfig | None = None,
        max_test: int | None = None,
        trace_writer: Callable[[str], None] | None = None,
        reporter_interval: float = REPORTER_INTERVAL_SECONDS,
    ):
        """
        Initialize tracing runner.

        Args:
            runner_implementation: Runner receiving every forwarded event
            runner_config: Tracing configuration, defaults to RunnerConfig.default()
            notation_config: Rendering options for the failure report
            max_test: Trial count shown in trace lines
            trace_writer: Sink for trace lines, defaults to the runner config's writer
            reporter_interval: Seconds between background reporter ticks
        """
        self.runner_implementation = runner_implementation
        self.runner_config = runner_config or RunnerConfig.default()
        self.notation_config = notation_config or NotationConfig.default()
        self.max_test = max_test or DEFAULT_MAX_TEST
        self.reporter_interval = reporter_interval
        self.trace_lines: list[str] = []
        self.failure_message: str | None = None
        self.failure_exception: BaseException | None = None

        self._trace_writer = trace_writer or self.runner_config.trace_writer
        self._serializer = NotationSerializer(self.notation_config)
        self._trace_lock = threading.Lock()
        self._attachment = ExitStack()
        self._reporter: ElapsedTimeReporter | None = None
        self._activity = ActivityMonitor()
        self._closed = False

        self._test_timer = Stopwatch()
        self._detailed_timer = Stopwatch()
        self._total_timer = Stopwatch()
        self._test_timer.start()

        # Counters for trace_number_of_runs
        self._is_detailed = False
        self._is_running_tests = False
        self._latest_num_tests = 0
        self._num_shrinks = 0

        # Counters for diagnostics from instrumented test code
        self._assert_failed_if_set = False
        self._stage_is_shrinking = False
        self._latest_num_executions = 0
        self._latest_num_diagnostic_shrinks = 0
        self._latest_trace_timer = 0

    def __repr__(self) -> str:
        return f"TracingRunner({self.runner_implementation!r}, max_test={self.max_test})"

    def __enter__(self) -> "TracingRunner":
        return self.attach_to_test()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def is_detailed(self) -> bool:
        """Check if detailed diagnostics are active."""
        return self._is_detailed

    def attach_to_test(self) -> "TracingRunner":
        """
        Enable diagnostics if configured.

        Attaches this runner to the configured events and starts the
        background time reporter. Safe to call more than once.
        """
        if not self.runner_config.trace_diagnostics_enabled or self._reporter is not None:
            return self

        self._is_detailed = True
        self._attachment.enter_context(self.runner_config.events.attached(self))
        self._detailed_timer.start()
        self._total_timer.start()

        self._reporter = ElapsedTimeReporter(
            self._trace, self._total_timer, self._activity, interval=self.reporter_interval
        )
        self._reporter.start()
        logger.debug("Tracing runner attached with detailed diagnostics")
        return self

    def close(self) -> None:
        """Detach from the events and stop the background reporter."""
        if self._closed:
            return
        self._closed = True
        self._attachment.close()
        if self._reporter is not None:
            self._reporter.stop()
        logger.debug("Tracing runner closed")

    # Run events

    def on_start_fixture(self, name: str) -> None:
        self.runner_implementation.on_start_fixture(name)
        self._test_timer.restart()

    def on_arguments(self, num_test: int, args: Sequence[Any], every: EveryCallback) -> None:
        self._test_timer.stop()
        self.runner_implementation.on_arguments(num_test, args, every)
        self._latest_num_tests += 1

        if not self._is_detailed:
            if self.runner_config.trace_number_of_runs:
                self._trace(
                    f"Ran test: {self._latest_num_tests} / {self.max_test} "
                    f"in {format_elapsed_ms(self._test_timer.elapsed_ms)}"
                )
            self._is_running_tests = True

        self._test_timer.restart()

    def on_shrink(self, args: Sequence[Any], every_shrink: EveryShrinkCallback) -> None:
        self._test_timer.stop()
        self.runner_implementation.on_shrink(args, every_shrink)
        self._num_shrinks += 1

        if not self._is_detailed and self.runner_config.trace_number_of_runs:
            self._trace_failed_test_once()
            self._trace(
                f"Ran shrink: {self._num_shrinks} in {format_elapsed_ms(self._test_timer.elapsed_ms)}"
            )

        self._test_timer.restart()

    def on_finished(self, name: str, result: CheckResult) -> None:
        try:
            if result.is_failed:
                if not self._is_detailed and self.runner_config.trace_number_of_runs:
                    self._trace_failed_test_once()

                self.failure_message = self._format_failure(result)
                self.failure_exception = result.exception

                if not self.runner_config.throw_on_failure:
                    self._trace(self.failure_message)

            self.runner_implementation.on_finished(name, result)
        finally:
            # A finished runner must not keep receiving trace calls from later checks
            self.close()

    def get_exception_result(self) -> str:
        """
        Build the message of the aggregated failure.

        Returns:
            Failure report, causing exception and, when tracing was enabled,
            every traced line
        """
        lines = [self.failure_message or "Property check failed"]

        if self.failure_exception is not None:
            lines.append("with exception:")
            lines.append(format_exception(self.failure_exception))

        if self._is_detailed or self.runner_config.trace_number_of_runs:
            lines.append("with trace messages:")
            with self._trace_lock:
                lines.extend(self.trace_lines)

        return "\n".join(lines)

    # Diagnostics from instrumented test code

    def on_trace_generated(self, additional: str | None = None) -> None:
        if not self._is_detailed:
            return

        self._activity.record_generated()

        # A second generated call without a tested call means the previous test failed
        if self._assert_failed_if_set:
            self._trace(f"{self._trace_message('failed test', additional)} ---> shrinking")
            self._stage_is_shrinking = True
            self._latest_num_executions = 0
            self._latest_num_diagnostic_shrinks += 1

        self._assert_failed_if_set = True
        self._latest_trace_timer = 0
        self._latest_num_executions += 1
        self._trace(self._trace_message("generated", additional))
        self._detailed_timer.restart()

    def on_trace_tested(self, additional: str | None = None) -> None:
        if not self._is_detailed:
            return

        self._activity.record_tested()
        self._trace(self._trace_message("succeeded test", additional))
        self._assert_failed_if_set = False
        self._detailed_timer.restart()

    def on_trace_timer(self, additional: str | None = None) -> None:
        if not self._is_detailed:
            return

        self._latest_trace_timer += 1
        self._trace(self._trace_message(f"timer{self._latest_trace_timer} hit", additional))
        self._detailed_timer.restart()

    # Helpers

    def _trace_failed_test_once(self) -> None:
        if self._is_running_tests:
            self._is_running_tests = False
            self._trace(f"Failed test: {self._latest_num_tests} / {self.max_test}")

    def _trace_message(self, message: str, additional: str | None) -> str:
        if self._stage_is_shrinking:
            stage = (
                f"shrink {self._latest_num_diagnostic_shrinks} "
                f"(attempt {self._latest_num_executions})"
            )
        else:
            stage = f"test {self._latest_num_executions} / {self.max_test}"

        prefix = f"{additional}: " if additional and additional.strip() else ""
        return f"{prefix}{stage} -> {message} in {format_elapsed_ms(self._detailed_timer.elapsed_ms)}"

    def _format_failure(self, result: CheckResult) -> str:
        return "\n".join(
            [
                f"Falsifiable, after {pluralize(self._latest_num_tests, 'test')} "
                f"({pluralize(self._num_shrinks, 'shrink')})",
                f"Last step was invoked with size of {result.size}",
                "Shrunk:",
                self._serializer.serialize_each(result.shrunk_args),
            ]
        )

    def _trace(self, message: str) -> None:
        with self._trace_lock:
            self.trace_lines.append(message)
            self._trace_writer(message)
