"""
RunnerConfig value object and the trace call hook set.

TraceCallEvents is the object instrumented test code calls into; the
running TracingRunner is attached to it for the duration of a run only.
"""

import logging
import threading
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field, replace

from ..core.types import TraceListener

logger = logging.getLogger(__name__)

TraceCall = Callable[..., None]


class TraceCallEvents:
    """
    Hook set fired by instrumented test code: generated, tested and timer.

    It can be unpacked into its three calls::

        generated, tested, timer = RunnerConfig.trace_diagnostics().events

    Calls made while no runner is attached are ignored.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._listener: TraceListener | None = None

    def __iter__(self) -> Iterator[TraceCall]:
        return iter((self.generated, self.tested, self.timer))

    def __repr__(self) -> str:
        return f"TraceCallEvents(attached={self.listener is not None})"

    @property
    def listener(self) -> TraceListener | None:
        """Currently attached listener, if any."""
        with self._lock:
            return self._listener

    @contextmanager
    def attached(self, listener: TraceListener) -> Iterator["TraceCallEvents"]:
        """
        Attach a listener for the duration of the block.

        A previously attached listener is restored when the block exits.
        """
        with self._lock:
            previous = self._listener
            self._listener = listener
        logger.debug(f"Attached trace listener {listener!r}")
        try:
            yield self
        finally:
            with self._lock:
                if self._listener is listener:
                    self._listener = previous
            logger.debug(f"Detached trace listener {listener!r}")

    def generated(self, additional: str | None = None) -> None:
        """Signal that the test has generated its input."""
        listener = self.listener
        if listener is not None:
            listener.on_trace_generated(additional)

    def tested(self, additional: str | None = None) -> None:
        """Signal that the test has verified its output."""
        listener = self.listener
        if listener is not None:
            listener.on_trace_tested(additional)

    def timer(self, additional: str | None = None) -> None:
        """Signal an intermediate checkpoint inside the test."""
        listener = self.listener
        if listener is not None:
            listener.on_trace_timer(additional)


@dataclass(frozen=True)
class RunnerConfig:
    """
    Immutable configuration of the tracing runner.

    Attributes:
        trace_number_of_runs: Trace a line per trial and per shrink
        throw_on_failure: Keep the failure report for the raised error instead of tracing it
        trace_diagnostics_enabled: Enable events and the background time reporter
        events: Hook set used by instrumented test code
        trace_writer: Sink for trace lines, print by default
    """

    trace_number_of_runs: bool = False
    throw_on_failure: bool = False
    trace_diagnostics_enabled: bool = False
    events: TraceCallEvents = field(default_factory=TraceCallEvents)
    trace_writer: Callable[[str], None] = print

    @classmethod
    def default(cls) -> "RunnerConfig":
        """Return the default configuration (all settings false)."""
        return cls()

    @classmethod
    def verbose(cls) -> "RunnerConfig":
        """Return the default configuration with a trace line per trial and shrink."""
        return cls(trace_number_of_runs=True)

    @classmethod
    def trace_diagnostics(cls) -> "RunnerConfig":
        """
        Return the shared configuration with detailed tracing enabled.

        Always the same instance, so test code and the runner share its events.
        """
        return TRACE_DIAGNOSTICS

    @classmethod
    def from_environment(
        cls, base: "RunnerConfig | None" = None, environ: Mapping[str, str] | None = None
    ) -> "RunnerConfig":
        """
        Apply environment overrides to a configuration.

        Tracing flags are only switched on, never off, by the environment.
        """
        from ..config.environment import get_environment_config

        env = get_environment_config(environ)
        return (base or cls.default()).with_(
            trace_number_of_runs=True if env.trace_number_of_runs else None,
            trace_diagnostics_enabled=True if env.trace_diagnostics else None,
        )

    def with_(
        self,
        trace_number_of_runs: bool | None = None,
        throw_on_failure: bool | None = None,
        trace_diagnostics_enabled: bool | None = None,
        events: TraceCallEvents | None = None,
        trace_writer: Callable[[str], None] | None = None,
    ) -> "RunnerConfig":
        """Return a new instance with the given fields; None keeps the current value."""
        overrides = {
            "trace_number_of_runs": trace_number_of_runs,
            "throw_on_failure": throw_on_failure,
            "trace_diagnostics_enabled": trace_diagnostics_enabled,
            "events": events,
            "trace_writer": trace_writer,
        }
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


TRACE_DIAGNOSTICS = RunnerConfig(trace_diagnostics_enabled=True)
