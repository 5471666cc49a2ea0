"""
Background elapsed-time reporter for detailed tracing.

A daemon thread wakes on a fixed cadence, traces the total elapsed time and
reports when instrumented test code has gone quiet. ActivityMonitor is the
only state shared with the run loop's thread.
"""

import logging
import threading
import time
from collections.abc import Callable

from ..utilities.constants import (
    MISSING_TRACE_CALLS_WARNING,
    REPORTER_INTERVAL_SECONDS,
    REPORTER_JOIN_TIMEOUT_SECONDS,
)
from ..utilities.formatters import format_elapsed_ms, format_seconds
from ..utilities.timing import Stopwatch

logger = logging.getLogger(__name__)


class ActivityMonitor:
    """
    Thread-safe record of trace call activity.

    Tracks whether generated/tested calls happened at all during the run,
    whether they happened since the reporter's previous tick, and when the
    latest generated call was seen.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._last_seen = time.monotonic()
        self.generated_hit = False
        self.tested_hit = False
        self.generated_since_last = False
        self.tested_since_last = False

    def record_generated(self) -> None:
        """Record a generated call and refresh the last activity time."""
        with self._lock:
            self.generated_hit = True
            self.generated_since_last = True
            self._last_seen = time.monotonic()

    def record_tested(self) -> None:
        """Record a tested call."""
        with self._lock:
            self.tested_hit = True
            self.tested_since_last = True

    @property
    def any_hit(self) -> bool:
        """Check if any generated or tested call was seen during the run."""
        with self._lock:
            return self.generated_hit or self.tested_hit

    @property
    def active_since_last(self) -> bool:
        """Check if both a generated and a tested call happened since the last reset."""
        with self._lock:
            return self.generated_since_last and self.tested_since_last

    def seconds_since_activity(self) -> float:
        """Seconds since the latest generated call, or since creation."""
        with self._lock:
            return time.monotonic() - self._last_seen

    def reset_since_last(self) -> None:
        """Start a new reporting interval."""
        with self._lock:
            self.generated_since_last = False
            self.tested_since_last = False


class ElapsedTimeReporter:
    """
    Daemon thread tracing elapsed time once per interval.

    Ticks are scheduled against the start time, so a slow trace writer does
    not make the cadence drift.
    """

    def __init__(
        self,
        trace: Callable[[str], None],
        total_timer: Stopwatch,
        activity: ActivityMonitor,
        interval: float = REPORTER_INTERVAL_SECONDS,
    ):
        """
        Initialize reporter.

        Args:
            trace: Sink for trace lines
            total_timer: Stopwatch measuring the whole run
            activity: Activity shared with the tracing runner
            interval: Seconds between ticks
        """
        self.trace = trace
        self.total_timer = total_timer
        self.activity = activity
        self.interval = interval
        self._cancel = threading.Event()
        self._thread: threading.Thread | None = None
        self._has_warned = False

    @property
    def is_running(self) -> bool:
        """Check if the background thread is alive."""
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the background thread."""
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._run, name="propcheck-time-reporter", daemon=True)
        self._thread.start()
        logger.debug("Elapsed time reporter started")

    def stop(self, timeout: float = REPORTER_JOIN_TIMEOUT_SECONDS) -> None:
        """Signal cancellation and wait for the thread, at most ``timeout`` seconds."""
        self._cancel.set()
        if self._thread is None:
            return
        self._thread.join(timeout)
        if self._thread.is_alive():
            logger.warning(f"Elapsed time reporter did not stop within {timeout}s")
        else:
            logger.debug("Elapsed time reporter stopped")

    def _run(self) -> None:
        first_run = True
        tick = 0
        started = time.monotonic()

        while True:
            tick += 1
            wait = max(0.001, started + tick * self.interval - time.monotonic())
            if self._cancel.wait(wait):
                break

            self.trace(f"time passed in total is now {format_elapsed_ms(self.total_timer.elapsed_ms)}")

            # Give the test one interval to start before reporting missing activity
            if not first_run:
                self._warn_about_missing_traces()

                if not self.activity.active_since_last:
                    seconds = format_seconds(self.activity.seconds_since_activity())
                    self.trace(f"--- {seconds} seconds have passed since any activity")

                self.activity.reset_since_last()

            first_run = False

        self._warn_about_missing_traces()

    def _warn_about_missing_traces(self) -> None:
        if self._has_warned or self.activity.any_hit:
            return
        self._has_warned = True
        logger.warning("No trace calls observed during the run")
        self.trace(MISSING_TRACE_CALLS_WARNING)
