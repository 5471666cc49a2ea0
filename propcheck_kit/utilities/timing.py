"""
Stopwatch used to time trials, shrinks and whole runs.
"""

import time


class Stopwatch:
    """Restartable stopwatch based on ``time.perf_counter``."""

    def __init__(self) -> None:
        self._started_at: float | None = None
        self._accumulated = 0.0

    @property
    def is_running(self) -> bool:
        """Check if the stopwatch is currently measuring."""
        return self._started_at is not None

    def start(self) -> None:
        """Start measuring, keeping any time already accumulated."""
        if self._started_at is None:
            self._started_at = time.perf_counter()

    def stop(self) -> None:
        """Stop measuring and keep the accumulated time."""
        if self._started_at is not None:
            self._accumulated += time.perf_counter() - self._started_at
            self._started_at = None

    def restart(self) -> None:
        """Reset the accumulated time and start measuring again."""
        self._accumulated = 0.0
        self._started_at = time.perf_counter()

    @property
    def elapsed_seconds(self) -> float:
        """Elapsed time in seconds."""
        if self._started_at is None:
            return self._accumulated
        return self._accumulated + (time.perf_counter() - self._started_at)

    @property
    def elapsed_ms(self) -> float:
        """Elapsed time in milliseconds."""
        return self.elapsed_seconds * 1000
