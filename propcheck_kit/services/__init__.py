"""
Services package for propcheck-kit.

Provides the tracing runner decorator, its configuration and the
background elapsed-time reporter.
"""

from .runner_config import TRACE_DIAGNOSTICS, RunnerConfig, TraceCallEvents
from .time_reporter import ActivityMonitor, ElapsedTimeReporter
from .tracing_runner import TracingRunner

__all__ = [
    "TRACE_DIAGNOSTICS",
    "ActivityMonitor",
    "ElapsedTimeReporter",
    "RunnerConfig",
    "TraceCallEvents",
    "TracingRunner",
]
