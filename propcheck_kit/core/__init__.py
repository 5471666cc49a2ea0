"""
Engine facade over Hypothesis.

Run configuration, declarative properties, run-event protocols and the
single run loop that drives Hypothesis.
"""

from .default_runner import DefaultRunner, format_failure_report
from .engine import check_one
from .property import Property, PropertyReturnedFalse, for_all
from .result import CheckResult, Outcome
from .run_config import RunConfig
from .types import Runner, TraceListener

__all__ = [
    "CheckResult",
    "DefaultRunner",
    "Outcome",
    "Property",
    "PropertyReturnedFalse",
    "RunConfig",
    "Runner",
    "TraceListener",
    "check_one",
    "for_all",
    "format_failure_report",
]
