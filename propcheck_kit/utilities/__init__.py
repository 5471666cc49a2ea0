"""
Utilities package for propcheck-kit.

Shared constants, formatting helpers, input validation and timing used by
the runners and configuration records.
"""

from .constants import (
    DEFAULT_END_SIZE,
    DEFAULT_MAX_TEST,
    DEFAULT_START_SIZE,
    INDENT_UNIT,
    REPORTER_INTERVAL_SECONDS,
)
from .formatters import format_elapsed_ms, format_exception, format_seconds, pluralize
from .timing import Stopwatch
from .validators import validate_non_negative_int, validate_positive_int

__all__ = [
    # Constants
    "DEFAULT_END_SIZE",
    "DEFAULT_MAX_TEST",
    "DEFAULT_START_SIZE",
    "INDENT_UNIT",
    "REPORTER_INTERVAL_SECONDS",
    # Formatting
    "format_elapsed_ms",
    "format_exception",
    "format_seconds",
    "pluralize",
    # Timing
    "Stopwatch",
    # Validation
    "validate_non_negative_int",
    "validate_positive_int",
]
