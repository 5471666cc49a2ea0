"""
Formatting utilities for trace and report messages.

Keeps the number formatting of elapsed times and counters consistent
between the tracing runner, the background reporter and the default runner.
"""

import traceback


def format_elapsed_ms(milliseconds: float) -> str:
    """Format elapsed milliseconds with thousands separators, e.g. ``1,234ms``."""
    return f"{int(milliseconds):,}ms"


def format_seconds(seconds: float) -> str:
    """Format seconds rounded to whole units with thousands separators."""
    return f"{seconds:,.0f}"


def pluralize(count: int, noun: str) -> str:
    """Return ``"<count> <noun>"`` with an ``s`` appended unless count is one."""
    return f"{count} {noun}{'' if count == 1 else 's'}"


def format_exception(exc: BaseException) -> str:
    """Format an exception with its traceback, without a trailing newline."""
    lines = traceback.format_exception(type(exc), exc, exc.__traceback__)
    return "".join(lines).rstrip("\n")
