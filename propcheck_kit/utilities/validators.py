"""
Input validation utilities.

This module provides validation functions for configuration values with
errors raised as ConfigurationError.
"""

from ..errors import ConfigurationError


def validate_positive_int(value: int, name: str) -> None:
    """Validate that a value is a positive integer."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")


def validate_non_negative_int(value: int, name: str) -> None:
    """Validate that a value is an integer greater than or equal to zero."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise ConfigurationError(f"{name} cannot be negative, got {value}")


def parse_bool(value: str, name: str) -> bool:
    """Parse a boolean flag from its textual form."""
    normalized = value.strip().lower()
    if normalized in ("1", "true", "yes", "on"):
        return True
    if normalized in ("0", "false", "no", "off", ""):
        return False
    raise ConfigurationError(f"{name} must be a boolean flag, got {value!r}")


def parse_int(value: str, name: str) -> int:
    """Parse an integer, raising ConfigurationError on malformed input."""
    try:
        return int(value.strip())
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from e
