"""
Exception types raised by propcheck-kit.

Falsified properties surface as AssertionError subclasses so test runners
report them as ordinary test failures.
"""


class PropCheckError(Exception):
    """Base class for all propcheck-kit errors."""


class ConfigurationError(PropCheckError, ValueError):
    """Raised when a configuration record is built from invalid values."""


class PropertyFalsifiedError(PropCheckError, AssertionError):
    """Raised by a throwing engine runner when a property is falsified."""


class PropertyCheckError(PropCheckError, AssertionError):
    """
    Aggregated failure raised by the check entry points.

    Carries the tracing runner's report: counts, size, the shrunk
    counterexample in notation form, the causing exception and, when
    tracing was enabled, every trace line of the run.
    """
