"""
propcheck-kit - readable counterexamples and run tracing for Hypothesis.

This package provides:
- A notation serializer rendering shrunk counterexamples as construction expressions
- Immutable run and tracing configuration records with copy-on-write overrides
- A tracing runner decorator with optional diagnostics from instrumented tests
- Check entry points that raise one aggregated error on falsification
"""

__version__ = "1.0.0"
__description__ = "Readable counterexamples and run tracing for Hypothesis property checks"

from .checks import (
    attach_to_test,
    check,
    quick,
    quick_check_throw_on_failure,
    verbose,
    verbose_check_throw_on_failure,
    with_tracing_runner,
)
from .core import CheckResult, DefaultRunner, Outcome, Property, RunConfig, Runner, for_all
from .errors import (
    ConfigurationError,
    PropCheckError,
    PropertyCheckError,
    PropertyFalsifiedError,
)
from .notation import NotationConfig, NotationSerializer, serialize, serialize_each
from .services import RunnerConfig, TraceCallEvents, TracingRunner

__all__ = [
    "CheckResult",
    "ConfigurationError",
    "DefaultRunner",
    "NotationConfig",
    "NotationSerializer",
    "Outcome",
    "PropCheckError",
    "Property",
    "PropertyCheckError",
    "PropertyFalsifiedError",
    "RunConfig",
    "Runner",
    "RunnerConfig",
    "TraceCallEvents",
    "TracingRunner",
    "attach_to_test",
    "check",
    "for_all",
    "quick",
    "quick_check_throw_on_failure",
    "serialize",
    "serialize_each",
    "verbose",
    "verbose_check_throw_on_failure",
    "with_tracing_runner",
]
