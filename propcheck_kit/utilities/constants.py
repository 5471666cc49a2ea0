"""
Constants shared across propcheck-kit.

Defaults mirror the run parameters of the wrapped engine so that a
configuration built without overrides behaves like a plain Hypothesis run.
"""

# Run defaults
DEFAULT_MAX_TEST = 100
DEFAULT_START_SIZE = 1
DEFAULT_END_SIZE = 100
CI_MAX_TEST = 200

# Notation rendering
INDENT_UNIT = "  "
LINE_SEPARATOR = "\n"
SINGLE_BINDING_NAME = "data"

# Background reporter
REPORTER_INTERVAL_SECONDS = 1.0
REPORTER_JOIN_TIMEOUT_SECONDS = 5.0

# Environment variables
ENV_ENVIRONMENT = "PROPCHECK_ENV"
ENV_MAX_TEST = "PROPCHECK_MAX_TEST"
ENV_SEED = "PROPCHECK_SEED"
ENV_TRACE_RUNS = "PROPCHECK_TRACE_RUNS"
ENV_TRACE_DIAGNOSTICS = "PROPCHECK_TRACE_DIAGNOSTICS"
ENV_CI = "CI"

MISSING_TRACE_CALLS_WARNING = (
    "--- No calls to trace call functions, make sure your code is instrumented "
    "with the functions from RunnerConfig.trace_diagnostics().events"
)
