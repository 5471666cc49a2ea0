"""
Environment-specific configuration for property checks.

Reads the PROPCHECK_* environment variables so a CI pipeline can raise the
trial count, replay a seed or switch on tracing without code changes.
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from ..errors import ConfigurationError
from ..utilities.constants import (
    CI_MAX_TEST,
    ENV_CI,
    ENV_ENVIRONMENT,
    ENV_MAX_TEST,
    ENV_SEED,
    ENV_TRACE_DIAGNOSTICS,
    ENV_TRACE_RUNS,
)
from ..utilities.validators import (
    parse_bool,
    parse_int,
    validate_non_negative_int,
    validate_positive_int,
)

logger = logging.getLogger(__name__)


class Environment(Enum):
    """Supported environments."""

    DEVELOPMENT = "development"
    CI = "ci"

    @classmethod
    def parse(cls, value: str) -> "Environment":
        """Parse an environment name, case-insensitively."""
        try:
            return cls(value.strip().lower())
        except ValueError as e:
            valid = ", ".join(env.value for env in cls)
            raise ConfigurationError(f"Unknown environment {value!r}, expected one of: {valid}") from e


@dataclass(frozen=True)
class EnvironmentConfig:
    """
    Overrides read from the environment.

    Attributes:
        environment: Detected environment
        max_test: Trial count override, None to keep the configured one
        seed: Replay seed, None for random runs
        trace_number_of_runs: Switch on per-trial tracing
        trace_diagnostics: Switch on detailed diagnostics
    """

    environment: Environment = Environment.DEVELOPMENT
    max_test: int | None = None
    seed: int | None = None
    trace_number_of_runs: bool = False
    trace_diagnostics: bool = False

    @property
    def is_ci(self) -> bool:
        return self.environment == Environment.CI


def get_environment_config(environ: Mapping[str, str] | None = None) -> EnvironmentConfig:
    """
    Read the environment configuration.

    Args:
        environ: Environment mapping, defaults to os.environ

    Returns:
        Parsed EnvironmentConfig

    Raises:
        ConfigurationError: If a variable holds an invalid value
    """
    environ = os.environ if environ is None else environ

    if ENV_ENVIRONMENT in environ:
        environment = Environment.parse(environ[ENV_ENVIRONMENT])
    elif environ.get(ENV_CI) and parse_bool(environ[ENV_CI], ENV_CI):
        environment = Environment.CI
    else:
        environment = Environment.DEVELOPMENT

    max_test = None
    if environ.get(ENV_MAX_TEST):
        max_test = parse_int(environ[ENV_MAX_TEST], ENV_MAX_TEST)
        validate_positive_int(max_test, ENV_MAX_TEST)
    elif environment == Environment.CI:
        max_test = CI_MAX_TEST

    seed = None
    if environ.get(ENV_SEED):
        seed = parse_int(environ[ENV_SEED], ENV_SEED)
        validate_non_negative_int(seed, ENV_SEED)

    config = EnvironmentConfig(
        environment=environment,
        max_test=max_test,
        seed=seed,
        trace_number_of_runs=parse_bool(environ.get(ENV_TRACE_RUNS, ""), ENV_TRACE_RUNS),
        trace_diagnostics=parse_bool(environ.get(ENV_TRACE_DIAGNOSTICS, ""), ENV_TRACE_DIAGNOSTICS),
    )
    logger.debug(f"Environment configuration: {config}")
    return config
