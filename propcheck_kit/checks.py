"""
Check entry points.

Each entry point wraps the configured runner in a TracingRunner, attaches
it to the test for the duration of the run and translates a falsified run
into PropertyCheckError carrying the aggregated tracing message.
"""

import logging
from typing import Any

from .core.engine import check_one
from .core.property import Property
from .core.result import CheckResult
from .core.run_config import RunConfig
from .errors import PropertyCheckError, PropertyFalsifiedError
from .notation.config import NotationConfig
from .services.runner_config import RunnerConfig
from .services.tracing_runner import TracingRunner

logger = logging.getLogger(__name__)


def with_tracing_runner(
    config: RunConfig,
    notation_config: NotationConfig | None = None,
    runner_config: RunnerConfig | None = None,
    **overrides: Any,
) -> RunConfig:
    """
    Apply overrides to a configuration and wrap its runner in a TracingRunner.

    An already wrapped runner is unwrapped first, so calling this more than
    once never nests tracing runners. Its notation and runner configurations
    are kept unless new ones are given.

    Args:
        config: Configuration to modify
        notation_config: Rendering options for the failure report
        runner_config: Tracing configuration
        **overrides: Field overrides accepted by RunConfig.with_

    Returns:
        New configuration whose runner is a fresh TracingRunner
    """
    config = config.with_(**overrides)
    runner = config.runner

    if isinstance(runner, TracingRunner):
        notation_config = notation_config or runner.notation_config
        runner_config = runner_config or runner.runner_config
        runner = runner.runner_implementation

    tracing_runner = TracingRunner(
        runner_implementation=runner,
        runner_config=runner_config,
        notation_config=notation_config,
        max_test=config.max_test,
    )
    return config.with_(runner=tracing_runner)


def attach_to_test(config: RunConfig) -> RunConfig:
    """Attach the configuration's TracingRunner, if any, to the running test."""
    if isinstance(config.runner, TracingRunner):
        config.runner.attach_to_test()
    return config


def check(prop: Property, config: RunConfig | None = None) -> CheckResult:
    """Check a property with the given or default configuration."""
    config = config or RunConfig.from_environment(RunConfig.default())
    return _check_one(with_tracing_runner(config), prop)


def quick(prop: Property, config: RunConfig | None = None) -> CheckResult:
    """Check a property with the given or quick configuration."""
    config = config or RunConfig.from_environment(RunConfig.quick())
    return _check_one(with_tracing_runner(config), prop)


def verbose(prop: Property, config: RunConfig | None = None) -> CheckResult:
    """Check a property with the given or verbose configuration, tracing every trial and shrink."""
    config = config or RunConfig.from_environment(RunConfig.verbose())
    return _check_one(with_tracing_runner(config, runner_config=RunnerConfig.verbose()), prop)


def quick_check_throw_on_failure(
    prop: Property,
    notation_config: NotationConfig | None = None,
    runner_config: RunnerConfig | None = None,
    config: RunConfig | None = None,
    **overrides: Any,
) -> CheckResult:
    """
    Quick check raising PropertyCheckError when the property is falsified.

    Args:
        prop: Property to check
        notation_config: Rendering options for the shrunk arguments
        runner_config: Tracing configuration, throw_on_failure is forced on
        config: Base configuration, defaults to RunConfig.quick_throw_on_failure()
        **overrides: Field overrides accepted by RunConfig.with_

    Returns:
        Result of the passed check

    Raises:
        PropertyCheckError: If the property is falsified
    """
    config = config or RunConfig.from_environment(RunConfig.quick_throw_on_failure())
    runner_config = (runner_config or RunnerConfig.from_environment()).with_(throw_on_failure=True)
    return _check_one(with_tracing_runner(config, notation_config, runner_config, **overrides), prop)


def verbose_check_throw_on_failure(
    prop: Property,
    notation_config: NotationConfig | None = None,
    runner_config: RunnerConfig | None = None,
    config: RunConfig | None = None,
    **overrides: Any,
) -> CheckResult:
    """
    Verbose check raising PropertyCheckError when the property is falsified.

    Same arguments as quick_check_throw_on_failure; the configurations
    default to RunConfig.verbose_throw_on_failure() and RunnerConfig.verbose().
    """
    config = config or RunConfig.from_environment(RunConfig.verbose_throw_on_failure())
    runner_config = runner_config or RunnerConfig.from_environment(RunnerConfig.verbose())
    runner_config = runner_config.with_(throw_on_failure=True)
    return _check_one(with_tracing_runner(config, notation_config, runner_config, **overrides), prop)


def _check_one(config: RunConfig, prop: Property) -> CheckResult:
    runner = config.runner
    tracing_runner = runner if isinstance(runner, TracingRunner) else None

    try:
        attach_to_test(config)
        result = check_one(config.name, config, prop)
    except PropertyFalsifiedError as e:
        if tracing_runner is None:
            raise
        logger.error(f"Property {config.name or prop.name!r} falsified")
        raise PropertyCheckError(tracing_runner.get_exception_result()) from e
    finally:
        if tracing_runner is not None:
            tracing_runner.close()

    # The wrapped runner may be a non-throwing one
    if result.is_failed and tracing_runner is not None and tracing_runner.runner_config.throw_on_failure:
        logger.error(f"Property {config.name or prop.name!r} falsified")
        raise PropertyCheckError(tracing_runner.get_exception_result()) from result.exception

    return result
