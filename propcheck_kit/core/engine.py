"""
Engine run loop on top of Hypothesis.

Runs a Property through ``hypothesis.given`` and turns Hypothesis's
generate/shrink/replay cycle into run events: one ``on_arguments`` per
generated trial, one ``on_shrink`` per successful shrink step and a final
``on_finished`` carrying the CheckResult. The final replay of the minimal
example is not reported as an event.
"""

import logging
from dataclasses import dataclass
from typing import Any

from hypothesis import given, seed
from hypothesis.control import current_build_context
from hypothesis.errors import UnsatisfiedAssumption

from .property import Property, PropertyReturnedFalse
from .result import CheckResult
from .run_config import RunConfig

logger = logging.getLogger(__name__)


@dataclass
class _RunState:
    """Mutable bookkeeping for one check, owned by the run loop."""

    num_tests: int = 0
    num_shrinks: int = 0
    size: int = 0
    falsified: bool = False
    original_args: tuple[Any, ...] = ()
    shrunk_args: tuple[Any, ...] = ()
    exception: BaseException | None = None


def check_one(name: str, config: RunConfig, prop: Property) -> CheckResult:
    """
    Check one property and report the run to the configured runner.

    Args:
        name: Property name passed to the runner
        config: Run configuration
        prop: Property to check

    Returns:
        Result of the check; a falsified result is returned unless the
        runner raises from on_finished

    Raises:
        Any Hypothesis error that is not a falsification (unsatisfiable
        assumptions, failed health checks, flaky failures whose minimal
        example passes on replay) propagates unchanged.
    """
    runner = config.runner
    state = _RunState()

    def trial(args: tuple[Any, ...]) -> None:
        if current_build_context().is_final:
            _run_final(prop, args, state)
        elif state.falsified:
            _run_shrink(prop, args, state, config, runner)
        else:
            _run_generated(prop, args, state, config, runner)

    test = config.to_settings()(given(prop.strategy(config.arbitrary))(trial))
    if config.replay is not None:
        test = seed(config.replay)(test)

    logger.info(f"Checking property {name or prop.name!r} with up to {config.max_test} tests")
    runner.on_start_fixture(name)

    try:
        test()
    except Exception as e:
        # Only the failure raised by the final replay is a falsification
        if not state.falsified or e is not state.exception:
            raise
        result = CheckResult.falsified(
            num_tests=state.num_tests,
            num_shrinks=state.num_shrinks,
            size=state.size,
            original_args=state.original_args,
            shrunk_args=state.shrunk_args,
            exception=None if isinstance(e, PropertyReturnedFalse) else e,
            seed=config.replay,
        )
    else:
        result = CheckResult.passed(state.num_tests, size=state.size, seed=config.replay)

    logger.debug(f"Check finished: {result.to_dict()}")
    runner.on_finished(name, result)
    return result


def _run_generated(prop, args, state, config, runner) -> None:
    state.num_tests += 1
    state.size = config.size_for(state.num_tests)
    runner.on_arguments(state.num_tests, args, config.every)
    try:
        prop.evaluate(args)
    except UnsatisfiedAssumption:
        raise
    except Exception as e:
        logger.debug(f"Trial {state.num_tests} failed: {e!r}")
        state.falsified = True
        state.original_args = args
        state.shrunk_args = args
        state.exception = e
        raise


def _run_shrink(prop, args, state, config, runner) -> None:
    try:
        prop.evaluate(args)
    except UnsatisfiedAssumption:
        raise
    except Exception as e:
        state.num_shrinks += 1
        state.shrunk_args = args
        state.exception = e
        runner.on_shrink(args, config.every_shrink)
        raise


def _run_final(prop, args, state) -> None:
    try:
        prop.evaluate(args)
    except Exception as e:
        state.shrunk_args = args
        state.exception = e
        raise
