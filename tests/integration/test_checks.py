"""
Integration tests running properties through Hypothesis.

Covers the engine run loop, the run events it emits and the check entry
points with their tracing runner plumbing.
"""

import pytest
from hypothesis import assume
from hypothesis import strategies as st
from hypothesis.errors import Flaky, HypothesisException

from propcheck_kit import (
    DefaultRunner,
    NotationConfig,
    PropertyCheckError,
    PropertyFalsifiedError,
    RunConfig,
    RunnerConfig,
    TracingRunner,
    attach_to_test,
    check,
    for_all,
    quick,
    quick_check_throw_on_failure,
    verbose,
    verbose_check_throw_on_failure,
    with_tracing_runner,
)
from propcheck_kit.core.engine import check_one
from propcheck_kit.core.run_config import verbose_every
from propcheck_kit.errors import ConfigurationError

from ..fixtures.models import Reading
from ..mocks import RecordingRunner, RecordingWriter

readings = st.builds(Reading, st.sampled_from(["dev1", "dev2"]), st.integers(min_value=0, max_value=1000))


def recording_config(max_test: int = 30, **overrides) -> tuple[RunConfig, RecordingRunner]:
    runner = RecordingRunner()
    return RunConfig.quick().with_(max_test=max_test, runner=runner, **overrides), runner


def small_numbers(x: int) -> bool:
    return x < 10


class TestEngine:
    """Test cases for the engine run loop."""

    def test_passing_property(self):
        config, runner = recording_config()
        result = check_one("ints", config, for_all(st.integers(), lambda x: isinstance(x, int)))

        assert not result.is_failed
        assert 0 < result.num_tests <= 30
        assert runner.names()[0] == "start"
        assert runner.names()[-1] == "finished"
        assert runner.count("arguments") == result.num_tests
        assert runner.count("shrink") == 0

    def test_trial_numbers_are_sequential(self):
        config, runner = recording_config(max_test=10)
        check_one("", config, for_all(st.integers(), lambda x: True))
        numbers = [event[1] for event in runner.events if event[0] == "arguments"]
        assert numbers == list(range(1, len(numbers) + 1))

    def test_falsified_by_false_return(self):
        config, runner = recording_config(max_test=200)
        result = check_one("", config, for_all(st.integers(min_value=0), small_numbers))

        assert result.is_failed
        assert result.shrunk_args == (10,)
        assert result.original_args[0] >= 10
        assert result.exception is None
        assert runner.count("shrink") == result.num_shrinks
        assert runner.count("arguments") == result.num_tests

    def test_shrinks_follow_trials(self):
        config, runner = recording_config(max_test=200)
        check_one("", config, for_all(st.integers(min_value=0), small_numbers))

        names = runner.names()
        last_trial = max(i for i, name in enumerate(names) if name == "arguments")
        assert all(name != "arguments" for name in names[last_trial + 1 :])

    def test_falsified_by_exception(self):
        def divides(x):
            return 1 // (x - x)

        config, _ = recording_config()
        result = check_one("", config, for_all(st.integers(), divides))

        assert result.is_failed
        assert isinstance(result.exception, ZeroDivisionError)
        assert result.shrunk_args == (0,)

    def test_assumptions_do_not_fail(self):
        def positive_only(x):
            assume(x > 0)
            return x > 0

        config, _ = recording_config()
        assert not check_one("", config, for_all(st.integers(), positive_only)).is_failed

    def test_unsatisfiable_propagates(self):
        def never(x):
            assume(False)

        config, _ = recording_config()
        with pytest.raises(HypothesisException):
            check_one("", config, for_all(st.integers(), never))

    def test_flaky_failure_propagates(self):
        calls = {"n": 0}

        def fails_on_third_call(x):
            calls["n"] += 1
            assert calls["n"] != 3

        config, runner = recording_config()
        with pytest.raises(Flaky):
            check_one("", config, for_all(st.integers(), fails_on_third_call))
        assert runner.count("finished") == 0

    def test_replay_is_deterministic(self):
        first_config, first = recording_config(max_test=15, replay=1234)
        second_config, second = recording_config(max_test=15, replay=1234)
        prop = for_all(st.integers(), lambda x: True)

        check_one("", first_config, prop)
        check_one("", second_config, prop)

        assert first.events == second.events

    def test_result_reports_size_schedule(self):
        config, _ = recording_config(max_test=10, start_size=100, end_size=100)
        assert check_one("", config, for_all(st.integers(), lambda x: True)).size == 100

    def test_every_output_through_default_runner(self):
        writer = RecordingWriter()
        config = RunConfig.verbose().with_(max_test=3, runner=DefaultRunner(writer=writer))
        check_one("", config, for_all(st.just(5), lambda x: True))

        assert writer.snapshot()[0] == "1:\n5"
        assert writer.snapshot()[-1].startswith("Ok, passed")

    def test_throwing_default_runner(self):
        runner = DefaultRunner(raise_on_failure=True, writer=RecordingWriter())
        config = RunConfig.quick_throw_on_failure().with_(runner=runner)
        with pytest.raises(PropertyFalsifiedError, match="Falsifiable"):
            check_one("", config, for_all(st.integers(min_value=0), small_numbers))


class TestProperty:
    """Test cases for property construction."""

    def test_decorator_form(self):
        @for_all(st.integers(), st.text())
        def concatenation_length(number, text):
            return len(f"{number}{text}") >= len(text)

        config, runner = recording_config(max_test=5)
        assert not check_one("", config, concatenation_length).is_failed
        assert len(runner.events[1][2]) == 2
        assert concatenation_length.name == "concatenation_length"

    def test_types_resolve_through_arbitrary(self):
        config, runner = recording_config(max_test=5, arbitrary={Reading: readings})
        check_one("", config, for_all(Reading, lambda reading: reading.device_id in ("dev1", "dev2")))
        assert all(isinstance(event[2][0], Reading) for event in runner.events if event[0] == "arguments")

    def test_builtin_types_resolve_with_from_type(self):
        config, _ = recording_config(max_test=5)
        assert not check_one("", config, for_all(int, lambda x: isinstance(x, int))).is_failed

    def test_invalid_arbitraries(self):
        with pytest.raises(ConfigurationError):
            for_all(lambda x: True)
        with pytest.raises(ConfigurationError):
            config, _ = recording_config()
            check_one("", config, for_all(42, lambda x: True))


class TestTracingRunnerWiring:
    """Test cases for with_tracing_runner and attach_to_test."""

    def test_wraps_runner(self):
        inner = RecordingRunner()
        config = with_tracing_runner(RunConfig.quick().with_(runner=inner), max_test=5)

        assert isinstance(config.runner, TracingRunner)
        assert config.runner.runner_implementation is inner
        assert config.runner.max_test == 5
        assert config.max_test == 5

    def test_rewrapping_unwraps_and_keeps_configs(self):
        inner = RecordingRunner()
        notation = NotationConfig.default().with_parameter_names()
        tracing = RunnerConfig.verbose()

        once = with_tracing_runner(RunConfig.quick().with_(runner=inner), notation, tracing)
        twice = with_tracing_runner(once)

        assert twice.runner is not once.runner
        assert twice.runner.runner_implementation is inner
        assert twice.runner.notation_config is notation
        assert twice.runner.runner_config is tracing

    def test_new_configs_replace_wrapped_ones(self):
        once = with_tracing_runner(RunConfig.quick(), runner_config=RunnerConfig.verbose())
        twice = with_tracing_runner(once, runner_config=RunnerConfig.default())
        assert not twice.runner.runner_config.trace_number_of_runs

    def test_attach_to_test(self):
        runner_config = RunnerConfig(trace_diagnostics_enabled=True, trace_writer=RecordingWriter())
        config = attach_to_test(with_tracing_runner(RunConfig.quick(), runner_config=runner_config))

        assert runner_config.events.listener is config.runner
        config.runner.close()
        assert runner_config.events.listener is None

    def test_attach_without_tracing_runner(self):
        config = RunConfig.quick()
        assert attach_to_test(config) is config


class TestCheckEntryPoints:
    """Test cases for the check entry points."""

    def test_quick_passes(self):
        config, runner = recording_config()
        result = quick(for_all(st.integers(), lambda x: True), config)
        assert not result.is_failed
        assert runner.names()[-1] == "finished"

    def test_check_returns_failed_result_without_throwing(self):
        config, _ = recording_config(max_test=200)
        result = check(for_all(st.integers(min_value=0), small_numbers), config)
        assert result.is_failed

    def test_quick_uses_environment_without_config(self, monkeypatch, capsys):
        monkeypatch.setenv("PROPCHECK_MAX_TEST", "4")
        result = quick(for_all(st.integers(), lambda x: True))
        assert result.num_tests <= 4
        assert "Ok, passed" in capsys.readouterr().out

    def test_verbose_traces_runs(self, capsys):
        config, _ = recording_config(max_test=3)
        verbose(for_all(st.integers(), lambda x: True), config)
        assert "Ran test: 1 / 3 in " in capsys.readouterr().out

    def test_quick_check_throw_on_failure(self):
        writer = RecordingWriter()
        prop = for_all(st.integers(min_value=0), small_numbers)

        with pytest.raises(PropertyCheckError) as exc_info:
            quick_check_throw_on_failure(prop, runner_config=RunnerConfig(trace_writer=writer), max_test=200)

        message = str(exc_info.value)
        assert message.startswith("Falsifiable, after ")
        assert "Shrunk:\nvar data = 10;" in message
        assert isinstance(exc_info.value.__cause__, PropertyFalsifiedError)
        assert isinstance(exc_info.value, AssertionError)
        assert writer.snapshot() == []

    def test_counterexample_in_notation(self):
        prop = for_all(st.lists(readings, min_size=1), lambda items: all(r.value < 500 for r in items))

        with pytest.raises(PropertyCheckError) as exc_info:
            quick_check_throw_on_failure(
                prop, NotationConfig.default().with_parameter_names(), max_test=200
            )

        assert 'Shrunk:\nvar data = new[] {\n  new Reading(device_id: "dev1", value: 500)\n};' in str(
            exc_info.value
        )

    def test_exception_in_message(self):
        def fails(x):
            raise KeyError("missing")

        with pytest.raises(PropertyCheckError, match="with exception:") as exc_info:
            quick_check_throw_on_failure(for_all(st.integers(), fails))

        assert "KeyError: 'missing'" in str(exc_info.value)

    def test_throws_even_with_non_throwing_runner(self):
        config, runner = recording_config(max_test=200)
        prop = for_all(st.integers(min_value=0), small_numbers)

        with pytest.raises(PropertyCheckError):
            quick_check_throw_on_failure(prop, config=config)
        assert runner.results[0].is_failed

    def test_verbose_check_throw_on_failure_includes_trace(self):
        writer = RecordingWriter()
        prop = for_all(st.integers(min_value=0), small_numbers)

        with pytest.raises(PropertyCheckError) as exc_info:
            verbose_check_throw_on_failure(
                prop,
                runner_config=RunnerConfig.verbose().with_(trace_writer=writer),
                config=RunConfig.quick_throw_on_failure().with_(max_test=200),
            )

        message = str(exc_info.value)
        assert "\nwith trace messages:\nRan test: 1 / 200 in " in message
        assert writer.matching("Failed test: ")

    def test_passing_check_does_not_throw(self):
        prop = for_all(st.booleans(), lambda b: b in (True, False))
        result = quick_check_throw_on_failure(prop, max_test=10)
        assert not result.is_failed

    def test_other_errors_propagate_unchanged(self):
        def never(x):
            assume(False)

        with pytest.raises(HypothesisException):
            quick_check_throw_on_failure(for_all(st.integers(), never))

    def test_flaky_failure_is_not_reported_as_falsified(self):
        calls = {"n": 0}

        def fails_on_third_call(x):
            calls["n"] += 1
            assert calls["n"] != 3

        with pytest.raises(Flaky):
            quick_check_throw_on_failure(for_all(st.integers(), fails_on_third_call))

    def test_property_methods(self):
        prop = for_all(st.integers(min_value=0), small_numbers)
        with pytest.raises(PropertyCheckError):
            prop.quick_check_throw_on_failure(max_test=200)

        config, _ = recording_config()
        assert not for_all(st.integers(), lambda x: True).check(config).is_failed

    def test_verbose_every_callback_receives_arguments(self):
        seen = []

        def every(num_test, args):
            seen.append((num_test, tuple(args)))
            return verbose_every(num_test, args)

        runner = DefaultRunner(writer=RecordingWriter())
        config = RunConfig.verbose().with_(max_test=3, every=every, runner=runner)
        quick(for_all(st.just(1), lambda x: True), config)
        assert seen[0] == (1, (1,))
