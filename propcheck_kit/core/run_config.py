"""
RunConfig value object for the wrapped engine.

Bridges optional named overrides onto Hypothesis settings: every field
defaults to the current value when a ``with_`` override is absent, and
``to_settings`` produces the Hypothesis settings object for one run.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from datetime import timedelta
from typing import Any

from hypothesis import HealthCheck, Phase, settings
from hypothesis.strategies import SearchStrategy

from ..errors import ConfigurationError
from ..utilities.constants import DEFAULT_END_SIZE, DEFAULT_MAX_TEST, DEFAULT_START_SIZE
from ..utilities.validators import validate_non_negative_int, validate_positive_int
from .default_runner import DefaultRunner
from .types import EveryCallback, EveryShrinkCallback, Runner

# The explain phase re-executes the failing test with variations, which would
# surface as shrink events after the minimal example was found.
RUN_PHASES = (Phase.explicit, Phase.reuse, Phase.generate, Phase.target, Phase.shrink)


def quiet_every(num_test: int, args: Sequence[Any]) -> str:
    """Per-trial output of the quick configurations: nothing."""
    return ""


def quiet_every_shrink(args: Sequence[Any]) -> str:
    """Per-shrink output of the quick configurations: nothing."""
    return ""


def verbose_every(num_test: int, args: Sequence[Any]) -> str:
    """Per-trial output of the verbose configurations: trial number and arguments."""
    return "\n".join([f"{num_test}:", *(repr(arg) for arg in args)])


def verbose_every_shrink(args: Sequence[Any]) -> str:
    """Per-shrink output of the verbose configurations: the shrunk arguments."""
    return "\n".join(["shrink:", *(repr(arg) for arg in args)])


@dataclass(frozen=True)
class RunConfig:
    """
    Immutable run configuration for property checks.

    Attributes:
        max_test: Number of generated trials (Hypothesis max_examples)
        name: Property name used in reports
        replay: Seed to replay a previous run, None for a random run
        start_size: Size reported for the first trial
        end_size: Size reported for the last trial
        every: Called with the trial number and arguments before each trial
        every_shrink: Called with the arguments of each successful shrink
        arbitrary: Strategies used for property arguments declared as types
        runner: Run-event sink
        deadline: Per-trial Hypothesis deadline, None to disable
        suppress_health_check: Hypothesis health checks to suppress
    """

    max_test: int = DEFAULT_MAX_TEST
    name: str = ""
    replay: int | None = None
    start_size: int = DEFAULT_START_SIZE
    end_size: int = DEFAULT_END_SIZE
    every: EveryCallback = quiet_every
    every_shrink: EveryShrinkCallback = quiet_every_shrink
    arbitrary: Mapping[type, SearchStrategy] = field(default_factory=dict)
    runner: Runner = field(default_factory=DefaultRunner)
    deadline: timedelta | None = None
    suppress_health_check: tuple[HealthCheck, ...] = (HealthCheck.too_slow,)

    def __post_init__(self):
        """Validate configuration after initialization."""
        validate_positive_int(self.max_test, "max_test")
        validate_non_negative_int(self.start_size, "start_size")
        validate_non_negative_int(self.end_size, "end_size")
        if self.end_size < self.start_size:
            raise ConfigurationError(
                f"end_size ({self.end_size}) cannot be smaller than start_size ({self.start_size})"
            )
        if self.replay is not None:
            validate_non_negative_int(self.replay, "replay")
        if not isinstance(self.runner, Runner):
            raise ConfigurationError(f"runner does not implement the Runner protocol: {self.runner!r}")

    @classmethod
    def default(cls) -> "RunConfig":
        """Return the default configuration."""
        return cls()

    @classmethod
    def quick(cls) -> "RunConfig":
        """Return the quick configuration: no per-trial output."""
        return cls()

    @classmethod
    def quick_throw_on_failure(cls) -> "RunConfig":
        """Return the quick configuration whose runner raises on failure."""
        return cls(runner=DefaultRunner(raise_on_failure=True))

    @classmethod
    def verbose(cls) -> "RunConfig":
        """Return the verbose configuration: every trial and shrink is printed."""
        return cls(every=verbose_every, every_shrink=verbose_every_shrink)

    @classmethod
    def verbose_throw_on_failure(cls) -> "RunConfig":
        """Return the verbose configuration whose runner raises on failure."""
        return cls(
            every=verbose_every,
            every_shrink=verbose_every_shrink,
            runner=DefaultRunner(raise_on_failure=True),
        )

    @classmethod
    def from_environment(
        cls, base: "RunConfig | None" = None, environ: Mapping[str, str] | None = None
    ) -> "RunConfig":
        """
        Apply environment overrides to a configuration.

        Args:
            base: Configuration to override, defaults to RunConfig.quick()
            environ: Environment mapping, defaults to os.environ

        Returns:
            Configuration with trial count and seed taken from the environment
        """
        from ..config.environment import get_environment_config

        env = get_environment_config(environ)
        return (base or cls.quick()).with_(max_test=env.max_test, replay=env.seed)

    def with_(
        self,
        max_test: int | None = None,
        name: str | None = None,
        replay: int | None = None,
        start_size: int | None = None,
        end_size: int | None = None,
        every: EveryCallback | None = None,
        every_shrink: EveryShrinkCallback | None = None,
        arbitrary: Mapping[type, SearchStrategy] | None = None,
        runner: Runner | None = None,
        deadline: timedelta | None = None,
        suppress_health_check: Sequence[HealthCheck] | None = None,
    ) -> "RunConfig":
        """Return a new instance with the given fields; None keeps the current value."""
        overrides = {
            "max_test": max_test,
            "name": name,
            "replay": replay,
            "start_size": start_size,
            "end_size": end_size,
            "every": every,
            "every_shrink": every_shrink,
            "arbitrary": dict(arbitrary) if arbitrary is not None else None,
            "runner": runner,
            "deadline": deadline,
            "suppress_health_check": (
                tuple(suppress_health_check) if suppress_health_check is not None else None
            ),
        }
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def size_for(self, num_test: int) -> int:
        """
        Size reported for a trial, growing linearly from start_size to end_size.

        Args:
            num_test: One-based trial number

        Returns:
            Size for the trial, clamped to end_size
        """
        if self.max_test <= 1 or num_test <= 1:
            return self.start_size
        step = (self.end_size - self.start_size) * (num_test - 1) // (self.max_test - 1)
        return min(self.start_size + step, self.end_size)

    def to_settings(self) -> settings:
        """
        Build the Hypothesis settings for one run.

        The active Hypothesis profile is the parent, so registered profiles
        still apply to anything not set here. The example database is
        disabled and only one failure is reported.
        """
        return settings(
            max_examples=self.max_test,
            deadline=self.deadline,
            database=None,
            phases=RUN_PHASES,
            report_multiple_bugs=False,
            suppress_health_check=list(self.suppress_health_check),
        )
