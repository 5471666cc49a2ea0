"""
Declarative property values.

A Property pairs a body with the arbitraries its arguments are drawn from.
Arbitraries are Hypothesis strategies or types; types are resolved through
the run configuration's ``arbitrary`` mapping and then ``st.from_type``.
"""

import typing
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from hypothesis import strategies as st
from hypothesis.strategies import SearchStrategy

from ..errors import ConfigurationError


class PropertyReturnedFalse(AssertionError):
    """Raised inside a trial when the property body returns False."""


class Property:
    """
    Property checked against generated arguments.

    The body is called with one positional argument per arbitrary. It fails
    by raising or by returning False; any other return value passes.
    """

    def __init__(self, body: Callable[..., Any], arbitraries: Sequence[Any]):
        """
        Initialize property.

        Args:
            body: Callable asserting the property
            arbitraries: Strategies or types, one per body argument
        """
        if not callable(body):
            raise ConfigurationError(f"Property body must be callable, got {body!r}")
        if not arbitraries:
            raise ConfigurationError("A property needs at least one arbitrary")

        self.body = body
        self.arbitraries = tuple(arbitraries)

    @property
    def name(self) -> str:
        """Name of the body, used when the run configuration has none."""
        return getattr(self.body, "__name__", type(self.body).__name__)

    def __repr__(self) -> str:
        return f"Property({self.name}, arbitraries={len(self.arbitraries)})"

    def strategy(self, arbitrary: Mapping[type, SearchStrategy] | None = None) -> SearchStrategy:
        """
        Build the strategy drawing one tuple of arguments per trial.

        Args:
            arbitrary: Per-type strategy overrides

        Returns:
            Strategy of argument tuples
        """
        return st.tuples(*(_resolve(item, arbitrary or {}) for item in self.arbitraries))

    def evaluate(self, args: Sequence[Any]) -> None:
        """Run the body once; raises PropertyReturnedFalse if it returns False."""
        if self.body(*args) is False:
            raise PropertyReturnedFalse(f"Property {self.name} returned False")

    # Entry points mirroring the module-level functions in propcheck_kit.checks

    def check(self, config=None):
        """Check with the given or default configuration."""
        from ..checks import check

        return check(self, config)

    def quick(self, config=None):
        """Check with the given or quick configuration."""
        from ..checks import quick

        return quick(self, config)

    def verbose(self, config=None):
        """Check with the given or verbose configuration, tracing every run."""
        from ..checks import verbose

        return verbose(self, config)

    def quick_check_throw_on_failure(self, notation_config=None, runner_config=None, config=None, **overrides):
        """Quick check raising PropertyCheckError on failure."""
        from ..checks import quick_check_throw_on_failure

        return quick_check_throw_on_failure(self, notation_config, runner_config, config, **overrides)

    def verbose_check_throw_on_failure(self, notation_config=None, runner_config=None, config=None, **overrides):
        """Verbose check raising PropertyCheckError on failure."""
        from ..checks import verbose_check_throw_on_failure

        return verbose_check_throw_on_failure(self, notation_config, runner_config, config, **overrides)


def for_all(*arbitraries: Any) -> Any:
    """
    Build a property from arbitraries and a body.

    Used either as ``for_all(st.integers(), lambda x: ...)`` or as a
    decorator ``@for_all(st.integers())``.
    """
    if arbitraries and _is_body(arbitraries[-1]):
        return Property(arbitraries[-1], arbitraries[:-1])

    def decorator(body: Callable[..., Any]) -> Property:
        return Property(body, arbitraries)

    return decorator


def _is_body(candidate: Any) -> bool:
    if isinstance(candidate, (type, SearchStrategy)):
        return False
    # Parameterized aliases such as list[int] are callable but are arbitraries
    if typing.get_origin(candidate) is not None:
        return False
    return callable(candidate)


def _resolve(item: Any, arbitrary: Mapping[type, SearchStrategy]) -> SearchStrategy:
    if isinstance(item, SearchStrategy):
        return item
    if item in arbitrary:
        return arbitrary[item]
    if isinstance(item, type) or typing.get_origin(item) is not None:
        return st.from_type(item)
    raise ConfigurationError(f"Cannot build a strategy from {item!r}")
