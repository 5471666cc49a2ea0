"""
Pytest configuration and shared fixtures for propcheck-kit tests.

Registers the test category markers, isolates tests from PROPCHECK_*
environment overrides and provides recording runners and writers.
"""

import pytest
from hypothesis import settings

from propcheck_kit.notation import NotationConfig
from propcheck_kit.services import RunnerConfig

from .mocks.runners import RecordingRunner, RecordingWriter

ENVIRONMENT_VARIABLES = (
    "PROPCHECK_ENV",
    "PROPCHECK_MAX_TEST",
    "PROPCHECK_SEED",
    "PROPCHECK_TRACE_RUNS",
    "PROPCHECK_TRACE_DIAGNOSTICS",
    "CI",
)

# Property tests of the serializer itself stay fast
settings.register_profile("propcheck-dev", max_examples=50, deadline=None)
settings.load_profile("propcheck-dev")


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as unit test (fast, isolated)")
    config.addinivalue_line(
        "markers", "integration: mark test as integration test (runs full property checks)"
    )
    config.addinivalue_line("markers", "property: mark test as property-based test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on test location."""
    for item in items:
        # Add markers based on test file location
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        elif "property" in str(item.fspath):
            item.add_marker(pytest.mark.property)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Remove environment overrides so runs use the configured defaults."""
    for name in ENVIRONMENT_VARIABLES:
        monkeypatch.delenv(name, raising=False)


# Runner fixtures
@pytest.fixture
def recording_runner() -> RecordingRunner:
    """Create a runner recording every run event."""
    return RecordingRunner()


@pytest.fixture
def recording_writer() -> RecordingWriter:
    """Create a trace writer collecting lines."""
    return RecordingWriter()


# Configuration fixtures
@pytest.fixture
def named_notation() -> NotationConfig:
    """Notation configuration with parameter names."""
    return NotationConfig.default().with_parameter_names()


@pytest.fixture
def tracing_config(recording_writer) -> RunnerConfig:
    """Runner configuration tracing every run into the recording writer."""
    return RunnerConfig.verbose().with_(trace_writer=recording_writer)
