"""Environment configuration for propcheck-kit."""

from .environment import Environment, EnvironmentConfig, get_environment_config

__all__ = ["Environment", "EnvironmentConfig", "get_environment_config"]
