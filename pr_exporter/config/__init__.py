"""Configuration for the pull request exporter.

Example usage:
    from pr_exporter.config import EnvironmentConfigLoader

    config = EnvironmentConfigLoader().load()
    repositories = config.repositories
"""

from .exceptions import (
    ConfigurationError,
    ConfigurationMissingError,
    ConfigurationValidationError,
)
from .loader import EnvironmentConfigLoader, parse_repositories
from .models import ExporterConfig, LogLevel

__all__ = [
    "ConfigurationError",
    "ConfigurationMissingError",
    "ConfigurationValidationError",
    "EnvironmentConfigLoader",
    "ExporterConfig",
    "LogLevel",
    "parse_repositories",
]
