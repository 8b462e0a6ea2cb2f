"""Configuration loading from the process environment.

The exporter is configured exclusively through environment variables:

    GITHUB_TOKEN             required, bearer token for the GitHub API
    GITHUB_REPOSITORIES      required, comma-separated owner/name list
    POLL_INTERVAL_SECONDS    optional, defaults to 300
    METRICS_HOST             optional, defaults to 0.0.0.0
    METRICS_PORT             optional, defaults to 8080
    GITHUB_API_URL           optional, defaults to https://api.github.com
    GITHUB_REQUEST_TIMEOUT   optional, defaults to 30
    EXPORTER_FAIL_FAST       optional, defaults to true
    LOG_LEVEL                optional, defaults to INFO
"""

import os
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from .exceptions import ConfigurationMissingError, ConfigurationValidationError
from .models import DEFAULT_POLL_INTERVAL_SECONDS, ExporterConfig

TOKEN_VAR = "GITHUB_TOKEN"  # nosec B105
REPOSITORIES_VAR = "GITHUB_REPOSITORIES"
POLL_INTERVAL_VAR = "POLL_INTERVAL_SECONDS"
METRICS_HOST_VAR = "METRICS_HOST"
METRICS_PORT_VAR = "METRICS_PORT"
API_URL_VAR = "GITHUB_API_URL"
REQUEST_TIMEOUT_VAR = "GITHUB_REQUEST_TIMEOUT"
FAIL_FAST_VAR = "EXPORTER_FAIL_FAST"
LOG_LEVEL_VAR = "LOG_LEVEL"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def parse_repositories(raw: str) -> list[str]:
    """Split a comma-separated repository list into owner/name tokens.

    Tokens are stripped and blanks dropped. A repository listed twice is
    kept once, at its first position.
    """
    tokens = (token.strip() for token in raw.split(","))
    return list(dict.fromkeys(token for token in tokens if token))


class EnvironmentConfigLoader:
    """Reads and validates exporter settings from environment variables."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        """Initialize the loader.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.
        """
        self._environ = environ if environ is not None else os.environ

    def _get(self, name: str) -> str | None:
        value = self._environ.get(name)
        if value is None or not value.strip():
            return None
        return value.strip()

    def _require(self, name: str) -> str:
        value = self._get(name)
        if value is None:
            raise ConfigurationMissingError(name)
        return value

    def _get_int(self, name: str) -> int | None:
        value = self._get(name)
        if value is None:
            return None
        try:
            return int(value)
        except ValueError as e:
            raise ConfigurationValidationError(
                f"Environment variable {name} must be an integer, got {value!r}",
                variable=name,
            ) from e

    def _get_bool(self, name: str) -> bool | None:
        value = self._get(name)
        if value is None:
            return None
        lowered = value.lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise ConfigurationValidationError(
            f"Environment variable {name} must be a boolean, got {value!r}",
            variable=name,
        )

    def read_credential(self) -> str:
        """Read the GitHub token.

        Raises:
            ConfigurationMissingError: If the variable is unset or empty
        """
        return self._require(TOKEN_VAR)

    def read_collections(self) -> str:
        """Read the raw comma-separated repository list.

        Raises:
            ConfigurationMissingError: If the variable is unset or empty
        """
        return self._require(REPOSITORIES_VAR)

    def read_poll_interval(self) -> int:
        """Read the poll interval in seconds, falling back to the default.

        Raises:
            ConfigurationValidationError: If the value is not a positive integer
        """
        interval = self._get_int(POLL_INTERVAL_VAR)
        if interval is None:
            return DEFAULT_POLL_INTERVAL_SECONDS
        if interval <= 0:
            raise ConfigurationValidationError(
                f"Environment variable {POLL_INTERVAL_VAR} must be positive, "
                f"got {interval}",
                variable=POLL_INTERVAL_VAR,
            )
        return interval

    def load(self) -> ExporterConfig:
        """Load the full configuration.

        Returns:
            Validated, immutable exporter configuration

        Raises:
            ConfigurationMissingError: If a required variable is missing
            ConfigurationValidationError: If any value is malformed
        """
        config_data: dict[str, Any] = {
            "github_token": self.read_credential(),
            "repositories": parse_repositories(self.read_collections()),
            "poll_interval_seconds": self.read_poll_interval(),
        }

        optional: dict[str, Any] = {
            "metrics_host": self._get(METRICS_HOST_VAR),
            "metrics_port": self._get_int(METRICS_PORT_VAR),
            "github_api_url": self._get(API_URL_VAR),
            "request_timeout_seconds": self._get_int(REQUEST_TIMEOUT_VAR),
            "fail_fast": self._get_bool(FAIL_FAST_VAR),
            "log_level": self._get(LOG_LEVEL_VAR),
        }
        if optional["log_level"] is not None:
            optional["log_level"] = optional["log_level"].upper()
        config_data.update({k: v for k, v in optional.items() if v is not None})

        try:
            return ExporterConfig(**config_data)
        except ValidationError as e:
            raise ConfigurationValidationError(
                f"Configuration validation failed: {e}",
                validation_errors=e.errors(include_url=False),
            ) from e
