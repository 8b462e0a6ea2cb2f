"""Configuration-related exceptions.

Each error names the environment variable at fault when there is one, so
the single critical log line at startup tells the operator what to fix.
"""

from typing import Any


class ConfigurationError(Exception):
    """Base exception for all configuration-related errors."""

    def __init__(self, message: str, variable: str | None = None):
        super().__init__(message)
        self.variable = variable


class ConfigurationMissingError(ConfigurationError):
    """A required environment variable is unset or blank."""

    def __init__(self, variable: str):
        super().__init__(f"Missing environment variable: {variable}", variable)


class ConfigurationValidationError(ConfigurationError):
    """An environment value could not be turned into a valid setting.

    Args:
        message: Human-readable error message
        variable: Offending environment variable, when a single one is known
        validation_errors: pydantic error dicts, when raised by the model
    """

    def __init__(
        self,
        message: str,
        variable: str | None = None,
        validation_errors: list[Any] | None = None,
    ):
        super().__init__(message, variable)
        self.validation_errors = validation_errors or []
