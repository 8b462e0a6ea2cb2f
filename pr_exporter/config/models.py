"""Pydantic configuration model for the pull request exporter.

The model is immutable once built; the environment loader in ``loader.py``
is the only place that reads the process environment.
"""

from enum import Enum
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

DEFAULT_POLL_INTERVAL_SECONDS = 300
DEFAULT_METRICS_PORT = 8080


class LogLevel(str, Enum):
    """Supported logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ExporterConfig(BaseModel):
    """Runtime configuration for the exporter process."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    github_token: SecretStr = Field(description="Bearer token for the GitHub API")

    repositories: list[str] = Field(
        min_length=1, description="Repositories to poll, as owner/name"
    )

    poll_interval_seconds: int = Field(
        default=DEFAULT_POLL_INTERVAL_SECONDS,
        gt=0,
        description="Seconds between poll cycles",
    )

    metrics_host: str = Field(
        default="0.0.0.0",  # nosec B104
        description="Address the /metrics endpoint listens on",
    )

    metrics_port: int = Field(
        default=DEFAULT_METRICS_PORT,
        ge=0,
        le=65535,
        description="Port the /metrics endpoint listens on",
    )

    github_api_url: str = Field(
        default="https://api.github.com", description="GitHub REST API base URL"
    )

    request_timeout_seconds: int = Field(
        default=30, gt=0, le=600, description="Total timeout per GitHub request"
    )

    fail_fast: bool = Field(
        default=True, description="Stop the worker when a poll cycle fails"
    )

    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")

    @field_validator("github_token")
    @classmethod
    def validate_github_token(cls, v: SecretStr) -> SecretStr:
        """Reject blank tokens."""
        if not v.get_secret_value().strip():
            raise ValueError("GitHub token cannot be empty")
        return v

    @field_validator("repositories")
    @classmethod
    def validate_repositories(cls, v: list[str]) -> list[str]:
        """Validate owner/name pairs and drop duplicates, keeping order."""
        seen: list[str] = []
        for repository in v:
            owner, sep, name = repository.partition("/")
            if not sep or not owner or not name or "/" in name:
                raise ValueError(
                    f"Repository must be in owner/name format: {repository!r}"
                )
            if repository not in seen:
                seen.append(repository)
        return seen

    @field_validator("github_api_url")
    @classmethod
    def validate_github_api_url(cls, v: str) -> str:
        """Validate GitHub API URL format."""
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"Invalid GitHub API URL: {v}")
        return v.rstrip("/")
