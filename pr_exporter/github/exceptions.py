"""GitHub API client exceptions.

Every failure talking to GitHub surfaces as a ``GitHubError`` carrying the
request that failed, so a fatal poll cycle log names the repository URL
rather than only GitHub's terse message.
"""

from typing import Any


class GitHubError(Exception):
    """A GitHub request failed or returned something unusable."""

    def __init__(
        self,
        message: str,
        method: str | None = None,
        url: str | None = None,
    ):
        """Initialize GitHub error.

        Args:
            message: Error message
            method: HTTP method of the failed request
            url: URL of the failed request
        """
        super().__init__(f"{message} ({method} {url})" if url else message)
        self.message = message
        self.method = method
        self.url = url


class GitHubHTTPError(GitHubError):
    """GitHub answered with a non-success status."""

    def __init__(
        self,
        message: str,
        status_code: int,
        method: str | None = None,
        url: str | None = None,
        response_data: dict[str, Any] | None = None,
    ):
        super().__init__(f"HTTP {status_code}: {message}", method, url)
        self.status_code = status_code
        self.response_data = response_data or {}


class GitHubAuthenticationError(GitHubHTTPError):
    """The token is invalid or lacks access (401, or 403 without rate limit)."""


class GitHubRateLimitError(GitHubHTTPError):
    """The token's request quota is used up."""


class GitHubNotFoundError(GitHubHTTPError):
    """Repository does not exist or the token cannot see it."""


class GitHubConnectionError(GitHubError):
    """Transport failure before a response arrived."""


class GitHubTimeoutError(GitHubError):
    """Request exceeded the configured total timeout."""
