"""GitHub API client with authentication, timeouts, and pagination."""

import asyncio
import json
import logging
import time
import uuid
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import aiohttp

from .auth import AuthProvider
from .exceptions import (
    GitHubAuthenticationError,
    GitHubConnectionError,
    GitHubError,
    GitHubHTTPError,
    GitHubNotFoundError,
    GitHubRateLimitError,
    GitHubTimeoutError,
)
from .pagination import AsyncPaginator, PaginatedResponse

logger = logging.getLogger(__name__)


@dataclass
class GitHubClientConfig:
    """Configuration for GitHub client."""

    base_url: str = "https://api.github.com"
    timeout: int = 30
    user_agent: str = "PR-Prometheus-Exporter/1.0"

    def build_url(self, path: str) -> str:
        """Join an API path onto the base URL, keeping any base path prefix."""
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"


class GitHubClient:
    """Async GitHub API client.

    Each request is attempted exactly once and bounded by the configured
    total timeout; failures are translated into ``GitHubError`` subclasses.
    """

    def __init__(
        self,
        auth: AuthProvider,
        config: GitHubClientConfig | None = None,
    ) -> None:
        """Initialize GitHub client.

        Args:
            auth: Authentication provider
            config: Client configuration
        """
        self.auth = auth
        self.config = config or GitHubClientConfig()

        # HTTP session will be initialized on first use
        self._session: aiohttp.ClientSession | None = None
        self._session_lock = asyncio.Lock()

    async def __aenter__(self) -> "GitHubClient":
        """Async context manager entry."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()

    async def _ensure_session(self) -> None:
        """Ensure HTTP session is initialized."""
        if self._session is None or self._session.closed:
            async with self._session_lock:
                if self._session is None or self._session.closed:
                    timeout = aiohttp.ClientTimeout(total=self.config.timeout)
                    auth_token = await self.auth.get_token()

                    self._session = aiohttp.ClientSession(
                        timeout=timeout,
                        headers={
                            "User-Agent": self.config.user_agent,
                            "Accept": "application/vnd.github+json",
                            **auth_token.to_header(),
                        },
                    )

    async def close(self) -> None:
        """Close HTTP session and cleanup resources."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    def _generate_correlation_id(self) -> str:
        """Generate correlation ID for request tracking."""
        return str(uuid.uuid4())[:8]

    async def _make_request(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        correlation_id: str | None = None,
    ) -> tuple[Any, Mapping[str, str]]:
        """Make a single HTTP request and decode its JSON body.

        Args:
            method: HTTP method
            url: Request URL
            params: Query parameters
            correlation_id: Request correlation ID

        Returns:
            Tuple of (decoded JSON body or None, response headers)

        Raises:
            GitHubError: Various GitHub API errors
        """
        if not correlation_id:
            correlation_id = self._generate_correlation_id()

        await self._ensure_session()
        if not self._session:
            raise GitHubConnectionError("HTTP session unavailable", method, url)

        logger.debug(f"GitHub API request [{correlation_id}] {method} {url}")
        start_time = time.monotonic()

        try:
            async with self._session.request(method, url, params=params) as response:
                request_time = time.monotonic() - start_time
                logger.debug(
                    f"GitHub API response [{correlation_id}] "
                    f"{response.status} in {request_time:.2f}s"
                )

                if response.status >= 300:
                    await self._handle_error_response(response, method, url)

                # Case-insensitive copy, outlives the released response
                headers = response.headers.copy()
                if response.status == 204:
                    return None, headers
                return await response.json(content_type=None), headers

        except TimeoutError as e:
            raise GitHubTimeoutError("Request timed out", method, url) from e
        except aiohttp.ClientError as e:
            raise GitHubConnectionError(f"Connection error: {e}", method, url) from e
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise GitHubError("Invalid JSON in response", method, url) from e

    async def _handle_error_response(
        self, response: aiohttp.ClientResponse, method: str, url: str
    ) -> None:
        """Raise the GitHubError matching an error response.

        Args:
            response: HTTP response
            method: HTTP method of the request
            url: Request URL, without the first page's query parameters

        Raises:
            GitHubHTTPError: Always
        """
        try:
            error_data = await response.json(content_type=None)
        except (json.JSONDecodeError, UnicodeDecodeError, aiohttp.ContentTypeError):
            error_data = None
        if not isinstance(error_data, dict):
            error_data = {"message": await response.text(errors="replace")}

        status = response.status
        message = str(error_data.get("message") or response.reason or "error")
        logger.warning(f"GitHub API error {status} for {method} {url}: {message}")

        error_class = GitHubHTTPError
        if status == 401:
            error_class = GitHubAuthenticationError
        elif status in (403, 429):
            exhausted = response.headers.get("X-RateLimit-Remaining") == "0"
            if status == 429 or exhausted or "rate limit" in message.lower():
                error_class = GitHubRateLimitError
                reset = response.headers.get("X-RateLimit-Reset")
                if reset:
                    message = f"{message}; quota resets at unix time {reset}"
            else:
                error_class = GitHubAuthenticationError
        elif status == 404:
            error_class = GitHubNotFoundError

        raise error_class(message, status, method, url, error_data)

    async def _fetch_paginated(
        self, url: str, params: dict[str, Any] | None = None
    ) -> PaginatedResponse:
        """Fetch one page for AsyncPaginator; the body must be a JSON array."""
        data, headers = await self._make_request("GET", url, params)
        if not isinstance(data, list):
            raise GitHubError("Expected a JSON array", "GET", url)
        return PaginatedResponse(data, headers, url)

    def paginate(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        per_page: int = 100,
    ) -> AsyncPaginator:
        """Create async paginator for GitHub API endpoint.

        Args:
            path: API path
            params: Query parameters
            per_page: Items per page (max 100)

        Returns:
            AsyncPaginator for iterating through results
        """
        return AsyncPaginator(
            client=self,
            initial_url=self.config.build_url(path),
            params=params,
            per_page=per_page,
        )

    def list_pulls(
        self,
        owner: str,
        repo: str,
        state: str = "open",
        per_page: int = 100,
    ) -> AsyncPaginator:
        """List pull requests for a repository.

        Args:
            owner: Repository owner
            repo: Repository name
            state: PR state (open, closed, all)
            per_page: Items per page

        Returns:
            AsyncPaginator for pull requests
        """
        return self.paginate(
            f"/repos/{owner}/{repo}/pulls",
            params={"state": state},
            per_page=per_page,
        )
