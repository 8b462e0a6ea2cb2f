"""GitHub authentication handlers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from .exceptions import GitHubError


@dataclass(frozen=True)
class AuthToken:
    """Authentication token with metadata."""

    token: str
    token_type: str = "Bearer"

    def to_header(self) -> dict[str, str]:
        """Convert to authorization header."""
        return {"Authorization": f"{self.token_type} {self.token}"}

    def __repr__(self) -> str:
        return f"AuthToken(token='***', token_type={self.token_type!r})"


class AuthProvider(ABC):
    """Abstract base class for authentication providers."""

    @abstractmethod
    async def get_token(self) -> AuthToken:
        """Get authentication token."""
        pass


class TokenAuth(AuthProvider):
    """Static bearer token, as read from ``GITHUB_TOKEN``."""

    def __init__(self, token: str):
        """Initialize token authentication.

        Args:
            token: Personal access or fine-grained token

        Raises:
            GitHubError: If the token is empty
        """
        if not token or not token.strip():
            raise GitHubError("Authentication token is required")
        self._token = AuthToken(token=token.strip())

    async def get_token(self) -> AuthToken:
        return self._token
