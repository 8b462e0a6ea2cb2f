"""Recover the owning repository of a pull request from its resource URL."""

from abc import ABC, abstractmethod
from urllib.parse import urlparse


class ResourceParseError(Exception):
    """Raised when a pull request payload does not have the expected shape."""

    def __init__(self, message: str, value: object | None = None):
        """Initialize parse error.

        Args:
            message: Error message
            value: The offending value, kept for diagnostics
        """
        super().__init__(message)
        self.value = value


class ResourceLocator(ABC):
    """Strategy for extracting ``(owner, name)`` from a resource URL."""

    @abstractmethod
    def parse(self, url: str) -> tuple[str, str]:
        """Return the repository owner and name the URL belongs to.

        Raises:
            ResourceParseError: If the URL does not identify a repository
        """
        pass


class ApiUrlLocator(ResourceLocator):
    """Parses GitHub REST API URLs of the form ``.../repos/{owner}/{name}/...``.

    The ``repos`` segment is located rather than indexed so that GitHub
    Enterprise prefixes such as ``/api/v3`` are handled as well.
    """

    ANCHOR_SEGMENT = "repos"

    def parse(self, url: str) -> tuple[str, str]:
        if not isinstance(url, str) or not url:
            raise ResourceParseError("Resource URL is missing", url)

        segments = [s for s in urlparse(url).path.split("/") if s]
        try:
            anchor = segments.index(self.ANCHOR_SEGMENT)
        except ValueError:
            raise ResourceParseError(
                f"Resource URL has no '{self.ANCHOR_SEGMENT}' segment: {url}", url
            ) from None

        if len(segments) < anchor + 3:
            raise ResourceParseError(
                f"Resource URL does not name a repository: {url}", url
            )

        return segments[anchor + 1], segments[anchor + 2]
