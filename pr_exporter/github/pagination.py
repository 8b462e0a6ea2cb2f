"""GitHub API pagination utilities."""

import re
from collections.abc import AsyncIterator, Mapping
from typing import Any

# Link header format: <url>; rel="next", <url>; rel="last"
_LINK_PATTERN = re.compile(r'<([^>]+)>;\s*rel="([^"]+)"')


class LinkHeader:
    """Parsed ``Link`` response header, keyed by relation."""

    def __init__(self, link_header: str | None = None):
        self.links: dict[str, str] = {}
        if link_header:
            for match in _LINK_PATTERN.finditer(link_header):
                url, rel = match.groups()
                self.links[rel] = url

    @property
    def next_url(self) -> str | None:
        """URL of the next page, if GitHub advertised one."""
        return self.links.get("next")


class PaginatedResponse:
    """One page of a list endpoint."""

    def __init__(self, items: list[Any], headers: Mapping[str, str], url: str):
        """Initialize paginated response.

        Args:
            items: Decoded JSON array of the page
            headers: Response headers
            url: URL the page was fetched from
        """
        self.items = items
        self.url = url
        self.link_header = LinkHeader(headers.get("Link"))

    @property
    def next_page_url(self) -> str | None:
        return self.link_header.next_url


class AsyncPaginator:
    """Async iterator that follows ``rel="next"`` links until exhausted.

    The query parameters are only sent with the first request; the URLs
    GitHub returns in the Link header already carry the full query string.
    """

    def __init__(
        self,
        client: Any,  # Avoid circular import
        initial_url: str,
        params: dict[str, Any] | None = None,
        per_page: int = 100,
    ):
        """Initialize async paginator.

        Args:
            client: GitHub client instance
            initial_url: Initial URL to fetch
            params: Query parameters for the first page
            per_page: Items per page (max 100 for GitHub)
        """
        self.client = client
        self.initial_url = initial_url
        self.params = dict(params or {})
        self.params["per_page"] = min(per_page, 100)

        self._pages_fetched = 0
        self._next_url: str | None = initial_url

    @property
    def pages_fetched(self) -> int:
        """Number of pages fetched so far."""
        return self._pages_fetched

    async def __aiter__(self) -> AsyncIterator[Any]:
        while self._next_url:
            params = self.params if self._pages_fetched == 0 else None
            response: PaginatedResponse = await self.client._fetch_paginated(
                self._next_url, params
            )
            self._pages_fetched += 1
            self._next_url = response.next_page_url

            for item in response.items:
                yield item

    async def collect_all(self) -> list[Any]:
        """Fetch every remaining page and return the items in order."""
        return [item async for item in self]
