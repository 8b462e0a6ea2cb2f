"""Fetching of open pull requests from GitHub."""

import logging
from collections.abc import Iterable

from ...github.client import GitHubClient
from .models import RawWorkItem

logger = logging.getLogger(__name__)


class GitHubWorkItemSource:
    """Collects every open pull request across a list of repositories."""

    def __init__(self, github_client: GitHubClient, per_page: int = 100) -> None:
        """Initialize the source.

        Args:
            github_client: Authenticated GitHub client
            per_page: Page size requested from the pulls endpoint
        """
        self.github_client = github_client
        self.per_page = per_page

    async def fetch_repository(self, owner: str, name: str) -> list[RawWorkItem]:
        """Fetch all open pull requests of one repository, following pagination."""
        paginator = self.github_client.list_pulls(
            owner, name, state="open", per_page=self.per_page
        )
        items = await paginator.collect_all()
        logger.debug(
            f"Fetched {len(items)} open pull requests from {owner}/{name} "
            f"in {paginator.pages_fetched} page(s)"
        )
        return items

    async def fetch_open_items(self, repositories: Iterable[str]) -> list[RawWorkItem]:
        """Fetch open pull requests for every repository, in order.

        Each repository is collected into its own list before being appended
        to the result. Any ``GitHubError`` aborts the whole fetch.

        Args:
            repositories: Repositories as ``owner/name`` strings

        Returns:
            All open pull requests across all repositories
        """
        all_items: list[RawWorkItem] = []
        for repository in repositories:
            owner, _, name = repository.partition("/")
            repository_items = await self.fetch_repository(owner, name)
            all_items.extend(repository_items)

        logger.info(f"Fetched {len(all_items)} open pull requests in total")
        return all_items
