"""Normalization of raw GitHub pull request payloads."""

import logging
from collections.abc import Iterable
from typing import Any

from .locator import ApiUrlLocator, ResourceLocator, ResourceParseError
from .models import RawWorkItem, WorkItemRecord

logger = logging.getLogger(__name__)


def _names(entries: Any, key: str, field: str) -> tuple[str, ...]:
    """Extract ``key`` from each mapping in ``entries``, keeping source order."""
    if entries is None:
        return ()
    if not isinstance(entries, list):
        raise ResourceParseError(f"Pull request field '{field}' is not a list", entries)

    names = []
    for entry in entries:
        value = entry.get(key) if isinstance(entry, dict) else None
        if not isinstance(value, str):
            raise ResourceParseError(
                f"Pull request field '{field}' has an entry without '{key}'", entry
            )
        names.append(value)
    return tuple(names)


class WorkItemNormalizer:
    """Maps raw pull request payloads to ``WorkItemRecord`` instances."""

    def __init__(self, locator: ResourceLocator | None = None) -> None:
        self.locator = locator or ApiUrlLocator()

    def normalize_item(self, raw: RawWorkItem) -> WorkItemRecord:
        """Normalize a single pull request payload.

        Raises:
            ResourceParseError: If a required field is missing or malformed
        """
        if not isinstance(raw, dict):
            raise ResourceParseError("Pull request entry is not a JSON object", raw)

        number = raw.get("number")
        if not isinstance(number, int) or isinstance(number, bool):
            raise ResourceParseError("Pull request has no numeric 'number'", number)

        user = raw.get("user")
        author = user.get("login") if isinstance(user, dict) else None
        if not isinstance(author, str):
            raise ResourceParseError(
                f"Pull request #{number} has no author login", user
            )

        owner, name = self.locator.parse(raw.get("url", ""))

        return WorkItemRecord(
            number=number,
            labels=_names(raw.get("labels"), "name", "labels"),
            author=author,
            reviewers=_names(
                raw.get("requested_reviewers"), "login", "requested_reviewers"
            ),
            repository=f"{owner}/{name}",
        )

    def normalize(self, raw_items: Iterable[RawWorkItem]) -> list[WorkItemRecord]:
        """Normalize every raw pull request, preserving input order.

        The first malformed item aborts the whole batch.
        """
        records = [self.normalize_item(raw) for raw in raw_items]
        logger.debug(f"Normalized {len(records)} pull requests")
        return records
