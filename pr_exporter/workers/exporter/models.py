"""Data models for the pull request exporter worker.

Raw pull requests are kept as the JSON dictionaries returned by the GitHub
REST API; they are normalized into immutable ``WorkItemRecord`` instances
before being published.
"""

from dataclasses import dataclass
from typing import Any, TypeAlias

RawWorkItem: TypeAlias = dict[str, Any]


@dataclass(frozen=True)
class WorkItemRecord:
    """Normalized view of one open pull request."""

    number: int
    labels: tuple[str, ...]
    author: str
    reviewers: tuple[str, ...]
    repository: str

    def __str__(self) -> str:
        """Return human-readable string representation."""
        return f"{self.repository}#{self.number}"
