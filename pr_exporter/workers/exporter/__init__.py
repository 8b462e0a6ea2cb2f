"""Fetch, normalize and locate pull requests for metric export."""

from .locator import ApiUrlLocator, ResourceLocator, ResourceParseError
from .models import RawWorkItem, WorkItemRecord
from .normalizer import WorkItemNormalizer
from .source import GitHubWorkItemSource

__all__ = [
    "ApiUrlLocator",
    "GitHubWorkItemSource",
    "RawWorkItem",
    "ResourceLocator",
    "ResourceParseError",
    "WorkItemNormalizer",
    "WorkItemRecord",
]
