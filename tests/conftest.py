"""
Test configuration and fixtures for the pull request exporter.

Provides pytest fixtures for GitHub pull request payloads, exporter
configuration and environment variables shared by the unit tests.
"""

import os
from collections.abc import Callable
from typing import Any
from unittest.mock import patch

import pytest

from pr_exporter.config.models import ExporterConfig

API_URL = "https://api.github.com"


def make_pull_request(
    number: int,
    repository: str = "acme/widgets",
    labels: list[str] | None = None,
    author: str = "octocat",
    reviewers: list[str] | None = None,
    api_url: str = API_URL,
) -> dict[str, Any]:
    """Build a pull request payload shaped like the GitHub REST API's."""
    return {
        "url": f"{api_url}/repos/{repository}/pulls/{number}",
        "html_url": f"https://github.com/{repository}/pull/{number}",
        "number": number,
        "state": "open",
        "title": f"Pull request {number}",
        "user": {"login": author, "id": 1},
        "labels": [{"id": i, "name": name} for i, name in enumerate(labels or [])],
        "requested_reviewers": [
            {"login": login, "id": i} for i, login in enumerate(reviewers or [])
        ],
    }


@pytest.fixture
def pull_request_factory() -> Callable[..., dict[str, Any]]:
    """
    Factory for GitHub pull request payloads.

    Why: Keeps test payloads consistent with the real API shape
    What: Returns make_pull_request
    How: Tests call it with the fields they care about
    """
    return make_pull_request


@pytest.fixture
def exporter_config() -> ExporterConfig:
    """
    Exporter configuration for two repositories.

    Why: Most worker tests need a valid configuration without touching
         the process environment
    What: Provides an ExporterConfig with a short interval and a free port
    How: Builds the pydantic model directly
    """
    return ExporterConfig(
        github_token="test-token",
        repositories=["acme/widgets", "acme/gadgets"],
        poll_interval_seconds=1,
        metrics_host="127.0.0.1",
        metrics_port=0,
    )


@pytest.fixture
def test_env_vars():
    """
    Set up exporter environment variables.

    Why: Ensures loader tests run with predictable configuration values
    What: Sets GITHUB_TOKEN and GITHUB_REPOSITORIES
    How: Uses patch.dict to temporarily set environment variables
    """
    env_vars = {
        "GITHUB_TOKEN": "env-token",
        "GITHUB_REPOSITORIES": "acme/widgets,acme/gadgets",
    }

    with patch.dict(os.environ, env_vars, clear=True):
        yield env_vars
