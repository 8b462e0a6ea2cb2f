"""Unit tests for repository recovery from pull request URLs."""

import pytest

from pr_exporter.workers.exporter.locator import ApiUrlLocator, ResourceParseError


class TestApiUrlLocator:
    """Tests for ApiUrlLocator.parse."""

    @pytest.fixture
    def locator(self) -> ApiUrlLocator:
        return ApiUrlLocator()

    def test_parse_public_api_url(self, locator: ApiUrlLocator) -> None:
        """Test owner and name are taken from the segments after /repos."""
        url = "https://api.github.com/repos/acme/widgets/pulls/42"

        assert locator.parse(url) == ("acme", "widgets")

    def test_parse_enterprise_api_url(self, locator: ApiUrlLocator) -> None:
        """
        Why: GitHub Enterprise prefixes API paths with /api/v3
        What: Tests the prefix does not shift the extracted segments
        How: Parses an enterprise pull request URL
        """
        url = "https://ghe.example.com/api/v3/repos/acme/widgets/pulls/7"

        assert locator.parse(url) == ("acme", "widgets")

    @pytest.mark.parametrize(
        "url",
        [
            "",
            "https://api.github.com/users/octocat",
            "https://api.github.com/repos/acme",
            "not a url",
        ],
    )
    def test_parse_rejects_unexpected_shape(
        self, locator: ApiUrlLocator, url: str
    ) -> None:
        """Test URLs without /repos/{owner}/{name} raise ResourceParseError."""
        with pytest.raises(ResourceParseError) as exc_info:
            locator.parse(url)

        assert exc_info.value.value == url

    def test_parse_rejects_non_string(self, locator: ApiUrlLocator) -> None:
        """Test a missing url field raises ResourceParseError."""
        with pytest.raises(ResourceParseError):
            locator.parse(None)  # type: ignore[arg-type]
