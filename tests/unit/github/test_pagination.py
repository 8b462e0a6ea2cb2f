"""
Unit tests for GitHub pagination module.

Why: Open pull requests of busy repositories span several pages; the
     exporter must follow Link headers until the last page.

What: Tests LinkHeader parsing, PaginatedResponse and AsyncPaginator.

How: Uses a mock client returning prepared PaginatedResponse objects.
"""

from unittest.mock import AsyncMock, Mock

import pytest

from pr_exporter.github.pagination import (
    AsyncPaginator,
    LinkHeader,
    PaginatedResponse,
)

PULLS_URL = "https://api.github.com/repos/acme/widgets/pulls"


class TestLinkHeader:
    """Test LinkHeader parsing."""

    def test_link_header_empty(self) -> None:
        """
        Why: The last page of a listing carries no Link header
        What: Tests LinkHeader with None
        How: Creates LinkHeader with None and validates empty state
        """
        link_header = LinkHeader(None)
        assert link_header.links == {}
        assert link_header.next_url is None

    def test_link_header_multiple_links(self) -> None:
        """Test LinkHeader with next and last links."""
        header_value = (
            f'<{PULLS_URL}?page=2>; rel="next", <{PULLS_URL}?page=7>; rel="last"'
        )
        link_header = LinkHeader(header_value)

        assert link_header.next_url == f"{PULLS_URL}?page=2"
        assert link_header.links["last"] == f"{PULLS_URL}?page=7"

    def test_link_header_without_next(self) -> None:
        """Test LinkHeader on the last page, which only has prev/first."""
        header_value = (
            f'<{PULLS_URL}?page=1>; rel="prev", <{PULLS_URL}?page=1>; rel="first"'
        )
        link_header = LinkHeader(header_value)

        assert link_header.next_url is None

    def test_link_header_malformed(self) -> None:
        """Test LinkHeader with malformed header."""
        link_header = LinkHeader("malformed link header")

        assert link_header.links == {}


class TestPaginatedResponse:
    """Test PaginatedResponse wrapper."""

    def test_paginated_response_properties(self) -> None:
        """Test items and next page detection."""
        data = [{"number": 1}, {"number": 2}]
        headers = {"Link": f'<{PULLS_URL}?page=2>; rel="next"'}

        response = PaginatedResponse(data, headers, PULLS_URL)

        assert response.items == data
        assert response.url == PULLS_URL
        assert response.next_page_url == f"{PULLS_URL}?page=2"

    def test_paginated_response_last_page(self) -> None:
        """Test a page without Link header."""
        response = PaginatedResponse([], {}, PULLS_URL)

        assert response.next_page_url is None


class TestAsyncPaginator:
    """Test AsyncPaginator iterator."""

    @pytest.fixture
    def mock_client(self) -> Mock:
        """Create mock GitHub client."""
        client = Mock()
        client._fetch_paginated = AsyncMock()
        return client

    def test_async_paginator_creation(self, mock_client: Mock) -> None:
        """Test AsyncPaginator configuration."""
        params = {"state": "open"}
        paginator = AsyncPaginator(
            client=mock_client,
            initial_url=PULLS_URL,
            params=params,
            per_page=50,
        )

        assert paginator.params == {"state": "open", "per_page": 50}
        assert paginator.pages_fetched == 0
        # Caller's dict is not modified
        assert params == {"state": "open"}

    def test_async_paginator_per_page_limit(self, mock_client: Mock) -> None:
        """Test AsyncPaginator per_page limit enforcement."""
        paginator = AsyncPaginator(
            client=mock_client, initial_url=PULLS_URL, per_page=150
        )

        assert paginator.params == {"per_page": 100}

    @pytest.mark.asyncio
    async def test_async_paginator_multiple_pages(self, mock_client: Mock) -> None:
        """
        Why: Every page of open pull requests must be collected
        What: Tests iteration over two pages
        How: Returns a page with a next link followed by a final page
        """
        next_url = f"{PULLS_URL}?state=open&per_page=100&page=2"
        mock_client._fetch_paginated.side_effect = [
            PaginatedResponse(
                [{"number": 1}, {"number": 2}],
                {"Link": f'<{next_url}>; rel="next"'},
                PULLS_URL,
            ),
            PaginatedResponse([{"number": 3}], {}, next_url),
        ]

        paginator = AsyncPaginator(
            client=mock_client, initial_url=PULLS_URL, params={"state": "open"}
        )
        items = await paginator.collect_all()

        assert [item["number"] for item in items] == [1, 2, 3]
        assert paginator.pages_fetched == 2

        first_call, second_call = mock_client._fetch_paginated.call_args_list
        assert first_call.args == (PULLS_URL, {"state": "open", "per_page": 100})
        # Next URLs already carry the query string
        assert second_call.args == (next_url, None)

    @pytest.mark.asyncio
    async def test_async_paginator_empty_response(self, mock_client: Mock) -> None:
        """Test AsyncPaginator with empty response."""
        mock_client._fetch_paginated.return_value = PaginatedResponse(
            [], {}, PULLS_URL
        )

        paginator = AsyncPaginator(client=mock_client, initial_url=PULLS_URL)
        items = await paginator.collect_all()

        assert items == []
        assert mock_client._fetch_paginated.call_count == 1
