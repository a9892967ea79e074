"""Precise unit tests for HTTPClient and HTTPPageFetcher.

Tests focus on session management, status mapping and page parameters.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from pagegather.core import (
    InvalidRequestError,
    PagingConfig,
    ProviderError,
    RateLimitError,
    ResourceNotFoundError,
    UnauthorizedError,
)
from pagegather.runtime import PagingHandler
from pagegather.runtime.chunking import PageDescriptor, WorkerPool
from pagegather.utils import HTTPClient, HTTPPageFetcher, raise_for_status


def _response(status: int, body=None, headers=None) -> MagicMock:
    response = MagicMock(spec=aiohttp.ClientResponse)
    response.status = status
    response.method = "GET"
    response.url = "https://api.example.com/activities"
    response.headers = headers or {}
    response.json = AsyncMock(return_value=body)
    response.text = AsyncMock(return_value="")
    return response


class TestHTTPClientSessionManagement:
    """Test HTTPClient session management."""

    def test_init(self):
        client = HTTPClient(timeout=10.0, headers={"Authorization": "Bearer token"})
        assert client.timeout.total == 10.0
        assert client.headers == {"Authorization": "Bearer token"}
        assert client._session is None

    def test_build_url(self):
        client = HTTPClient(base_url="https://api.example.com/v3/")
        assert client.build_url("/activities") == "https://api.example.com/v3/activities"
        assert client.build_url("https://other.example.com/x") == "https://other.example.com/x"
        assert HTTPClient().build_url("/activities") == "/activities"

    @pytest.mark.asyncio
    async def test_session_property_creates_session(self):
        client = HTTPClient()
        session = client.session
        try:
            assert isinstance(session, aiohttp.ClientSession)
            assert client.session is session
        finally:
            await client.close()

    @pytest.mark.asyncio
    async def test_context_manager_closes_session(self):
        async with HTTPClient() as client:
            session = client.session
            assert not session.closed

        assert session.closed

    @pytest.mark.asyncio
    async def test_close_idempotent(self):
        client = HTTPClient()
        await client.close()
        await client.close()


class TestRaiseForStatus:
    """Test mapping failed responses to provider errors."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("status", "error_cls"),
        [
            (400, InvalidRequestError),
            (401, UnauthorizedError),
            (403, UnauthorizedError),
            (404, ResourceNotFoundError),
            (500, ProviderError),
        ],
    )
    async def test_status_mapping(self, status, error_cls):
        response = _response(status, body={"message": "Record Not Found"})

        with pytest.raises(error_cls) as exc_info:
            await raise_for_status(response)

        assert exc_info.value.status_code == status
        assert "Record Not Found" in str(exc_info.value)
        assert exc_info.value.response == {"message": "Record Not Found"}

    @pytest.mark.asyncio
    async def test_rate_limit_reads_retry_after(self):
        response = _response(
            429, body={"message": "Rate Limit Exceeded"}, headers={"Retry-After": "30"}
        )

        with pytest.raises(RateLimitError) as exc_info:
            await raise_for_status(response)

        assert exc_info.value.retry_after == 30

    @pytest.mark.asyncio
    async def test_non_json_body(self):
        response = _response(404)
        response.json = AsyncMock(side_effect=ValueError("not json"))
        response.text = AsyncMock(return_value="Not Found")

        with pytest.raises(ResourceNotFoundError) as exc_info:
            await raise_for_status(response)

        assert exc_info.value.response == "Not Found"


class TestHTTPPageFetcher:
    """Test HTTPPageFetcher requests."""

    @pytest.fixture
    def mock_client(self):
        client = MagicMock(spec=HTTPClient)
        client.get = AsyncMock(return_value=[{"id": 1}, {"id": 2}])
        return client

    def test_build_params(self, mock_client):
        fetcher = HTTPPageFetcher(mock_client, "/activities", params={"before": 1700000000})

        params = fetcher.build_params(PageDescriptor(page_number=3, page_size=50))

        assert params == {"before": 1700000000, "page": 3, "per_page": 50}

    def test_build_params_custom_names(self, mock_client):
        fetcher = HTTPPageFetcher(mock_client, "/items", page_param="p", size_param="limit")

        assert fetcher.build_params(PageDescriptor(page_number=1, page_size=10)) == {
            "p": 1,
            "limit": 10,
        }

    @pytest.mark.asyncio
    async def test_call_fetches_page(self, mock_client):
        fetcher = HTTPPageFetcher(mock_client, "/activities", headers={"X-Trace": "1"})

        records = await fetcher(PageDescriptor(page_number=2, page_size=2))

        assert records == [{"id": 1}, {"id": 2}]
        mock_client.get.assert_awaited_once_with(
            "/activities", params={"page": 2, "per_page": 2}, headers={"X-Trace": "1"}
        )

    @pytest.mark.asyncio
    async def test_call_rejects_non_list_body(self, mock_client):
        mock_client.get = AsyncMock(return_value={"id": 1})
        fetcher = HTTPPageFetcher(mock_client, "/activities/1")

        with pytest.raises(TypeError, match="Expected a JSON list"):
            await fetcher(PageDescriptor(page_number=1, page_size=1))

    @pytest.mark.asyncio
    async def test_with_paging_handler(self, mock_client):
        async def get(path, params=None, headers=None):
            start = (params["page"] - 1) * params["per_page"]
            return [{"id": index} for index in range(start, start + params["per_page"])]

        mock_client.get = AsyncMock(side_effect=get)
        pool = WorkerPool(max_workers=4)
        handler = PagingHandler(config=PagingConfig(max_page_size=3), pool=pool)

        records = await handler.handle_paging(
            PageDescriptor(page_number=1, page_size=7), HTTPPageFetcher(mock_client, "/activities")
        )

        assert [record["id"] for record in records] == list(range(7))
        assert mock_client.get.await_count == 3

    @pytest.mark.asyncio
    async def test_not_found_through_handler(self, mock_client):
        mock_client.get = AsyncMock(side_effect=ResourceNotFoundError("Record Not Found"))
        handler = PagingHandler(config=PagingConfig(max_page_size=3), pool=WorkerPool(2))

        result = await handler.handle_paging(
            PageDescriptor(page_number=1, page_size=6),
            HTTPPageFetcher(mock_client, "/activities/9/comments"),
        )

        assert result is None
