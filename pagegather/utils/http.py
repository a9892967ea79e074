"""HTTP client helper and page fetcher for JSON list endpoints."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import aiohttp

from ..core.exceptions import error_for_status
from ..runtime.chunking.definitions import PageDescriptor


class HTTPClient:
    """Async HTTP client wrapper."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 30.0,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.headers = dict(headers or {})
        self._session: aiohttp.ClientSession | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout, headers=self.headers)
        return self._session

    def build_url(self, url: str) -> str:
        # If base_url is set and url is relative, combine them
        if self.base_url and not url.startswith("http"):
            return f"{self.base_url.rstrip('/')}/{url.lstrip('/')}"
        return url

    async def get(
        self,
        url: str,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """GET request returning the decoded JSON body.

        Raises:
            ProviderError: Subclass matching the status code for any 4xx/5xx response
        """
        async with self.session.get(
            self.build_url(url), params=dict(params or {}), headers=headers
        ) as response:
            if response.status >= 400:
                await raise_for_status(response)
            return await response.json()

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()


async def raise_for_status(response: aiohttp.ClientResponse) -> None:
    """Raise the provider error for a failed response."""
    try:
        body: Any = await response.json(content_type=None)
    except (aiohttp.ContentTypeError, ValueError):
        body = await response.text()

    message = f"{response.method} {response.url} failed with HTTP {response.status}"
    if isinstance(body, dict) and body.get("message"):
        message = f"{message}: {body['message']}"

    retry_after = None
    raw_retry = response.headers.get("Retry-After")
    if raw_retry is not None and raw_retry.isdigit():
        retry_after = int(raw_retry)

    raise error_for_status(response.status, message, response=body, retry_after=retry_after)


class HTTPPageFetcher:
    """Page fetcher for endpoints that take ``page``/``per_page`` query params.

    Instances are awaitable page fetchers usable with PagingHandler, e.g.::

        fetcher = HTTPPageFetcher(client, "/athlete/activities")
        activities = await handler.handle_paging(PageDescriptor(1, 500), fetcher)
    """

    def __init__(
        self,
        client: HTTPClient,
        path: str,
        params: Mapping[str, Any] | None = None,
        *,
        page_param: str = "page",
        size_param: str = "per_page",
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self._client = client
        self._path = path
        self._params = dict(params or {})
        self._page_param = page_param
        self._size_param = size_param
        self._headers = dict(headers) if headers else None

    def build_params(self, page: PageDescriptor) -> dict[str, Any]:
        params = dict(self._params)
        params[self._page_param] = page.page_number
        params[self._size_param] = page.page_size
        return params

    async def __call__(self, page: PageDescriptor) -> list[Any]:
        data = await self._client.get(
            self._path, params=self.build_params(page), headers=self._headers
        )
        if data is None:
            return []
        if not isinstance(data, list):
            raise TypeError(f"Expected a JSON list from {self._path}, got {type(data).__name__}")
        return data
