"""Paging handler: validate, plan, execute and trim paged requests.

The handler is the entry point for service code. It takes a caller's page
request and a function that fetches one provider page, and returns exactly
the records the caller asked for.

Return values follow one convention throughout:
    - ``None``: the addressed resource does not exist
    - ``[]``: the provider rejected the request (denied or malformed)
    - a list of records otherwise
"""

from __future__ import annotations

import logging
from typing import Any

from ..core.config import PagingConfig, get_config
from .chunking import (
    ChunkExecutor,
    ChunkPolicy,
    OutcomeKind,
    PageDescriptor,
    PageFetcher,
    PagePlanner,
    PagingResult,
    WorkerPool,
    trim_to_window,
    validate_descriptor,
)
from .chunking.telemetry import log_list_all_complete, log_list_all_iteration

logger = logging.getLogger(__name__)


class PagingHandler:
    """Serves logical page requests against a provider with bounded pages."""

    def __init__(
        self,
        config: PagingConfig | None = None,
        pool: WorkerPool | None = None,
    ) -> None:
        """Initialize paging handler.

        Args:
            config: Paging limits (default: the process-wide config)
            pool: Worker pool for concurrent fetches (default: the process-wide pool)
        """
        self._config = config if config is not None else get_config()
        self._planner = PagePlanner(
            ChunkPolicy(
                max_page_size=self._config.max_page_size,
                max_chunks=self._config.max_chunks,
            )
        )
        self._executor = ChunkExecutor(pool=pool)

    @property
    def config(self) -> PagingConfig:
        return self._config

    async def page_result(
        self, descriptor: PageDescriptor, fetch_page: PageFetcher[Any]
    ) -> PagingResult:
        """Fetch one logical page and report the full outcome.

        Args:
            descriptor: Logical page request
            fetch_page: Fetches one provider page

        Returns:
            PagingResult whose records are already trimmed

        Raises:
            InvalidPagingArgumentError: If the descriptor is malformed (nothing is fetched)
        """
        validate_descriptor(descriptor)
        plans = self._planner.plan(descriptor)
        result = await self._executor.execute(plans=plans, fetch_page=fetch_page)
        if result.kind is OutcomeKind.SUCCESS:
            result.records = trim_to_window(result.records, descriptor, plans)
        return result

    async def handle_paging(
        self, descriptor: PageDescriptor, fetch_page: PageFetcher[Any]
    ) -> list[Any] | None:
        """Get the records for a logical page.

        Args:
            descriptor: Logical page request, possibly larger than the provider allows
            fetch_page: Fetches one provider page

        Returns:
            Records as per the descriptor, [] if the provider rejected the
            request, or None if the resource does not exist

        Raises:
            InvalidPagingArgumentError: If the descriptor is malformed (nothing is fetched)
        """
        result = await self.page_result(descriptor, fetch_page)
        return result.data

    async def handle_list_all(self, fetch_page: PageFetcher[Any]) -> list[Any] | None:
        """Get every record the provider has, page window after page window.

        USE WITH CAUTION: each iteration issues ``list_all_parallelism``
        provider requests, so this can exhaust a rate limit quota very quickly.

        Iteration stops at the first window shorter than requested. A missing
        resource at any point discards everything fetched so far.

        Args:
            fetch_page: Fetches one provider page

        Returns:
            All records in page order, or None if the resource does not exist
        """
        window = self._config.list_all_window
        logger.warning(
            "list_all_started",
            extra={
                "window": window,
                "requests_per_iteration": self._config.list_all_parallelism,
            },
        )

        records: list[Any] = []
        page_number = 0
        while True:
            page_number += 1
            current = await self.handle_paging(
                PageDescriptor(page_number=page_number, page_size=window), fetch_page
            )
            log_list_all_iteration(
                page_number=page_number,
                window=window,
                rows=None if current is None else len(current),
            )
            if current is None:
                log_list_all_complete(iterations=page_number, total_points=None)
                return None
            records.extend(current)
            if len(current) < window:
                break

        log_list_all_complete(iterations=page_number, total_points=len(records))
        return records


_default_handler: PagingHandler | None = None


def get_default_handler() -> PagingHandler:
    """Get the handler built from the process-wide config and pool.

    The handler is rebuilt when ``configure`` installed a new config.
    """
    global _default_handler
    if _default_handler is None or _default_handler.config is not get_config():
        _default_handler = PagingHandler()
    return _default_handler


async def handle_paging(
    descriptor: PageDescriptor, fetch_page: PageFetcher[Any]
) -> list[Any] | None:
    """Get the records for a logical page using the default handler."""
    return await get_default_handler().handle_paging(descriptor, fetch_page)


async def handle_list_all(fetch_page: PageFetcher[Any]) -> list[Any] | None:
    """Get every record using the default handler.

    USE WITH CAUTION: this rapidly eats through the provider's request quota.
    """
    return await get_default_handler().handle_list_all(fetch_page)
