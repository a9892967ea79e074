"""Chunk execution logic for fetching and reassembling pages.

This module provides the ChunkExecutor class that runs the physical page
requests of a plan, concurrently when there is more than one, and reduces
their outcomes to a single ordered PagingResult.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Sequence
from time import perf_counter
from typing import Any

from .definitions import (
    ChunkOutcome,
    PageDescriptor,
    PageFetcher,
    PagingResult,
    outcome_for_error,
)
from .pool import WorkerPool, get_default_pool
from .telemetry import log_chunk_completed, log_chunk_failed, log_execution_complete


class ChunkExecutor:
    """Executes page plans and reassembles results.

    A single-page plan is fetched inline on the caller's task. Larger plans
    fan out over the worker pool, one unit of work per physical page, and
    are reassembled in plan order no matter which fetch finishes first.

    Provider errors for a missing resource, a denied caller or a rejected
    request become outcomes; any other exception propagates after every
    started fetch has finished.
    """

    def __init__(self, pool: WorkerPool | None = None) -> None:
        """Initialize chunk executor.

        Args:
            pool: Worker pool for concurrent fetches (default: the process-wide pool)
        """
        self._pool = pool

    @property
    def pool(self) -> WorkerPool:
        if self._pool is None:
            self._pool = get_default_pool()
        return self._pool

    async def execute(
        self,
        *,
        plans: Sequence[PageDescriptor],
        fetch_page: PageFetcher[Any],
    ) -> PagingResult:
        """Execute page plans and reassemble the results.

        Args:
            plans: Physical descriptors, in plan order
            fetch_page: Fetches one physical page (coroutine function or plain callable)

        Returns:
            PagingResult with records in plan order, or the failure outcome
        """
        if not plans:
            raise ValueError("Cannot execute: no page plans provided")

        started = perf_counter()
        if len(plans) == 1:
            outcome = await self._fetch_inline(plans[0], fetch_page)
            result = PagingResult.combine([outcome])
        else:
            result = await self._fetch_parallel(plans, fetch_page)

        log_execution_complete(
            result=result,
            total_latency_ms=(perf_counter() - started) * 1000.0,
        )
        return result

    async def _fetch_inline(
        self, plan: PageDescriptor, fetch_page: PageFetcher[Any]
    ) -> ChunkOutcome:
        chunk_start = perf_counter()
        try:
            records = fetch_page(plan)
            if inspect.isawaitable(records):
                records = await records
        except Exception as e:
            return self._failed(plan, e)
        return self._completed(plan, records, chunk_start)

    async def _fetch_parallel(
        self, plans: Sequence[PageDescriptor], fetch_page: PageFetcher[Any]
    ) -> PagingResult:
        # One slot per plan; each unit writes only to its own index
        slots: list[ChunkOutcome | None] = [None] * len(plans)

        async def run_chunk(slot: int, plan: PageDescriptor) -> None:
            chunk_start = perf_counter()
            try:
                records = await self.pool.run(fetch_page, plan)
            except Exception as e:
                slots[slot] = self._failed(plan, e)
                return
            slots[slot] = self._completed(plan, records, chunk_start)

        errors = await asyncio.gather(
            *(run_chunk(slot, plan) for slot, plan in enumerate(plans)),
            return_exceptions=True,
        )
        # Unmapped errors surface only after every fetch has run to completion
        for error in errors:
            if isinstance(error, BaseException):
                raise error

        return PagingResult.combine([outcome for outcome in slots if outcome is not None])

    def _completed(
        self, plan: PageDescriptor, records: Sequence[Any] | None, chunk_start: float
    ) -> ChunkOutcome:
        rows = list(records) if records is not None else []
        log_chunk_completed(
            chunk_index=plan.chunk_index,
            page_number=plan.page_number,
            rows=len(rows),
            latency_ms=(perf_counter() - chunk_start) * 1000.0,
        )
        return ChunkOutcome.success(plan.chunk_index, rows)

    def _failed(self, plan: PageDescriptor, error: Exception) -> ChunkOutcome:
        kind = outcome_for_error(error)
        log_chunk_failed(
            chunk_index=plan.chunk_index,
            page_number=plan.page_number,
            outcome=kind,
            error_type=type(error).__name__,
            error_message=str(error),
        )
        if kind is None:
            raise error
        return ChunkOutcome.failure(plan.chunk_index, kind)

