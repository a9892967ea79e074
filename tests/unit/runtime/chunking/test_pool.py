"""Unit tests for the shared worker pool."""

from __future__ import annotations

import asyncio
import threading

import pytest

from pagegather.core import configure
from pagegather.runtime.chunking import WorkerPool, get_default_pool
from pagegather.runtime.chunking.pool import is_async_callable


class TestWorkerPool:
    """Test WorkerPool scheduling."""

    def test_rejects_non_positive_size(self):
        with pytest.raises(ValueError, match="max_workers"):
            WorkerPool(max_workers=0)

    @pytest.mark.asyncio
    async def test_bounds_concurrency(self):
        pool = WorkerPool(max_workers=2)
        running = 0
        peak = 0

        async def work(value: int) -> int:
            nonlocal running, peak
            running += 1
            peak = max(peak, running)
            await asyncio.sleep(0.01)
            running -= 1
            return value * 2

        results = await asyncio.gather(*(pool.run(work, value) for value in range(6)))

        assert results == [0, 2, 4, 6, 8, 10]
        assert peak == 2

    @pytest.mark.asyncio
    async def test_blocking_work_runs_in_thread(self):
        pool = WorkerPool(max_workers=2)

        def work() -> str:
            return threading.current_thread().name

        try:
            name = await pool.run(work)
        finally:
            pool.shutdown()

        assert name.startswith("pagegather")
        assert name != threading.current_thread().name

    @pytest.mark.asyncio
    async def test_semaphore_per_event_loop(self):
        pool = WorkerPool(max_workers=3)

        assert pool.semaphore is pool.semaphore

    def test_shutdown_is_idempotent(self):
        pool = WorkerPool(max_workers=1)
        assert pool.threads is pool.threads
        pool.shutdown()
        pool.shutdown()


class TestDefaultPool:
    """Test the process-wide pool."""

    def test_default_pool_is_shared(self):
        assert get_default_pool() is get_default_pool()

    def test_default_pool_sized_from_config(self):
        configure(max_workers=5)

        assert get_default_pool().max_workers == 5


def test_is_async_callable():
    async def coroutine_function(page):
        return []

    class AsyncFetcher:
        async def __call__(self, page):
            return []

    assert is_async_callable(coroutine_function)
    assert is_async_callable(AsyncFetcher())
    assert not is_async_callable(lambda page: [])


class TestNestedWork:
    """Test work submitted from inside a pool slot."""

    @pytest.mark.asyncio
    async def test_nested_run_does_not_wait_for_a_slot(self):
        pool = WorkerPool(max_workers=1)

        async def inner() -> str:
            return "inner"

        async def outer() -> str:
            return await pool.run(inner)

        assert await asyncio.wait_for(pool.run(outer), timeout=5) == "inner"

    @pytest.mark.asyncio
    async def test_other_pool_still_takes_a_slot(self):
        outer_pool = WorkerPool(max_workers=1)
        inner_pool = WorkerPool(max_workers=1)

        async def inner() -> int:
            return inner_pool.semaphore._value

        async def outer() -> int:
            return await inner_pool.run(inner)

        assert await outer_pool.run(outer) == 0
