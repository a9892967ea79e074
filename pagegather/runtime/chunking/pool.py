"""Shared worker pool bounding concurrent page fetches.

One pool is normally shared by every executor in the process. It is created
lazily on first use and lives as long as the process; executors receive it
by reference and never shut it down.
"""

from __future__ import annotations

import asyncio
import contextvars
import functools
import inspect
import threading
import weakref
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from ...core.config import get_config

# Pool whose slot the current task or thread is running in
_active_pool: contextvars.ContextVar[WorkerPool | None] = contextvars.ContextVar(
    "pagegather_active_pool", default=None
)


def is_async_callable(func: Callable[..., Any]) -> bool:
    """Whether calling ``func`` returns an awaitable."""
    return inspect.iscoroutinefunction(func) or inspect.iscoroutinefunction(
        getattr(func, "__call__", None)
    )


class WorkerPool:
    """Concurrency bound for page fetches.

    Coroutine fetchers run on the caller's event loop, gated by a semaphore
    of ``max_workers`` slots (one semaphore per event loop). Blocking fetchers
    run in a thread pool of the same size so they never stall the loop.
    """

    def __init__(self, max_workers: int) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be positive")
        self._max_workers = max_workers
        self._semaphores: weakref.WeakKeyDictionary[
            asyncio.AbstractEventLoop, asyncio.Semaphore
        ] = weakref.WeakKeyDictionary()
        self._threads: ThreadPoolExecutor | None = None
        self._lock = threading.Lock()

    @property
    def max_workers(self) -> int:
        return self._max_workers

    @property
    def semaphore(self) -> asyncio.Semaphore:
        """Semaphore for the running event loop."""
        loop = asyncio.get_running_loop()
        with self._lock:
            semaphore = self._semaphores.get(loop)
            if semaphore is None:
                semaphore = asyncio.Semaphore(self._max_workers)
                self._semaphores[loop] = semaphore
        return semaphore

    @property
    def threads(self) -> ThreadPoolExecutor:
        """Thread pool for blocking fetchers, created on first use."""
        if self._threads is None:
            with self._lock:
                if self._threads is None:
                    self._threads = ThreadPoolExecutor(
                        max_workers=self._max_workers,
                        thread_name_prefix="pagegather",
                    )
        return self._threads

    async def run(self, func: Callable[..., Any], *args: Any) -> Any:
        """Run one unit of work inside a pool slot.

        Coroutine functions are awaited on the running loop; plain callables
        run in the thread pool. Work started from inside a slot of this pool
        (a fetcher that pages through the engine again) runs without taking
        another slot, since the outer slots are only released once it returns.
        """
        if _active_pool.get() is self:
            return await self._run_nested(func, *args)
        async with self.semaphore:
            token = _active_pool.set(self)
            try:
                if is_async_callable(func):
                    return await func(*args)
                loop = asyncio.get_running_loop()
                # Threads do not inherit the context on their own
                call = functools.partial(contextvars.copy_context().run, func, *args)
                result = await loop.run_in_executor(self.threads, call)
                if inspect.isawaitable(result):
                    return await result
                return result
            finally:
                _active_pool.reset(token)

    async def _run_nested(self, func: Callable[..., Any], *args: Any) -> Any:
        if is_async_callable(func):
            return await func(*args)
        # The pool threads may all be held by outer slots
        result = await asyncio.to_thread(func, *args)
        if inspect.isawaitable(result):
            return await result
        return result

    def shutdown(self, wait: bool = True) -> None:
        """Release the thread pool. Only the pool's owner should call this."""
        with self._lock:
            threads, self._threads = self._threads, None
        if threads is not None:
            threads.shutdown(wait=wait)


_default_pool: WorkerPool | None = None
_default_lock = threading.Lock()


def get_default_pool() -> WorkerPool:
    """Get the process-wide pool, sized from the current config.

    A pool is replaced only when ``configure`` changed ``max_workers``; the
    old one is left to the calls still using it.
    """
    global _default_pool
    max_workers = get_config().max_workers
    if _default_pool is None or _default_pool.max_workers != max_workers:
        with _default_lock:
            if _default_pool is None or _default_pool.max_workers != max_workers:
                _default_pool = WorkerPool(max_workers)
    return _default_pool
