"""Chunking layer for paged provider requests.

This module splits page requests that exceed the provider's per-request
limit, fetches the pieces concurrently and reassembles them in order.

Architecture:
    The chunking layer consists of:
    - definitions.py: Page descriptors, chunk policy and outcome values
    - validation.py: Rejects malformed page requests before any fetch
    - planners.py: Page planning logic (determines physical pages)
    - pool.py: Shared worker pool bounding concurrent fetches
    - executors.py: Page execution logic (fetches and reassembles chunks)
    - trimming.py: Drops ignored records from the reassembled result
    - telemetry.py: Structured logging
"""

from __future__ import annotations

from .definitions import (
    ChunkOutcome,
    ChunkPolicy,
    OutcomeKind,
    PageDescriptor,
    PageFetcher,
    PagingResult,
    outcome_for_error,
)
from .executors import ChunkExecutor
from .planners import PagePlanner
from .pool import WorkerPool, get_default_pool
from .trimming import ignore_first_n, ignore_last_n, trim, trim_to_window
from .validation import validate_descriptor

__all__ = [
    "PageDescriptor",
    "PageFetcher",
    "ChunkPolicy",
    "ChunkOutcome",
    "OutcomeKind",
    "PagingResult",
    "outcome_for_error",
    "PagePlanner",
    "ChunkExecutor",
    "WorkerPool",
    "get_default_pool",
    "validate_descriptor",
    "trim",
    "trim_to_window",
    "ignore_first_n",
    "ignore_last_n",
]
