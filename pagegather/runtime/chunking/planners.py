"""Page planning logic for splitting oversized page requests.

This module provides the PagePlanner class that turns one logical page
request into the provider-compliant page requests that cover it.
"""

from __future__ import annotations

from dataclasses import replace

from ...core.exceptions import InvalidPagingArgumentError
from .definitions import ChunkPolicy, PageDescriptor
from .telemetry import log_page_plan


class PagePlanner:
    """Plans physical page requests for a logical page.

    The provider addresses records as ``(page, per_page)`` pairs, where page
    ``n`` of size ``d`` holds the zero-based records ``[(n-1)*d, n*d)``. A
    logical page larger than the provider cap is covered by consecutive
    physical pages of one common size. The first physical page carries the
    caller's ``ignore_first_n`` and the last carries ``ignore_last_n``, plus
    any records the physical pages overshoot the logical window by.

    Planning is deterministic and performs no I/O.
    """

    def __init__(self, policy: ChunkPolicy) -> None:
        """Initialize page planner.

        Args:
            policy: Chunking policy for the provider
        """
        self._policy = policy

    @property
    def policy(self) -> ChunkPolicy:
        return self._policy

    def plan(self, descriptor: PageDescriptor) -> list[PageDescriptor]:
        """Plan physical page requests for a logical descriptor.

        Args:
            descriptor: Validated logical page request

        Returns:
            Physical descriptors in ascending page order, indexed from 0

        Raises:
            InvalidPagingArgumentError: If the plan would exceed the policy's max_chunks
        """
        max_size = self._policy.max_page_size

        # Fast path: the provider can serve the page as asked
        if descriptor.page_size <= max_size:
            plans = [replace(descriptor, chunk_index=0)]
            log_page_plan(
                descriptor=descriptor,
                total_chunks=1,
                physical_page_size=descriptor.page_size,
                max_page_size=max_size,
            )
            return plans

        start = descriptor.first_offset
        end = descriptor.end_offset
        target_chunks = -(-descriptor.page_size // max_size)
        size = self._choose_page_size(start, end, target_chunks)

        first_page = start // size + 1
        last_page = -(-end // size)
        leading = start - (first_page - 1) * size
        trailing = last_page * size - end
        total_chunks = last_page - first_page + 1

        max_chunks = self._policy.max_chunks
        if max_chunks is not None and total_chunks > max_chunks:
            raise InvalidPagingArgumentError(
                f"page_size {descriptor.page_size} needs {total_chunks} requests, "
                f"more than the allowed {max_chunks}",
                field="page_size",
                value=descriptor.page_size,
            )

        plans: list[PageDescriptor] = []
        for chunk_index, page_number in enumerate(range(first_page, last_page + 1)):
            is_first = chunk_index == 0
            is_last = chunk_index == total_chunks - 1
            plans.append(
                PageDescriptor(
                    page_number=page_number,
                    page_size=size,
                    ignore_first_n=descriptor.ignore_first_n + leading if is_first else 0,
                    ignore_last_n=descriptor.ignore_last_n + trailing if is_last else 0,
                    chunk_index=chunk_index,
                )
            )

        log_page_plan(
            descriptor=descriptor,
            total_chunks=total_chunks,
            physical_page_size=size,
            max_page_size=max_size,
        )
        return plans

    def _choose_page_size(self, start: int, end: int, target_chunks: int) -> int:
        """Pick the largest page size that covers ``[start, end)`` in ``target_chunks`` requests.

        Falls back to the provider cap, which always needs at most one extra request.
        """
        max_size = self._policy.max_page_size
        smallest = -(-(end - start) // target_chunks)
        for size in range(max_size, smallest - 1, -1):
            if -(-end // size) - start // size == target_chunks:
                return size
        return max_size
