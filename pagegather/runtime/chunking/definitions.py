"""Paging metadata definitions and outcome structures.

This module defines the data structures shared by the planner, executor and
paging handler: page descriptors, the chunking policy, and the explicit
outcome values that replace exception-driven control flow inside the engine.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar, Union

from ...core.exceptions import InvalidRequestError, ResourceNotFoundError, UnauthorizedError

T = TypeVar("T")


@dataclass(frozen=True)
class PageDescriptor:
    """One logical or physical page request.

    A logical descriptor is what the caller asks for; the planner derives
    physical descriptors from it that the provider can serve in one call.

    Attributes:
        page_number: 1-based page index
        page_size: Number of records on the page
        ignore_first_n: Records to drop from the front of the combined result
        ignore_last_n: Records to drop from the back of the combined result
        chunk_index: Zero-based position of this descriptor in a plan
    """

    page_number: int
    page_size: int
    ignore_first_n: int = 0
    ignore_last_n: int = 0
    chunk_index: int = 0

    @property
    def first_offset(self) -> int:
        """Zero-based offset of the first record addressed by the page."""
        return (self.page_number - 1) * self.page_size

    @property
    def end_offset(self) -> int:
        """Zero-based offset one past the last record addressed by the page."""
        return self.page_number * self.page_size


@dataclass(frozen=True)
class ChunkPolicy:
    """Chunking policy for a provider.

    Attributes:
        max_page_size: Maximum number of records per provider request
        max_chunks: Maximum number of requests one logical page may expand to (None = unlimited)
    """

    max_page_size: int
    max_chunks: int | None = None

    def __post_init__(self) -> None:
        if self.max_page_size < 1:
            raise ValueError("ChunkPolicy max_page_size must be positive")
        if self.max_chunks is not None and self.max_chunks < 1:
            raise ValueError("ChunkPolicy max_chunks must be positive")


class OutcomeKind(str, Enum):
    """Result tag for one fetch or a whole aggregate."""

    SUCCESS = "success"
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    INVALID_REQUEST = "invalid_request"

    @property
    def rank(self) -> int:
        # Higher rank wins when chunk outcomes are combined
        return _OUTCOME_RANK[self]


_OUTCOME_RANK = {
    OutcomeKind.SUCCESS: 0,
    OutcomeKind.INVALID_REQUEST: 1,
    OutcomeKind.UNAUTHORIZED: 1,
    OutcomeKind.NOT_FOUND: 2,
}

# Provider errors the engine converts into outcomes; anything else propagates
_ERROR_OUTCOMES: tuple[tuple[type[Exception], OutcomeKind], ...] = (
    (ResourceNotFoundError, OutcomeKind.NOT_FOUND),
    (UnauthorizedError, OutcomeKind.UNAUTHORIZED),
    (InvalidRequestError, OutcomeKind.INVALID_REQUEST),
)


def outcome_for_error(error: BaseException) -> OutcomeKind | None:
    """Map a fetch error to its outcome tag, or None if the engine does not handle it."""
    for error_cls, kind in _ERROR_OUTCOMES:
        if isinstance(error, error_cls):
            return kind
    return None


@dataclass(frozen=True)
class ChunkOutcome:
    """Outcome of fetching one physical page.

    Attributes:
        kind: Success or the failure category
        chunk_index: Index of the physical descriptor that produced it
        records: Records returned by the provider (empty unless successful)
    """

    kind: OutcomeKind
    chunk_index: int
    records: tuple[Any, ...] = ()

    @classmethod
    def success(cls, chunk_index: int, records: Sequence[Any]) -> ChunkOutcome:
        return cls(kind=OutcomeKind.SUCCESS, chunk_index=chunk_index, records=tuple(records))

    @classmethod
    def failure(cls, chunk_index: int, kind: OutcomeKind) -> ChunkOutcome:
        if kind is OutcomeKind.SUCCESS:
            raise ValueError("failure outcome needs a failure kind")
        return cls(kind=kind, chunk_index=chunk_index)

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS


@dataclass
class PagingResult:
    """Aggregated result of one paging request.

    Attributes:
        kind: Combined outcome over all chunks
        records: Reassembled records, in physical page order (empty on failure)
        chunks_used: Number of provider requests issued
    """

    kind: OutcomeKind
    records: list[Any] = field(default_factory=list)
    chunks_used: int = 0

    @property
    def total_points(self) -> int:
        return len(self.records)

    @property
    def data(self) -> list[Any] | None:
        """Caller-facing value: None when absent, [] when rejected, records otherwise."""
        if self.kind is OutcomeKind.NOT_FOUND:
            return None
        if self.kind is OutcomeKind.SUCCESS:
            return self.records
        return []

    @classmethod
    def combine(cls, outcomes: Sequence[ChunkOutcome]) -> PagingResult:
        """Reassemble chunk outcomes in chunk order.

        Any failed chunk discards the data of every other chunk. A not-found
        chunk outranks a rejected one regardless of position.
        """
        ordered = sorted(outcomes, key=lambda outcome: outcome.chunk_index)
        kind = OutcomeKind.SUCCESS
        for outcome in ordered:
            if outcome.kind.rank > kind.rank:
                kind = outcome.kind
        if kind is not OutcomeKind.SUCCESS:
            return cls(kind=kind, chunks_used=len(ordered))

        records: list[Any] = []
        for outcome in ordered:
            records.extend(outcome.records)
        return cls(kind=kind, records=records, chunks_used=len(ordered))


PageFetcher = Union[
    Callable[[PageDescriptor], Awaitable[Sequence[T]]],
    Callable[[PageDescriptor], Sequence[T]],
]
