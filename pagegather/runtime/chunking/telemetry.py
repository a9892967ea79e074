"""Structured logging for paging operations.

This module provides telemetry hooks for planning and executing paged
requests, emitting event-named log records with structured ``extra`` fields.
"""

from __future__ import annotations

import logging

from .definitions import OutcomeKind, PageDescriptor, PagingResult

logger = logging.getLogger(__name__)


def log_page_plan(
    *,
    descriptor: PageDescriptor,
    total_chunks: int,
    physical_page_size: int,
    max_page_size: int,
) -> None:
    """Log creation of a page plan.

    Args:
        descriptor: Logical descriptor that was planned
        total_chunks: Number of physical requests planned
        physical_page_size: Page size used for the physical requests
        max_page_size: Provider cap on records per request
    """
    logger.debug(
        "page_plan_created",
        extra={
            "page_number": descriptor.page_number,
            "page_size": descriptor.page_size,
            "total_chunks": total_chunks,
            "physical_page_size": physical_page_size,
            "max_page_size": max_page_size,
        },
    )


def log_chunk_completed(
    *,
    chunk_index: int,
    page_number: int,
    rows: int,
    latency_ms: float | None = None,
) -> None:
    """Log completion of a single chunk fetch."""
    logger.debug(
        "chunk_completed",
        extra={
            "chunk_index": chunk_index,
            "page_number": page_number,
            "rows": rows,
            "latency_ms": latency_ms,
        },
    )


def log_chunk_failed(
    *,
    chunk_index: int,
    page_number: int,
    outcome: OutcomeKind | None,
    error_type: str,
    error_message: str,
) -> None:
    """Log a failed chunk fetch.

    Args:
        chunk_index: Zero-based index of the chunk that failed
        page_number: Provider page number of the chunk
        outcome: Outcome the failure maps to (None when it propagates)
        error_type: Exception class name
        error_message: Exception message
    """
    log = logger.warning if outcome is not None else logger.error
    log(
        "chunk_failed",
        extra={
            "chunk_index": chunk_index,
            "page_number": page_number,
            "outcome": outcome.value if outcome is not None else None,
            "error_type": error_type,
            "error_message": error_message,
        },
    )


def log_execution_complete(
    *,
    result: PagingResult,
    total_latency_ms: float | None = None,
) -> None:
    """Log completion of a paging execution."""
    logger.info(
        "paging_execution_complete",
        extra={
            "outcome": result.kind.value,
            "chunks_used": result.chunks_used,
            "total_points": result.total_points,
            "total_latency_ms": total_latency_ms,
        },
    )


def log_list_all_iteration(*, page_number: int, window: int, rows: int | None) -> None:
    """Log one list-all iteration (rows is None when the resource is absent)."""
    logger.debug(
        "list_all_iteration",
        extra={"page_number": page_number, "window": window, "rows": rows},
    )


def log_list_all_complete(*, iterations: int, total_points: int | None) -> None:
    """Log the end of a list-all run."""
    logger.info(
        "list_all_complete",
        extra={"iterations": iterations, "total_points": total_points},
    )
