"""Trimming of reassembled records down to the caller's window."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from .definitions import PageDescriptor

T = TypeVar("T")


def ignore_first_n(records: Sequence[T], n: int) -> list[T]:
    """Drop the first ``n`` records; returns an empty list if there are not enough."""
    if n <= 0:
        return list(records)
    if n >= len(records):
        return []
    return list(records[n:])


def ignore_last_n(records: Sequence[T], n: int) -> list[T]:
    """Drop the last ``n`` records; returns an empty list if there are not enough."""
    if n <= 0:
        return list(records)
    if n >= len(records):
        return []
    return list(records[: len(records) - n])


def trim(records: Sequence[T], first_n: int, last_n: int) -> list[T]:
    """Drop ``first_n`` records from the front and ``last_n`` from the back.

    Never fails: if the two together cover the whole sequence, the result is empty.
    """
    return ignore_first_n(ignore_last_n(records, last_n), first_n)


def trim_to_window(
    records: Sequence[T],
    descriptor: PageDescriptor,
    plans: Sequence[PageDescriptor],
) -> list[T]:
    """Cut the combined records of a plan down to the logical descriptor's window.

    Records past the end of the logical window (physical overshoot) are
    removed by position, so a short final page does not lose real records.
    The caller's own ignore counts then apply to the combined sequence.

    Args:
        records: Records reassembled in physical page order
        descriptor: Logical descriptor the plan was made for
        plans: Physical descriptors returned by the planner

    Returns:
        Trimmed records
    """
    if not plans:
        return trim(records, descriptor.ignore_first_n, descriptor.ignore_last_n)
    first_n = plans[0].ignore_first_n
    leading = first_n - descriptor.ignore_first_n
    window = list(records[: leading + descriptor.page_size])
    return trim(window, first_n, descriptor.ignore_last_n)
