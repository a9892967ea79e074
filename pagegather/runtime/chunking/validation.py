"""Validation of paging instructions before any fetch is issued."""

from __future__ import annotations

from ...core.exceptions import InvalidPagingArgumentError
from .definitions import PageDescriptor


def validate_descriptor(descriptor: PageDescriptor) -> None:
    """Reject a malformed paging instruction.

    Args:
        descriptor: Logical page request supplied by the caller

    Raises:
        InvalidPagingArgumentError: If page number or page size is below 1, or
            either ignore count is negative
    """
    if descriptor is None:
        raise InvalidPagingArgumentError("Paging descriptor is required")
    _require_int(descriptor.page_number, "page_number", minimum=1)
    _require_int(descriptor.page_size, "page_size", minimum=1)
    _require_int(descriptor.ignore_first_n, "ignore_first_n", minimum=0)
    _require_int(descriptor.ignore_last_n, "ignore_last_n", minimum=0)


def _require_int(value: object, field: str, *, minimum: int) -> None:
    # bool is an int subclass but never a meaningful page value
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidPagingArgumentError(
            f"{field} must be an integer, got {type(value).__name__}",
            field=field,
            value=value,
        )
    if value < minimum:
        raise InvalidPagingArgumentError(
            f"{field} must be >= {minimum}, got {value}",
            field=field,
            value=value,
        )
