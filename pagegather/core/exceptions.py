"""Custom exception hierarchy."""

from __future__ import annotations

from typing import Any


class PagingError(Exception):
    """Base exception for all library errors."""

    pass


class InvalidPagingArgumentError(PagingError, ValueError):
    """Paging instruction is malformed.

    Raised before any page is fetched, so no provider quota is consumed.
    """

    def __init__(self, message: str, field: str | None = None, value: Any = None) -> None:
        super().__init__(message)
        self.field = field
        self.value = value


class ProviderError(PagingError):
    """Error from the remote data provider."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class ResourceNotFoundError(ProviderError):
    """The resource addressed by the request does not exist."""

    def __init__(self, message: str, response: Any = None) -> None:
        super().__init__(message, status_code=404, response=response)


class UnauthorizedError(ProviderError):
    """The caller is not allowed to read the resource."""

    def __init__(self, message: str, response: Any = None) -> None:
        super().__init__(message, status_code=401, response=response)


class InvalidRequestError(ProviderError):
    """The provider rejected the request as malformed."""

    def __init__(self, message: str, response: Any = None) -> None:
        super().__init__(message, status_code=400, response=response)


class RateLimitError(ProviderError):
    """Provider rate limit exceeded.

    Not converted by the paging engine: it propagates to the caller.
    """

    def __init__(self, message: str, retry_after: int = 60, response: Any = None) -> None:
        super().__init__(message, status_code=429, response=response)
        self.retry_after = retry_after


_STATUS_ERRORS: dict[int, type[ProviderError]] = {
    400: InvalidRequestError,
    401: UnauthorizedError,
    403: UnauthorizedError,
    404: ResourceNotFoundError,
}


def error_for_status(
    status: int,
    message: str,
    response: Any = None,
    retry_after: int | None = None,
) -> ProviderError:
    """Build the provider error matching an HTTP status code.

    Args:
        status: HTTP status code returned by the provider
        message: Error message
        response: Optional decoded response body
        retry_after: Seconds to wait, for rate limited responses

    Returns:
        ProviderError subclass instance (not raised)
    """
    if status == 429:
        return RateLimitError(
            message,
            retry_after=retry_after if retry_after is not None else 60,
            response=response,
        )
    error_cls = _STATUS_ERRORS.get(status)
    if error_cls is None:
        return ProviderError(message, status_code=status, response=response)
    error = error_cls(message, response=response)
    error.status_code = status
    return error
