"""Core components."""

from .config import PagingConfig, configure, get_config, reset_config
from .exceptions import (
    InvalidPagingArgumentError,
    InvalidRequestError,
    PagingError,
    ProviderError,
    RateLimitError,
    ResourceNotFoundError,
    UnauthorizedError,
    error_for_status,
)

__all__ = [
    "PagingConfig",
    "configure",
    "get_config",
    "reset_config",
    "PagingError",
    "InvalidPagingArgumentError",
    "ProviderError",
    "ResourceNotFoundError",
    "UnauthorizedError",
    "InvalidRequestError",
    "RateLimitError",
    "error_for_status",
]
