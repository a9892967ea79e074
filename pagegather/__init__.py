"""pagegather - Paging aggregation for page-limited remote APIs."""

from .core import (
    InvalidPagingArgumentError,
    InvalidRequestError,
    PagingConfig,
    PagingError,
    ProviderError,
    RateLimitError,
    ResourceNotFoundError,
    UnauthorizedError,
    configure,
    error_for_status,
    get_config,
)
from .runtime import PagingHandler, handle_list_all, handle_paging
from .runtime.chunking import (
    ChunkExecutor,
    ChunkPolicy,
    OutcomeKind,
    PageDescriptor,
    PageFetcher,
    PagePlanner,
    PagingResult,
    WorkerPool,
    get_default_pool,
    trim,
    validate_descriptor,
)
from .utils import HTTPClient, HTTPPageFetcher

__version__ = "0.1.0"

__all__ = [
    # Config
    "PagingConfig",
    "configure",
    "get_config",
    # Errors
    "PagingError",
    "InvalidPagingArgumentError",
    "ProviderError",
    "ResourceNotFoundError",
    "UnauthorizedError",
    "InvalidRequestError",
    "RateLimitError",
    "error_for_status",
    # Paging
    "PageDescriptor",
    "PageFetcher",
    "PagingHandler",
    "PagingResult",
    "OutcomeKind",
    "handle_paging",
    "handle_list_all",
    # Chunking
    "ChunkPolicy",
    "PagePlanner",
    "ChunkExecutor",
    "WorkerPool",
    "get_default_pool",
    "validate_descriptor",
    "trim",
    # HTTP
    "HTTPClient",
    "HTTPPageFetcher",
]
