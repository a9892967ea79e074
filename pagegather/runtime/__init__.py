"""Runtime layer: paging handler and chunking machinery."""

from .paging import PagingHandler, get_default_handler, handle_list_all, handle_paging

__all__ = ["PagingHandler", "get_default_handler", "handle_paging", "handle_list_all"]
