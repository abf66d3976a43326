"""Keyset (cursor-based) pagination for SQLAlchemy statements."""

from keyset_pager.core.exceptions import (
    CursorEncodeError,
    InvalidOptionsError,
    MalformedCursorError,
    PaginationError,
    QueryAugmentationError,
    UnknownSortError,
)
from keyset_pager.core.pagination import (
    AsyncPaginator,
    AsyncSessionExecutor,
    Page,
    PaginationConfig,
    PaginationQueries,
    PaginationResult,
    Paginator,
    PagingDirection,
    SessionExecutor,
    apaginate,
    apaginate_or_raise,
    paginate,
    paginate_or_raise,
)

__version__ = "0.1.0"

__all__ = [
    "AsyncPaginator",
    "AsyncSessionExecutor",
    "CursorEncodeError",
    "InvalidOptionsError",
    "MalformedCursorError",
    "Page",
    "PaginationConfig",
    "PaginationError",
    "PaginationQueries",
    "PaginationResult",
    "Paginator",
    "PagingDirection",
    "QueryAugmentationError",
    "SessionExecutor",
    "UnknownSortError",
    "apaginate",
    "apaginate_or_raise",
    "paginate",
    "paginate_or_raise",
]
