"""Cursor-based (keyset) pagination.

Pagination is:
- Stable: cursors encode sort-key values, not offsets, so inserts and
  deletes elsewhere do not shift pages
- Performant: indexed seeks instead of OFFSET scans
- Bidirectional: ``first``/``after`` and ``last``/``before``

Usage:
    from keyset_pager.core.pagination import (
        PaginationConfig,
        SessionExecutor,
        paginate_or_raise,
    )

    config = PaginationConfig(
        queries=UserQueries(),
        executor=SessionExecutor(session),
        max_limit=100,
    )
    page = paginate_or_raise(select(User), "by_name", {"first": 20}, config)
    page.rows, page.has_next_page, page.end_cursor

The query provider (``UserQueries`` above) belongs to the caller; see
``PaginationQueries``.
"""

from keyset_pager.core.pagination.config import PaginationConfig
from keyset_pager.core.pagination.cursor import CursorCodec, decode_cursor, encode_cursor
from keyset_pager.core.pagination.executors import (
    AsyncExecutor,
    AsyncSessionExecutor,
    Executor,
    SessionExecutor,
)
from keyset_pager.core.pagination.options import (
    PaginationRequest,
    PagingDirection,
    normalize,
)
from keyset_pager.core.pagination.page import AugmentedRow, Page, assemble
from keyset_pager.core.pagination.paginator import (
    AsyncPaginator,
    PaginationResult,
    Paginator,
    apaginate,
    apaginate_or_raise,
    atotal_count,
    paginate,
    paginate_or_raise,
    total_count,
)
from keyset_pager.core.pagination.queries import (
    PaginationQueries,
    QueryAugmentor,
    augment,
    reverse_order,
)
from keyset_pager.core.pagination.schemas import Connection, CursorPage, Edge, PageInfo

__all__ = [
    "AsyncExecutor",
    "AsyncPaginator",
    "AsyncSessionExecutor",
    "AugmentedRow",
    "Connection",
    "CursorCodec",
    "CursorPage",
    "Edge",
    "Executor",
    "Page",
    "PageInfo",
    "PaginationConfig",
    "PaginationQueries",
    "PaginationRequest",
    "PaginationResult",
    "Paginator",
    "PagingDirection",
    "QueryAugmentor",
    "SessionExecutor",
    "apaginate",
    "apaginate_or_raise",
    "assemble",
    "atotal_count",
    "augment",
    "decode_cursor",
    "encode_cursor",
    "normalize",
    "paginate",
    "paginate_or_raise",
    "reverse_order",
    "total_count",
]
