"""Pagination configuration passed to every call."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from keyset_pager.core.pagination.cursor import MAX_CURSOR_LENGTH

if TYPE_CHECKING:
    from keyset_pager.core.pagination.executors import AsyncExecutor, Executor
    from keyset_pager.core.pagination.queries import PaginationQueries
    from keyset_pager.core.settings.pagination import PaginationSettings


@dataclass(slots=True, frozen=True)
class PaginationConfig:
    """Collaborators and limits for pagination calls.

    Attributes:
        queries: Provider of cursor filter, ordering and projection per sort name
        executor: Runs the augmented statement (sync or async)
        max_limit: Default upper bound for ``first``/``last``
        cursor_max_length: Longest cursor token accepted

    Example:
        config = PaginationConfig(
            queries=UserQueries(),
            executor=SessionExecutor(session),
            max_limit=100,
        )
    """

    queries: PaginationQueries
    executor: Executor | AsyncExecutor
    max_limit: int
    cursor_max_length: int = MAX_CURSOR_LENGTH

    @classmethod
    def from_settings(
        cls,
        queries: PaginationQueries,
        executor: Executor | AsyncExecutor,
        settings: PaginationSettings | None = None,
    ) -> PaginationConfig:
        """Build a config from ``PaginationSettings``.

        Args:
            queries: Query provider
            executor: Statement executor
            settings: Settings to read; the cached settings when omitted
        """
        if settings is None:
            from keyset_pager.core.settings import get_pagination_settings

            settings = get_pagination_settings()

        return cls(
            queries=queries,
            executor=executor,
            max_limit=settings.max_limit,
            cursor_max_length=settings.cursor_max_length,
        )


__all__ = ["PaginationConfig"]
