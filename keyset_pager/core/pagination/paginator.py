"""Pagination entry points.

Each call runs normalize -> augment -> execute -> assemble:

    result = paginate(select(User), "by_name", {"first": 20}, config)
    if result.ok:
        render(result.page)
    else:
        reject(result.error)

Invalid options come back as ``PaginationResult.error``. The ``*_or_raise``
variants raise ``InvalidOptionsError`` instead, for call sites that have
already validated their input. Malformed cursors, unknown sort names and
database errors propagate from every variant.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from keyset_pager.core.exceptions import InvalidOptionsError, PaginationError
from keyset_pager.core.pagination.config import PaginationConfig
from keyset_pager.core.pagination.options import (
    Options,
    PaginationRequest,
    collect_options,
    normalize,
)
from keyset_pager.core.pagination.page import AugmentedRow, Page, assemble
from keyset_pager.core.pagination.queries import augment
from keyset_pager.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from sqlalchemy import Select

    from keyset_pager.core.pagination.executors import AsyncExecutor, Executor
    from keyset_pager.core.pagination.queries import PaginationQueries
    from keyset_pager.core.settings.pagination import PaginationSettings

logger = get_lazy_logger(__name__)

T = TypeVar("T")


@dataclass(slots=True, frozen=True)
class PaginationResult(Generic[T]):
    """Outcome of ``paginate``: a page, or a validation message.

    Attributes:
        page: The page when the options were valid
        error: Human-readable validation failure otherwise
    """

    page: Page[T] | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Page[T]:
        """Return the page or raise ``InvalidOptionsError`` with the message."""
        if self.page is None:
            raise InvalidOptionsError(self.error or "Invalid pagination options")
        return self.page


def _build_request(sort_name: str, options: Options | None, config: PaginationConfig) -> PaginationRequest:
    # Config goes last so caller-supplied max_limit wins
    return normalize(sort_name, options, {"max_limit": config.max_limit})


def _augmented_statement(
    query: Select[Any], request: PaginationRequest, config: PaginationConfig
) -> Select[Any]:
    return augment(query, request, config.queries, max_cursor_length=config.cursor_max_length)


def _to_page(rows: Sequence[Sequence[Any]], request: PaginationRequest, query: Select[Any]) -> Page[Any]:
    return assemble([AugmentedRow.from_row(row) for row in rows], request, query)


def _invalid(sort_name: str, error: InvalidOptionsError) -> PaginationResult[Any]:
    logger.debug("Invalid pagination options for sort %s: %s", sort_name, error)
    return PaginationResult(error=str(error))


def paginate_or_raise(
    query: Select[Any],
    sort_name: str,
    options: Options | None,
    config: PaginationConfig,
) -> Page[Any]:
    """Paginate a statement, raising on invalid options.

    Args:
        query: Base statement, without ordering or limits for the sort
        sort_name: Sort the query provider should apply
        options: ``first``/``after`` or ``last``/``before``, optional ``max_limit``
        config: Provider, executor and limits

    Returns:
        The requested page

    Raises:
        InvalidOptionsError: If the options fail validation
        MalformedCursorError: If the cursor cannot be decoded
    """
    request = _build_request(sort_name, options, config)
    statement = _augmented_statement(query, request, config)
    rows = config.executor.all(statement)
    return _to_page(rows, request, query)


def paginate(
    query: Select[Any],
    sort_name: str,
    options: Options | None,
    config: PaginationConfig,
) -> PaginationResult[Any]:
    """Paginate a statement, returning validation failures as a result.

    Options:
        first/after: the next ``first`` rows after the ``after`` cursor, or
            from the start of the set without a cursor
        last/before: the last ``last`` rows leading up to the ``before``
            cursor, or up to the end of the set without a cursor
        max_limit: upper bound for ``first``/``last``; defaults to
            ``config.max_limit``

    Returns:
        Result holding the page, or the validation message
    """
    try:
        request = _build_request(sort_name, options, config)
    except InvalidOptionsError as e:
        return _invalid(sort_name, e)

    statement = _augmented_statement(query, request, config)
    rows = config.executor.all(statement)
    return PaginationResult(page=_to_page(rows, request, query))


async def apaginate_or_raise(
    query: Select[Any],
    sort_name: str,
    options: Options | None,
    config: PaginationConfig,
) -> Page[Any]:
    """Async ``paginate_or_raise`` over an ``AsyncExecutor``."""
    request = _build_request(sort_name, options, config)
    statement = _augmented_statement(query, request, config)
    rows = await config.executor.all(statement)
    return _to_page(rows, request, query)


async def apaginate(
    query: Select[Any],
    sort_name: str,
    options: Options | None,
    config: PaginationConfig,
) -> PaginationResult[Any]:
    """Async ``paginate`` over an ``AsyncExecutor``."""
    try:
        request = _build_request(sort_name, options, config)
    except InvalidOptionsError as e:
        return _invalid(sort_name, e)

    statement = _augmented_statement(query, request, config)
    rows = await config.executor.all(statement)
    return PaginationResult(page=_to_page(rows, request, query))


def _base_query(page: Page[Any]) -> Select[Any]:
    if page.query is None:
        msg = "Page was not built from a query; cannot count"
        raise PaginationError(msg)
    return page.query


def total_count(page: Page[Any], config: PaginationConfig) -> int:
    """Count every row of the page's base query, ignoring pagination.

    Costs a COUNT query per call.
    """
    return config.executor.count(_base_query(page))


async def atotal_count(page: Page[Any], config: PaginationConfig) -> int:
    """Async ``total_count``."""
    return await config.executor.count(_base_query(page))


class Paginator:
    """Pagination bound to one config.

    Usage:
        users = Paginator(UserQueries(), SessionExecutor(session), max_limit=50)

        page = users.paginate_or_raise(select(User), "by_name", first=20)
        older = users.paginate_or_raise(select(User), "by_name", last=20, before=page.start_cursor)
    """

    def __init__(
        self,
        queries: PaginationQueries,
        executor: Executor,
        *,
        max_limit: int | None = None,
        settings: PaginationSettings | None = None,
    ) -> None:
        config = PaginationConfig.from_settings(queries, executor, settings)
        if max_limit is not None:
            config = replace(config, max_limit=max_limit)
        self.config = config

    def paginate(
        self, query: Select[Any], sort_name: str, options: Options | None = None, **kwargs: Any
    ) -> PaginationResult[Any]:
        try:
            resolved = collect_options(options, kwargs)
        except InvalidOptionsError as e:
            return _invalid(sort_name, e)
        return paginate(query, sort_name, resolved, self.config)

    def paginate_or_raise(
        self, query: Select[Any], sort_name: str, options: Options | None = None, **kwargs: Any
    ) -> Page[Any]:
        return paginate_or_raise(query, sort_name, collect_options(options, kwargs), self.config)

    def total_count(self, page: Page[Any]) -> int:
        return total_count(page, self.config)


class AsyncPaginator(Paginator):
    """``Paginator`` over an ``AsyncExecutor``."""

    def __init__(
        self,
        queries: PaginationQueries,
        executor: AsyncExecutor,
        *,
        max_limit: int | None = None,
        settings: PaginationSettings | None = None,
    ) -> None:
        super().__init__(queries, executor, max_limit=max_limit, settings=settings)  # type: ignore[arg-type]

    async def paginate(  # type: ignore[override]
        self, query: Select[Any], sort_name: str, options: Options | None = None, **kwargs: Any
    ) -> PaginationResult[Any]:
        try:
            resolved = collect_options(options, kwargs)
        except InvalidOptionsError as e:
            return _invalid(sort_name, e)
        return await apaginate(query, sort_name, resolved, self.config)

    async def paginate_or_raise(  # type: ignore[override]
        self, query: Select[Any], sort_name: str, options: Options | None = None, **kwargs: Any
    ) -> Page[Any]:
        return await apaginate_or_raise(query, sort_name, collect_options(options, kwargs), self.config)

    async def total_count(self, page: Page[Any]) -> int:  # type: ignore[override]
        return await atotal_count(page, self.config)


__all__ = [
    "AsyncPaginator",
    "PaginationResult",
    "Paginator",
    "apaginate",
    "apaginate_or_raise",
    "atotal_count",
    "paginate",
    "paginate_or_raise",
    "total_count",
]
