"""Query augmentation for keyset pagination.

The engine never builds predicates itself. A query provider, supplied by
the caller and keyed by sort name, knows how to express three things for
each named sort:

- ``beyond_cursor``: rows strictly after (forward) or before (backward)
  the cursor row, with a full keyset comparison over the sort columns
- ``apply_order``: the natural (forward) ORDER BY
- ``apply_select``: add the sort-key columns after the record, so each
  result row reads ``(record, key_1, key_2, ...)``

The augmentor sequences those calls, reverses the ordering for backward
pagination, and bounds the statement to ``limit + 1`` rows. The extra row
is the probe that tells the assembler whether more rows exist.

Example provider:
    class UserQueries:
        def beyond_cursor(self, statement, cursor_values, sort_name, direction):
            (name, id_) = cursor_values
            if direction == PagingDirection.FORWARD:
                return statement.where(tuple_(User.name, User.id) > (name, id_))
            return statement.where(tuple_(User.name, User.id) < (name, id_))

        def apply_order(self, statement, sort_name):
            return statement.order_by(User.name.asc(), User.id.asc())

        def apply_select(self, statement, sort_name):
            return statement.add_columns(User.name, User.id)
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from sqlalchemy import Select, desc, nulls_first, nulls_last
from sqlalchemy.sql import operators
from sqlalchemy.sql.elements import UnaryExpression

from keyset_pager.core.exceptions import MalformedCursorError, QueryAugmentationError
from keyset_pager.core.pagination.cursor import MAX_CURSOR_LENGTH, decode_cursor
from keyset_pager.core.pagination.options import PagingDirection
from keyset_pager.infra.logging import LazyString, get_lazy_logger

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement

    from keyset_pager.core.pagination.options import PaginationRequest

logger = get_lazy_logger(__name__)


@runtime_checkable
class PaginationQueries(Protocol):
    """Provider of cursor filtering, ordering and projection per sort name.

    Implementations raise ``UnknownSortError`` for sort names they do not
    define. All three methods are pure statement transformations.
    """

    def beyond_cursor(
        self,
        statement: Select[Any],
        cursor_values: Sequence[Any],
        sort_name: str,
        direction: PagingDirection,
    ) -> Select[Any]: ...

    def apply_order(self, statement: Select[Any], sort_name: str) -> Select[Any]: ...

    def apply_select(self, statement: Select[Any], sort_name: str) -> Select[Any]: ...


def _reverse_term(term: ColumnElement[Any]) -> ColumnElement[Any]:
    """Flip one ORDER BY term: ASC <-> DESC, NULLS FIRST <-> NULLS LAST."""
    if isinstance(term, UnaryExpression):
        if term.modifier is operators.desc_op:
            return term.element.asc()
        if term.modifier is operators.asc_op:
            return term.element.desc()
        if term.modifier is operators.nulls_first_op:
            return nulls_last(_reverse_term(term.element))
        if term.modifier is operators.nulls_last_op:
            return nulls_first(_reverse_term(term.element))
    # Bare columns sort ascending
    return desc(term)


def reverse_order(statement: Select[Any]) -> Select[Any]:
    """Reverse every ORDER BY term of a statement.

    Args:
        statement: Statement with an ORDER BY clause

    Returns:
        Statement ordered the opposite way

    Raises:
        QueryAugmentationError: If the statement has no ORDER BY
    """
    clauses = statement._order_by_clauses
    if not clauses:
        msg = "Cannot reverse the order of a statement without ORDER BY"
        raise QueryAugmentationError(msg)
    return statement.order_by(None).order_by(*(_reverse_term(c) for c in clauses))


class QueryAugmentor:
    """Turn a base statement into a bounded, cursor-filtered statement.

    Adds, in order:
    1. The provider's beyond-cursor filter (if the request has a cursor)
    2. The provider's ordering, reversed for backward pagination
    3. The provider's sort-key projection
    4. LIMIT of ``request.limit + 1``

    Attributes:
        request: Canonical pagination request
        queries: Query provider for the request's sort name
        max_cursor_length: Longest cursor token accepted
    """

    def __init__(
        self,
        request: PaginationRequest,
        queries: PaginationQueries,
        *,
        max_cursor_length: int = MAX_CURSOR_LENGTH,
    ) -> None:
        self.request = request
        self.queries = queries
        self.max_cursor_length = max_cursor_length

    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Apply pagination to statement."""
        statement = self._apply_where(statement)
        statement = self._apply_ordering(statement)
        statement = self._apply_select(statement)
        statement = statement.limit(self.request.limit + 1)

        logger.debug(
            lambda: (
                f"pagination.augment: sort={self.request.sort_name} "
                f"direction={self.request.direction} limit={self.request.limit} "
                f"cursor={'yes' if self.request.cursor else 'no'}"
            )
        )
        logger.debug("pagination.statement: %s", LazyString(lambda: statement))
        return statement

    def _apply_where(self, statement: Select[Any]) -> Select[Any]:
        if self.request.cursor is None:
            return statement

        try:
            cursor_values = decode_cursor(
                self.request.cursor, max_length=self.max_cursor_length
            )
        except MalformedCursorError as e:
            logger.warning("Rejected cursor for sort %s: %s", self.request.sort_name, e.reason)
            raise

        return self.queries.beyond_cursor(
            statement, cursor_values, self.request.sort_name, self.request.direction
        )

    def _apply_ordering(self, statement: Select[Any]) -> Select[Any]:
        statement = self.queries.apply_order(statement, self.request.sort_name)
        if self.request.direction is PagingDirection.BACKWARD:
            # Rows nearest the cursor come back first
            statement = reverse_order(statement)
        return statement

    def _apply_select(self, statement: Select[Any]) -> Select[Any]:
        return self.queries.apply_select(statement, self.request.sort_name)


def augment(
    statement: Select[Any],
    request: PaginationRequest,
    queries: PaginationQueries,
    *,
    max_cursor_length: int = MAX_CURSOR_LENGTH,
) -> Select[Any]:
    """Build the bounded pagination statement. See ``QueryAugmentor``."""
    return QueryAugmentor(request, queries, max_cursor_length=max_cursor_length).apply(statement)


__all__ = [
    "PaginationQueries",
    "QueryAugmentor",
    "augment",
    "reverse_order",
]
