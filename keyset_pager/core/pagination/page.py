"""Page assembly from over-fetched rows.

The augmented statement fetches ``limit + 1`` rows, nearest the cursor
first. Assembly keeps the first ``limit`` rows, puts them back in natural
(forward) order and works out the navigation flags:

    direction   has_previous_page        has_next_page
    ---------   ----------------------   ----------------------
    forward     cursor was supplied      probe row was fetched
    backward    probe row was fetched    cursor was supplied

The side the cursor cuts into is assumed to hold more rows; the side
being fetched is measured by the probe row.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from keyset_pager.core.pagination.cursor import encode_cursor
from keyset_pager.core.pagination.options import PaginationRequest, PagingDirection
from keyset_pager.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from keyset_pager.core.pagination.schemas import Connection, CursorPage

logger = get_lazy_logger(__name__)

T = TypeVar("T")


@dataclass(slots=True, frozen=True)
class AugmentedRow(Generic[T]):
    """A record paired with the sort-key values it was ordered by.

    Attributes:
        sort_key_values: Values of the sort columns, in sort order
        record: The application row
    """

    sort_key_values: tuple[Any, ...]
    record: T

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> AugmentedRow[Any]:
        """Split an executed result row shaped ``(record, key_1, key_2, ...)``."""
        return cls(sort_key_values=tuple(row[1:]), record=row[0])

    @property
    def cursor(self) -> str:
        """Cursor pointing at this row."""
        return encode_cursor(self.sort_key_values)


@dataclass(slots=True, frozen=True)
class Page(Generic[T]):
    """One page of keyset-paginated results.

    Attributes:
        rows: Records in natural (forward) order, whatever the direction
        has_previous_page: Whether rows exist before this page
        has_next_page: Whether rows exist after this page
        start_cursor: Cursor of the first row, None when empty
        end_cursor: Cursor of the last row, None when empty
        raw_rows: Augmented rows behind ``rows``, same order
        request: The request this page answers
        query: Base statement the page was cut from

    Example:
        page = paginate_or_raise(stmt, "by_name", {"first": 20}, config)
        for user in page.rows:
            ...
        if page.has_next_page:
            next_page = paginate_or_raise(
                stmt, "by_name", {"first": 20, "after": page.end_cursor}, config
            )
    """

    rows: tuple[T, ...]
    has_previous_page: bool
    has_next_page: bool
    start_cursor: str | None = None
    end_cursor: str | None = None
    raw_rows: tuple[AugmentedRow[T], ...] = field(default=(), repr=False)
    request: PaginationRequest | None = field(default=None, repr=False)
    query: Any = field(default=None, repr=False, compare=False)

    @property
    def records(self) -> tuple[T, ...]:
        """Alias for ``rows``."""
        return self.rows

    def cursors_and_records(self) -> list[tuple[str, T]]:
        """Pair every record with its own cursor."""
        return [(row.cursor, row.record) for row in self.raw_rows]

    def to_connection(self, total_count: int | None = None) -> Connection[T]:
        """Convert to a Relay-style ``Connection``."""
        from keyset_pager.core.pagination.schemas import Connection, Edge, PageInfo

        return Connection(
            edges=[Edge(node=record, cursor=cursor) for cursor, record in self.cursors_and_records()],
            page_info=PageInfo(
                has_previous_page=self.has_previous_page,
                has_next_page=self.has_next_page,
                start_cursor=self.start_cursor,
                end_cursor=self.end_cursor,
                total_count=total_count,
            ),
        )

    def to_cursor_page(self, total_count: int | None = None) -> CursorPage[T]:
        """Convert to a REST-style ``CursorPage``."""
        return self.to_connection(total_count).to_cursor_page()


def assemble(
    extended_rows: Sequence[AugmentedRow[Any]],
    request: PaginationRequest,
    query: Any = None,
) -> Page[Any]:
    """Build a page from the rows returned by the augmented statement.

    Args:
        extended_rows: Up to ``request.limit + 1`` rows, nearest the cursor first
        request: The request the statement was built from
        query: Base statement, kept on the page for ``total_count``

    Returns:
        Assembled page
    """
    requested_rows = list(extended_rows[: request.limit])
    overfetched = len(extended_rows) > len(requested_rows)
    has_cursor = request.cursor is not None

    if request.direction is PagingDirection.BACKWARD:
        requested_rows.reverse()
        has_previous, has_next = overfetched, has_cursor
    else:
        has_previous, has_next = has_cursor, overfetched

    page: Page[Any] = Page(
        rows=tuple(row.record for row in requested_rows),
        has_previous_page=has_previous,
        has_next_page=has_next,
        start_cursor=requested_rows[0].cursor if requested_rows else None,
        end_cursor=requested_rows[-1].cursor if requested_rows else None,
        raw_rows=tuple(requested_rows),
        request=request,
        query=query,
    )

    logger.debug(
        lambda: (
            f"pagination.assemble: sort={request.sort_name} fetched={len(extended_rows)} "
            f"returned={len(page.rows)} has_previous={has_previous} has_next={has_next}"
        )
    )
    return page


__all__ = [
    "AugmentedRow",
    "Page",
    "assemble",
]
