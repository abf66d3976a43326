"""Pagination option validation.

Turns raw caller options into a canonical, immutable ``PaginationRequest``:

    first=10                -> forward, no cursor
    first=10, after="..."   -> forward, starting after the cursor row
    last=10                 -> backward from the end of the set
    last=10, before="..."   -> backward, ending before the cursor row

Options may be given as a mapping or as ``(key, value)`` pairs. When a key
appears more than once, the first occurrence wins and later ones are
ignored. Config values are appended after caller options, so a caller's
``max_limit`` takes precedence over the configured one.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from keyset_pager.core.exceptions import InvalidOptionsError

RECOGNIZED_OPTIONS = frozenset({"first", "after", "last", "before", "max_limit"})

Options = Mapping[str, Any] | Iterable[tuple[str, Any]]

_BAD_SHAPE = "Options must be a mapping or (key, value) pairs"


class PagingDirection(StrEnum):
    """Direction in which rows are fetched relative to the cursor."""

    FORWARD = "forward"
    BACKWARD = "backward"


@dataclass(slots=True, frozen=True)
class PaginationRequest:
    """Canonical pagination request.

    Attributes:
        sort_name: Name of the sort the query provider knows how to apply
        cursor: Opaque cursor to resume from, or None for the start/end
        direction: FORWARD for first/after, BACKWARD for last/before
        limit: Number of rows requested (the query fetches one more)
    """

    sort_name: str
    cursor: str | None
    direction: PagingDirection
    limit: int

    @property
    def is_forward(self) -> bool:
        return self.direction is PagingDirection.FORWARD


def collect_options(*sources: Options | None) -> dict[str, Any]:
    """Flatten option sources into a dict, keeping the first value per key.

    Args:
        *sources: Mappings or iterables of ``(key, value)`` pairs, in
            precedence order

    Returns:
        Dict of the first-supplied value for each key

    Raises:
        InvalidOptionsError: If a source is neither a mapping nor pairs
    """
    resolved: dict[str, Any] = {}
    for source in sources:
        if source is None:
            continue
        if isinstance(source, Mapping):
            pairs: Iterable[Any] = source.items()
        elif isinstance(source, Iterable) and not isinstance(source, (str, bytes)):
            pairs = source
        else:
            raise InvalidOptionsError(_BAD_SHAPE)
        for pair in pairs:
            if not _is_pair(pair):
                raise InvalidOptionsError(_BAD_SHAPE)
            key, value = pair
            resolved.setdefault(key, value)
    return resolved


def _is_pair(value: Any) -> bool:
    return isinstance(value, (tuple, list)) and len(value) == 2 and isinstance(value[0], str)


def _is_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_cursor(name: str, value: Any) -> None:
    if value is not None and (not isinstance(value, str) or not value):
        msg = f"`{name}` must be a non-empty cursor string"
        raise InvalidOptionsError(msg, details={name: value})


def normalize(sort_name: str, *options: Options | None) -> PaginationRequest:
    """Validate pagination options and build a ``PaginationRequest``.

    Args:
        sort_name: Name of the sort to paginate by
        *options: Option sources in precedence order; see ``collect_options``

    Returns:
        Canonical pagination request

    Raises:
        InvalidOptionsError: If the options are conflicting, incomplete,
            or out of range

    Example:
        normalize("by_name", [("first", 25), ("after", cursor)], {"max_limit": 100})
    """
    opts = collect_options(*options)

    unknown = sorted(str(key) for key in set(opts) - RECOGNIZED_OPTIONS)
    if unknown:
        msg = f"Unrecognized pagination options: {', '.join(unknown)}"
        raise InvalidOptionsError(msg)

    first = opts.get("first")
    last = opts.get("last")
    after = opts.get("after")
    before = opts.get("before")

    if first is not None and last is not None:
        msg = "Specify either `first` or `last`, not both"
        raise InvalidOptionsError(msg)
    if first is None and last is None:
        msg = "One of `first` or `last` is required"
        raise InvalidOptionsError(msg)

    count_key = "first" if first is not None else "last"
    count = first if first is not None else last
    if not _is_count(count):
        msg = f"`{count_key}` must be an integer"
        raise InvalidOptionsError(msg, details={count_key: count})
    if count < 0:
        msg = f"`{count_key}` must not be negative"
        raise InvalidOptionsError(msg, details={count_key: count})

    if after is not None and before is not None:
        msg = "Specify either `after` or `before`, not both"
        raise InvalidOptionsError(msg)
    if first is not None and before is not None:
        msg = "`before` can only be used with `last`"
        raise InvalidOptionsError(msg)
    if last is not None and after is not None:
        msg = "`after` can only be used with `first`"
        raise InvalidOptionsError(msg)
    _check_cursor("after", after)
    _check_cursor("before", before)

    max_limit = opts.get("max_limit")
    if max_limit is None:
        msg = "`max_limit` is required"
        raise InvalidOptionsError(msg)
    if not _is_count(max_limit) or max_limit < 1:
        msg = "`max_limit` must be a positive integer"
        raise InvalidOptionsError(msg, details={"max_limit": max_limit})
    if count > max_limit:
        msg = f"`{count_key}` may not exceed {max_limit}"
        raise InvalidOptionsError(msg, details={count_key: count, "max_limit": max_limit})

    if first is not None:
        return PaginationRequest(
            sort_name=sort_name,
            cursor=after,
            direction=PagingDirection.FORWARD,
            limit=count,
        )
    return PaginationRequest(
        sort_name=sort_name,
        cursor=before,
        direction=PagingDirection.BACKWARD,
        limit=count,
    )


__all__ = [
    "RECOGNIZED_OPTIONS",
    "Options",
    "PaginationRequest",
    "PagingDirection",
    "collect_options",
    "normalize",
]
