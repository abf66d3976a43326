"""Pagination exceptions.

Two failure channels are kept apart:

- ``InvalidOptionsError`` is the validation channel. It describes bad
  end-user input (conflicting or out-of-range options) and is the only
  exception the non-raising entry points turn into an error result.
- Everything else (malformed cursors, unknown sort names, statements that
  cannot be augmented) is a structural failure and always propagates.
"""
from __future__ import annotations

from typing import Any


class PaginationError(Exception):
    """Base exception for the pagination engine.

    Attributes:
        message: Human-readable description
        details: Additional context about the failure
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize pagination error.

        Args:
            message: Error description
            details: Additional context about the error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Format error message with details."""
        if self.details:
            details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class InvalidOptionsError(PaginationError, ValueError):
    """Pagination options failed validation.

    Raised by the request normalizer for conflicting direction options,
    a cursor paired with the wrong direction, a missing count, or a count
    outside ``0..max_limit``.
    """


class MalformedCursorError(PaginationError, ValueError):
    """A cursor token could not be decoded.

    The token was not produced by the current cursor encoding: bad
    base64, bad JSON, an unknown version, or an unknown value tag.
    """

    def __init__(self, reason: str, cursor: str | None = None):
        details = {"cursor": cursor} if cursor is not None else None
        super().__init__(f"Malformed cursor: {reason}", details=details)
        self.reason = reason
        self.cursor = cursor


class CursorEncodeError(PaginationError, TypeError):
    """A sort-key value has no cursor representation."""


class UnknownSortError(PaginationError, LookupError):
    """A query provider was asked for a sort name it does not define.

    Providers raise this from ``beyond_cursor``, ``apply_order`` or
    ``apply_select``.
    """

    def __init__(self, sort_name: str, available: list[str] | None = None):
        details: dict[str, Any] = {"sort_name": sort_name}
        if available:
            details["available"] = sorted(available)
        super().__init__(f"Unknown sort {sort_name!r}", details=details)
        self.sort_name = sort_name

    def __repr__(self) -> str:
        """Repr for debugging."""
        return f"UnknownSortError(sort_name={self.sort_name!r})"


class QueryAugmentationError(PaginationError):
    """A statement could not be turned into a paginated statement."""


__all__ = [
    "CursorEncodeError",
    "InvalidOptionsError",
    "MalformedCursorError",
    "PaginationError",
    "QueryAugmentationError",
    "UnknownSortError",
]
