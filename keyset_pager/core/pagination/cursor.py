"""Cursor encoding and decoding for keyset pagination.

Cursors are opaque strings that encode the sort-key values of exactly one
row, in sort order. The next query seeks past (or before) those values,
so a cursor identifies a position by value rather than by offset.

The cursor format is:
1. JSON object ``{"v": <version>, "k": [<value>, ...]}``
2. URL-safe base64, padding stripped

JSON-native scalars (null, bool, int, float, str) are stored as-is. Other
scalars are stored as single-key tagged objects so they decode to the
same Python type:

    datetime  -> {"dt": "2025-01-15T10:30:00+00:00"}
    date      -> {"d": "2025-01-15"}
    time      -> {"t": "10:30:00"}
    timedelta -> {"td": [days, seconds, microseconds]}
    UUID      -> {"u": "550e8400-e29b-41d4-a716-446655440000"}
    Decimal   -> {"dec": "10.50"}
    bytes     -> {"b": "<base64>"}
    nan/inf   -> {"f": "nan" | "inf" | "-inf"}

Example:
    token = encode_cursor([datetime(2025, 1, 15, tzinfo=UTC), 42])
    decode_cursor(token)  # (datetime(2025, 1, 15, tzinfo=UTC), 42)

Changing the format invalidates every outstanding cursor; bump
``CURSOR_VERSION`` when doing so.
"""

from __future__ import annotations

import base64
import binascii
import json
import math
import re
from collections.abc import Callable, Sequence
from datetime import date, datetime, time, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, StrictInt, ValidationError

from keyset_pager.core.exceptions import CursorEncodeError, MalformedCursorError

CURSOR_VERSION = 1
MAX_CURSOR_LENGTH = 4096

_TOKEN_RE = re.compile(r"^[A-Za-z0-9_-]+$")
_NON_FINITE = {"nan": math.nan, "inf": math.inf, "-inf": -math.inf}


class CursorPayload(BaseModel):
    """Decoded JSON body of a cursor token.

    Attributes:
        v: Encoding version
        k: Sort-key values in their JSON form
    """

    v: StrictInt = Field(description="Cursor encoding version")
    k: list[Any] = Field(description="Serialized sort-key values")

    model_config = {"frozen": True, "extra": "forbid"}


def _reject_constant(name: str) -> Any:
    # encode() never emits NaN/Infinity literals
    raise ValueError(f"unexpected JSON constant {name}")


def _decode_timedelta(value: Any) -> timedelta:
    days, seconds, microseconds = value
    for part in (days, seconds, microseconds):
        if not isinstance(part, int) or isinstance(part, bool):
            raise TypeError("timedelta parts must be integers")
    return timedelta(days=days, seconds=seconds, microseconds=microseconds)


def _decode_non_finite(value: Any) -> float:
    return _NON_FINITE[value]


def _decode_bytes(value: Any) -> bytes:
    return base64.b64decode(value, validate=True)


_DECODERS: dict[str, Callable[[Any], Any]] = {
    "dt": datetime.fromisoformat,
    "d": date.fromisoformat,
    "t": time.fromisoformat,
    "td": _decode_timedelta,
    "u": UUID,
    "dec": Decimal,
    "b": _decode_bytes,
    "f": _decode_non_finite,
}


class CursorCodec:
    """Encode and decode pagination cursors.

    Usage:
        cursor = CursorCodec.encode(["Alice", 17])
        CursorCodec.decode(cursor)  # ("Alice", 17)
    """

    @staticmethod
    def encode(values: Sequence[Any]) -> str:
        """Encode sort-key values to an opaque string.

        Args:
            values: Sort-key values of one row, in sort order

        Returns:
            URL-safe base64 string without padding

        Raises:
            CursorEncodeError: If a value has no cursor representation
        """
        payload = {
            "v": CURSOR_VERSION,
            "k": [CursorCodec._serialize_value(value) for value in values],
        }
        json_str = json.dumps(payload, separators=(",", ":"), allow_nan=False)
        encoded = base64.urlsafe_b64encode(json_str.encode()).decode("ascii")
        return encoded.rstrip("=")

    @staticmethod
    def decode(cursor: str, *, max_length: int = MAX_CURSOR_LENGTH) -> tuple[Any, ...]:
        """Decode a cursor string to its sort-key values.

        Args:
            cursor: Token produced by ``encode``
            max_length: Longest token accepted

        Returns:
            Tuple of sort-key values, in sort order

        Raises:
            MalformedCursorError: If the token was not produced by ``encode``
        """
        if not isinstance(cursor, str):
            raise MalformedCursorError(f"expected a string, got {type(cursor).__name__}")
        if len(cursor) > max_length:
            raise MalformedCursorError(f"token longer than {max_length} characters")
        if not _TOKEN_RE.match(cursor) or len(cursor) % 4 == 1:
            raise MalformedCursorError("not URL-safe base64", cursor)

        padded = cursor + "=" * (-len(cursor) % 4)
        try:
            raw = base64.urlsafe_b64decode(padded.encode("ascii"))
            data = json.loads(raw.decode("utf-8"), parse_constant=_reject_constant)
            payload = CursorPayload.model_validate(data)
        except (ValueError, ValidationError) as e:
            raise MalformedCursorError(f"undecodable payload: {e}", cursor) from e

        if payload.v != CURSOR_VERSION:
            raise MalformedCursorError(f"unsupported version {payload.v}", cursor)

        values = tuple(CursorCodec._deserialize_value(value, cursor) for value in payload.k)
        # Only the canonical encoding of the decoded values is accepted
        if CursorCodec.encode(values) != cursor:
            raise MalformedCursorError("not a canonical cursor encoding", cursor)
        return values

    @staticmethod
    def _serialize_value(value: Any) -> Any:
        """Serialize one sort-key value to its JSON form."""
        if value is None or isinstance(value, (bool, int, str)):
            return value
        if isinstance(value, float):
            if math.isfinite(value):
                return value
            if math.isnan(value):
                return {"f": "nan"}
            return {"f": "inf" if value > 0 else "-inf"}
        # datetime is a date subclass, check it first
        if isinstance(value, datetime):
            return {"dt": value.isoformat()}
        if isinstance(value, date):
            return {"d": value.isoformat()}
        if isinstance(value, time):
            return {"t": value.isoformat()}
        if isinstance(value, timedelta):
            return {"td": [value.days, value.seconds, value.microseconds]}
        if isinstance(value, UUID):
            return {"u": str(value)}
        if isinstance(value, Decimal):
            return {"dec": str(value)}
        if isinstance(value, (bytes, bytearray, memoryview)):
            return {"b": base64.b64encode(bytes(value)).decode("ascii")}

        msg = f"Cannot encode {type(value).__name__} in a cursor"
        raise CursorEncodeError(msg, details={"value": value})

    @staticmethod
    def _deserialize_value(value: Any, cursor: str) -> Any:
        """Restore one sort-key value from its JSON form."""
        if value is None or isinstance(value, (bool, int, float, str)):
            return value
        if not isinstance(value, dict) or len(value) != 1:
            raise MalformedCursorError("sort-key values must be scalars", cursor)

        ((tag, raw),) = value.items()
        decoder = _DECODERS.get(tag)
        if decoder is None:
            raise MalformedCursorError(f"unknown value tag {tag!r}", cursor)
        if tag != "td" and not isinstance(raw, str):
            raise MalformedCursorError(f"bad {tag!r} value: expected a string", cursor)
        try:
            return decoder(raw)
        except (
            TypeError,
            ValueError,
            KeyError,
            OverflowError,
            InvalidOperation,
            binascii.Error,
        ) as e:
            raise MalformedCursorError(f"bad {tag!r} value: {e}", cursor) from e


def encode_cursor(values: Sequence[Any]) -> str:
    """Encode sort-key values to a cursor. See ``CursorCodec.encode``."""
    return CursorCodec.encode(values)


def decode_cursor(cursor: str, *, max_length: int = MAX_CURSOR_LENGTH) -> tuple[Any, ...]:
    """Decode a cursor to sort-key values. See ``CursorCodec.decode``."""
    return CursorCodec.decode(cursor, max_length=max_length)


__all__ = [
    "CURSOR_VERSION",
    "MAX_CURSOR_LENGTH",
    "CursorCodec",
    "CursorPayload",
    "decode_cursor",
    "encode_cursor",
]
