"""Unit tests for pagination option validation."""
from __future__ import annotations

import pytest

from keyset_pager.core.exceptions import InvalidOptionsError
from keyset_pager.core.pagination.options import (
    PaginationRequest,
    PagingDirection,
    collect_options,
    normalize,
)


@pytest.mark.unit
class TestNormalizeValid:
    """Valid option combinations produce canonical requests."""

    def test_forward_without_cursor(self):
        request = normalize("first_name", {"first": 101, "max_limit": 200})

        assert request == PaginationRequest(
            sort_name="first_name",
            cursor=None,
            direction=PagingDirection.FORWARD,
            limit=101,
        )
        assert request.is_forward

    def test_forward_with_cursor(self):
        request = normalize("first_name", {"first": 101, "after": "abc123", "max_limit": 200})

        assert request.cursor == "abc123"
        assert request.direction is PagingDirection.FORWARD
        assert request.limit == 101

    def test_backward_without_cursor(self):
        request = normalize("middle_name", {"last": 99, "max_limit": 100})

        assert request.cursor is None
        assert request.direction is PagingDirection.BACKWARD
        assert request.limit == 99
        assert not request.is_forward

    def test_backward_with_cursor(self):
        request = normalize("middle_name", {"last": 99, "before": "def456", "max_limit": 100})

        assert request.cursor == "def456"
        assert request.direction is PagingDirection.BACKWARD

    def test_none_cursor_counts_as_absent(self):
        """An explicit None cursor should behave like no cursor."""
        request = normalize("name", {"first": 5, "after": None, "before": None, "max_limit": 10})

        assert request.cursor is None

    def test_request_is_immutable(self):
        request = normalize("name", {"first": 1, "max_limit": 10})

        with pytest.raises(AttributeError):
            request.limit = 2  # type: ignore[misc]

    def test_pairs_and_mappings_combine(self):
        """Option sources should merge in the order given."""
        request = normalize("name", [("first", 3)], {"max_limit": 5})

        assert request.limit == 3


@pytest.mark.unit
class TestNormalizeInvalid:
    """Conflicting or incomplete options raise InvalidOptionsError."""

    @pytest.mark.parametrize(
        "options",
        [
            {"first": 99, "last": 99},
            {"after": "99", "before": "99"},
            {"first": 99, "before": "99"},
            {"last": 99, "after": "99"},
            {"first": 9, "after": "a", "before": "b"},
        ],
    )
    def test_mutually_exclusive_options(self, options):
        with pytest.raises(InvalidOptionsError):
            normalize("middle_name", {**options, "max_limit": 100})

    def test_missing_count(self):
        with pytest.raises(InvalidOptionsError, match="`first` or `last` is required"):
            normalize("name", {"after": "abc", "max_limit": 100})

    def test_missing_max_limit(self):
        with pytest.raises(InvalidOptionsError, match="max_limit"):
            normalize("name", {"first": 1})

    @pytest.mark.parametrize("max_limit", [0, -5, "10", 2.5, True])
    def test_invalid_max_limit(self, max_limit):
        with pytest.raises(InvalidOptionsError):
            normalize("name", {"first": 1, "max_limit": max_limit})

    @pytest.mark.parametrize("count", ["5", 2.0, True, None])
    def test_non_integer_count(self, count):
        options = {"first": count, "max_limit": 10}
        if count is None:
            options["last"] = None

        with pytest.raises(InvalidOptionsError):
            normalize("name", options)

    @pytest.mark.parametrize("cursor", ["", 42, b"abc"])
    def test_invalid_cursor_value(self, cursor):
        with pytest.raises(InvalidOptionsError):
            normalize("name", {"first": 1, "after": cursor, "max_limit": 10})

    def test_unrecognized_option(self):
        with pytest.raises(InvalidOptionsError, match="Unrecognized pagination options: offset"):
            normalize("name", {"first": 1, "offset": 20, "max_limit": 10})

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            normalize("name", {})


@pytest.mark.unit
class TestNormalizeBounds:
    """Count must satisfy 0 <= count <= max_limit."""

    def test_negative_count(self):
        with pytest.raises(InvalidOptionsError, match="negative"):
            normalize("name", {"first": -1, "max_limit": 100})

    def test_zero_count_is_valid(self):
        request = normalize("name", {"first": 0, "max_limit": 100})

        assert request.limit == 0

    @pytest.mark.parametrize("count_key", ["first", "last"])
    def test_count_above_max_limit(self, count_key):
        with pytest.raises(InvalidOptionsError, match="may not exceed 5"):
            normalize("name", {count_key: 6, "max_limit": 5})

    @pytest.mark.parametrize("count_key", ["first", "last"])
    def test_count_at_max_limit(self, count_key):
        request = normalize("name", {count_key: 5, "max_limit": 5})

        assert request.limit == 5


@pytest.mark.unit
class TestDuplicateOptions:
    """When a key appears more than once, the first occurrence wins."""

    def test_first_max_limit_wins(self):
        opts = [("first", 101), ("max_limit", 100)]

        with pytest.raises(InvalidOptionsError):
            normalize("name", opts)
        with pytest.raises(InvalidOptionsError):
            normalize("name", [*opts, ("max_limit", 101)])
        assert normalize("name", [("max_limit", 101), *opts]).limit == 101

    def test_first_count_wins(self):
        opts = [("first", 5), ("first", 50), ("max_limit", 10)]

        assert normalize("name", opts).limit == 5

    def test_first_cursor_wins(self):
        opts = [("last", 5), ("before", "one"), ("before", "two"), ("max_limit", 10)]

        assert normalize("name", opts).cursor == "one"

    def test_earlier_source_wins(self):
        """Caller options should override later config-supplied values."""
        request = normalize("name", {"first": 20, "max_limit": 50}, {"max_limit": 10})

        assert request.limit == 20

    def test_collect_options_keeps_first(self):
        resolved = collect_options([("a", 1), ("a", 2)], {"a": 3, "b": 4}, None)

        assert resolved == {"a": 1, "b": 4}


@pytest.mark.unit
class TestOptionShapes:
    """Options must be a mapping or (key, value) pairs."""

    @pytest.mark.parametrize(
        "options",
        [
            [("first",)],
            ["first"],
            5,
            "first",
            [("first", 1, 2)],
            [(["first"], 1)],
        ],
    )
    def test_bad_shape(self, options):
        with pytest.raises(InvalidOptionsError, match=r"mapping or \(key, value\) pairs"):
            normalize("name", options, {"max_limit": 10})

    def test_list_pairs_accepted(self):
        request = normalize("name", [["first", 2], ["max_limit", 5]])

        assert request.limit == 2

    def test_non_string_mapping_key_is_unrecognized(self):
        with pytest.raises(InvalidOptionsError, match="Unrecognized pagination options: 5"):
            normalize("name", {"first": 1, 5: "x", "max_limit": 10})
