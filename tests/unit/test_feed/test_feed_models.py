"""Tests for feed models."""

import pytest
from pydantic import ValidationError

from vibefeed.feed.errors import FeedQueryError
from vibefeed.feed.models import FeedQuery, SortMode


class TestSortMode:
    """Tests for SortMode parsing."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("recent", SortMode.RECENT),
            ("STARS", SortMode.STARS),
            (" trending ", SortMode.TRENDING),
            (SortMode.STARS, SortMode.STARS),
        ],
    )
    def test_parse(self, raw: str, expected: SortMode) -> None:
        """Names parse case-insensitively."""
        assert SortMode.parse(raw) is expected

    def test_parse_unknown_lists_choices(self) -> None:
        """Errors name the allowed values."""
        with pytest.raises(FeedQueryError) as exc_info:
            SortMode.parse("popular")
        assert "recent, stars, trending" in str(exc_info.value)


class TestFeedQuery:
    """Tests for FeedQuery validation."""

    def test_offset(self) -> None:
        """Offset is (page - 1) * limit."""
        assert FeedQuery(page=3, limit=12).offset == 24

    @pytest.mark.parametrize(
        "kwargs",
        [{"page": 0}, {"limit": 0}, {"limit": 101}],
    )
    def test_out_of_range(self, kwargs: dict[str, int]) -> None:
        """Page and limit are bounded."""
        with pytest.raises(ValidationError):
            FeedQuery(**kwargs)
