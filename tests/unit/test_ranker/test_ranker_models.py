"""Tests for ranker data models."""

from datetime import UTC, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from vibefeed.ranker.models import RankableItem, ScoredItem


class TestRankableItem:
    """Tests for RankableItem validation."""

    def test_naive_timestamp_becomes_utc(self) -> None:
        """Naive creation times are interpreted as UTC."""
        item = RankableItem(id="a", created_at=datetime(2024, 1, 1, 8, 0))
        assert item.created_at == datetime(2024, 1, 1, 8, 0, tzinfo=UTC)

    def test_aware_timestamp_normalized_to_utc(self) -> None:
        """Offsets are converted to UTC."""
        plus_two = timezone(timedelta(hours=2))
        item = RankableItem(id="a", created_at=datetime(2024, 1, 1, 10, 0, tzinfo=plus_two))
        assert item.created_at == datetime(2024, 1, 1, 8, 0, tzinfo=UTC)
        assert item.created_at.utcoffset() == timedelta(0)

    def test_negative_popularity_rejected(self) -> None:
        """Popularity counts cannot be negative."""
        with pytest.raises(ValidationError):
            RankableItem(id="a", created_at=datetime(2024, 1, 1), popularity_count=-1)

    def test_empty_id_rejected(self) -> None:
        """Identifiers must be non-empty."""
        with pytest.raises(ValidationError):
            RankableItem(id="", created_at=datetime(2024, 1, 1))

    def test_extra_fields_rejected(self) -> None:
        """Unknown fields are not accepted."""
        with pytest.raises(ValidationError):
            RankableItem(id="a", created_at=datetime(2024, 1, 1), title="x")  # type: ignore[call-arg]

    def test_frozen(self) -> None:
        """Records are immutable."""
        item = RankableItem(id="a", created_at=datetime(2024, 1, 1))
        with pytest.raises(ValidationError):
            item.popularity_count = 5  # type: ignore[misc]


class TestScoredItem:
    """Tests for ScoredItem serialization."""

    def test_to_json_dict(self) -> None:
        """The JSON view carries the item fields and the score."""
        item = RankableItem(
            id="proj-1",
            created_at=datetime(2024, 6, 1, 9, 30, tzinfo=UTC),
            popularity_count=4,
        )
        scored = ScoredItem(item=item, trending_score=0.5)
        assert scored.id == "proj-1"
        assert scored.to_json_dict() == {
            "id": "proj-1",
            "created_at": "2024-06-01T09:30:00+00:00",
            "popularity_count": 4,
            "trending_score": 0.5,
        }
