"""Unit tests for ranking and threshold filtering."""

from collections.abc import Generator
from datetime import timedelta

import pytest

from vibefeed.config.schemas import RankingConfig, ThresholdsConfig, TrendingConfig
from vibefeed.ranker.metrics import RankerMetrics
from vibefeed.ranker.models import RankableItem
from vibefeed.ranker.ranker import (
    TrendingRanker,
    compute_checksum,
    compute_score_percentiles,
    filter_candidates,
    rank,
    rank_items_pure,
)
from tests.helpers.items import make_item
from tests.helpers.time import FIXED_NOW


@pytest.fixture(autouse=True)
def reset_metrics() -> Generator[None]:
    """Reset singleton before and after each test."""
    RankerMetrics.reset()
    yield
    RankerMetrics.reset()


class TestRank:
    """Tests for the pure rank function."""

    def test_orders_by_descending_score(self) -> None:
        """Higher scores come first."""
        items = [
            make_item("stale", age_hours=100.0, popularity=10),
            make_item("hot", age_hours=1.0, popularity=10),
            make_item("warm", age_hours=10.0, popularity=10),
        ]
        ranked = rank(items, FIXED_NOW)
        assert [s.id for s in ranked] == ["hot", "warm", "stale"]

    def test_popular_old_item_can_beat_unpopular_new_item(self) -> None:
        """Popularity can outweigh recency."""
        items = [
            make_item("new", age_hours=0.0, popularity=2),
            make_item("popular", age_hours=5.0, popularity=100),
        ]
        ranked = rank(items, FIXED_NOW)
        assert [s.id for s in ranked] == ["popular", "new"]

    def test_stable_for_equal_scores(self) -> None:
        """Ties keep their input order."""
        a = make_item("a", age_hours=4.0, popularity=6)
        b = make_item("b", age_hours=4.0, popularity=6)
        assert [s.id for s in rank([a, b], FIXED_NOW)] == ["a", "b"]
        assert [s.id for s in rank([b, a], FIXED_NOW)] == ["b", "a"]

    def test_zero_score_items_keep_fetch_order(self) -> None:
        """Unendorsed items stay in the order they were supplied."""
        items = [
            make_item("z1", age_hours=1.0, popularity=0),
            make_item("scored", age_hours=30.0, popularity=3),
            make_item("z2", age_hours=2.0, popularity=1),
            make_item("z3", age_hours=3.0, popularity=0),
        ]
        ranked = rank(items, FIXED_NOW)
        assert [s.id for s in ranked] == ["scored", "z1", "z2", "z3"]

    def test_repeatable_for_fixed_now(self) -> None:
        """Same input and instant give the same order."""
        items = [
            make_item(f"item-{i}", age_hours=i * 3.0, popularity=(i * 7) % 11)
            for i in range(20)
        ]
        first = rank(items, FIXED_NOW)
        second = rank(items, FIXED_NOW)
        assert [s.id for s in first] == [s.id for s in second]
        assert [s.trending_score for s in first] == [s.trending_score for s in second]

    def test_does_not_mutate_input(self) -> None:
        """The input list keeps its order and contents."""
        items = [
            make_item("a", age_hours=50.0, popularity=2),
            make_item("b", age_hours=1.0, popularity=20),
        ]
        snapshot = list(items)
        rank(items, FIXED_NOW)
        assert items == snapshot

    def test_empty_input(self) -> None:
        """Empty input gives empty output."""
        assert rank([], FIXED_NOW) == []

    def test_later_now_changes_order(self) -> None:
        """Decay reorders the same data as time passes."""
        items = [
            make_item("steady", age_hours=20.0, popularity=40),
            make_item("burst", age_hours=0.0, popularity=8),
        ]
        assert rank(items, FIXED_NOW)[0].id == "burst"
        later = FIXED_NOW + timedelta(hours=48)
        assert rank(items, later)[0].id == "steady"


class TestFilterCandidates:
    """Tests for threshold filtering."""

    def test_thresholds_exclude_regardless_of_score(self) -> None:
        """Items under popularity or over age are dropped."""
        items = [
            make_item("keep", age_hours=10.0, popularity=5),
            make_item("too-few", age_hours=1.0, popularity=4),
            make_item("too-old", age_hours=25.0, popularity=500),
            make_item("edge", age_hours=24.0, popularity=5),
        ]
        kept = filter_candidates(items, min_popularity=5, max_age_hours=24, now=FIXED_NOW)
        assert {s.id for s in kept} == {"keep", "edge"}
        assert [s.id for s in kept] == ["keep", "edge"]

    def test_defaults_are_one_star_and_one_week(self) -> None:
        """Defaults keep items with at least one star from the last 7 days."""
        items = [
            make_item("zero", age_hours=1.0, popularity=0),
            make_item("one", age_hours=1.0, popularity=1),
            make_item("week", age_hours=168.0, popularity=3),
            make_item("older", age_hours=168.5, popularity=3),
        ]
        kept = filter_candidates(items, now=FIXED_NOW)
        assert {s.id for s in kept} == {"one", "week"}

    def test_future_item_is_kept(self) -> None:
        """Future timestamps count as age zero."""
        future = RankableItem(
            id="future",
            created_at=FIXED_NOW + timedelta(hours=1),
            popularity_count=3,
        )
        kept = filter_candidates([future], min_popularity=1, max_age_hours=0, now=FIXED_NOW)
        assert [s.id for s in kept] == ["future"]


class TestTrendingRanker:
    """Tests for the service wrapper."""

    def test_rank_result(self) -> None:
        """rank returns every item with summary fields."""
        items = [
            make_item("a", age_hours=2.0, popularity=3),
            make_item("b", age_hours=1.0, popularity=9),
        ]
        result = TrendingRanker(now=FIXED_NOW).rank(items)
        assert result.ids == ["b", "a"]
        assert result.items_in == 2
        assert result.items_out == 2
        assert result.filtered_out == 0
        assert result.ranked_at == FIXED_NOW
        assert len(result.output_checksum) == 64

    def test_trending_uses_configured_thresholds(self) -> None:
        """Thresholds come from configuration unless overridden."""
        config = RankingConfig(
            thresholds=ThresholdsConfig(min_popularity=3, max_age_hours=12)
        )
        items = [
            make_item("ok", age_hours=2.0, popularity=3),
            make_item("few", age_hours=2.0, popularity=2),
            make_item("old", age_hours=13.0, popularity=30),
        ]
        ranker = TrendingRanker(config=config, now=FIXED_NOW)

        result = ranker.trending(items)
        assert result.ids == ["ok"]
        assert result.filtered_out == 2

        overridden = ranker.trending(items, min_popularity=2, max_age_hours=24)
        assert overridden.ids == ["old", "ok", "few"]

    def test_configured_gravity_applies(self) -> None:
        """Gravity from configuration flows into scores."""
        config = RankingConfig(trending=TrendingConfig(gravity=1.0))
        item = make_item(age_hours=8.0, popularity=3)
        result = TrendingRanker(config=config, now=FIXED_NOW).rank([item])
        assert result.items[0].trending_score == pytest.approx(0.2)

    def test_records_metrics(self) -> None:
        """Every call updates the shared metrics."""
        items = [
            make_item("a", age_hours=1.0, popularity=0),
            make_item("b", age_hours=1.0, popularity=5),
            make_item("c", age_hours=500.0, popularity=5),
        ]
        ranker = TrendingRanker(now=FIXED_NOW)
        ranker.rank(items)
        ranker.trending(items)

        metrics = RankerMetrics.get_instance().to_dict()
        assert metrics["rankings_total"] == 2
        assert metrics["items_in_total"] == 6
        assert metrics["items_out_total"] == 4
        assert metrics["filtered_out_total"] == 2
        assert metrics["zero_score_total"] == 1

    def test_checksum_tracks_order(self) -> None:
        """Identical inputs share a checksum; different orders do not."""
        items = [
            make_item("a", age_hours=1.0, popularity=4),
            make_item("b", age_hours=1.0, popularity=8),
        ]
        ranker = TrendingRanker(now=FIXED_NOW)
        first = ranker.rank(items)
        second = ranker.rank(items)
        assert first.output_checksum == second.output_checksum
        assert compute_checksum(list(reversed(first.items))) != first.output_checksum


class TestHelpers:
    """Tests for percentile and pure API helpers."""

    def test_percentiles_empty(self) -> None:
        """No scores give zero percentiles."""
        assert compute_score_percentiles([]) == {"p50": 0.0, "p90": 0.0, "p99": 0.0}

    def test_percentiles(self) -> None:
        """Percentiles pick from the sorted scores."""
        items = [make_item(f"i{n}", age_hours=0.0, popularity=n + 1) for n in range(10)]
        scored = rank(items, FIXED_NOW)
        percentiles = compute_score_percentiles(scored)
        assert percentiles["p50"] == pytest.approx(5 / 2**1.8)
        assert percentiles["p90"] == pytest.approx(9 / 2**1.8)
        assert percentiles["p99"] == pytest.approx(9 / 2**1.8)

    def test_rank_items_pure_matches_rank(self) -> None:
        """The pure API gives the same order as rank with defaults."""
        items = [
            make_item("a", age_hours=3.0, popularity=2),
            make_item("b", age_hours=1.0, popularity=2),
        ]
        assert [s.id for s in rank_items_pure(items, FIXED_NOW)] == ["b", "a"]
