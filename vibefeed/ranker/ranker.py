"""Trending ranker: pure ranking functions and the logging service wrapper."""

import hashlib
import json
import time
from collections.abc import Sequence
from datetime import UTC, datetime

import structlog

from vibefeed.config.constants import (
    AGE_OFFSET_HOURS,
    COMPONENT_RANKER,
    DEFAULT_MAX_AGE_HOURS,
    DEFAULT_MIN_POPULARITY,
    GRAVITY,
)
from vibefeed.config.schemas import RankingConfig
from vibefeed.ranker.metrics import RankerMetrics
from vibefeed.ranker.models import Rankable, RankerResult, ScoredItem
from vibefeed.ranker.scorer import age_in_hours, score_items


logger = structlog.get_logger()


def rank(
    items: Sequence[Rankable],
    now: datetime | None = None,
    *,
    gravity: float = GRAVITY,
    age_offset_hours: float = AGE_OFFSET_HOURS,
) -> list[ScoredItem]:
    """Score items and order them by descending trending score.

    The sort is stable: items with equal scores keep their input order. Zero
    score items therefore stay in whatever order the caller fetched them
    (usually newest first).

    Args:
        items: Candidates to rank. Never mutated.
        now: Reference instant. Read from the clock once when omitted.
        gravity: Decay exponent.
        age_offset_hours: Offset added to the age before decay.

    Returns:
        New list of ScoredItem in ranked order.
    """
    reference = now or datetime.now(UTC)
    scored = score_items(
        items,
        reference,
        gravity=gravity,
        age_offset_hours=age_offset_hours,
    )
    return sorted(scored, key=lambda s: s.trending_score, reverse=True)


def filter_candidates(
    items: Sequence[Rankable],
    min_popularity: int = DEFAULT_MIN_POPULARITY,
    max_age_hours: float = DEFAULT_MAX_AGE_HOURS,
    now: datetime | None = None,
    *,
    gravity: float = GRAVITY,
    age_offset_hours: float = AGE_OFFSET_HOURS,
) -> list[ScoredItem]:
    """Keep popular, recent items and rank them.

    An item is kept when popularity_count >= min_popularity and its age is
    at most max_age_hours. Future timestamps count as age zero.

    Args:
        items: Candidates to filter.
        min_popularity: Minimum popularity_count to keep.
        max_age_hours: Maximum age in hours to keep.
        now: Reference instant. Read from the clock once when omitted.
        gravity: Decay exponent.
        age_offset_hours: Offset added to the age before decay.

    Returns:
        Ranked ScoredItem list of the retained items.
    """
    reference = now or datetime.now(UTC)
    kept = [
        item
        for item in items
        if item.popularity_count >= min_popularity
        and age_in_hours(item.created_at, reference) <= max_age_hours
    ]
    return rank(
        kept,
        reference,
        gravity=gravity,
        age_offset_hours=age_offset_hours,
    )


class TrendingRanker:
    """Ranks candidate batches with configuration, logging, and metrics.

    The scoring itself is delegated to the pure functions in this module; this
    class only adds the ambient concerns around them. It holds no per-call
    state and may be shared between concurrent requests.
    """

    def __init__(
        self,
        config: RankingConfig | None = None,
        metrics: RankerMetrics | None = None,
        now: datetime | None = None,
        request_id: str | None = None,
    ) -> None:
        """Initialize the ranker.

        Args:
            config: Ranking configuration (defaults when omitted).
            metrics: Optional metrics instance.
            now: Fixed reference instant. The clock is read per call when omitted.
            request_id: Optional identifier bound to every log line.
        """
        self._config = config or RankingConfig()
        self._metrics = metrics or RankerMetrics.get_instance()
        self._now = now
        self._log = logger.bind(component=COMPONENT_RANKER, request_id=request_id)

    @property
    def config(self) -> RankingConfig:
        """Get the active ranking configuration."""
        return self._config

    def rank(self, items: Sequence[Rankable]) -> RankerResult:
        """Rank every candidate.

        Args:
            items: Candidates to rank.

        Returns:
            RankerResult with all items in ranked order.
        """
        now = self._resolve_now()
        self._log.info("ranking_started", items_in=len(items), mode="all")

        start = time.perf_counter()
        ranked = rank(
            items,
            now,
            gravity=self._config.trending.gravity,
            age_offset_hours=self._config.trending.age_offset_hours,
        )
        duration_ms = (time.perf_counter() - start) * 1000

        return self._finish(items, ranked, now, duration_ms)

    def trending(
        self,
        items: Sequence[Rankable],
        min_popularity: int | None = None,
        max_age_hours: float | None = None,
    ) -> RankerResult:
        """Rank candidates that pass the popularity and age thresholds.

        Args:
            items: Candidates to filter and rank.
            min_popularity: Override for the configured minimum popularity.
            max_age_hours: Override for the configured maximum age.

        Returns:
            RankerResult with the retained items in ranked order.
        """
        thresholds = self._config.thresholds
        min_pop = (
            thresholds.min_popularity if min_popularity is None else min_popularity
        )
        max_age = thresholds.max_age_hours if max_age_hours is None else max_age_hours
        now = self._resolve_now()

        self._log.info(
            "ranking_started",
            items_in=len(items),
            mode="thresholds",
            min_popularity=min_pop,
            max_age_hours=max_age,
        )

        start = time.perf_counter()
        ranked = filter_candidates(
            items,
            min_pop,
            max_age,
            now,
            gravity=self._config.trending.gravity,
            age_offset_hours=self._config.trending.age_offset_hours,
        )
        duration_ms = (time.perf_counter() - start) * 1000

        return self._finish(items, ranked, now, duration_ms)

    def _resolve_now(self) -> datetime:
        return self._now or datetime.now(UTC)

    def _finish(
        self,
        items: Sequence[Rankable],
        ranked: list[ScoredItem],
        now: datetime,
        duration_ms: float,
    ) -> RankerResult:
        filtered_out = len(items) - len(ranked)
        zero_scores = sum(1 for s in ranked if s.trending_score == 0.0)

        self._metrics.record_ranking(
            items_in=len(items),
            items_out=len(ranked),
            duration_ms=duration_ms,
            filtered_out=filtered_out,
            zero_scores=zero_scores,
        )

        result = RankerResult(
            items=ranked,
            items_in=len(items),
            items_out=len(ranked),
            ranked_at=now,
            filtered_out=filtered_out,
            score_percentiles=compute_score_percentiles(ranked),
            output_checksum=compute_checksum(ranked),
        )

        self._log.info(
            "ranking_complete",
            items_in=result.items_in,
            items_out=result.items_out,
            filtered_out=filtered_out,
            zero_scores=zero_scores,
            ranking_duration_ms=round(duration_ms, 3),
        )
        return result


def compute_score_percentiles(scored: Sequence[ScoredItem]) -> dict[str, float]:
    """Calculate score percentiles (p50/p90/p99).

    Args:
        scored: Scored items in any order.

    Returns:
        Dictionary with p50, p90, p99 values.
    """
    if not scored:
        return {"p50": 0.0, "p90": 0.0, "p99": 0.0}

    sorted_scores = sorted(s.trending_score for s in scored)
    n = len(sorted_scores)

    def percentile(p: float) -> float:
        idx = int(p * n / 100)
        return sorted_scores[min(idx, n - 1)]

    return {
        "p50": percentile(50),
        "p90": percentile(90),
        "p99": percentile(99),
    }


def compute_checksum(scored: Sequence[ScoredItem]) -> str:
    """Compute SHA-256 checksum of an ordered output.

    Args:
        scored: Scored items in output order.

    Returns:
        SHA-256 hex digest.
    """
    data = [s.to_json_dict() for s in scored]
    json_str = json.dumps(data, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(json_str.encode("utf-8")).hexdigest()


def rank_items_pure(
    items: Sequence[Rankable],
    now: datetime | None = None,
    config: RankingConfig | None = None,
) -> list[ScoredItem]:
    """Pure function API for configured ranking.

    Args:
        items: Candidates to rank.
        now: Reference instant.
        config: Ranking configuration (defaults when omitted).

    Returns:
        Ranked ScoredItem list.
    """
    trending = (config or RankingConfig()).trending
    return rank(
        items,
        now,
        gravity=trending.gravity,
        age_offset_hours=trending.age_offset_hours,
    )
