"""Feed page assembly over an already-fetched candidate batch."""

import math
from collections.abc import Sequence
from datetime import UTC, datetime

import structlog

from vibefeed.config.constants import (
    AGE_OFFSET_HOURS,
    CANDIDATE_MULTIPLIER,
    COMPONENT_FEED,
    GRAVITY,
    MIN_CANDIDATE_WINDOW,
)
from vibefeed.config.schemas import RankingConfig
from vibefeed.feed.models import FeedPage, FeedQuery, Pagination, SortMode
from vibefeed.ranker.models import Rankable, ScoredItem
from vibefeed.ranker.ranker import rank
from vibefeed.ranker.scorer import as_utc, score_items


logger = structlog.get_logger()


def candidate_window(
    limit: int,
    multiplier: int = CANDIDATE_MULTIPLIER,
    minimum: int = MIN_CANDIDATE_WINDOW,
) -> int:
    """Number of most-recent candidates to fetch before trending ranking.

    Trending order cannot be expressed as a database sort, so the caller
    fetches a capped superset ordered by recency and ranks it in memory.

    Args:
        limit: Requested page size.
        multiplier: Candidates fetched per requested item.
        minimum: Lower bound on the fetch size.

    Returns:
        max(limit * multiplier, minimum).
    """
    return max(limit * multiplier, minimum)


def order_candidates(
    candidates: Sequence[Rankable],
    sort: SortMode,
    now: datetime,
    *,
    gravity: float = GRAVITY,
    age_offset_hours: float = AGE_OFFSET_HOURS,
) -> list[ScoredItem]:
    """Score candidates and order them for the given sort mode.

    Every ordering is a stable sort, so ties keep the input order.

    Args:
        candidates: Candidate batch.
        sort: Ordering to apply.
        now: Reference instant for scores.
        gravity: Decay exponent.
        age_offset_hours: Offset added to the age before decay.

    Returns:
        Scored items in feed order.
    """
    if sort is SortMode.TRENDING:
        return rank(
            candidates,
            now,
            gravity=gravity,
            age_offset_hours=age_offset_hours,
        )

    scored = score_items(
        candidates,
        now,
        gravity=gravity,
        age_offset_hours=age_offset_hours,
    )
    if sort is SortMode.STARS:
        return sorted(scored, key=lambda s: s.item.popularity_count, reverse=True)
    return sorted(scored, key=lambda s: as_utc(s.item.created_at), reverse=True)


def build_feed_page(
    candidates: Sequence[Rankable],
    query: FeedQuery,
    now: datetime | None = None,
    total: int | None = None,
    *,
    gravity: float = GRAVITY,
    age_offset_hours: float = AGE_OFFSET_HOURS,
) -> FeedPage:
    """Order a candidate batch and cut one page out of it.

    Args:
        candidates: Candidate batch fetched by the caller.
        query: Sort mode and page request.
        now: Reference instant. Read from the clock once when omitted.
        total: Total matching items in storage; defaults to len(candidates).
        gravity: Decay exponent.
        age_offset_hours: Offset added to the age before decay.

    Returns:
        FeedPage with the sliced items and pagination metadata.
    """
    reference = now or datetime.now(UTC)
    ordered = order_candidates(
        candidates,
        query.sort,
        reference,
        gravity=gravity,
        age_offset_hours=age_offset_hours,
    )
    page_items = ordered[query.offset : query.offset + query.limit]

    total_count = len(candidates) if total is None else total
    pagination = Pagination(
        page=query.page,
        limit=query.limit,
        total=total_count,
        pages=math.ceil(total_count / query.limit),
    )
    return FeedPage(sort=query.sort, items=page_items, pagination=pagination)


class FeedBuilder:
    """Builds feed pages using the configured page limits and decay tuning."""

    def __init__(
        self,
        config: RankingConfig | None = None,
        now: datetime | None = None,
        request_id: str | None = None,
    ) -> None:
        """Initialize the builder.

        Args:
            config: Ranking configuration (defaults when omitted).
            now: Fixed reference instant. The clock is read per call when omitted.
            request_id: Optional identifier bound to every log line.
        """
        self._config = config or RankingConfig()
        self._now = now
        self._log = logger.bind(component=COMPONENT_FEED, request_id=request_id)

    def query(
        self,
        sort: str | SortMode = SortMode.RECENT,
        page: int = 1,
        limit: int | None = None,
    ) -> FeedQuery:
        """Build a FeedQuery, applying the configured page size limits.

        Args:
            sort: Sort mode name or member.
            page: 1-based page number.
            limit: Requested page size; the configured default when omitted.

        Returns:
            Validated FeedQuery.

        Raises:
            FeedQueryError: If the sort mode is unknown.
        """
        feed = self._config.feed
        requested = feed.default_page_size if limit is None else limit
        effective = min(requested, feed.max_page_size)
        if effective != requested:
            self._log.warning(
                "page_size_clamped",
                requested=requested,
                max_page_size=feed.max_page_size,
            )
        return FeedQuery(sort=SortMode.parse(sort), page=page, limit=effective)

    def window(self, limit: int) -> int:
        """Candidate fetch size for a trending page of the given size."""
        feed = self._config.feed
        return candidate_window(
            limit,
            multiplier=feed.candidate_multiplier,
            minimum=feed.min_candidate_window,
        )

    def build(
        self,
        candidates: Sequence[Rankable],
        query: FeedQuery,
        total: int | None = None,
    ) -> FeedPage:
        """Build one feed page.

        Args:
            candidates: Candidate batch fetched by the caller.
            query: Sort mode and page request.
            total: Total matching items in storage.

        Returns:
            FeedPage for the query.
        """
        trending = self._config.trending
        page = build_feed_page(
            candidates,
            query,
            self._now or datetime.now(UTC),
            total,
            gravity=trending.gravity,
            age_offset_hours=trending.age_offset_hours,
        )
        self._log.info(
            "feed_page_built",
            sort=query.sort.value,
            page=query.page,
            limit=query.limit,
            candidates=len(candidates),
            items=len(page.items),
            total=page.pagination.total,
        )
        return page
