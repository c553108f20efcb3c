"""Time-decayed popularity scoring.

Scoring formula:
    score = (max(popularity_count, 1) - 1) / (age_hours + age_offset) ** gravity

Items at or below the popularity floor score exactly 0 at any age. Ages are
measured against an explicit ``now``; a creation time later than ``now``
(clock skew) is clamped to an age of zero instead of being rejected.
"""

from collections.abc import Iterable
from datetime import UTC, datetime

from vibefeed.config.constants import (
    AGE_OFFSET_HOURS,
    GRAVITY,
    POPULARITY_FLOOR,
    SECONDS_PER_HOUR,
)
from vibefeed.ranker.models import Rankable, ScoredItem


def as_utc(value: datetime) -> datetime:
    """Return the timestamp with UTC attached when it is naive."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def age_in_hours(created_at: datetime, now: datetime) -> float:
    """Compute the non-negative age of an item in hours.

    Args:
        created_at: Creation timestamp (naive values are taken as UTC).
        now: Reference instant.

    Returns:
        Age in hours, clamped to 0.0 for future timestamps.
    """
    delta = as_utc(now) - as_utc(created_at)
    return max(delta.total_seconds() / SECONDS_PER_HOUR, 0.0)


def trending_score(
    item: Rankable,
    now: datetime,
    *,
    gravity: float = GRAVITY,
    age_offset_hours: float = AGE_OFFSET_HOURS,
) -> float:
    """Score a single item.

    Args:
        item: Item exposing created_at and popularity_count.
        now: Reference instant for the age computation.
        gravity: Decay exponent.
        age_offset_hours: Offset added to the age before decay.

    Returns:
        Non-negative score; higher means more trending.
    """
    age = age_in_hours(item.created_at, now)
    effective_count = max(item.popularity_count, POPULARITY_FLOOR)
    decay = (age + age_offset_hours) ** gravity
    return (effective_count - POPULARITY_FLOOR) / decay


def score_items(
    items: Iterable[Rankable],
    now: datetime,
    *,
    gravity: float = GRAVITY,
    age_offset_hours: float = AGE_OFFSET_HOURS,
) -> list[ScoredItem]:
    """Score items, preserving input order.

    Args:
        items: Items to score.
        now: Reference instant shared by every item.
        gravity: Decay exponent.
        age_offset_hours: Offset added to the age before decay.

    Returns:
        ScoredItem list parallel to the input.
    """
    return [
        ScoredItem(
            item=item,
            trending_score=trending_score(
                item,
                now,
                gravity=gravity,
                age_offset_hours=age_offset_hours,
            ),
        )
        for item in items
    ]
