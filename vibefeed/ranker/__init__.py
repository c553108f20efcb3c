"""Trending ranker for the project feed.

Scores candidates by time-decayed popularity and orders them for feed
presentation. The module-level functions are pure; TrendingRanker adds
configuration, logging, and metrics around them.
"""

from vibefeed.ranker.models import Rankable, RankableItem, RankerResult, ScoredItem
from vibefeed.ranker.ranker import (
    TrendingRanker,
    filter_candidates,
    rank,
    rank_items_pure,
)
from vibefeed.ranker.scorer import age_in_hours, score_items, trending_score


__all__ = [
    "Rankable",
    "RankableItem",
    "RankerResult",
    "ScoredItem",
    "TrendingRanker",
    "age_in_hours",
    "filter_candidates",
    "rank",
    "rank_items_pure",
    "score_items",
    "trending_score",
]
