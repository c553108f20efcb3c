"""Feed page assembly over candidate batches.

Orders an already-fetched batch by recency, popularity, or trending score
and cuts a page out of it with pagination metadata.
"""

from vibefeed.feed.errors import CandidateLoadError, FeedError, FeedQueryError
from vibefeed.feed.loader import load_candidates
from vibefeed.feed.models import FeedPage, FeedQuery, Pagination, SortMode
from vibefeed.feed.paginator import (
    FeedBuilder,
    build_feed_page,
    candidate_window,
    order_candidates,
)


__all__ = [
    "CandidateLoadError",
    "FeedBuilder",
    "FeedError",
    "FeedPage",
    "FeedQuery",
    "FeedQueryError",
    "Pagination",
    "SortMode",
    "build_feed_page",
    "candidate_window",
    "load_candidates",
    "order_candidates",
]
