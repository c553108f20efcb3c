"""Deterministic JSON rendering of ranking results and feed pages."""

import json
from datetime import UTC

from vibefeed.feed.models import FeedPage
from vibefeed.ranker.models import RankerResult
from vibefeed.ranker.scorer import as_utc


def _dumps(data: object) -> str:
    return json.dumps(data, indent=2, sort_keys=True, ensure_ascii=False) + "\n"


def ranking_to_dict(result: RankerResult) -> dict[str, object]:
    """Convert a RankerResult to a JSON-serializable dictionary.

    Args:
        result: Result from TrendingRanker.

    Returns:
        Dictionary with items and summary statistics.
    """
    return {
        "ranked_at": as_utc(result.ranked_at).astimezone(UTC).isoformat(),
        "items": [s.to_json_dict() for s in result.items],
        "summary": {
            "items_in": result.items_in,
            "items_out": result.items_out,
            "filtered_out": result.filtered_out,
            "score_percentiles": result.score_percentiles,
            "output_checksum": result.output_checksum,
        },
    }


def render_ranking(result: RankerResult) -> str:
    """Render a ranking result as stable, indented JSON."""
    return _dumps(ranking_to_dict(result))


def render_feed_page(page: FeedPage) -> str:
    """Render a feed page as stable, indented JSON."""
    return _dumps(page.to_json_dict())
