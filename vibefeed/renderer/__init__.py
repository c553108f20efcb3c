"""Output rendering."""

from vibefeed.renderer.json_renderer import (
    ranking_to_dict,
    render_feed_page,
    render_ranking,
)


__all__ = ["ranking_to_dict", "render_feed_page", "render_ranking"]
