"""Data models for feed pages."""

from dataclasses import dataclass
from enum import Enum
from typing import Annotated

from pydantic import Field

from vibefeed.config.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from vibefeed.data_model import StrictBaseModel
from vibefeed.feed.errors import FeedQueryError
from vibefeed.ranker.models import ScoredItem


class SortMode(str, Enum):
    """Feed ordering."""

    RECENT = "recent"
    STARS = "stars"
    TRENDING = "trending"

    @classmethod
    def parse(cls, value: "str | SortMode") -> "SortMode":
        """Parse a sort mode from user input.

        Args:
            value: Sort mode name (case-insensitive) or member.

        Returns:
            The matching SortMode.

        Raises:
            FeedQueryError: If the value names no sort mode.
        """
        if isinstance(value, SortMode):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError:
            allowed = ", ".join(m.value for m in cls)
            msg = f"Unknown sort mode '{value}'. Expected one of: {allowed}"
            raise FeedQueryError(msg) from None


class FeedQuery(StrictBaseModel):
    """One page request.

    Attributes:
        sort: Ordering to apply.
        page: 1-based page number.
        limit: Items per page.
    """

    sort: SortMode = SortMode.RECENT
    page: Annotated[int, Field(ge=1)] = 1
    limit: Annotated[int, Field(ge=1, le=MAX_PAGE_SIZE)] = DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        """Index of the first item on the page."""
        return (self.page - 1) * self.limit


class Pagination(StrictBaseModel):
    """Pagination metadata for a page.

    Attributes:
        page: 1-based page number.
        limit: Items per page.
        total: Total items available to page through.
        pages: Number of pages, ceil(total / limit).
    """

    page: Annotated[int, Field(ge=1)]
    limit: Annotated[int, Field(ge=1)]
    total: Annotated[int, Field(ge=0)]
    pages: Annotated[int, Field(ge=0)]


@dataclass(frozen=True)
class FeedPage:
    """A page of scored items.

    Attributes:
        sort: Ordering used.
        items: Items on this page, each with its trending score.
        pagination: Pagination metadata.
    """

    sort: SortMode
    items: list[ScoredItem]
    pagination: Pagination

    def to_json_dict(self) -> dict[str, object]:
        """Convert to a JSON-serializable dictionary.

        Returns:
            Dictionary with sort, items and pagination.
        """
        return {
            "sort": self.sort.value,
            "items": [s.to_json_dict() for s in self.items],
            "pagination": self.pagination.model_dump(),
        }
