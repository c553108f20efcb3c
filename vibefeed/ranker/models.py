"""Data models for the trending ranker."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Annotated, Protocol

from pydantic import Field, field_validator

from vibefeed.data_model import StrictBaseModel


class Rankable(Protocol):
    """Anything the ranker can score.

    ORM rows or API payload objects satisfy this as long as they expose the
    three attributes below.
    """

    @property
    def id(self) -> str: ...

    @property
    def created_at(self) -> datetime: ...

    @property
    def popularity_count(self) -> int: ...


class RankableItem(StrictBaseModel):
    """Candidate record handed to the ranker.

    Attributes:
        id: Opaque identifier, unique per item.
        created_at: Creation timestamp. Naive values are taken as UTC.
        popularity_count: Point-in-time count of endorsements (e.g. stars).
    """

    id: Annotated[str, Field(min_length=1)]
    created_at: datetime
    popularity_count: Annotated[int, Field(ge=0)] = 0

    @field_validator("created_at")
    @classmethod
    def ensure_utc(cls, value: datetime) -> datetime:
        """Attach UTC to naive timestamps and normalize aware ones."""
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)


@dataclass(frozen=True)
class ScoredItem:
    """A candidate paired with its computed trending score.

    Created per ranking call and never persisted.

    Attributes:
        item: The original record, untouched.
        trending_score: Time-decayed popularity score.
    """

    item: Rankable
    trending_score: float

    @property
    def id(self) -> str:
        """Identifier of the wrapped item."""
        return self.item.id

    def to_json_dict(self) -> dict[str, object]:
        """Convert to a JSON-serializable dictionary.

        Returns:
            Dictionary with the item fields and its score.
        """
        created_at = self.item.created_at
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=UTC)
        return {
            "id": self.item.id,
            "created_at": created_at.astimezone(UTC).isoformat(),
            "popularity_count": self.item.popularity_count,
            "trending_score": self.trending_score,
        }


@dataclass(frozen=True)
class RankerResult:
    """Result of a ranking call made through TrendingRanker.

    Attributes:
        items: Scored items in ranked order.
        items_in: Number of candidates supplied.
        items_out: Number of items returned.
        filtered_out: Candidates removed by thresholds.
        ranked_at: Instant used as "now" for every age computation.
        score_percentiles: p50/p90/p99 of the returned scores.
        output_checksum: SHA-256 of the ordered output JSON.
    """

    items: list[ScoredItem]
    items_in: int
    items_out: int
    ranked_at: datetime
    filtered_out: int = 0
    score_percentiles: dict[str, float] = field(default_factory=dict)
    output_checksum: str = ""

    @property
    def ids(self) -> list[str]:
        """Identifiers in ranked order."""
        return [s.id for s in self.items]
