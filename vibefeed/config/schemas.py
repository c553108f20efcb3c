"""Ranking configuration schema."""

from typing import Annotated

from pydantic import Field, model_validator

from vibefeed.config.constants import (
    AGE_OFFSET_HOURS,
    CANDIDATE_MULTIPLIER,
    DEFAULT_MAX_AGE_HOURS,
    DEFAULT_MIN_POPULARITY,
    DEFAULT_PAGE_SIZE,
    GRAVITY,
    MAX_PAGE_SIZE,
    MIN_CANDIDATE_WINDOW,
)
from vibefeed.data_model import StrictBaseModel


class TrendingConfig(StrictBaseModel):
    """Decay tuning.

    Attributes:
        gravity: Decay exponent; higher values make items fall faster.
        age_offset_hours: Offset added to the age before decay.
    """

    gravity: Annotated[float, Field(gt=0.0, le=10.0)] = GRAVITY
    age_offset_hours: Annotated[float, Field(gt=0.0, le=48.0)] = AGE_OFFSET_HOURS


class ThresholdsConfig(StrictBaseModel):
    """Default thresholds for the trending view.

    Attributes:
        min_popularity: Minimum popularity_count to keep.
        max_age_hours: Maximum age in hours to keep.
    """

    min_popularity: Annotated[int, Field(ge=0)] = DEFAULT_MIN_POPULARITY
    max_age_hours: Annotated[float, Field(ge=0.0)] = DEFAULT_MAX_AGE_HOURS


class FeedConfig(StrictBaseModel):
    """Feed pagination configuration.

    Attributes:
        default_page_size: Page size when the caller does not pass one.
        max_page_size: Largest page a caller may request.
        candidate_multiplier: Candidates fetched per requested item for trending.
        min_candidate_window: Lower bound on candidates fetched for trending.
    """

    default_page_size: Annotated[int, Field(ge=1, le=100)] = DEFAULT_PAGE_SIZE
    max_page_size: Annotated[int, Field(ge=1, le=100)] = MAX_PAGE_SIZE
    candidate_multiplier: Annotated[int, Field(ge=1, le=20)] = CANDIDATE_MULTIPLIER
    min_candidate_window: Annotated[int, Field(ge=0, le=10000)] = MIN_CANDIDATE_WINDOW

    @model_validator(mode="after")
    def validate_page_sizes(self) -> "FeedConfig":
        """Ensure the default page size fits under the maximum."""
        if self.default_page_size > self.max_page_size:
            msg = "default_page_size must not exceed max_page_size"
            raise ValueError(msg)
        return self


class RankingConfig(StrictBaseModel):
    """Root configuration for ranking.yaml.

    Attributes:
        version: Schema version.
        trending: Decay tuning.
        thresholds: Default trending-view thresholds.
        feed: Feed pagination configuration.
    """

    version: Annotated[str, Field(pattern=r"^\d+\.\d+$")] = "1.0"
    trending: TrendingConfig = Field(default_factory=TrendingConfig)
    thresholds: ThresholdsConfig = Field(default_factory=ThresholdsConfig)
    feed: FeedConfig = Field(default_factory=FeedConfig)
