"""Pydantic base model shared by candidates, queries, and configuration."""

from pydantic import BaseModel, ConfigDict


class StrictBaseModel(BaseModel):
    """Immutable model that rejects unknown keys.

    Used for RankableItem, FeedQuery, Pagination, and every RankingConfig
    section, so a misspelled YAML key fails validation instead of being ignored.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")
