"""Ranking configuration loading and validation."""

from vibefeed.config.loader import (
    ConfigLoader,
    ConfigValidationError,
    load_ranking_config,
)
from vibefeed.config.schemas import (
    FeedConfig,
    RankingConfig,
    ThresholdsConfig,
    TrendingConfig,
)
from vibefeed.config.state_machine import ConfigState, ConfigStateError


__all__ = [
    "ConfigLoader",
    "ConfigState",
    "ConfigStateError",
    "ConfigValidationError",
    "FeedConfig",
    "RankingConfig",
    "ThresholdsConfig",
    "TrendingConfig",
    "load_ranking_config",
]
