"""Constants shared by the ranker, feed, and configuration modules."""

# Decay exponent; higher values push older items down faster
GRAVITY: float = 1.8

# Added to the age before decay so items created moments ago stay finite
AGE_OFFSET_HOURS: float = 2.0

# Popularity is floored at this value before scoring
POPULARITY_FLOOR: int = 1

# Default thresholds for the trending view (7 days)
DEFAULT_MIN_POPULARITY: int = 1
DEFAULT_MAX_AGE_HOURS: float = 7 * 24

SECONDS_PER_HOUR: float = 3600.0

# Feed pagination defaults
DEFAULT_PAGE_SIZE: int = 12
MAX_PAGE_SIZE: int = 100
CANDIDATE_MULTIPLIER: int = 3
MIN_CANDIDATE_WINDOW: int = 50

# Log component names
COMPONENT_CONFIG = "config"
COMPONENT_RANKER = "ranker"
COMPONENT_FEED = "feed"
COMPONENT_CLI = "cli"
