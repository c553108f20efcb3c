"""Metrics collection for the trending ranker."""

from dataclasses import dataclass, field
from threading import Lock


# Module-level singleton state
_metrics_instance: "RankerMetrics | None" = None
_metrics_lock: Lock = Lock()


@dataclass
class RankerMetrics:
    """Thread-safe counters for ranking calls.

    Ranking may run concurrently from independent requests, so every update
    goes through the instance lock. Use get_instance() for singleton access.

    Attributes:
        rankings_total: Number of ranking calls.
        items_in_total: Candidates received across all calls.
        items_out_total: Items returned across all calls.
        filtered_out_total: Candidates removed by thresholds.
        zero_score_total: Returned items whose score was exactly zero.
        last_ranking_duration_ms: Duration of the most recent call.
    """

    _lock: Lock = field(default_factory=Lock, repr=False, compare=False)

    rankings_total: int = 0
    items_in_total: int = 0
    items_out_total: int = 0
    filtered_out_total: int = 0
    zero_score_total: int = 0
    last_ranking_duration_ms: float = 0.0

    @classmethod
    def get_instance(cls) -> "RankerMetrics":
        """Get the singleton instance (thread-safe).

        Returns:
            The shared RankerMetrics instance.
        """
        global _metrics_instance  # noqa: PLW0603
        if _metrics_instance is None:
            with _metrics_lock:
                if _metrics_instance is None:
                    _metrics_instance = cls()
        return _metrics_instance

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton instance (for testing)."""
        global _metrics_instance  # noqa: PLW0603
        with _metrics_lock:
            _metrics_instance = None

    def record_ranking(
        self,
        items_in: int,
        items_out: int,
        duration_ms: float,
        filtered_out: int = 0,
        zero_scores: int = 0,
    ) -> None:
        """Record one completed ranking call.

        Args:
            items_in: Candidates supplied.
            items_out: Items returned.
            duration_ms: Time spent ranking.
            filtered_out: Candidates removed by thresholds.
            zero_scores: Returned items scoring exactly zero.
        """
        with self._lock:
            self.rankings_total += 1
            self.items_in_total += items_in
            self.items_out_total += items_out
            self.filtered_out_total += filtered_out
            self.zero_score_total += zero_scores
            self.last_ranking_duration_ms = duration_ms

    def to_dict(self) -> dict[str, float | int]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        with self._lock:
            return {
                "rankings_total": self.rankings_total,
                "items_in_total": self.items_in_total,
                "items_out_total": self.items_out_total,
                "filtered_out_total": self.filtered_out_total,
                "zero_score_total": self.zero_score_total,
                "last_ranking_duration_ms": self.last_ranking_duration_ms,
            }
