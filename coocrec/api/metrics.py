"""Metrics service for tracking recommendation latency.

Singleton service counting recommendation calls, the ones that were rejected,
and how long they took.
"""

import threading
from typing import Dict


class MetricsService:
    """Singleton service for tracking API metrics.

    Thread-safe counters; ranking calls may run concurrently.
    """

    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        """Create singleton instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super(MetricsService, cls).__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._lock = threading.Lock()
        self.reset()
        self._initialized = True

    def record_recommendation(self, latency_ms: float) -> None:
        """Record a recommendation call with its latency.

        Args:
            latency_ms: Latency in milliseconds
        """
        with self._lock:
            self._recommendation_count += 1
            self._total_latency_ms += latency_ms
            self._min_latency_ms = min(self._min_latency_ms, latency_ms)
            self._max_latency_ms = max(self._max_latency_ms, latency_ms)

    def record_rejection(self) -> None:
        """Record a call that failed input validation."""
        with self._lock:
            self._rejected_count += 1

    def get_metrics(self) -> Dict:
        """Get current metrics.

        Returns:
            Dictionary with recommendation_count, rejected_count and the
            average, minimum and maximum latency in milliseconds.
        """
        with self._lock:
            avg_latency = (
                self._total_latency_ms / self._recommendation_count
                if self._recommendation_count > 0
                else 0.0
            )
            min_latency = (
                self._min_latency_ms if self._min_latency_ms != float("inf") else 0.0
            )

            return {
                "recommendation_count": self._recommendation_count,
                "rejected_count": self._rejected_count,
                "average_latency_ms": round(avg_latency, 2),
                "min_latency_ms": round(min_latency, 2),
                "max_latency_ms": round(self._max_latency_ms, 2),
            }

    def reset(self) -> None:
        """Reset all metrics (useful for testing)."""
        with self._lock:
            self._recommendation_count = 0
            self._rejected_count = 0
            self._total_latency_ms = 0.0
            self._min_latency_ms = float("inf")
            self._max_latency_ms = 0.0


# Global singleton instance
metrics_service = MetricsService()
