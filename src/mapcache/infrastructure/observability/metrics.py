"""
Metrics Collection
In-process counters and gauges for the mapper cache
"""
from __future__ import annotations

import threading
from collections import defaultdict
from typing import Any

from mapcache.infrastructure.observability.logger import get_logger

logger = get_logger(__name__)


class MetricsCollector:
    """
    Collects mapcache metrics for observability.

    Counters and gauges are kept in memory and can be read back with
    get_metrics(); export to Prometheus/OpenTelemetry is left to the
    embedding application.
    """

    def __init__(self, enabled: bool = False) -> None:
        self.enabled = enabled
        self._counters: dict[str, float] = defaultdict(float)
        self._gauges: dict[str, float] = {}
        self._lock = threading.Lock()

        if enabled:
            logger.info("Metrics collector initialized")

    def increment_counter(self, name: str, value: float = 1.0, **labels: Any) -> None:
        """
        Increment a counter metric.

        Args:
            name: Metric name (e.g., "mapcache_builds_total")
            value: Amount to increment by
            **labels: Metric labels (e.g., result="hit")
        """
        if not self.enabled:
            return

        key = self._make_key(name, labels)
        with self._lock:
            self._counters[key] += value

    def set_gauge(self, name: str, value: float, **labels: Any) -> None:
        """
        Set a gauge metric to a specific value.

        Args:
            name: Metric name (e.g., "mapcache_cached_pairs")
            value: Current value
            **labels: Metric labels
        """
        if not self.enabled:
            return

        key = self._make_key(name, labels)
        with self._lock:
            self._gauges[key] = value

    def get_counter(self, name: str, **labels: Any) -> float:
        with self._lock:
            return self._counters.get(self._make_key(name, labels), 0.0)

    def get_gauge(self, name: str, **labels: Any) -> float | None:
        with self._lock:
            return self._gauges.get(self._make_key(name, labels))

    def get_metrics(self) -> dict[str, Any]:
        """Get all collected metrics (for debugging/export)."""
        with self._lock:
            return {
                "counters": dict(self._counters),
                "gauges": dict(self._gauges),
            }

    def reset_metrics(self) -> None:
        """Reset all collected metrics (for testing)."""
        with self._lock:
            self._counters.clear()
            self._gauges.clear()

    @staticmethod
    def _make_key(name: str, labels: dict[str, Any]) -> str:
        """Create a unique key from metric name and labels."""
        label_str = ",".join(f"{k}={v}" for k, v in sorted(labels.items()))
        return f"{name}{{{label_str}}}" if label_str else name


# Global metrics collector (configured at startup)
_metrics: MetricsCollector | None = None


def get_metrics() -> MetricsCollector:
    """Get the global metrics collector instance."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics


def configure_metrics(enabled: bool = False) -> MetricsCollector:
    """
    Configure the global metrics collector.

    Args:
        enabled: Whether to enable metrics collection
    """
    global _metrics
    _metrics = MetricsCollector(enabled=enabled)
    return _metrics
