"""
mapcache Observability Infrastructure
Logging and metrics
"""
from mapcache.infrastructure.observability.logger import (
    configure_logging,
    get_logger,
)
from mapcache.infrastructure.observability.metrics import (
    MetricsCollector,
    configure_metrics,
    get_metrics,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "MetricsCollector",
    "configure_metrics",
    "get_metrics",
]
