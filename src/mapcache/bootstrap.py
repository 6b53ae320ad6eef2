"""
Process start-up wiring for mapcache observability.
"""
from __future__ import annotations

from typing import Optional

from mapcache.config import Settings, get_settings
from mapcache.infrastructure.observability.logger import configure_logging, get_logger
from mapcache.infrastructure.observability.metrics import configure_metrics


def configure_observability(settings: Optional[Settings] = None) -> Settings:
    """
    Apply logging and metrics settings. Call once at process start.

    Args:
        settings: Settings to apply (environment settings when omitted)

    Returns:
        The settings that were applied
    """
    settings = settings or get_settings()
    configure_logging(log_level=settings.log_level, json_logs=settings.json_logs)
    configure_metrics(enabled=settings.metrics_enabled)
    get_logger(__name__).info("mapcache observability configured", **settings.safe_dict())
    return settings
