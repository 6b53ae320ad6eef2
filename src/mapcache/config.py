"""
Centralized configuration for mapcache.

- Loads from OS env; a .env file in the working directory is read first
  (python-dotenv, never overriding variables already set).
- Strong typing & validation in __post_init__.
- Immutable singleton via functools.lru_cache.
"""

from __future__ import annotations

import functools
import logging
import os
import re
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

_ENV_PREFIX = "MAPCACHE_"


# ------------------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------------------
def _get_env_str(key: str, default: str) -> str:
    v = os.getenv(_ENV_PREFIX + key)
    if v is None or v.strip() == "":
        return default
    return v.strip()


def _get_env_bool(key: str, default: bool = False) -> bool:
    v = os.getenv(_ENV_PREFIX + key)
    if v is None:
        return default
    v = v.strip().lower()
    return v in {"1", "true", "t", "yes", "y", "on"}


def _get_env_int(key: str, default: int) -> int:
    v = os.getenv(_ENV_PREFIX + key)
    if v is None or v.strip() == "":
        return default
    try:
        return int(v)
    except ValueError:
        raise ValueError(f"Env var {_ENV_PREFIX}{key} must be an integer") from None


# ------------------------------------------------------------------------------
# Settings dataclass (immutable)
# ------------------------------------------------------------------------------
@dataclass(frozen=True)
class Settings:
    # Observability
    log_level: str = "INFO"
    json_logs: bool = False
    metrics_enabled: bool = False

    # Surface resolution
    max_interface_count: int = 256

    # Executor
    verify_instance_types: bool = True

    def __post_init__(self) -> None:
        if not re.fullmatch(r"(?i)DEBUG|INFO|WARNING|ERROR|CRITICAL", self.log_level.strip()):
            raise ValueError("MAPCACHE_LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL")
        object.__setattr__(self, "log_level", self.log_level.strip().upper())

        if self.max_interface_count <= 0:
            raise ValueError("MAPCACHE_MAX_INTERFACE_COUNT must be > 0")

    def safe_dict(self) -> dict:
        return {
            "log_level": self.log_level,
            "json_logs": self.json_logs,
            "metrics_enabled": self.metrics_enabled,
            "max_interface_count": self.max_interface_count,
            "verify_instance_types": self.verify_instance_types,
        }


# ------------------------------------------------------------------------------
# Loader (singleton)
# ------------------------------------------------------------------------------
_logger = logging.getLogger(__name__)


@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    env_file = find_dotenv(usecwd=True)
    if env_file:
        load_dotenv(dotenv_path=env_file, override=False)

    settings = Settings(
        log_level=_get_env_str("LOG_LEVEL", "INFO"),
        json_logs=_get_env_bool("JSON_LOGS", False),
        metrics_enabled=_get_env_bool("METRICS_ENABLED", False),
        max_interface_count=_get_env_int("MAX_INTERFACE_COUNT", 256),
        verify_instance_types=_get_env_bool("VERIFY_INSTANCE_TYPES", True),
    )

    _logger.debug("Settings loaded", extra={"settings": settings.safe_dict()})
    return settings
