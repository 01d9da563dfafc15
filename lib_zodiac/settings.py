"""Engine settings read from environment variables.

Variables (all optional):
    ZODIAC_LOG_LEVEL          logging level name, default ``INFO``
    ZODIAC_SCAN_WARN_PAIRS    pair count above which scans log a warning
    ZODIAC_BEST_PAIRS_LIMIT   default limit for organization-wide best pairs
"""

from __future__ import annotations

import logging
import os

from pydantic import BaseModel, Field, field_validator


logger = logging.getLogger(__name__)

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class EngineSettings(BaseModel):
    """Tunables for logging and performance warnings."""

    log_level: str = "INFO"
    scan_warn_pairs: int = Field(default=5000, ge=1)
    best_pairs_limit: int = Field(default=10, ge=1)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LEVELS)}")
        return level


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "")
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


def load_settings() -> EngineSettings:
    """Build settings from ``ZODIAC_*`` environment variables.

    Raises:
        ValueError: If a variable holds an invalid value.
    """
    try:
        settings = EngineSettings(
            log_level=os.getenv("ZODIAC_LOG_LEVEL", "INFO"),
            scan_warn_pairs=_int_env("ZODIAC_SCAN_WARN_PAIRS", 5000),
            best_pairs_limit=_int_env("ZODIAC_BEST_PAIRS_LIMIT", 10),
        )
    except ValueError as e:
        raise ValueError(f"Invalid engine settings: {e}") from e
    logger.debug("Engine settings: %s", settings.model_dump())
    return settings
