"""
Centralized configuration with environment variable overrides.

Business hours, the business timezone, slot granularity and the
same-day advance-notice buffer are configurable here. Nothing in the
scheduling core hardcodes these values.
"""

import logging
import os
from dataclasses import dataclass, field
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

ALLOWED_SLOT_INTERVALS = (15, 30, 60)


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_float(env_var: str, default: str) -> float:
    """Parse a float from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return float(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid float for {env_var}: {raw!r}"
        ) from None


@dataclass(frozen=True)
class BusinessConfig:
    """Salon identity, timezone and opening hours."""

    name: str = os.getenv("BUSINESS_NAME", "Polished Nail Lounge")
    timezone: str = os.getenv("BUSINESS_TIMEZONE", "America/Los_Angeles")
    weekday_open_hour: int = _safe_int("WEEKDAY_OPEN_HOUR", "9")
    weekday_close_hour: int = _safe_int("WEEKDAY_CLOSE_HOUR", "19")
    sunday_open_hour: int = _safe_int("SUNDAY_OPEN_HOUR", "11")
    sunday_close_hour: int = _safe_int("SUNDAY_CLOSE_HOUR", "17")


@dataclass(frozen=True)
class SchedulingConfig:
    """Slot grid, advance-notice and search cutoffs."""

    slot_interval_minutes: int = _safe_int("SLOT_INTERVAL_MINUTES", "30")
    default_buffer_hours: float = _safe_float("DEFAULT_BUFFER_HOURS", "1.0")
    backtracking_max_items: int = _safe_int("BACKTRACKING_MAX_ITEMS", "20")
    backtracking_max_lanes: int = _safe_int("BACKTRACKING_MAX_LANES", "4")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    business: BusinessConfig = field(default_factory=BusinessConfig)
    scheduling: SchedulingConfig = field(default_factory=SchedulingConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


def _validate_hours(label: str, open_hour: int, close_hour: int) -> None:
    if not 0 <= open_hour < close_hour <= 24:
        raise ValueError(
            f"{label} hours must satisfy 0 <= open < close <= 24, got {open_hour}-{close_hour}"
        )


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    try:
        ZoneInfo(config.business.timezone)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError(
            f"BUSINESS_TIMEZONE is not a known timezone: {config.business.timezone!r}"
        ) from None

    _validate_hours(
        "WEEKDAY", config.business.weekday_open_hour, config.business.weekday_close_hour
    )
    _validate_hours(
        "SUNDAY", config.business.sunday_open_hour, config.business.sunday_close_hour
    )

    if config.scheduling.slot_interval_minutes not in ALLOWED_SLOT_INTERVALS:
        raise ValueError(
            f"SLOT_INTERVAL_MINUTES must be one of {ALLOWED_SLOT_INTERVALS}, "
            f"got {config.scheduling.slot_interval_minutes}"
        )
    if config.scheduling.default_buffer_hours < 0:
        raise ValueError(
            f"DEFAULT_BUFFER_HOURS must be >= 0, got {config.scheduling.default_buffer_hours}"
        )
    if config.scheduling.backtracking_max_items < 1:
        raise ValueError(
            "BACKTRACKING_MAX_ITEMS must be >= 1, "
            f"got {config.scheduling.backtracking_max_items}"
        )
    if config.scheduling.backtracking_max_lanes < 1:
        raise ValueError(
            "BACKTRACKING_MAX_LANES must be >= 1, "
            f"got {config.scheduling.backtracking_max_lanes}"
        )


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logger.info("Configuration loaded for '%s'", config.business.name)
    return config


# Singleton instance
settings = load_config()
