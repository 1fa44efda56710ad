"""
Centralized configuration with environment variable overrides.

Calendar grid bounds, suggestion thresholds, and backend connection
settings all live here so the scheduling and assignment logic never
hardcodes them.
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

WEEK_START_NAMES = ("sunday", "monday")


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


def _safe_bool(env_var: str, default: str) -> bool:
    """Parse a boolean flag (true/false, yes/no, 1/0) from an env var."""
    raw = os.getenv(env_var, default).strip().lower()
    if raw in ("1", "true", "yes", "on"):
        return True
    if raw in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"Invalid boolean for {env_var}: {raw!r}")


@dataclass(frozen=True)
class CalendarConfig:
    """Weekly scheduling grid bounds."""

    week_start: str = os.getenv("CALENDAR_WEEK_START", "sunday").strip().lower()
    first_slot_hour: int = _safe_int("CALENDAR_FIRST_SLOT_HOUR", "8")
    last_slot_hour: int = _safe_int("CALENDAR_LAST_SLOT_HOUR", "18")


@dataclass(frozen=True)
class SuggestionConfig:
    """Match-score thresholds and candidate pool rules."""

    perfect_threshold: int = _safe_int("MATCH_PERFECT_THRESHOLD", "100")
    good_threshold: int = _safe_int("MATCH_GOOD_THRESHOLD", "75")
    partial_threshold: int = _safe_int("MATCH_PARTIAL_THRESHOLD", "50")
    include_pending: bool = _safe_bool("SUGGEST_INCLUDE_PENDING", "true")
    max_results: int = _safe_int("SUGGEST_MAX_RESULTS", "0")


@dataclass(frozen=True)
class BackendConfig:
    """Connection settings for the REST persistence backend."""

    url: str = os.getenv("BACKEND_URL", "http://localhost:54321/rest/v1")
    api_key: str = os.getenv("BACKEND_API_KEY", "")
    timeout_seconds: float = _safe_float("BACKEND_TIMEOUT_SECONDS", "5.0")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    calendar: CalendarConfig = field(default_factory=CalendarConfig)
    suggestions: SuggestionConfig = field(default_factory=SuggestionConfig)
    backend: BackendConfig = field(default_factory=BackendConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    app_name: str = os.getenv("APP_NAME", "talent-dispatch")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    if config.calendar.week_start not in WEEK_START_NAMES:
        raise ValueError(
            f"CALENDAR_WEEK_START must be one of {WEEK_START_NAMES}, "
            f"got {config.calendar.week_start!r}"
        )
    for name, hour in [
        ("CALENDAR_FIRST_SLOT_HOUR", config.calendar.first_slot_hour),
        ("CALENDAR_LAST_SLOT_HOUR", config.calendar.last_slot_hour),
    ]:
        if not 0 <= hour <= 23:
            raise ValueError(f"{name} must be between 0 and 23, got {hour}")
    if config.calendar.first_slot_hour > config.calendar.last_slot_hour:
        raise ValueError(
            "CALENDAR_FIRST_SLOT_HOUR must not be after CALENDAR_LAST_SLOT_HOUR, "
            f"got {config.calendar.first_slot_hour} > {config.calendar.last_slot_hour}"
        )

    s = config.suggestions
    if s.partial_threshold <= 0:
        raise ValueError(
            f"MATCH_PARTIAL_THRESHOLD must be > 0, got {s.partial_threshold}"
        )
    if not s.perfect_threshold > s.good_threshold > s.partial_threshold:
        raise ValueError(
            "Match thresholds must be strictly descending "
            "(MATCH_PERFECT_THRESHOLD > MATCH_GOOD_THRESHOLD > MATCH_PARTIAL_THRESHOLD), "
            f"got {s.perfect_threshold}/{s.good_threshold}/{s.partial_threshold}"
        )
    if s.max_results < 0:
        raise ValueError(f"SUGGEST_MAX_RESULTS must be >= 0, got {s.max_results}")

    if config.backend.timeout_seconds <= 0:
        raise ValueError(
            f"BACKEND_TIMEOUT_SECONDS must be > 0, got {config.backend.timeout_seconds}"
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
    logger.info("Configuration loaded for '%s'", config.app_name)
    return config


# Singleton instance
settings = load_config()
