"""Configuration management.

Loads from TOML config files + environment variables.
Uses pydantic-settings for validation and env var overriding.
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_STARTING_BALANCE = Decimal("28000")
DEFAULT_BUCKET_WIDTH = Decimal("100")
OPTIONS_CONTRACT_MULTIPLIER = 100

# Settings-store key holding the account's starting balance
STARTING_BALANCE_KEY = "account_balance"


# ---------------------------------------------------------------------------
# Sub-configs
# ---------------------------------------------------------------------------

def _parse_clock_minutes(value: str) -> int:
    hours, _, minutes = value.partition(":")
    h, m = int(hours), int(minutes)
    if not (0 <= h < 24 and 0 <= m < 60):
        raise ValueError(f"clock time out of range: {value!r}")
    return h * 60 + m


class TimeWindow(BaseModel):
    """A labelled intraday window, inclusive on both ends (``HH:MM``)."""

    label: str
    start: str
    end: str

    @field_validator("start", "end")
    @classmethod
    def _check_clock(cls, v: str) -> str:
        try:
            _parse_clock_minutes(v)
        except ValueError as e:
            raise ValueError(f"expected HH:MM, got {v!r}") from e
        return v

    @model_validator(mode="after")
    def _check_order(self) -> "TimeWindow":
        if self.end_minute < self.start_minute:
            raise ValueError(
                f"window {self.label!r} ends before it starts "
                f"({self.start} > {self.end})"
            )
        return self

    @property
    def start_minute(self) -> int:
        return _parse_clock_minutes(self.start)

    @property
    def end_minute(self) -> int:
        return _parse_clock_minutes(self.end)

    def contains(self, minute_of_day: int) -> bool:
        return self.start_minute <= minute_of_day <= self.end_minute


def default_time_windows() -> list[TimeWindow]:
    return [
        TimeWindow(label="Cash Open", start="08:30", end="09:30"),
        TimeWindow(label="Euro Close", start="09:31", end="10:30"),
        TimeWindow(label="Power Hour", start="14:30", end="15:00"),
    ]


class AnalyticsConfig(BaseModel):
    starting_balance: Decimal = Field(default=DEFAULT_STARTING_BALANCE, gt=0)
    histogram_bucket_width: Decimal = Field(default=DEFAULT_BUCKET_WIDTH, gt=0)
    contract_multiplier: int = Field(default=OPTIONS_CONTRACT_MULTIPLIER, gt=0)
    timezone: str = "America/Chicago"  # Calendar-day boundaries
    risk_free_rate: float = 0.0  # Per period, subtracted before Sharpe

    @field_validator("timezone")
    @classmethod
    def _check_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"unknown timezone: {v!r}") from e
        return v

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


class ObservabilityConfig(BaseModel):
    log_level: str = "INFO"
    log_format: str = "console"  # "json" or "console"


# ---------------------------------------------------------------------------
# Top-level settings
# ---------------------------------------------------------------------------

class Settings(BaseSettings):
    """Top-level application settings.

    Loaded from TOML config files, overridden by environment variables.
    """

    analytics: AnalyticsConfig = Field(default_factory=AnalyticsConfig)
    time_windows: list[TimeWindow] = Field(default_factory=default_time_windows)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    model_config = {"env_prefix": "JOURNAL_", "env_nested_delimiter": "__"}


def load_settings(
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> Settings:
    """Load settings from TOML file + env vars.

    Args:
        config_path: Path to TOML config file (optional).
        overrides: Dict of overrides to apply on top.

    Raises:
        ConfigError: the file exists but is not valid TOML.
    """
    data: dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.exists():
            import tomli

            try:
                with open(path, "rb") as f:
                    data = tomli.load(f)
            except tomli.TOMLDecodeError as e:
                raise ConfigError(f"Invalid TOML in {path}: {e}") from e
        else:
            logger.warning("Config file %s not found, using defaults", path)

    if overrides:
        for key, value in overrides.items():
            if isinstance(value, dict) and isinstance(data.get(key), dict):
                data[key] = {**data[key], **value}
            else:
                data[key] = value

    return Settings(**data)


def parse_starting_balance(
    raw: str | None,
    default: Decimal = DEFAULT_STARTING_BALANCE,
) -> Decimal:
    """Parse the stored starting-balance setting.

    Falls back to ``default`` when the value is absent, not a number,
    not finite, or not positive.  Never raises.
    """
    if raw is None or not str(raw).strip():
        return default
    text = str(raw).strip().replace(",", "").lstrip("$")
    try:
        value = Decimal(text)
    except InvalidOperation:
        logger.warning("Unparseable starting balance %r, using %s", raw, default)
        return default
    if not value.is_finite() or value <= 0:
        logger.warning("Starting balance %r out of range, using %s", raw, default)
        return default
    return value
