"""Test Settings loading and the starting-balance setting."""

import pytest
from decimal import Decimal
from zoneinfo import ZoneInfo

from pydantic import ValidationError

from options_journal.core.config import (
    DEFAULT_STARTING_BALANCE,
    AnalyticsConfig,
    Settings,
    TimeWindow,
    load_settings,
    parse_starting_balance,
)
from options_journal.core.errors import ConfigError


class TestSettingsDefaults:
    def test_default_settings(self):
        settings = Settings()
        assert settings.analytics.starting_balance == Decimal("28000")
        assert settings.analytics.histogram_bucket_width == Decimal("100")
        assert settings.analytics.contract_multiplier == 100
        assert settings.analytics.timezone == "America/Chicago"
        assert settings.observability.log_level == "INFO"

    def test_default_time_windows(self):
        labels = [w.label for w in Settings().time_windows]
        assert labels == ["Cash Open", "Euro Close", "Power Hour"]

    def test_tzinfo(self):
        assert AnalyticsConfig().tzinfo == ZoneInfo("America/Chicago")


class TestSettingsValidation:
    def test_rejects_non_positive_balance(self):
        with pytest.raises(ValidationError):
            AnalyticsConfig(starting_balance=Decimal("0"))

    def test_rejects_zero_bucket_width(self):
        with pytest.raises(ValidationError):
            AnalyticsConfig(histogram_bucket_width=Decimal("0"))

    def test_rejects_unknown_timezone(self):
        with pytest.raises(ValidationError, match="unknown timezone"):
            AnalyticsConfig(timezone="Mars/Olympus_Mons")

    def test_window_requires_clock_format(self):
        with pytest.raises(ValidationError):
            TimeWindow(label="bad", start="8am", end="09:00")

    def test_window_end_before_start(self):
        with pytest.raises(ValidationError, match="ends before it starts"):
            TimeWindow(label="bad", start="10:00", end="09:00")

    def test_window_contains_is_inclusive(self):
        w = TimeWindow(label="x", start="09:00", end="09:30")
        assert w.contains(540)
        assert w.contains(570)
        assert not w.contains(571)


class TestLoadSettings:
    def test_load_from_toml(self, tmp_path):
        path = tmp_path / "journal.toml"
        path.write_text(
            '[analytics]\n'
            'starting_balance = "50000"\n'
            'timezone = "UTC"\n'
            '\n'
            '[[time_windows]]\n'
            'label = "Open"\n'
            'start = "09:30"\n'
            'end = "10:00"\n'
        )
        settings = load_settings(path)
        assert settings.analytics.starting_balance == Decimal("50000")
        assert settings.analytics.timezone == "UTC"
        assert [w.label for w in settings.time_windows] == ["Open"]

    def test_missing_file_uses_defaults(self, tmp_path):
        settings = load_settings(tmp_path / "nope.toml")
        assert settings.analytics.starting_balance == DEFAULT_STARTING_BALANCE

    def test_invalid_toml_raises(self, tmp_path):
        path = tmp_path / "broken.toml"
        path.write_text("[analytics\nstarting_balance = ")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_settings(path)

    def test_overrides_merge_into_sections(self, tmp_path):
        path = tmp_path / "journal.toml"
        path.write_text('[analytics]\ntimezone = "UTC"\n')
        settings = load_settings(path, overrides={"analytics": {"risk_free_rate": 0.001}})
        assert settings.analytics.timezone == "UTC"
        assert settings.analytics.risk_free_rate == 0.001

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("JOURNAL_ANALYTICS__TIMEZONE", "UTC")
        assert load_settings().analytics.timezone == "UTC"


class TestParseStartingBalance:
    def test_plain_number(self):
        assert parse_starting_balance("30000") == Decimal("30000")

    def test_formatted_number(self):
        assert parse_starting_balance("$31,500.50") == Decimal("31500.50")

    @pytest.mark.parametrize("raw", [None, "", "   ", "abc", "NaN", "Infinity", "0", "-5000"])
    def test_falls_back_to_default(self, raw):
        assert parse_starting_balance(raw) == DEFAULT_STARTING_BALANCE

    def test_custom_default(self):
        assert parse_starting_balance(None, default=Decimal("1000")) == Decimal("1000")
