"""Shared fixtures for the options-journal test suite."""

from __future__ import annotations

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from options_journal.core.clock import FixedClock
from options_journal.core.config import Settings
from options_journal.storage.memory import InMemorySettingsStore, InMemoryTradeRepository

CHICAGO = ZoneInfo("America/Chicago")


@pytest.fixture
def fixed_clock() -> FixedClock:
    """Clock frozen at 2024-06-01 12:00 UTC."""
    return FixedClock(datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def repo() -> InMemoryTradeRepository:
    return InMemoryTradeRepository()


@pytest.fixture
def settings_store() -> InMemorySettingsStore:
    return InMemorySettingsStore()
