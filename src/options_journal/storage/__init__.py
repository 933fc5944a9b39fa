"""Record stores for trades and settings."""

from .memory import InMemorySettingsStore, InMemoryTradeRepository

__all__ = ["InMemorySettingsStore", "InMemoryTradeRepository"]
