"""Protocol interfaces for the journal.

Module boundaries are defined here as Protocol classes.  The analytics
core depends only on ``ITradeReader`` and ``ISettingsStore``; record
stores (in-memory, database) implement the wider repository contract.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, Sequence, runtime_checkable

from ..journal.record import TradeRecord


# ---------------------------------------------------------------------------
# Trades
# ---------------------------------------------------------------------------

@runtime_checkable
class ITradeReader(Protocol):
    """Read side of the trade store."""

    def list_trades(self) -> Sequence[TradeRecord]: ...


@runtime_checkable
class ITradeRepository(ITradeReader, Protocol):
    """CRUD over trade records.  Every method returns immutable snapshots."""

    def get(self, trade_id: int) -> TradeRecord | None: ...

    def create(self, data: Mapping[str, Any]) -> TradeRecord: ...

    def update(self, trade_id: int, changes: Mapping[str, Any]) -> TradeRecord | None: ...

    def delete(self, trade_id: int) -> bool: ...


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

@runtime_checkable
class ISettingsStore(Protocol):
    """String key/value settings."""

    def get_setting(self, key: str) -> str | None: ...

    def set_setting(self, key: str, value: str) -> None: ...
