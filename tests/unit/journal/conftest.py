"""Shared fixtures and trade factories for journal tests."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Any

from options_journal.journal.record import TradeRecord

BASE_TIME = datetime(2024, 3, 4, 15, 0, tzinfo=timezone.utc)


def make_trade(
    trade_id: int = 1,
    pnl: Decimal | str | int | None = "100",
    exit_time: Any = "default",
    trade_date: Any = "default",
    ticker: str = "SPY",
    **overrides: Any,
) -> TradeRecord:
    """A closed trade; exit ``trade_id`` hours after ``BASE_TIME``.

    Pass ``exit_time=None`` for an open trade.
    """
    if exit_time == "default":
        exit_time = BASE_TIME + timedelta(hours=trade_id)
    if trade_date == "default":
        trade_date = date(2024, 3, 4)
    return TradeRecord(
        id=trade_id,
        ticker=ticker,
        entry_price=Decimal("2.00"),
        exit_time=exit_time,
        realized_pnl=Decimal(str(pnl)) if pnl is not None else None,
        trade_date=trade_date,
        **overrides,
    )


def make_sequence(pnls: list[int | str]) -> list[TradeRecord]:
    """Closed trades with ids 1..n closing one hour apart, in order."""
    return [make_trade(i, pnl=p) for i, p in enumerate(pnls, start=1)]


def make_open_trade(trade_id: int = 99, **overrides: Any) -> TradeRecord:
    return make_trade(trade_id, pnl=None, exit_time=None, **overrides)
