"""In-memory record store.

Reference implementation of ``ITradeRepository`` and ``ISettingsStore``
used by the CLI and tests.  Ids auto-increment per store instance.
Records are frozen, so callers always get snapshots they cannot mutate.

On create / update the store derives what the journal form leaves out:
the realised P&L from entry and exit price, and the time-of-day label
from the entry time.
"""

from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import fields, replace
from datetime import tzinfo
from typing import Any, Mapping, Sequence

from ..core.config import (
    OPTIONS_CONTRACT_MULTIPLIER,
    AnalyticsConfig,
    TimeWindow,
    default_time_windows,
)
from ..core.errors import TimestampError
from ..journal.record import TradeRecord, calculate_options_pnl
from ..journal.time_of_day import classify_time_of_day

logger = logging.getLogger(__name__)


class InMemoryTradeRepository:
    """Dict-backed trade store.

    Parameters
    ----------
    contract_multiplier : int
        Units per contract used when deriving P&L.  Default 100.
    time_windows : Sequence[TimeWindow] | None
        Session table for entry-time classification.
    tz : tzinfo | None
        Exchange timezone the windows are expressed in.  Aware entry
        times are converted into it before classification.  Defaults to
        the configured analytics timezone.
    """

    def __init__(
        self,
        *,
        contract_multiplier: int = OPTIONS_CONTRACT_MULTIPLIER,
        time_windows: Sequence[TimeWindow] | None = None,
        tz: tzinfo | None = None,
    ) -> None:
        self._multiplier = contract_multiplier
        self._windows = list(time_windows) if time_windows is not None else default_time_windows()
        self._tz = tz or AnalyticsConfig().tzinfo
        self._trades: dict[int, TradeRecord] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    # ------------------------------------------------------------------ #
    # Read                                                                 #
    # ------------------------------------------------------------------ #

    def list_trades(self) -> Sequence[TradeRecord]:
        """All trades, newest id first."""
        with self._lock:
            return tuple(sorted(self._trades.values(), key=lambda t: t.id, reverse=True))

    def get(self, trade_id: int) -> TradeRecord | None:
        with self._lock:
            return self._trades.get(trade_id)

    # ------------------------------------------------------------------ #
    # Write                                                                #
    # ------------------------------------------------------------------ #

    def create(self, data: Mapping[str, Any]) -> TradeRecord:
        """Insert a trade and return the stored snapshot."""
        with self._lock:
            trade_id = next(self._ids)
            record = TradeRecord.from_dict({**data, "id": trade_id})
            record = self._derive(record, classify=record.time_classification is None)
            self._trades[trade_id] = record
        logger.debug("Created trade %s (%s)", trade_id, record.ticker)
        return record

    def update(self, trade_id: int, changes: Mapping[str, Any]) -> TradeRecord | None:
        """Merge ``changes`` into an existing trade.  ``None`` if unknown."""
        with self._lock:
            existing = self._trades.get(trade_id)
            if existing is None:
                return None
            current = {f.name: getattr(existing, f.name) for f in fields(existing)}
            merged = {**current, **changes, "id": trade_id}
            record = TradeRecord.from_dict(merged)
            explicit_label = "time_classification" in changes or "timeClassification" in changes
            moved = "entry_time" in changes or "entryTime" in changes
            reclassify = moved and not explicit_label
            record = self._derive(
                record, classify=reclassify or record.time_classification is None
            )
            self._trades[trade_id] = record
        return record

    def delete(self, trade_id: int) -> bool:
        with self._lock:
            return self._trades.pop(trade_id, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._trades.clear()

    # ------------------------------------------------------------------ #
    # Derived fields                                                       #
    # ------------------------------------------------------------------ #

    def _derive(self, record: TradeRecord, *, classify: bool) -> TradeRecord:
        pnl = record.realized_pnl
        if record.exit_price is not None:
            pnl = calculate_options_pnl(
                record.entry_price, record.exit_price, record.quantity,
                multiplier=self._multiplier,
            )
        if record.exit_time is None:
            pnl = None  # P&L is only realised once the trade has an exit time

        label = record.time_classification
        if classify and record.entry_time is not None:
            try:
                label = classify_time_of_day(record.entry_time, self._windows, tz=self._tz)
            except TimestampError as e:
                logger.warning("Trade %s: cannot classify entry time (%s)", record.id, e)

        return replace(record, realized_pnl=pnl, time_classification=label)


class InMemorySettingsStore:
    """String key/value settings."""

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get_setting(self, key: str) -> str | None:
        with self._lock:
            return self._values.get(key)

    def set_setting(self, key: str, value: str) -> None:
        with self._lock:
            self._values[key] = str(value)
