"""Headline performance statistics.

Totals, win rate, average win / loss and the average reward-to-risk
ratio, plus realised P&L broken down by ticker and by time-of-day
session.  Open trades count toward ``total_trades`` only.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import timezone, tzinfo
from decimal import Decimal
from typing import Any, Iterable, Sequence

from ..core.config import TimeWindow
from ..core.errors import TimestampError
from ..journal.normalizer import ClosedTrade, normalize
from ..journal.record import TradeRecord
from ..journal.time_of_day import classify_time_of_day

logger = logging.getLogger(__name__)

_ZERO = Decimal("0")


@dataclass
class PerformanceSummary:
    total_trades: int = 0
    closed_trades: int = 0
    wins: int = 0
    losses: int = 0
    total_pnl: Decimal = _ZERO
    win_rate: float = 0.0  # percent
    avg_win: Decimal = _ZERO
    avg_loss: Decimal = _ZERO  # absolute value
    avg_rr: float = 0.0
    largest_win: Decimal = _ZERO
    largest_loss: Decimal = _ZERO
    by_symbol: dict[str, Decimal] = field(default_factory=dict)
    by_time_classification: dict[str, Decimal] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_trades": self.total_trades,
            "closed_trades": self.closed_trades,
            "wins": self.wins,
            "losses": self.losses,
            "total_pnl": str(self.total_pnl),
            "win_rate": round(self.win_rate, 2),
            "avg_win": str(round(self.avg_win, 2)),
            "avg_loss": str(round(self.avg_loss, 2)),
            "avg_rr": round(self.avg_rr, 4),
            "largest_win": str(self.largest_win),
            "largest_loss": str(self.largest_loss),
            "by_symbol": {k: str(v) for k, v in self.by_symbol.items()},
            "by_time_classification": {
                k: str(v) for k, v in self.by_time_classification.items()
            },
        }


def _session_label(
    trade: TradeRecord,
    closed: ClosedTrade,
    windows: Sequence[TimeWindow] | None,
    tz: tzinfo,
) -> str | None:
    """Stored classification, else derived from the entry time."""
    if closed.time_classification:
        return closed.time_classification
    if windows is None or trade.entry_time is None:
        return None
    try:
        return classify_time_of_day(trade.entry_time, windows, tz=tz)
    except TimestampError as e:
        logger.warning("Trade %s: cannot classify entry time (%s)", trade.id, e)
        return None


def summarize(
    trades: Iterable[TradeRecord],
    *,
    time_windows: Sequence[TimeWindow] | None = None,
    tz: tzinfo = timezone.utc,
) -> PerformanceSummary:
    """Compute the headline statistics for ``trades``.

    Parameters
    ----------
    time_windows : Sequence[TimeWindow] | None
        When given, trades without a stored time classification are
        labelled from their entry time.  When ``None`` they are left out
        of ``by_time_classification``.
    """
    records = list(trades)
    summary = PerformanceSummary(total_trades=len(records))

    win_pnls: list[Decimal] = []
    loss_pnls: list[Decimal] = []
    by_symbol: dict[str, Decimal] = defaultdict(Decimal)
    by_session: dict[str, Decimal] = defaultdict(Decimal)

    for trade in records:
        closed = normalize(trade, tz=tz)
        if closed is None:
            continue
        (win_pnls if closed.is_win else loss_pnls).append(closed.pnl)
        by_symbol[closed.ticker] += closed.pnl
        label = _session_label(trade, closed, time_windows, tz)
        if label:
            by_session[label] += closed.pnl

    n_closed = len(win_pnls) + len(loss_pnls)
    if n_closed == 0:
        return summary

    summary.closed_trades = n_closed
    summary.wins = len(win_pnls)
    summary.losses = len(loss_pnls)
    summary.total_pnl = sum(win_pnls, _ZERO) + sum(loss_pnls, _ZERO)
    summary.win_rate = summary.wins / n_closed * 100
    if win_pnls:
        summary.avg_win = sum(win_pnls, _ZERO) / len(win_pnls)
        summary.largest_win = max(win_pnls)
    if loss_pnls:
        summary.avg_loss = abs(sum(loss_pnls, _ZERO) / len(loss_pnls))
        summary.largest_loss = min(loss_pnls)
    if summary.avg_loss > 0:
        summary.avg_rr = float(summary.avg_win / summary.avg_loss)
    summary.by_symbol = dict(by_symbol)
    summary.by_time_classification = dict(by_session)
    return summary
