"""Sharpe-style risk-adjusted return.

Mean period return over its sample standard deviation (ddof=1).  No
annualization: the ratio is reported on the native period of the input,
one entry per calendar day with at least one closed trade.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date, timezone, tzinfo
from decimal import Decimal
from typing import Iterable, Sequence

import numpy as np

from ..core.config import DEFAULT_STARTING_BALANCE
from ..journal.normalizer import closed_trades
from ..journal.record import TradeRecord


def sharpe_ratio(returns: Sequence[float], *, risk_free_rate: float = 0.0) -> float:
    """Mean excess return divided by the sample standard deviation.

    Args:
        returns: Fractional per-period returns.
        risk_free_rate: Per-period rate subtracted from every return.

    Returns:
        0.0 when there are fewer than two periods or the returns do not
        vary, never NaN or infinity.
    """
    if len(returns) < 2:
        return 0.0

    arr = np.asarray(returns, dtype=float) - risk_free_rate
    std = float(np.std(arr, ddof=1))
    if std == 0 or not np.isfinite(std):
        return 0.0
    return float(np.mean(arr)) / std


def daily_pnl(
    trades: Iterable[TradeRecord], *, tz: tzinfo = timezone.utc
) -> dict[date, Decimal]:
    """Realised P&L per ``trade_date`` calendar day, oldest first."""
    totals: dict[date, Decimal] = defaultdict(Decimal)
    for closed in closed_trades(trades, tz=tz):
        if closed.trade_date is None:
            continue
        totals[closed.trade_date] += closed.pnl
    return dict(sorted(totals.items()))


def daily_returns(
    trades: Iterable[TradeRecord],
    starting_balance: Decimal = DEFAULT_STARTING_BALANCE,
    *,
    tz: tzinfo = timezone.utc,
) -> list[float]:
    """Day P&L divided by the starting balance, one entry per trading day."""
    if starting_balance <= 0:
        return []
    return [float(pnl / starting_balance) for pnl in daily_pnl(trades, tz=tz).values()]
