"""Equity curve builder.

Folds closed trades, oldest first, into a running account balance
starting from the configured starting balance.  The curve always has
one more point than there are time-ordered closed trades: the seed
point carries the starting balance.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from decimal import Decimal
from typing import Iterable

from ..core.clock import IClock, WallClock
from ..core.config import DEFAULT_STARTING_BALANCE
from ..journal.normalizer import chronological
from ..journal.record import TradeRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EquityPoint:
    """Account balance after one closed trade."""

    timestamp: datetime
    balance: Decimal

    def to_dict(self) -> dict:
        return {"timestamp": self.timestamp.isoformat(), "balance": str(self.balance)}


def build_equity_curve(
    trades: Iterable[TradeRecord],
    starting_balance: Decimal = DEFAULT_STARTING_BALANCE,
    *,
    clock: IClock | None = None,
    tz: tzinfo = timezone.utc,
) -> list[EquityPoint]:
    """Running balance series, seeded with ``(now, starting_balance)``.

    The seed is stamped with the clock's ``now`` unless the first trade
    closed earlier, in which case it takes that trade's close time so
    the series stays ordered by timestamp.  Zero-P&L trades still get
    their own (flat) point.
    """
    ordered = chronological(trades, tz=tz)
    now = (clock or WallClock()).now()
    seed_time = min(now, ordered[0].closed_at) if ordered else now  # type: ignore[type-var]

    balance = Decimal(starting_balance)
    curve = [EquityPoint(timestamp=seed_time, balance=balance)]
    for closed in ordered:
        balance += closed.pnl
        curve.append(EquityPoint(timestamp=closed.closed_at, balance=balance))  # type: ignore[arg-type]

    logger.debug(
        "Equity curve: %d points, %s -> %s", len(curve), starting_balance, balance
    )
    return curve


def balances(curve: Iterable[EquityPoint]) -> list[Decimal]:
    """Balance values of an equity curve, order preserved."""
    return [point.balance for point in curve]
