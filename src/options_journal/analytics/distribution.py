"""P&L distribution and calendar aggregations.

Histogram buckets use floor semantics so negative P&L lands in the
bucket below zero (-50 with width 100 is bucket -100).  Calendar views
group by the local calendar day of ``trade_date``, never by the UTC
date of an instant.

Usage::

    hist = pnl_histogram(trades, bucket_width=Decimal("100"))
    days = daily_calendar(trades, tz=ZoneInfo("America/Chicago"))
    year = monthly_calendar(trades, 2024, tz=ZoneInfo("America/Chicago"))
"""

from __future__ import annotations

import calendar
import math
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, timedelta, timezone, tzinfo
from decimal import Decimal
from typing import Iterable

from ..core.config import DEFAULT_BUCKET_WIDTH
from ..journal.normalizer import ClosedTrade, closed_trades
from ..journal.record import TradeRecord

MONTH_LABELS = [calendar.month_abbr[m] for m in range(1, 13)]


@dataclass
class CalendarDay:
    """P&L total and trade count for one calendar cell."""

    pnl_sum: Decimal = Decimal("0")
    trade_count: int = 0

    def record(self, pnl: Decimal, count: int = 1) -> None:
        self.pnl_sum += pnl
        self.trade_count += count

    def to_dict(self) -> dict:
        return {"pnl_sum": str(self.pnl_sum), "trade_count": self.trade_count}


# ---------------------------------------------------------------------- #
# Histogram                                                                #
# ---------------------------------------------------------------------- #

def bucket_key(pnl: Decimal, width: Decimal) -> Decimal:
    """Lower edge of the bucket containing ``pnl``: floor(pnl / width) × width."""
    return Decimal(math.floor(pnl / width)) * width


def pnl_histogram(
    trades: Iterable[TradeRecord],
    bucket_width: Decimal = DEFAULT_BUCKET_WIDTH,
    *,
    tz: tzinfo = timezone.utc,
) -> dict[Decimal, int]:
    """Trade count per fixed-width P&L bucket, lowest bucket first.

    Order-independent, so closed trades with a malformed exit time are
    still counted.

    Raises:
        ValueError: ``bucket_width`` is not positive.
    """
    width = Decimal(str(bucket_width))
    if width <= 0:
        raise ValueError(f"bucket_width must be positive, got {bucket_width}")

    counts: dict[Decimal, int] = defaultdict(int)
    for closed in closed_trades(trades, tz=tz):
        counts[bucket_key(closed.pnl, width)] += 1
    return dict(sorted(counts.items()))


# ---------------------------------------------------------------------- #
# Calendar                                                                 #
# ---------------------------------------------------------------------- #

def _dated(trades: Iterable[TradeRecord], tz: tzinfo) -> list[ClosedTrade]:
    return [c for c in closed_trades(trades, tz=tz) if c.trade_date is not None]


def daily_calendar(
    trades: Iterable[TradeRecord], *, tz: tzinfo = timezone.utc
) -> dict[date, CalendarDay]:
    """P&L and trade count per local calendar day, oldest first."""
    days: dict[date, CalendarDay] = defaultdict(CalendarDay)
    for closed in _dated(trades, tz):
        days[closed.trade_date].record(closed.pnl)  # type: ignore[index]
    return dict(sorted(days.items()))


def monthly_calendar(
    trades: Iterable[TradeRecord],
    year: int,
    *,
    tz: tzinfo = timezone.utc,
) -> dict[str, CalendarDay]:
    """Twelve month cells ("Jan" … "Dec") for ``year``.

    Each cell sums the daily cells falling in that month; months with
    no trades are present with zero totals.
    """
    months = {label: CalendarDay() for label in MONTH_LABELS}
    for day, cell in daily_calendar(trades, tz=tz).items():
        if day.year != year:
            continue
        months[MONTH_LABELS[day.month - 1]].record(cell.pnl_sum, cell.trade_count)
    return months


def week_start(day: date) -> date:
    """Sunday on or before ``day``."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def weekly_calendar(
    trades: Iterable[TradeRecord], *, tz: tzinfo = timezone.utc
) -> dict[date, CalendarDay]:
    """Daily cells rolled up into Sunday-to-Saturday weeks."""
    weeks: dict[date, CalendarDay] = defaultdict(CalendarDay)
    for day, cell in daily_calendar(trades, tz=tz).items():
        weeks[week_start(day)].record(cell.pnl_sum, cell.trade_count)
    return dict(sorted(weeks.items()))
