"""Trade record normalizer, the leaf every analyzer builds on.

Decides whether a trade is closed, parses its close timestamp, and
hands back the signed realised P&L.  Open trades are filtered, never
rejected.  A closed trade whose exit timestamp cannot be parsed is kept
for order-independent aggregations but dropped from the time-ordered
passes (equity curve, streaks), with a warning.

Usage::

    ordered = chronological(trades, tz=ZoneInfo("America/Chicago"))
    for closed in ordered:
        print(closed.closed_at, closed.pnl)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone, tzinfo
from decimal import Decimal
from typing import Iterable

from ..core.errors import TimestampError
from .record import DateLike, TimestampLike, TradeRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClosedTrade:
    """The per-trade fields every analyzer needs."""

    trade_id: int
    closed_at: datetime | None  # None: exit timestamp was malformed
    pnl: Decimal
    trade_date: date | None
    ticker: str = ""
    time_classification: str | None = None

    @property
    def is_win(self) -> bool:
        return self.pnl > 0


def parse_timestamp(value: TimestampLike, *, tz: tzinfo = timezone.utc) -> datetime:
    """Parse a stored timestamp into an aware datetime.

    Naive values are taken to be wall-clock time in ``tz``.

    Raises
    ------
    TimestampError
        The value is not a datetime or an ISO-8601 string.
    """
    if isinstance(value, datetime):
        ts = value
    elif isinstance(value, str):
        ts = _parse_iso(value)
    else:
        raise TimestampError(value, "unsupported timestamp type")

    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=tz)
    return ts


def calendar_date(value: DateLike, *, tz: tzinfo = timezone.utc) -> date:
    """Local calendar day for a ``trade_date``.

    Aware instants are converted into ``tz`` before the date is taken so
    that a late-evening UTC timestamp does not shift the trade onto the
    next day.  Plain dates and naive values are already local.

    Raises
    ------
    TimestampError
        The value cannot be read as a date.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.date()
        return value.astimezone(tz).date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if len(text) == 10:
            try:
                return date.fromisoformat(text)
            except ValueError as e:
                raise TimestampError(value) from e
        return calendar_date(_parse_iso(text), tz=tz)
    raise TimestampError(value, "unsupported date type")


def _parse_iso(value: str) -> datetime:
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as e:
        raise TimestampError(value) from e


def is_closed(trade: TradeRecord) -> bool:
    """A trade is closed once it has both an exit time and a realised P&L."""
    return trade.exit_time is not None and trade.realized_pnl is not None


def normalize(trade: TradeRecord, *, tz: tzinfo = timezone.utc) -> ClosedTrade | None:
    """Return the closed-trade view of ``trade``, or ``None`` if it is open."""
    if not is_closed(trade):
        return None

    closed_at: datetime | None
    try:
        closed_at = parse_timestamp(trade.exit_time, tz=tz)  # type: ignore[arg-type]
    except TimestampError as e:
        logger.warning(
            "Trade %s has a malformed exit time (%s); excluded from time-ordered analytics",
            trade.id, e,
        )
        closed_at = None

    trade_day: date | None = None
    if trade.trade_date is not None:
        try:
            trade_day = calendar_date(trade.trade_date, tz=tz)
        except TimestampError as e:
            logger.warning("Trade %s has a malformed trade date (%s)", trade.id, e)

    return ClosedTrade(
        trade_id=trade.id,
        closed_at=closed_at,
        pnl=trade.realized_pnl,  # type: ignore[arg-type]
        trade_date=trade_day,
        ticker=trade.ticker,
        time_classification=trade.time_classification,
    )


def closed_trades(
    trades: Iterable[TradeRecord], *, tz: tzinfo = timezone.utc
) -> list[ClosedTrade]:
    """Every closed trade in input order, malformed timestamps included."""
    result = []
    for trade in trades:
        closed = normalize(trade, tz=tz)
        if closed is not None:
            result.append(closed)
    return result


def chronological(
    trades: Iterable[TradeRecord], *, tz: tzinfo = timezone.utc
) -> list[ClosedTrade]:
    """Closed trades with a valid close time, oldest first.

    Ties on the close timestamp are broken by trade id.
    """
    ordered = [c for c in closed_trades(trades, tz=tz) if c.closed_at is not None]
    ordered.sort(key=lambda c: (c.closed_at, c.trade_id))
    return ordered
