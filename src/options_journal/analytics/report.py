"""Performance report: every analyzer over one trade snapshot.

``build_report`` is the pure core: given a trade collection, starting
balance, config and clock it runs each analyzer independently.
``PerformanceService`` is the thin shell that fetches the trades and
the starting-balance setting from the injected stores.

Usage::

    service = PerformanceService(repo, settings_store, config=settings)
    report = service.generate()
    print(report.drawdown.max_drawdown, report.sharpe_ratio)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Iterable

from ..core.clock import IClock, WallClock
from ..core.config import STARTING_BALANCE_KEY, Settings, parse_starting_balance
from ..core.interfaces import ISettingsStore, ITradeReader
from ..journal.record import TradeRecord
from ..observability.logger import get_logger, new_request_id
from .distribution import (
    CalendarDay,
    daily_calendar,
    monthly_calendar,
    pnl_histogram,
    weekly_calendar,
)
from .drawdown import DrawdownResult, calculate_drawdown
from .equity import EquityPoint, balances, build_equity_curve
from .risk import daily_returns, sharpe_ratio
from .streaks import StreakAnalysis, analyze_streaks
from .summary import PerformanceSummary, summarize

logger = get_logger(__name__)


@dataclass
class PerformanceReport:
    """All computed analytics for one request."""

    starting_balance: Decimal
    year: int
    summary: PerformanceSummary
    equity_curve: list[EquityPoint] = field(default_factory=list)
    drawdown: DrawdownResult = field(default_factory=DrawdownResult)
    sharpe_ratio: float = 0.0
    streaks: StreakAnalysis = field(default_factory=StreakAnalysis)
    pnl_histogram: dict[Decimal, int] = field(default_factory=dict)
    daily_calendar: dict[date, CalendarDay] = field(default_factory=dict)
    weekly_calendar: dict[date, CalendarDay] = field(default_factory=dict)
    monthly_calendar: dict[str, CalendarDay] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """JSON-safe rendering (Decimals as strings, dates as ISO)."""
        return {
            "starting_balance": str(self.starting_balance),
            "year": self.year,
            "summary": self.summary.to_dict(),
            "equity_curve": [p.to_dict() for p in self.equity_curve],
            "drawdown": self.drawdown.to_dict(),
            "sharpe_ratio": round(self.sharpe_ratio, 4),
            "streaks": self.streaks.to_dict(),
            "pnl_histogram": {str(k): v for k, v in self.pnl_histogram.items()},
            "daily_calendar": {
                d.isoformat(): c.to_dict() for d, c in self.daily_calendar.items()
            },
            "weekly_calendar": {
                d.isoformat(): c.to_dict() for d, c in self.weekly_calendar.items()
            },
            "monthly_calendar": {m: c.to_dict() for m, c in self.monthly_calendar.items()},
        }


def build_report(
    trades: Iterable[TradeRecord],
    *,
    starting_balance: Decimal | None = None,
    config: Settings | None = None,
    clock: IClock | None = None,
    year: int | None = None,
) -> PerformanceReport:
    """Run every analyzer over ``trades``.

    Parameters
    ----------
    starting_balance : Decimal | None
        Overrides ``config.analytics.starting_balance`` when given.
    year : int | None
        Year of the monthly overview.  Defaults to the clock's current
        year in the configured timezone.
    """
    cfg = config or Settings()
    analytics = cfg.analytics
    tz = analytics.tzinfo
    clk = clock or WallClock()
    balance = starting_balance if starting_balance is not None else analytics.starting_balance
    records = list(trades)
    report_year = year if year is not None else clk.now().astimezone(tz).year

    curve = build_equity_curve(records, balance, clock=clk, tz=tz)

    return PerformanceReport(
        starting_balance=balance,
        year=report_year,
        summary=summarize(records, time_windows=cfg.time_windows, tz=tz),
        equity_curve=curve,
        drawdown=calculate_drawdown(balances(curve)),
        sharpe_ratio=sharpe_ratio(
            daily_returns(records, balance, tz=tz),
            risk_free_rate=analytics.risk_free_rate,
        ),
        streaks=analyze_streaks(records, tz=tz),
        pnl_histogram=pnl_histogram(records, analytics.histogram_bucket_width, tz=tz),
        daily_calendar=daily_calendar(records, tz=tz),
        weekly_calendar=weekly_calendar(records, tz=tz),
        monthly_calendar=monthly_calendar(records, report_year, tz=tz),
    )


class PerformanceService:
    """Fetches trades and settings, then builds the report.

    Depends only on the read side of the trade store.
    """

    def __init__(
        self,
        trades: ITradeReader,
        settings_store: ISettingsStore | None = None,
        *,
        config: Settings | None = None,
        clock: IClock | None = None,
    ) -> None:
        self._trades = trades
        self._settings_store = settings_store
        self._config = config or Settings()
        self._clock = clock or WallClock()

    def starting_balance(self) -> Decimal:
        """Stored starting balance, else the configured default."""
        default = self._config.analytics.starting_balance
        if self._settings_store is None:
            return default
        raw = self._settings_store.get_setting(STARTING_BALANCE_KEY)
        return parse_starting_balance(raw, default=default)

    def generate(self, year: int | None = None) -> PerformanceReport:
        new_request_id()
        trades = self._trades.list_trades()
        balance = self.starting_balance()
        logger.info(
            "performance_report.start",
            trades=len(trades),
            starting_balance=str(balance),
        )
        report = build_report(
            trades,
            starting_balance=balance,
            config=self._config,
            clock=self._clock,
            year=year,
        )
        logger.info(
            "performance_report.done",
            closed_trades=report.summary.closed_trades,
            max_drawdown=str(report.drawdown.max_drawdown),
            current_streak=report.streaks.current_streak,
        )
        return report
