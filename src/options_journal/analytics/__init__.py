"""Performance analytics over closed trades.

Key components
--------------
build_equity_curve   Running account balance, oldest trade first
calculate_drawdown   Max and current peak-to-trough drop
sharpe_ratio         Mean daily return over its sample std
analyze_streaks      Signed win / loss run lengths
pnl_histogram        Trade counts per fixed-width P&L bucket
daily_calendar       P&L per local calendar day (plus weekly / monthly)
summarize            Headline totals, win rate, averages
PerformanceService   Fetches trades + settings and builds the full report
"""

from .distribution import (
    CalendarDay,
    daily_calendar,
    monthly_calendar,
    pnl_histogram,
    weekly_calendar,
)
from .drawdown import DrawdownResult, calculate_drawdown
from .equity import EquityPoint, build_equity_curve
from .report import PerformanceReport, PerformanceService, build_report
from .risk import daily_returns, sharpe_ratio
from .streaks import StreakAnalysis, analyze_streaks
from .summary import PerformanceSummary, summarize

__all__ = [
    "CalendarDay",
    "daily_calendar",
    "weekly_calendar",
    "monthly_calendar",
    "pnl_histogram",
    "DrawdownResult",
    "calculate_drawdown",
    "EquityPoint",
    "build_equity_curve",
    "PerformanceReport",
    "PerformanceService",
    "build_report",
    "daily_returns",
    "sharpe_ratio",
    "StreakAnalysis",
    "analyze_streaks",
    "PerformanceSummary",
    "summarize",
]
