"""Drawdown analysis over an equity balance series.

Single forward pass tracking the running peak.  The maximum drawdown
percentage is measured against the peak in force when that maximum
drop happened, not against the final peak.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")


@dataclass(frozen=True)
class DrawdownResult:
    """Peak-to-trough statistics.  All values are non-negative."""

    max_drawdown: Decimal = _ZERO
    max_drawdown_percent: Decimal = _ZERO
    current_drawdown: Decimal = _ZERO

    def to_dict(self) -> dict:
        return {
            "max_drawdown": str(self.max_drawdown),
            "max_drawdown_percent": str(round(self.max_drawdown_percent, 4)),
            "current_drawdown": str(self.current_drawdown),
        }


def calculate_drawdown(balances: Sequence[Decimal | float | int]) -> DrawdownResult:
    """Max drawdown (absolute and %) and current drawdown.

    Args:
        balances: Equity values in chronological order.  Floats and ints
            are converted to Decimal first.

    Returns:
        All-zero result for a series of fewer than two points.
    """
    series = [b if isinstance(b, Decimal) else Decimal(str(b)) for b in balances]
    if len(series) < 2:
        return DrawdownResult()

    peak = series[0]
    max_drawdown = _ZERO
    peak_at_max = peak

    for value in series[1:]:
        if value > peak:
            peak = value
            continue
        drop = peak - value
        if drop > max_drawdown:
            max_drawdown = drop
            peak_at_max = peak

    max_pct = max_drawdown / peak_at_max * _HUNDRED if peak_at_max > 0 else _ZERO
    current = peak - series[-1]

    return DrawdownResult(
        max_drawdown=max_drawdown,
        max_drawdown_percent=max_pct,
        current_drawdown=current,
    )
