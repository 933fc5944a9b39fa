"""Win / loss streak analysis.

Walks closed trades in close-time order and records every maximal run
of same-outcome trades as a signed length (+ wins, − losses).  A
breakeven trade counts as a loss, so it ends a winning run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timezone, tzinfo
from typing import Iterable

from ..journal.normalizer import chronological
from ..journal.record import TradeRecord


@dataclass(frozen=True)
class StreakAnalysis:
    """Streak statistics.

    ``current_streak`` is the signed length of the run still in
    progress after the last trade (0 with no trades).
    """

    current_streak: int = 0
    max_win_streak: int = 0
    max_loss_streak: int = 0
    streaks: list[int] = field(default_factory=list)

    @property
    def total_trades(self) -> int:
        return sum(abs(s) for s in self.streaks)

    def to_dict(self) -> dict:
        return {
            "current_streak": self.current_streak,
            "max_win_streak": self.max_win_streak,
            "max_loss_streak": self.max_loss_streak,
            "streaks": list(self.streaks),
        }


def streak_lengths(outcomes: Iterable[bool]) -> list[int]:
    """Signed run lengths of a win (True) / loss (False) sequence."""
    streaks: list[int] = []
    current_win: bool | None = None
    length = 0

    for won in outcomes:
        if won == current_win:
            length += 1
            continue
        if current_win is not None:
            streaks.append(length if current_win else -length)
        current_win = won
        length = 1

    if current_win is not None:
        streaks.append(length if current_win else -length)
    return streaks


def analyze_streaks(
    trades: Iterable[TradeRecord], *, tz: tzinfo = timezone.utc
) -> StreakAnalysis:
    """Streak analysis over the closed trades in ``trades``."""
    ordered = chronological(trades, tz=tz)
    streaks = streak_lengths(c.is_win for c in ordered)
    if not streaks:
        return StreakAnalysis()

    wins = [s for s in streaks if s > 0]
    losses = [-s for s in streaks if s < 0]
    return StreakAnalysis(
        current_streak=streaks[-1],
        max_win_streak=max(wins, default=0),
        max_loss_streak=max(losses, default=0),
        streaks=streaks,
    )
