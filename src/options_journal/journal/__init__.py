"""Trade journal: records, normalization and session labels.

Key components
--------------
TradeRecord           Immutable snapshot of one logged options trade
ClosedTrade           Per-trade view every analyzer consumes
normalize             Closed-trade view of a record (``None`` while open)
chronological         Closed trades ordered by close time
classify_time_of_day  Intraday session label for an entry time
"""

from .normalizer import ClosedTrade, chronological, closed_trades, normalize
from .record import OptionType, TradeOutcome, TradeRecord
from .time_of_day import OTHER, classify_time_of_day

__all__ = [
    "TradeRecord",
    "OptionType",
    "TradeOutcome",
    "ClosedTrade",
    "normalize",
    "closed_trades",
    "chronological",
    "classify_time_of_day",
    "OTHER",
]
