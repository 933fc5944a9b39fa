"""Trade record: the core data model.

A TradeRecord is an immutable snapshot of one options trade as the
record store hands it over.  Timestamps are kept exactly as supplied
(``datetime`` or ISO-8601 string); the normalizer parses them so that a
single malformed value cannot poison a whole analytics run.

Per-trade calculations (options P&L, planned risk-reward) live here too
because both the store and the analyzers need them.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Union

from ..core.config import OPTIONS_CONTRACT_MULTIPLIER
from ..core.errors import DataError

TimestampLike = Union[datetime, str]
DateLike = Union[date, datetime, str]


class OptionType(str, enum.Enum):
    """Contract type."""

    CALLS = "calls"
    PUTS = "puts"


class TradeOutcome(str, enum.Enum):
    """Win / loss classification.

    Breakeven trades are losses: only a strictly positive P&L wins.
    """

    WIN = "win"
    LOSS = "loss"


def classify_outcome(pnl: Decimal) -> TradeOutcome:
    return TradeOutcome.WIN if pnl > 0 else TradeOutcome.LOSS


@dataclass(frozen=True)
class TradeRecord:
    """Snapshot of one logged trade.

    Parameters
    ----------
    id : int
        Identifier assigned by the record store.
    realized_pnl : Decimal | None
        Signed P&L, present only once the trade is closed.
    trade_date : date | datetime | str | None
        Calendar day the trade is attributed to.  May differ from the
        date of ``entry_time`` for late-session fills.
    """

    id: int
    ticker: str = ""
    option_type: OptionType = OptionType.CALLS
    quantity: int = 1
    entry_price: Decimal = Decimal("0")
    exit_price: Decimal | None = None
    entry_time: TimestampLike | None = None
    exit_time: TimestampLike | None = None
    realized_pnl: Decimal | None = None
    trade_date: DateLike | None = None

    # Contract details
    strike_price: Decimal | None = None
    expiration_date: DateLike | None = None

    # Journal annotations
    entry_reason: str | None = None
    exit_reason: str | None = None
    playbook_id: int | None = None
    time_classification: str | None = None
    created_at: datetime | None = None

    @property
    def is_open(self) -> bool:
        return self.exit_time is None

    @property
    def outcome(self) -> TradeOutcome | None:
        """Win / loss, or ``None`` while no P&L is realised."""
        if self.realized_pnl is None:
            return None
        return classify_outcome(self.realized_pnl)

    # ------------------------------------------------------------------ #
    # Serialisation                                                        #
    # ------------------------------------------------------------------ #

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "TradeRecord":
        """Build a record from a store row (camelCase or snake_case keys).

        Raises
        ------
        DataError
            The row has no id, a numeric field is not a number, or the
            quantity is not a positive integer.
        """
        row = {_FIELD_ALIASES.get(k, k): v for k, v in raw.items()}
        if row.get("id") is None:
            raise DataError(f"trade row has no id: {raw!r}")

        option_type = row.get("option_type") or OptionType.CALLS.value
        try:
            quantity = _to_int(row.get("quantity"))
            if quantity is None:
                quantity = 1
            if quantity <= 0:
                raise ValueError(f"quantity must be positive, got {quantity}")
            return cls(
                id=int(row["id"]),
                ticker=str(row.get("ticker") or ""),
                option_type=(
                    option_type if isinstance(option_type, OptionType)
                    else OptionType(str(option_type).lower())
                ),
                quantity=quantity,
                entry_price=_to_decimal(row.get("entry_price")) or Decimal("0"),
                exit_price=_to_decimal(row.get("exit_price")),
                entry_time=row.get("entry_time"),
                exit_time=row.get("exit_time"),
                realized_pnl=_to_decimal(row.get("realized_pnl")),
                trade_date=row.get("trade_date"),
                strike_price=_to_decimal(row.get("strike_price")),
                expiration_date=row.get("expiration_date"),
                entry_reason=row.get("entry_reason"),
                exit_reason=row.get("exit_reason"),
                playbook_id=_to_int(row.get("playbook_id")),
                time_classification=row.get("time_classification"),
                created_at=row.get("created_at"),
            )
        except (TypeError, ValueError) as e:
            raise DataError(f"invalid trade row {row.get('id')!r}: {e}") from e

    def to_dict(self) -> dict:
        """Export to a flat dictionary for logging / JSON output."""
        return {
            "id": self.id,
            "ticker": self.ticker,
            "option_type": self.option_type.value,
            "quantity": self.quantity,
            "entry_price": str(self.entry_price),
            "exit_price": _str_or_none(self.exit_price),
            "entry_time": _iso_or_raw(self.entry_time),
            "exit_time": _iso_or_raw(self.exit_time),
            "realized_pnl": _str_or_none(self.realized_pnl),
            "trade_date": _iso_or_raw(self.trade_date),
            "strike_price": _str_or_none(self.strike_price),
            "expiration_date": _iso_or_raw(self.expiration_date),
            "entry_reason": self.entry_reason,
            "exit_reason": self.exit_reason,
            "playbook_id": self.playbook_id,
            "time_classification": self.time_classification,
            "outcome": self.outcome.value if self.outcome else None,
        }


_FIELD_ALIASES = {
    "type": "option_type",
    "optionType": "option_type",
    "entryPrice": "entry_price",
    "exitPrice": "exit_price",
    "entryTime": "entry_time",
    "exitTime": "exit_time",
    "pnl": "realized_pnl",
    "realizedPnL": "realized_pnl",
    "tradeDate": "trade_date",
    "strikePrice": "strike_price",
    "expirationDate": "expiration_date",
    "entryReason": "entry_reason",
    "exitReason": "exit_reason",
    "playbookId": "playbook_id",
    "timeClassification": "time_classification",
}


def _to_decimal(value: Any) -> Decimal | None:
    if value is None or value == "":
        return None
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"not a number: {value!r}") from e


def _as_decimal(value: Any) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def _to_int(value: Any) -> int | None:
    if value is None or value == "":
        return None
    return int(value)


def _str_or_none(value: Decimal | None) -> str | None:
    return str(value) if value is not None else None


def _iso_or_raw(value: Any) -> Any:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


# ---------------------------------------------------------------------- #
# Per-trade calculations                                                   #
# ---------------------------------------------------------------------- #

def calculate_options_pnl(
    entry_price: Decimal,
    exit_price: Decimal,
    quantity: int,
    commission: Decimal = Decimal("0"),
    multiplier: int = OPTIONS_CONTRACT_MULTIPLIER,
) -> Decimal:
    """Realised P&L of a long options position.

    ``(exit − entry) × quantity × multiplier − commission``
    """
    entry_debit = _as_decimal(entry_price) * quantity * multiplier
    exit_credit = _as_decimal(exit_price) * quantity * multiplier
    return exit_credit - entry_debit - _as_decimal(commission)


def calculate_risk_reward(
    entry_price: Decimal,
    stop_loss: Decimal,
    take_profit: Decimal,
) -> Decimal:
    """Planned reward per unit of risk.  Returns 0 when risk is 0."""
    risk = abs(_as_decimal(entry_price) - _as_decimal(stop_loss))
    reward = abs(_as_decimal(take_profit) - _as_decimal(entry_price))
    if risk == 0:
        return Decimal("0")
    return reward / risk
