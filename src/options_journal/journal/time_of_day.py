"""Time-of-day session classification.

Labels a trade's entry time with the intraday window it falls in
("Cash Open", "Power Hour", ...).  The windows are a configuration
table (``Settings.time_windows``) rather than constants, so a journal
for a different market only needs a different table.

Usage::

    label = classify_time_of_day("08:45", settings.time_windows)
    # "Cash Open"
"""

from __future__ import annotations

from datetime import datetime, time, timezone, tzinfo
from typing import Sequence, Union

from ..core.config import TimeWindow, default_time_windows
from ..core.errors import TimestampError
from .normalizer import parse_timestamp

OTHER = "Other"

TimeLike = Union[time, datetime, str]


def minute_of_day(value: TimeLike, *, tz: tzinfo | None = None) -> int:
    """Minutes since local midnight.

    Accepts ``HH:MM`` strings, ``time`` objects and datetimes (aware
    datetimes are converted into ``tz`` first when one is given).

    Raises
    ------
    TimestampError
        The value cannot be read as a clock time.
    """
    if isinstance(value, datetime):
        if tz is not None and value.tzinfo is not None:
            value = value.astimezone(tz)
        return value.hour * 60 + value.minute
    if isinstance(value, time):
        return value.hour * 60 + value.minute
    if isinstance(value, str):
        text = value.strip()
        if len(text) <= 5 and ":" in text:
            hours, _, minutes = text.partition(":")
            try:
                h, m = int(hours), int(minutes)
            except ValueError as e:
                raise TimestampError(value) from e
            if not (0 <= h < 24 and 0 <= m < 60):
                raise TimestampError(value, "clock time out of range")
            return h * 60 + m
        return minute_of_day(parse_timestamp(text, tz=tz or timezone.utc), tz=tz)
    raise TimestampError(value, "unsupported time type")


def classify_time_of_day(
    value: TimeLike,
    windows: Sequence[TimeWindow] | None = None,
    *,
    tz: tzinfo | None = None,
) -> str:
    """Label of the first window containing ``value``, else ``"Other"``."""
    if windows is None:
        windows = default_time_windows()
    minute = minute_of_day(value, tz=tz)
    for window in windows:
        if window.contains(minute):
            return window.label
    return OTHER
