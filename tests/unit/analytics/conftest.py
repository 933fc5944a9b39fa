"""Shared fixtures for analytics tests."""

from ..journal.conftest import (  # noqa: F401
    BASE_TIME,
    make_open_trade,
    make_sequence,
    make_trade,
)
