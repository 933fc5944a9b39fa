"""Options trading journal: trade records and performance analytics."""

__version__ = "0.1.0"
