"""Custom exception hierarchy for the options journal."""


class JournalError(Exception):
    """Base exception for all journal errors."""


# --- Configuration ---
class ConfigError(JournalError):
    """Invalid or missing configuration."""


# --- Data ---
class DataError(JournalError):
    """A trade record could not be interpreted."""


class TimestampError(DataError):
    """A timestamp could not be parsed into a valid instant."""

    def __init__(self, value: object, reason: str = "unparseable timestamp"):
        self.value = value
        self.reason = reason
        super().__init__(f"{reason}: {value!r}")
