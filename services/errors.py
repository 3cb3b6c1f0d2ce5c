class MoneyTrackerError(Exception):
    """Base class for errors raised by the tracker's services."""


class DecodeError(MoneyTrackerError, ValueError):
    """Persisted or imported transaction data is missing fields or malformed."""


class InvalidInputError(MoneyTrackerError, ValueError):
    """User input that cannot become a transaction (bad amount, empty title, ...)."""
