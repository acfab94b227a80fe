"""Chunking errors. Raised before any text is touched."""


class ConfigurationError(Exception):
    """Raised when a chunking configuration violates its invariants.

    Not a ValueError subclass, so it leaves pydantic validators unwrapped.
    """

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class UnknownStrategyError(ConfigurationError):
    """Raised when a strategy name has no registered splitter."""
