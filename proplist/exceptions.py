"""Custom exception hierarchy for proplist."""

from typing import Iterable


class ProplistError(Exception):
    """Base exception for all proplist errors."""


class ParseError(ProplistError):
    """Raised when a spreadsheet cannot be read or has no data rows."""


class EmptyResultError(ProplistError):
    """Raised when a parsed spreadsheet yields no eligible records."""

    def __init__(self, message: str, found_columns: Iterable[str] = ()) -> None:
        super().__init__(message)
        self.found_columns = list(found_columns)


class InvalidRecordError(ProplistError):
    """Raised when a record does not fit the property schema."""


class StoreError(ProplistError):
    """Raised when the record store rejects an operation."""


class RecordNotFoundError(StoreError):
    """Raised when a referenced record does not exist in the store."""


class StoreWriteError(ProplistError):
    """Raised when one record of a bulk write is rejected by the store."""

    def __init__(self, position: int, reason: str) -> None:
        super().__init__(f"Failed to add property {position}: {reason}")
        self.position = position
        self.reason = reason


class ConfigurationError(ProplistError):
    """Raised when configuration is invalid or missing."""
