"""Exceptions for localtz library."""


class LocalTimezoneError(Exception):
    """Base exception for all localtz errors."""


class DataUnavailable(LocalTimezoneError):
    """Exception raised when a provider can't supply a record for a year.

    The 'year' attribute contains the year that was requested. Building a
    schedule stops at the first failing year, so no partial schedule is
    ever returned alongside this error.
    """

    def __init__(self, year: int, message: str | None = None) -> None:
        """Initialize DataUnavailable with the failing year."""
        super().__init__(message or f"Unable to get daylight saving data for year {year}")
        self.year = year


class LocalTimezoneNotConfigured(LocalTimezoneError):
    """Exception raised when reading the local timezone before it is set."""
