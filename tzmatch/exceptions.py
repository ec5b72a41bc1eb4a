"""Exceptions for the tzmatch library."""


class TimezoneMatchError(Exception):
    """Base exception for all tzmatch errors."""


class CustomTimeZoneError(TimezoneMatchError):
    """Exception raised when a custom timezone is not valid.

    The 'message' attribute contains a human-readable message about the
    error that occurred. The 'detailed_error' attribute can provide additional
    information about the error, such as the individual field validation
    failures, useful for debugging purposes.
    """

    def __init__(self, message: str, *, detailed_error: str | None = None) -> None:
        """Initialize the CustomTimeZoneError with a message."""
        super().__init__(message)
        self.message = message
        self.detailed_error = detailed_error


class TimezoneInfoError(TimezoneMatchError):
    """Raised on error reading IANA timezone information."""
