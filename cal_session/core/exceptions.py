"""
Exception classes for cal-session.
"""


class CalSessionError(Exception):
    """Base exception for all cal-session errors."""
    pass


class ConfigurationError(CalSessionError):
    """Raised when configuration is invalid or missing."""
    pass


class ProviderError(CalSessionError):
    """Raised by a calendar provider when a read or write fails."""
    pass


class AuthorizationError(ProviderError):
    """Raised when the calendar permission request itself fails."""
    pass


class EventKitImportError(ProviderError):
    """Raised when EventKit/PyObjC dependencies are not available."""
    pass


class EventNotFoundError(ProviderError):
    """Raised when an event identifier is unknown to the provider."""

    def __init__(self, identifier):
        super().__init__(f"No event with identifier '{identifier}' in the calendar store")
        self.identifier = identifier
