"""
Core module for cal-session - contains domain models, configuration, and exceptions.
"""

from .models import (
    AuthorizationState,
    AppMode,
    CalendarRef,
    CalendarEvent,
    SessionConfig
)

from .errors import ErrorKind, ErrorState, SurfacedError

from .exceptions import (
    CalSessionError,
    ConfigurationError,
    ProviderError,
    AuthorizationError,
    EventKitImportError,
    EventNotFoundError
)

__all__ = [
    # Models
    'AuthorizationState',
    'AppMode',
    'CalendarRef',
    'CalendarEvent',
    'SessionConfig',
    # Error state
    'ErrorKind',
    'ErrorState',
    'SurfacedError',
    # Exceptions
    'CalSessionError',
    'ConfigurationError',
    'ProviderError',
    'AuthorizationError',
    'EventKitImportError',
    'EventNotFoundError'
]
