"""Calendar module for Apple Calendar integration."""

from .provider import CalendarProvider
from .gateway import EventKitProvider
from .gate import AuthorizationGate
from .manager import CalendarSessionManager
from .editor import CalendarAppEditor, EditorAction, ExternalEventEditor

__all__ = [
    'CalendarProvider',
    'EventKitProvider',
    'AuthorizationGate',
    'CalendarSessionManager',
    'CalendarAppEditor',
    'EditorAction',
    'ExternalEventEditor',
]
