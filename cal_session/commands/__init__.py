"""
Command implementations for cal-session.
"""

from .access import StatusCommand, AccessCommand, SettingsCommand
from .events import ListCommand, DeleteCommand
from .create import CreateCommand
from .edit import UpdateCommand, EditCommand

__all__ = [
    'StatusCommand',
    'AccessCommand',
    'SettingsCommand',
    'ListCommand',
    'DeleteCommand',
    'CreateCommand',
    'UpdateCommand',
    'EditCommand',
]
