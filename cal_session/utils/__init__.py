"""
Utility functions for cal-session.
"""

from .date import parse_datetime, format_datetime, format_event_time, format_event_row
from .prompts import is_interactive, confirm, prompt_choice
from .macos import is_macos, set_process_name, open_privacy_settings, open_calendar_app

__all__ = [
    # Date utilities
    'parse_datetime',
    'format_datetime',
    'format_event_time',
    'format_event_row',
    # Prompts
    'is_interactive',
    'confirm',
    'prompt_choice',
    # macOS helpers
    'is_macos',
    'set_process_name',
    'open_privacy_settings',
    'open_calendar_app',
]
