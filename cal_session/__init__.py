"""cal-session - upcoming calendar events over the macOS EventKit store."""

__version__ = "0.1.0"
