"""
Date parsing and formatting utilities.
"""

from datetime import datetime
from typing import Optional

from ..core.models import CalendarEvent


DEFAULT_DISPLAY_FORMAT = "%b %d, %Y %I:%M %p"

_INPUT_FORMATS = (
    "%Y-%m-%d %H:%M",
    "%Y-%m-%dT%H:%M",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d",
)


def _local_tz():
    return datetime.now().astimezone().tzinfo


def parse_datetime(value: Optional[str]) -> Optional[datetime]:
    """
    Parse a date/time string typed on the command line.

    Handles:
    - ISO date (YYYY-MM-DD), meaning local midnight
    - Date and time (YYYY-MM-DD HH:MM or YYYY-MM-DDTHH:MM, optional seconds)
    - Full ISO 8601 with an offset (2026-01-15T14:30:00+01:00)

    Naive values are taken as local time.

    Args:
        value: String to parse

    Returns:
        Timezone-aware datetime or None if invalid
    """
    if not value:
        return None

    value = value.strip()
    if value.endswith('Z'):
        value = value[:-1] + '+00:00'

    parsed = None
    for fmt in _INPUT_FORMATS:
        try:
            parsed = datetime.strptime(value, fmt)
            break
        except ValueError:
            continue

    if parsed is None:
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError:
            return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=_local_tz())
    return parsed


def format_datetime(value: datetime, fmt: str = DEFAULT_DISPLAY_FORMAT) -> str:
    """Format in local time."""
    return value.astimezone().strftime(fmt)


def format_event_time(event: CalendarEvent, fmt: str = DEFAULT_DISPLAY_FORMAT) -> str:
    """
    Format an event's time range for display.

    All-day events have no meaningful clock times and show as "All Day".
    """
    if event.all_day:
        return "All Day"

    return f"{format_datetime(event.start, fmt)} - {format_datetime(event.end, fmt)}"


def format_event_row(event: CalendarEvent, fmt: str = DEFAULT_DISPLAY_FORMAT,
                     index: Optional[int] = None) -> str:
    """List entry: title, time range, calendar name and identifier."""
    prefix = f"{index:>3}. " if index is not None else ""
    indent = " " * len(prefix)
    color = f" {event.calendar.color}" if event.calendar and event.calendar.color else ""
    lines = [
        f"{prefix}{event.title}",
        f"{indent}{format_event_time(event, fmt)}",
        f"{indent}{event.calendar_name}{color}",
    ]
    if event.identifier:
        lines.append(f"{indent}id: {event.identifier}")
    return "\n".join(lines)
