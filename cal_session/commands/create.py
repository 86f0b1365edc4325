"""Create command and the new-event form rules."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional, Tuple

from ..utils.date import parse_datetime, format_datetime
from .base import SessionCommand


@dataclass
class EventForm:
    """Validated input for a new event."""

    title: str
    start: datetime
    end: datetime
    notes: Optional[str] = None


def build_event_form(title: Optional[str],
                     start: Optional[str] = None,
                     end: Optional[str] = None,
                     notes: Optional[str] = None,
                     default_duration_minutes: int = 60,
                     now: Optional[datetime] = None) -> Tuple[Optional[EventForm], List[str]]:
    """
    Apply the new-event form rules.

    - title is trimmed and must not be blank
    - start defaults to now, end to start plus the default duration
    - end may not be before start
    - blank notes are stored as no notes

    Returns:
        (form, errors); form is None whenever errors is non-empty
    """
    errors: List[str] = []

    clean_title = (title or "").strip()
    if not clean_title:
        errors.append("Event title cannot be empty.")

    start_dt = now or datetime.now().astimezone()
    if start:
        start_dt = parse_datetime(start)
        if start_dt is None:
            errors.append(f"Could not understand start time '{start}'. Use YYYY-MM-DD HH:MM.")

    end_dt = None
    if end:
        end_dt = parse_datetime(end)
        if end_dt is None:
            errors.append(f"Could not understand end time '{end}'. Use YYYY-MM-DD HH:MM.")
    elif start_dt is not None:
        end_dt = start_dt + timedelta(minutes=default_duration_minutes)

    if start_dt is not None and end_dt is not None and end_dt < start_dt:
        errors.append("End time must not be before the start time.")

    if errors:
        return None, errors

    clean_notes = notes if notes and notes.strip() else None
    return EventForm(title=clean_title, start=start_dt, end=end_dt, notes=clean_notes), []


class CreateCommand(SessionCommand):
    """Create an event in the default calendar."""

    def run(self, title: Optional[str], start: Optional[str] = None,
            end: Optional[str] = None, notes: Optional[str] = None) -> bool:
        form, errors = build_event_form(
            title, start, end, notes,
            default_duration_minutes=self.config.default_duration_minutes,
        )
        if form is None:
            for error in errors:
                print(f"❌ {error}")
            return False

        if not self.ensure_events_mode():
            return False

        if self.manager.create_event(form.title, form.start, form.end, form.notes):
            when = format_datetime(form.start, self.config.date_format)
            print(f"✅ Created '{form.title}' on {when}.")
            return True

        print("❌ Could Not Save Event")
        self.report_error(fallback="An unknown error occurred.")
        return False
