"""Update and external-edit commands."""

from typing import Optional

from ..calendar.editor import CalendarAppEditor, ExternalEventEditor
from ..utils.date import parse_datetime
from .base import SessionCommand


class UpdateCommand(SessionCommand):
    """Change selected fields of one event occurrence."""

    def run(self, event_id: str, title: Optional[str] = None,
            start: Optional[str] = None, end: Optional[str] = None,
            notes: Optional[str] = None) -> bool:
        new_start = parse_datetime(start) if start else None
        new_end = parse_datetime(end) if end else None
        if start and new_start is None:
            print(f"❌ Could not understand start time '{start}'. Use YYYY-MM-DD HH:MM.")
            return False
        if end and new_end is None:
            print(f"❌ Could not understand end time '{end}'. Use YYYY-MM-DD HH:MM.")
            return False

        if title is not None and not title.strip():
            print("❌ Event title cannot be empty.")
            return False

        if all(value is None for value in (title, new_start, new_end, notes)):
            print("Nothing to update. Pass --title, --start, --end or --notes.")
            return False

        if not self.ensure_events_mode():
            return False

        event = self.resolve_event(event_id)
        if event is None:
            return False

        effective_start = new_start or event.start
        effective_end = new_end or event.end
        if effective_end < effective_start:
            print("❌ End time must not be before the start time.")
            return False

        if self.manager.update_event(
            event,
            new_title=title.strip() if title is not None else None,
            new_start=new_start,
            new_end=new_end,
            new_notes=notes,
        ):
            print(f"✅ Updated '{title.strip() if title else event.title}'.")
            return True

        self.report_error(fallback="Could not update event.")
        return False


class EditCommand(SessionCommand):
    """Open an event (or a blank one) in the Calendar app, then reload."""

    def __init__(self, *args, editor: Optional[ExternalEventEditor] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.editor = editor or CalendarAppEditor(logger=self.logger)

    def run(self, event_id: Optional[str] = None) -> bool:
        if not self.ensure_events_mode():
            return False

        event = None
        if event_id:
            event = self.resolve_event(event_id)
            if event is None:
                return False

        before = len(self.manager.events)
        self.manager.edit_with(self.editor, event)
        print(f"Reloaded events ({before} -> {len(self.manager.events)}).")
        self.report_error()
        return True
