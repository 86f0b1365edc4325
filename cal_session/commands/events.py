"""List and delete commands."""

from ..utils.date import format_event_row
from ..utils.prompts import confirm
from .base import SessionCommand


class ListCommand(SessionCommand):
    """Show upcoming events, or the permission prompt when access is missing."""

    def run(self) -> bool:
        if not self.ensure_events_mode():
            return False

        events = self.manager.events
        if not events:
            print("📅 No Upcoming Events")
            print(f"   Events in the next {self.config.window_days} days will appear here.")
            self.report_error()
            return True

        print(f"📅 {len(events)} upcoming events (next {self.config.window_days} days)\n")
        for index, event in enumerate(events, start=1):
            print(format_event_row(event, self.config.date_format, index=index))
            print()
        return True


class DeleteCommand(SessionCommand):
    """Delete one occurrence of an event."""

    def run(self, event_id: str, assume_yes: bool = False) -> bool:
        if not self.ensure_events_mode():
            return False

        event = self.resolve_event(event_id)
        if event is None:
            return False

        if not assume_yes and not confirm(f"Delete '{event.title}'?", default=False):
            print("Delete cancelled.")
            return False

        if self.manager.delete_event(event):
            print(f"🗑️  Deleted '{event.title}'.")
            return True

        self.report_error(fallback="Could not delete event.")
        return False
