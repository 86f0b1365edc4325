"""Shared plumbing for commands that talk to the calendar session."""

from typing import Optional
import logging

from ..calendar.gateway import EventKitProvider
from ..calendar.manager import CalendarSessionManager
from ..core.exceptions import ProviderError
from ..core.models import AppMode, CalendarEvent, SessionConfig


PERMISSION_TITLE = "Calendar Access Required"
PERMISSION_DESCRIPTION = "This app needs access to your calendar to display and manage events."


def build_manager(config: SessionConfig,
                  logger: Optional[logging.Logger] = None) -> CalendarSessionManager:
    """One provider and one manager per process."""
    provider = EventKitProvider(logger=logger, access_timeout=config.access_timeout)
    return CalendarSessionManager(provider, config=config, logger=logger)


class SessionCommand:
    """Base class for commands that need a CalendarSessionManager."""

    def __init__(self, config: SessionConfig, verbose: bool = False,
                 manager: Optional[CalendarSessionManager] = None):
        self.config = config
        self.verbose = verbose
        self.logger = logging.getLogger(self.__class__.__module__)
        if verbose:
            self.logger.setLevel(logging.DEBUG)
        self._manager = manager

    @property
    def manager(self) -> CalendarSessionManager:
        if self._manager is None:
            self._manager = build_manager(self.config)
        return self._manager

    def ensure_events_mode(self) -> bool:
        """Run the start-up routing and report whether events can be shown."""
        mode = self.manager.start()
        if mode is AppMode.SHOW_EVENTS:
            return True

        self.print_permission_prompt(mode)
        return False

    def print_permission_prompt(self, mode: AppMode) -> None:
        print(f"🔒 {PERMISSION_TITLE}")
        print(f"   {PERMISSION_DESCRIPTION}")
        if mode is AppMode.OPEN_SETTINGS:
            print("   Access was denied. Run 'cal-session settings' and enable access for this app.")
        else:
            print("   Run 'cal-session grant' to allow access.")
        self.report_error()

    def report_error(self, fallback: Optional[str] = None) -> None:
        """Print (and consume) the pending error message."""
        pending = self.manager.take_error()
        if pending is not None:
            print(f"❌ {pending.message}")
        elif fallback:
            print(f"❌ {fallback}")

    def resolve_event(self, identifier: str) -> Optional[CalendarEvent]:
        """Find an event in the loaded window, falling back to the store."""
        event = self.manager.find_event(identifier)
        if event is not None:
            return event

        try:
            event = self.manager.provider.event_with_identifier(identifier)
        except ProviderError as e:
            self.logger.error(f"Event lookup failed: {e}")
            event = None

        if event is None:
            print(f"No event found with id '{identifier}'.")
        return event
