"""Session manager for upcoming calendar events."""

from dataclasses import replace
from datetime import datetime, timedelta
from typing import Callable, List, Optional, Tuple
import logging

from ..core.errors import ErrorKind, ErrorState, SurfacedError
from ..core.exceptions import EventNotFoundError, ProviderError
from ..core.models import AppMode, AuthorizationState, CalendarEvent, SessionConfig
from .gate import AuthorizationGate
from .provider import CalendarProvider


EVENTS_CHANGED = "events"
AUTHORIZATION_CHANGED = "authorization"
ERROR_CHANGED = "error"

Observer = Callable[[str, "CalendarSessionManager"], None]


def _local_now() -> datetime:
    return datetime.now().astimezone()


def _add_calendar_days(moment: datetime, days: int) -> datetime:
    """Same local wall-clock time ``days`` calendar days later (DST aware)."""
    local = moment.astimezone().replace(tzinfo=None)
    return (local + timedelta(days=days)).astimezone()


class CalendarSessionManager:
    """Owns the upcoming-events list and the four calendar operations.

    The provider is authoritative: every successful write is followed by a
    full re-fetch instead of patching the local list. Provider failures never
    escape; they become a single pending error message and a ``False`` result.
    All state is meant to be touched from one thread (the UI's).
    """

    def __init__(self, provider: CalendarProvider,
                 config: Optional[SessionConfig] = None,
                 clock: Optional[Callable[[], datetime]] = None,
                 logger: Optional[logging.Logger] = None):
        self.provider = provider
        self.config = config or SessionConfig()
        self.logger = logger or logging.getLogger(__name__)
        self._clock = clock or _local_now
        self._events: Tuple[CalendarEvent, ...] = ()
        self._observers: List[Observer] = []

        self.errors = ErrorState(on_change=lambda: self._notify(ERROR_CHANGED))
        self.gate = AuthorizationGate(
            provider,
            errors=self.errors,
            on_change=lambda _state: self._notify(AUTHORIZATION_CHANGED),
            logger=self.logger,
        )

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------
    @property
    def events(self) -> Tuple[CalendarEvent, ...]:
        return self._events

    @property
    def authorization_state(self) -> AuthorizationState:
        return self.gate.state

    @property
    def mode(self) -> AppMode:
        return self.gate.mode

    @property
    def error(self) -> Optional[SurfacedError]:
        return self.errors.current

    @property
    def error_message(self) -> Optional[str]:
        return self.errors.message

    def take_error(self) -> Optional[SurfacedError]:
        return self.errors.take()

    def clear_error(self) -> None:
        self.errors.clear()

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register ``observer(change, manager)``; returns an unsubscribe callable."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _notify(self, change: str) -> None:
        for observer in list(self._observers):
            try:
                observer(change, self)
            except Exception as e:
                self.logger.warning(f"Observer failed handling '{change}': {e}")

    # ------------------------------------------------------------------
    # Authorization
    # ------------------------------------------------------------------
    def check_authorization_status(self) -> AuthorizationState:
        return self.gate.check_status()

    def request_access(self) -> AuthorizationState:
        """Prompt for access and load events as soon as it is granted."""
        state = self.gate.request_access()
        if state is AuthorizationState.GRANTED:
            self.fetch_events()
        return state

    def start(self) -> AppMode:
        """Initial routing: prompt if never asked, load if already allowed."""
        state = self.gate.check_status()
        if state is AuthorizationState.NOT_DETERMINED:
            self.request_access()
        elif state is AuthorizationState.GRANTED:
            self.fetch_events()
        return self.gate.mode

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def fetch_events(self) -> Tuple[CalendarEvent, ...]:
        """Reload every event in the next ``window_days`` days, sorted by start."""
        start = self._clock()
        end = _add_calendar_days(start, self.config.window_days)

        try:
            calendars = self.provider.calendars_for_events()
            fetched = self.provider.events_matching(start, end, calendars)
        except ProviderError as e:
            self.logger.error(f"Failed to fetch events: {e}")
            self.errors.record(ErrorKind.FETCH_FAILED, f"Failed to load events: {e}")
            return self._events

        # sorted() is stable, so equal start times keep provider order
        self._events = tuple(sorted(fetched, key=lambda event: event.start))
        self.logger.debug(f"Fetched {len(self._events)} events between {start} and {end}")
        self._notify(EVENTS_CHANGED)
        return self._events

    def create_event(self, title: str, start: datetime, end: datetime,
                     notes: Optional[str] = None) -> bool:
        """Save a new event to the default calendar. Title is not validated here."""
        try:
            draft = CalendarEvent(
                identifier=None,
                title=title,
                start=start,
                end=end,
                notes=notes,
                calendar=self.provider.default_calendar_for_new_events(),
            )
            saved = self.provider.save(draft, occurrence_only=True)
        except ProviderError as e:
            self.logger.error(f"Failed to save event '{title}': {e}")
            self.errors.record(ErrorKind.SAVE_FAILED, f"Failed to save event: {e}")
            return False

        self.logger.info(f"Created event {saved.identifier}: {title!r}")
        self.fetch_events()
        return True

    def update_event(self, event: CalendarEvent,
                     new_title: Optional[str] = None,
                     new_start: Optional[datetime] = None,
                     new_end: Optional[datetime] = None,
                     new_notes: Optional[str] = None) -> bool:
        """Change the given fields of one occurrence; omitted fields keep their stored value.

        ``new_notes`` of only whitespace removes the notes.
        """
        changes = {}
        if new_title is not None:
            changes['title'] = new_title
        if new_start is not None:
            changes['start'] = new_start
        if new_end is not None:
            changes['end'] = new_end
        if new_notes is not None:
            # A blank value clears the notes
            changes['notes'] = new_notes if new_notes.strip() else None

        try:
            if not event.is_saved:
                raise EventNotFoundError(event.identifier)
            current = self.provider.event_with_identifier(event.identifier, event.occurrence_date)
            if current is None:
                raise EventNotFoundError(event.identifier)
            self.provider.save(replace(current, **changes), occurrence_only=True)
        except ProviderError as e:
            self.logger.error(f"Failed to update event {event.identifier}: {e}")
            self.errors.record(ErrorKind.UPDATE_FAILED, f"Failed to update event: {e}")
            return False

        self.logger.info(f"Updated event {event.identifier}: {sorted(changes)}")
        self.fetch_events()
        return True

    def delete_event(self, event: CalendarEvent) -> bool:
        """Remove this single occurrence from the calendar."""
        try:
            self.provider.remove(event, occurrence_only=True)
        except ProviderError as e:
            self.logger.error(f"Failed to delete event {event.identifier}: {e}")
            self.errors.record(ErrorKind.DELETE_FAILED, f"Failed to delete event: {e}")
            return False

        self.logger.info(f"Deleted event {event.identifier}")
        self.fetch_events()
        return True

    def find_event(self, identifier: str) -> Optional[CalendarEvent]:
        """Look up an event in the current list by identifier."""
        for event in self._events:
            if event.identifier == identifier:
                return event
        return None

    def edit_with(self, editor, event: Optional[CalendarEvent] = None) -> None:
        """Hand ``event`` (or a new one) to an external editor.

        The editor may change the store directly, so the list is reloaded
        once the editor reports completion, whatever the user did.
        """
        def on_complete(action) -> None:
            self.logger.debug(f"External editor finished: {getattr(action, 'value', action)}")
            self.fetch_events()

        editor.present(self.provider, event, on_complete)
