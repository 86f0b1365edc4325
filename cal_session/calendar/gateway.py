"""Apple Calendar provider backed by EventKit through PyObjC."""

import threading
import time
from datetime import datetime, timedelta
from typing import Iterable, List, Optional
import logging

from ..core.exceptions import (
    AuthorizationError,
    EventKitImportError,
    EventNotFoundError,
    ProviderError,
)
from ..core.models import AuthorizationState, CalendarEvent, CalendarRef
from .provider import CalendarProvider


# How far a detached occurrence may have moved from its original date
OCCURRENCE_SEARCH_MARGIN = timedelta(days=1)


def describe_error(error) -> str:
    """Human-readable text for an NSError (or anything else)."""
    if error is None:
        return "unknown error"
    try:
        if hasattr(error, "localizedDescription"):
            return str(error.localizedDescription())
    except Exception:
        pass
    return str(error)


def nscolor_to_hex(color) -> Optional[str]:
    """Convert an NSColor to a ``#RRGGBB`` string."""
    if color is None:
        return None
    try:
        c = color.colorUsingColorSpaceName_("NSCalibratedRGBColorSpace")
        if c is None:
            return None
        r = int(round(c.redComponent() * 255))
        g = int(round(c.greenComponent() * 255))
        b = int(round(c.blueComponent() * 255))
        return f"#{r:02X}{g:02X}{b:02X}"
    except Exception:
        return None


class EventKitProvider(CalendarProvider):
    """Calendar provider for the macOS event store.

    One ``EKEventStore`` is created lazily and reused for every call made
    through this instance, so reads and writes share the same session
    (default calendar, pending changes).
    """

    def __init__(self, logger: Optional[logging.Logger] = None,
                 access_timeout: Optional[float] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.access_timeout = access_timeout
        self._store = None

    def _ensure_eventkit(self):
        """Import EventKit with specific error handling."""
        if getattr(self, "_EKEventStore", None) is not None:
            return

        try:
            import objc  # noqa: F401
            from EventKit import (
                EKEventStore, EKEvent, EKEntityTypeEvent, EKSpanThisEvent,
                EKSpanFutureEvents
            )
            from Foundation import NSRunLoop, NSDate

            self._EKEventStore = EKEventStore
            self._EKEvent = EKEvent
            self._EKEntityTypeEvent = EKEntityTypeEvent
            self._EKSpanThisEvent = EKSpanThisEvent
            self._EKSpanFutureEvents = EKSpanFutureEvents
            self._NSRunLoop = NSRunLoop
            self._NSDate = NSDate

        except ImportError as e:
            self.logger.error(f"EventKit import failed: {e}")
            raise EventKitImportError(
                "EventKit not available. Please install PyObjC framework:\n"
                "  pip install pyobjc-core pyobjc-framework-EventKit\n"
                f"Import error details: {e}"
            )

    def _get_store(self):
        """Get or create the shared EventKit store."""
        if self._store is not None:
            return self._store

        self._ensure_eventkit()

        try:
            self._store = self._EKEventStore.alloc().init()
            self.logger.debug("EventKit store created successfully")
        except Exception as e:
            self.logger.error(f"Failed to create EventKit store: {e}")
            raise ProviderError(
                f"Failed to initialize EventKit store: {e}\n"
                "This may indicate a system-level EventKit issue."
            )
        return self._store

    # ------------------------------------------------------------------
    # Authorization
    # ------------------------------------------------------------------
    def authorization_state(self) -> AuthorizationState:
        self._ensure_eventkit()
        status = self._EKEventStore.authorizationStatusForEntityType_(
            self._EKEntityTypeEvent
        )
        state = AuthorizationState.from_status_code(status)
        self.logger.debug(f"EventKit authorization status {int(status)} -> {state.value}")
        return state

    def request_full_access(self) -> bool:
        store = self._get_store()

        done = threading.Event()
        result = {'granted': False, 'error': None}

        def completion(granted, error):
            result['granted'] = bool(granted)
            result['error'] = error
            done.set()

        self.logger.info("Requesting EventKit access to calendar events...")
        try:
            # macOS 14 split event access into full and write-only
            if hasattr(store, "requestFullAccessToEventsWithCompletion_"):
                store.requestFullAccessToEventsWithCompletion_(completion)
            else:
                store.requestAccessToEntityType_completion_(
                    self._EKEntityTypeEvent, completion
                )
        except Exception as e:
            self.logger.error(f"Unexpected error during authorization: {e}")
            raise AuthorizationError(f"Failed to request EventKit authorization: {e}")

        start_time = time.time()
        while not done.is_set():
            if self.access_timeout is not None and time.time() - start_time > self.access_timeout:
                raise AuthorizationError(
                    f"Authorization request timed out after {self.access_timeout} seconds.\n"
                    "The system may be showing an authorization dialog."
                )

            # The completion handler is delivered through the run loop
            self._NSRunLoop.currentRunLoop().runUntilDate_(
                self._NSDate.dateWithTimeIntervalSinceNow_(0.1)
            )

        if not result['granted'] and result['error'] is not None:
            raise AuthorizationError(describe_error(result['error']))

        self.logger.info(f"EventKit access granted: {result['granted']}")
        return result['granted']

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def calendars_for_events(self) -> List[CalendarRef]:
        store = self._get_store()
        try:
            calendars = store.calendarsForEntityType_(self._EKEntityTypeEvent) or []
            return [self._convert_calendar(cal) for cal in calendars]
        except Exception as e:
            self.logger.error(f"Failed to fetch calendars: {e}")
            raise ProviderError(f"Failed to retrieve calendars: {e}")

    def events_matching(self, start: datetime, end: datetime,
                        calendars: Iterable[CalendarRef]) -> List[CalendarEvent]:
        store = self._get_store()

        try:
            native_calendars = []
            for ref in calendars:
                cal = store.calendarWithIdentifier_(ref.identifier)
                if cal is not None:
                    native_calendars.append(cal)

            if not native_calendars:
                self.logger.debug("No calendars to search; returning no events")
                return []

            predicate = store.predicateForEventsWithStartDate_endDate_calendars_(
                self._to_nsdate(start), self._to_nsdate(end), native_calendars
            )
            events = store.eventsMatchingPredicate_(predicate) or []
        except Exception as e:
            self.logger.error(f"Failed to fetch events: {e}")
            raise ProviderError(f"Failed to fetch events: {e}")

        result = []
        for event in events:
            try:
                result.append(self._convert_event(event))
            except Exception as e:
                self.logger.warning(f"Failed to process event: {e}")
                continue
        return result

    def default_calendar_for_new_events(self) -> Optional[CalendarRef]:
        store = self._get_store()
        try:
            cal = store.defaultCalendarForNewEvents()
            return self._convert_calendar(cal) if cal is not None else None
        except Exception as e:
            self.logger.error(f"Failed to read default calendar: {e}")
            raise ProviderError(f"Failed to read default calendar: {e}")

    def event_with_identifier(self, identifier: str,
                              occurrence_date: Optional[datetime] = None) -> Optional[CalendarEvent]:
        store = self._get_store()
        try:
            native = self._find_native(store, identifier, occurrence_date)
            return self._convert_event(native) if native is not None else None
        except Exception as e:
            self.logger.error(f"Failed to look up event {identifier}: {e}")
            raise ProviderError(f"Failed to look up event: {e}")

    def _find_native(self, store, identifier: str, occurrence_date: Optional[datetime] = None):
        """Resolve one native occurrence.

        ``eventWithIdentifier_`` returns the first occurrence of a recurring
        series, so recurring events are searched by their occurrence date and
        matched on identifier. Returns None when no occurrence matches.
        """
        native = store.eventWithIdentifier_(identifier)
        if native is None or occurrence_date is None or not native.hasRecurrenceRules():
            return native

        predicate = store.predicateForEventsWithStartDate_endDate_calendars_(
            self._to_nsdate(occurrence_date - OCCURRENCE_SEARCH_MARGIN),
            self._to_nsdate(occurrence_date + OCCURRENCE_SEARCH_MARGIN),
            None
        )
        wanted = occurrence_date.timestamp()
        for candidate in store.eventsMatchingPredicate_(predicate) or []:
            if str(candidate.eventIdentifier()) != identifier:
                continue
            if abs(self._occurrence_nsdate(candidate).timeIntervalSince1970() - wanted) < 1:
                return candidate

        self.logger.debug(f"No occurrence of {identifier} at {occurrence_date}")
        return None

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def save(self, event: CalendarEvent, occurrence_only: bool = True) -> CalendarEvent:
        store = self._get_store()

        try:
            if event.identifier:
                native = self._find_native(store, event.identifier, event.occurrence_date)
                if native is None:
                    raise EventNotFoundError(event.identifier)
            else:
                native = self._EKEvent.eventWithEventStore_(store)

            native.setTitle_(event.title)
            native.setStartDate_(self._to_nsdate(event.start))
            native.setEndDate_(self._to_nsdate(event.end))
            native.setNotes_(event.notes)
            native.setAllDay_(bool(event.all_day))

            calendar = None
            if event.calendar is not None:
                calendar = store.calendarWithIdentifier_(event.calendar.identifier)
            if calendar is None and native.calendar() is None:
                calendar = store.defaultCalendarForNewEvents()
            if calendar is not None:
                native.setCalendar_(calendar)

            success, error = store.saveEvent_span_commit_error_(
                native, self._span(occurrence_only), True, None
            )
        except ProviderError:
            raise
        except Exception as e:
            self.logger.error(f"Unexpected error saving event '{event.title}': {e}")
            raise ProviderError(f"Failed to save event: {e}")

        self.logger.debug(f"saveEvent result: success={success}, error={error}")
        if not success:
            self.logger.error(f"Failed to save event '{event.title}': {describe_error(error)}")
            raise ProviderError(describe_error(error))

        return self._convert_event(native)

    def remove(self, event: CalendarEvent, occurrence_only: bool = True) -> None:
        store = self._get_store()

        try:
            native = None
            if event.identifier:
                native = self._find_native(store, event.identifier, event.occurrence_date)
            if native is None:
                raise EventNotFoundError(event.identifier)

            success, error = store.removeEvent_span_commit_error_(
                native, self._span(occurrence_only), True, None
            )
        except ProviderError:
            raise
        except Exception as e:
            self.logger.error(f"Unexpected error removing event '{event.title}': {e}")
            raise ProviderError(f"Failed to remove event: {e}")

        self.logger.debug(f"removeEvent result: success={success}, error={error}")
        if not success:
            self.logger.error(f"Failed to remove event '{event.title}': {describe_error(error)}")
            raise ProviderError(describe_error(error))

    # ------------------------------------------------------------------
    # Conversion helpers
    # ------------------------------------------------------------------
    def _span(self, occurrence_only: bool):
        return self._EKSpanThisEvent if occurrence_only else self._EKSpanFutureEvents

    def _to_nsdate(self, value: datetime):
        return self._NSDate.dateWithTimeIntervalSince1970_(value.timestamp())

    def _from_nsdate(self, nsdate) -> datetime:
        # Local timezone for proper display
        local_tz = datetime.now().astimezone().tzinfo
        return datetime.fromtimestamp(nsdate.timeIntervalSince1970(), tz=local_tz)

    def _occurrence_nsdate(self, event):
        return event.occurrenceDate() or event.startDate()

    def _convert_calendar(self, cal) -> CalendarRef:
        return CalendarRef(
            identifier=str(cal.calendarIdentifier()),
            title=str(cal.title() or 'Untitled'),
            color=nscolor_to_hex(cal.color()),
        )

    def _convert_event(self, event) -> CalendarEvent:
        cal = event.calendar()
        identifier = event.eventIdentifier()
        return CalendarEvent(
            identifier=str(identifier) if identifier else None,
            title=str(event.title() or ''),
            start=self._from_nsdate(event.startDate()),
            end=self._from_nsdate(event.endDate()),
            notes=str(event.notes()) if event.notes() else None,
            calendar=self._convert_calendar(cal) if cal is not None else None,
            all_day=bool(event.isAllDay()),
            occurrence_date=self._from_nsdate(self._occurrence_nsdate(event)),
        )
