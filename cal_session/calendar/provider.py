"""Abstract calendar provider the session manager talks to."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable, List, Optional

from ..core.models import AuthorizationState, CalendarEvent, CalendarRef


class CalendarProvider(ABC):
    """The platform calendar service.

    The provider is the source of truth for events and calendars. Every
    write commits immediately. Failures are reported by raising
    :class:`~cal_session.core.exceptions.ProviderError`.
    """

    @abstractmethod
    def authorization_state(self) -> AuthorizationState:
        """Current permission state for event access. Must not prompt."""

    @abstractmethod
    def request_full_access(self) -> bool:
        """Show the one-time permission prompt and block until answered.

        Returns True when access was granted, False when refused.
        """

    @abstractmethod
    def calendars_for_events(self) -> List[CalendarRef]:
        """All calendars that can hold events."""

    @abstractmethod
    def events_matching(self, start: datetime, end: datetime,
                        calendars: Iterable[CalendarRef]) -> List[CalendarEvent]:
        """Event occurrences in ``calendars`` intersecting [start, end)."""

    @abstractmethod
    def default_calendar_for_new_events(self) -> Optional[CalendarRef]:
        """Calendar new events land in, or None if the user has none."""

    @abstractmethod
    def event_with_identifier(self, identifier: str,
                              occurrence_date: Optional[datetime] = None) -> Optional[CalendarEvent]:
        """Current stored representation of an event, or None if unknown.

        ``occurrence_date`` picks one occurrence of a recurring series;
        without it the provider may return any occurrence.
        """

    @abstractmethod
    def save(self, event: CalendarEvent, occurrence_only: bool = True) -> CalendarEvent:
        """Persist ``event`` and return it as stored (with its identifier)."""

    @abstractmethod
    def remove(self, event: CalendarEvent, occurrence_only: bool = True) -> None:
        """Delete ``event``; raise if the provider does not know it."""
