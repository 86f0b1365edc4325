"""External event editors.

An editor is a full-featured editing surface owned by someone else (the
system Calendar app here). It works directly against the calendar store, so
callers only learn that it finished, never what it changed.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, Optional
import logging

from ..core.models import CalendarEvent
from ..utils.macos import open_calendar_app
from ..utils.prompts import is_interactive, prompt_choice
from .provider import CalendarProvider


class EditorAction(Enum):
    SAVED = "saved"
    CANCELED = "canceled"
    DELETED = "deleted"


CompletionCallback = Callable[[EditorAction], None]


class _CompleteOnce:
    """Wraps a completion callback so that only the first call goes through."""

    def __init__(self, callback: CompletionCallback):
        self._callback = callback
        self.fired = False

    def __call__(self, action: EditorAction) -> None:
        if self.fired:
            return
        self.fired = True
        self._callback(action)


class ExternalEventEditor(ABC):
    """Editing surface invoked with the shared provider and an event (or None for a new one)."""

    def present(self, provider: CalendarProvider, event: Optional[CalendarEvent],
                on_complete: CompletionCallback) -> None:
        self._present(provider, event, _CompleteOnce(on_complete))

    @abstractmethod
    def _present(self, provider: CalendarProvider, event: Optional[CalendarEvent],
                 on_complete: CompletionCallback) -> None:
        """Show the editor and call ``on_complete`` when the user is done."""


class CalendarAppEditor(ExternalEventEditor):
    """Edits events in the macOS Calendar app."""

    _CHOICES = {
        "s": EditorAction.SAVED,
        "c": EditorAction.CANCELED,
        "d": EditorAction.DELETED,
    }

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def _present(self, provider, event, on_complete):
        if event is not None:
            print(f"Opening Calendar to edit '{event.title}' ({event.start:%Y-%m-%d %H:%M}).")
        else:
            print("Opening Calendar to create a new event.")

        if not open_calendar_app(logger=self.logger):
            print("Could not open the Calendar app.")
            on_complete(EditorAction.CANCELED)
            return

        if not is_interactive():
            on_complete(EditorAction.CANCELED)
            return

        answer = prompt_choice(
            "When you are done in Calendar, did you [s]ave, [c]ancel or [d]elete?",
            list(self._CHOICES),
            default="c",
        )
        on_complete(self._CHOICES[answer])
