"""
Surfaced error state shared by the authorization gate and the session manager.

Only one message is pending at a time. Each failing operation overwrites the
previous one; the UI either reads it with ``take()`` (which clears it) or
acknowledges it explicitly with ``clear()``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional


class ErrorKind(Enum):
    """Which operation produced the pending message."""

    PERMISSION_DENIED = "permission_denied"
    PERMISSION_REQUEST_FAILED = "permission_request_failed"
    FETCH_FAILED = "fetch_failed"
    SAVE_FAILED = "save_failed"
    UPDATE_FAILED = "update_failed"
    DELETE_FAILED = "delete_failed"


@dataclass(frozen=True)
class SurfacedError:
    kind: ErrorKind
    message: str


class ErrorState:
    """Single-slot holder for the latest human-readable error."""

    def __init__(self, on_change: Optional[Callable[[], None]] = None):
        self._current: Optional[SurfacedError] = None
        self._on_change = on_change

    @property
    def current(self) -> Optional[SurfacedError]:
        return self._current

    @property
    def message(self) -> Optional[str]:
        return self._current.message if self._current else None

    def record(self, kind: ErrorKind, message: str) -> None:
        self._current = SurfacedError(kind=kind, message=message)
        self._notify()

    def take(self) -> Optional[SurfacedError]:
        """Return the pending error and clear the slot."""
        pending = self._current
        if pending is not None:
            self._current = None
            self._notify()
        return pending

    def clear(self) -> None:
        if self._current is not None:
            self._current = None
            self._notify()

    def __bool__(self) -> bool:
        return self._current is not None

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()
