"""
Domain models for cal-session.

This module contains the data structures passed between the calendar
provider, the authorization gate, the session manager and the CLI.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional
import json
import os
import tempfile

from .exceptions import ConfigurationError


def _normalize_path(path: str) -> str:
    """Expand user and convert to absolute path."""
    return os.path.abspath(os.path.expanduser(path))


class AuthorizationState(Enum):
    """Calendar permission state as seen by this application."""

    NOT_DETERMINED = "not_determined"
    GRANTED = "granted"
    DENIED = "denied"

    @classmethod
    def from_status_code(cls, status: Any) -> "AuthorizationState":
        """Map an EKAuthorizationStatus value onto the three app-level states.

        0 = not determined, 1 = restricted, 2 = denied, 3 = authorized
        (full access on macOS 14+), 4 = write-only. Write-only cannot read
        events, so it is treated like a denial.
        """
        try:
            code = int(status)
        except (TypeError, ValueError):
            return cls.DENIED

        if code == 0:
            return cls.NOT_DETERMINED
        if code == 3:
            return cls.GRANTED
        return cls.DENIED


class AppMode(Enum):
    """Which screen the application should show for an authorization state."""

    PROMPT_FOR_ACCESS = "prompt_for_access"
    OPEN_SETTINGS = "open_settings"
    SHOW_EVENTS = "show_events"

    @classmethod
    def for_state(cls, state: AuthorizationState) -> "AppMode":
        if state is AuthorizationState.GRANTED:
            return cls.SHOW_EVENTS
        if state is AuthorizationState.DENIED:
            return cls.OPEN_SETTINGS
        return cls.PROMPT_FOR_ACCESS

    @property
    def can_create(self) -> bool:
        return self is AppMode.SHOW_EVENTS


@dataclass(frozen=True)
class CalendarRef:
    """A calendar (event grouping) as exposed by the provider."""

    identifier: str
    title: str
    color: Optional[str] = None


@dataclass(frozen=True, eq=False)
class CalendarEvent:
    """A single event occurrence.

    Events are identified by the provider-assigned ``identifier`` plus
    ``occurrence_date``, the original start of this occurrence. Occurrences
    of a recurring series share the identifier and differ in
    ``occurrence_date``. Two snapshots of the same occurrence compare equal
    even if their other fields differ. Drafts that have not been saved yet
    carry ``identifier=None``.
    """

    identifier: Optional[str]
    title: str
    start: datetime
    end: datetime
    notes: Optional[str] = None
    calendar: Optional[CalendarRef] = None
    all_day: bool = False
    occurrence_date: Optional[datetime] = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CalendarEvent):
            return NotImplemented
        if self.identifier is None or other.identifier is None:
            return self is other
        return self._key() == other._key()

    def __hash__(self) -> int:
        if self.identifier is None:
            return id(self)
        return hash(self._key())

    def _key(self):
        occurrence = self.occurrence_date.timestamp() if self.occurrence_date else None
        return (self.identifier, occurrence)

    @property
    def is_saved(self) -> bool:
        return self.identifier is not None

    @property
    def calendar_name(self) -> str:
        return self.calendar.title if self.calendar else "Unknown"


@dataclass
class SessionConfig:
    """User-tunable settings for cal-session."""

    # Length of the forward-looking event window
    window_days: int = 30
    # Default event length when only a start time is given
    default_duration_minutes: int = 60
    # Seconds to wait for the permission dialog; None waits until answered
    access_timeout: Optional[float] = None
    date_format: str = "%b %d, %Y %I:%M %p"

    def __post_init__(self) -> None:
        if self.window_days <= 0:
            self.window_days = 30
        if self.default_duration_minutes <= 0:
            self.default_duration_minutes = 60
        if self.access_timeout is not None and self.access_timeout <= 0:
            self.access_timeout = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "window": {
                "days": self.window_days,
            },
            "events": {
                "default_duration_minutes": self.default_duration_minutes,
                "date_format": self.date_format,
            },
            "access_timeout": self.access_timeout,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> SessionConfig:
        defaults = {f.name: f.default for f in fields(cls)}

        window = data.get("window", {})
        events = data.get("events", {})

        return cls(
            window_days=int(window.get("days", defaults["window_days"])),
            default_duration_minutes=int(
                events.get("default_duration_minutes", defaults["default_duration_minutes"])
            ),
            access_timeout=data.get("access_timeout", defaults["access_timeout"]),
            date_format=events.get("date_format", defaults["date_format"]),
        )

    @classmethod
    def load_from_file(cls, config_path: str) -> SessionConfig:
        config_path = _normalize_path(config_path)
        if not os.path.exists(config_path):
            return cls()

        try:
            with open(config_path, "r", encoding="utf-8") as handle:
                data = json.load(handle)
        except (json.JSONDecodeError, UnicodeDecodeError):
            return cls()
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file {config_path}: {e}")

        if not isinstance(data, dict):
            return cls()

        try:
            return cls.from_dict(data)
        except (AttributeError, TypeError, ValueError):
            return cls()

    def save_to_file(self, config_path: str) -> None:
        config_path = _normalize_path(config_path)
        config_dir = os.path.dirname(config_path)
        os.makedirs(config_dir, exist_ok=True)

        # Atomic replace via a sibling temp file
        with tempfile.NamedTemporaryFile(
            mode="w",
            dir=config_dir,
            prefix=".tmp_",
            suffix=".json",
            delete=False,
            encoding="utf-8",
        ) as tmp_file:
            json.dump(self.to_dict(), tmp_file, indent=2, sort_keys=True)
            tmp_path = tmp_file.name

        os.replace(tmp_path, config_path)
