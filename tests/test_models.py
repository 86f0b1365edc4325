"""
Tests for domain models and error state (cal_session/core/{models,errors}.py).
"""

import json
from dataclasses import replace
from datetime import timedelta

import pytest

from cal_session.core.errors import ErrorKind, ErrorState
from cal_session.core.exceptions import ConfigurationError
from cal_session.core.models import (
    AppMode, AuthorizationState, CalendarEvent, SessionConfig
)
from tests.e2e.fake_calendar_provider import NOW, make_event


class TestAuthorizationState:

    @pytest.mark.parametrize("code, expected", [
        (0, AuthorizationState.NOT_DETERMINED),
        (1, AuthorizationState.DENIED),
        (2, AuthorizationState.DENIED),
        (3, AuthorizationState.GRANTED),
        (4, AuthorizationState.DENIED),
        (99, AuthorizationState.DENIED),
        (None, AuthorizationState.DENIED),
    ])
    def test_from_status_code(self, code, expected):
        assert AuthorizationState.from_status_code(code) is expected

    def test_app_mode_routing(self):
        assert AppMode.for_state(AuthorizationState.GRANTED) is AppMode.SHOW_EVENTS
        assert AppMode.for_state(AuthorizationState.DENIED) is AppMode.OPEN_SETTINGS
        assert AppMode.for_state(AuthorizationState.NOT_DETERMINED) is AppMode.PROMPT_FOR_ACCESS


class TestCalendarEvent:

    def test_identity_equality(self):
        a = make_event("same", "Original", 1)
        b = make_event("same", "Edited", 5, notes="changed")

        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_different_identifiers_differ(self):
        assert make_event("one", "A", 1) != make_event("two", "A", 1)

    def test_occurrences_of_a_series(self):
        first = replace(make_event("series", "Weekly", 1), occurrence_date=NOW)
        later = replace(first, occurrence_date=NOW + timedelta(days=7))

        assert first != later
        assert len({first, later}) == 2
        assert first == replace(later, occurrence_date=NOW)

    def test_unsaved_drafts_compare_by_object(self):
        a = make_event(None, "Draft", 1)
        b = make_event(None, "Draft", 1)

        assert a == a
        assert a != b
        assert not a.is_saved

    def test_calendar_name(self):
        assert make_event("a", "A", 1).calendar_name == "Work"
        assert CalendarEvent(None, "x", NOW, NOW).calendar_name == "Unknown"

    def test_frozen(self):
        event = make_event("a", "A", 1)

        with pytest.raises(AttributeError):
            event.title = "B"


class TestSessionConfig:

    def test_defaults(self):
        config = SessionConfig()

        assert config.window_days == 30
        assert config.default_duration_minutes == 60
        assert config.access_timeout is None

    def test_invalid_values_fall_back(self):
        config = SessionConfig(window_days=0, default_duration_minutes=-5, access_timeout=0)

        assert config.window_days == 30
        assert config.default_duration_minutes == 60
        assert config.access_timeout is None

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "nested" / "config.json"
        config = SessionConfig(window_days=14, default_duration_minutes=30,
                               access_timeout=45.0, date_format="%Y-%m-%d %H:%M")

        config.save_to_file(str(path))
        loaded = SessionConfig.load_from_file(str(path))

        assert loaded == config
        data = json.loads(path.read_text())
        assert data["window"]["days"] == 14
        assert not list(path.parent.glob(".tmp_*"))

    def test_missing_file_gives_defaults(self, tmp_path):
        assert SessionConfig.load_from_file(str(tmp_path / "absent.json")) == SessionConfig()

    def test_corrupt_file_gives_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text('{"window": {"days": ')

        assert SessionConfig.load_from_file(str(path)) == SessionConfig()

    def test_unreadable_file_raises(self, tmp_path):
        path = tmp_path / "config.json"
        path.mkdir()

        with pytest.raises(ConfigurationError, match="Cannot read configuration file"):
            SessionConfig.load_from_file(str(path))

    def test_wrong_shape_gives_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text('{"window": "thirty"}')

        assert SessionConfig.load_from_file(str(path)) == SessionConfig()

    def test_partial_file_keeps_other_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text('{"window": {"days": 7}, "unknown": true}')

        config = SessionConfig.load_from_file(str(path))

        assert config.window_days == 7
        assert config.default_duration_minutes == 60


class TestErrorState:

    def test_single_slot_overwrite(self):
        errors = ErrorState()

        errors.record(ErrorKind.SAVE_FAILED, "first")
        errors.record(ErrorKind.DELETE_FAILED, "second")

        assert errors.current.kind is ErrorKind.DELETE_FAILED
        assert errors.message == "second"

    def test_take_clears(self):
        errors = ErrorState()
        errors.record(ErrorKind.UPDATE_FAILED, "oops")

        taken = errors.take()

        assert taken.message == "oops"
        assert errors.current is None
        assert errors.take() is None

    def test_clear_is_explicit_acknowledgement(self):
        errors = ErrorState()
        errors.record(ErrorKind.FETCH_FAILED, "oops")

        errors.clear()

        assert not errors
        assert errors.message is None

    def test_callback_fires_on_change_only(self):
        calls = []
        errors = ErrorState(on_change=lambda: calls.append("change"))

        errors.clear()
        errors.take()
        errors.record(ErrorKind.SAVE_FAILED, "x")
        errors.clear()

        assert calls == ["change", "change"]
