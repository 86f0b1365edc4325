#!/usr/bin/env python3
"""
Global pytest configuration and fixtures.

This module provides:
- Platform-specific test skipping (macOS/EventKit tests)
- An in-memory calendar provider and a session manager on a fixed clock
- Isolation of the cal-session working directory
"""

import os
import platform
import sys

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cal_session.calendar.manager import CalendarSessionManager
from cal_session.core.models import AuthorizationState, SessionConfig
from cal_session.core.paths import reset_path_manager
from tests.e2e.fake_calendar_provider import FakeCalendarProvider, NOW

HAS_EVENTKIT = False

try:
    if platform.system() == "Darwin":
        import objc
        import EventKit
        HAS_EVENTKIT = True
except ImportError:
    pass


def pytest_configure(config):
    """Configure pytest environment."""
    config.addinivalue_line("markers", "macos: test requires macOS")
    config.addinivalue_line("markers", "eventkit: test requires EventKit framework")


def pytest_collection_modifyitems(config, items):
    """
    Modify test collection to skip platform-specific tests.

    Automatically skip macOS/EventKit tests on non-Darwin platforms.
    """
    skip_macos = pytest.mark.skip(reason="macOS/EventKit tests require Darwin platform")
    skip_eventkit = pytest.mark.skip(reason="Test requires EventKit framework")

    for item in items:
        if "macos" in item.keywords and platform.system() != "Darwin":
            item.add_marker(skip_macos)

        if "eventkit" in item.keywords and not HAS_EVENTKIT:
            item.add_marker(skip_eventkit)


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Point the working directory at a temp dir for every test."""
    home = tmp_path / "cal-session-home"
    monkeypatch.setenv("CAL_SESSION_HOME", str(home))
    reset_path_manager()
    yield home
    reset_path_manager()


@pytest.fixture
def provider() -> FakeCalendarProvider:
    """Provider that has already been granted access."""
    return FakeCalendarProvider(state=AuthorizationState.GRANTED)


@pytest.fixture
def manager(provider) -> CalendarSessionManager:
    """Session manager on a fixed clock, authorization already checked."""
    mgr = CalendarSessionManager(provider, config=SessionConfig(), clock=lambda: NOW)
    mgr.check_authorization_status()
    return mgr
