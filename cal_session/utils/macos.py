"""macOS-specific helpers."""

from __future__ import annotations

import logging
import platform
import subprocess
from typing import List, Optional


PRIVACY_CALENDARS_URL = "x-apple.systempreferences:com.apple.preference.security?Privacy_Calendars"


def is_macos() -> bool:
    return platform.system() == "Darwin"


def set_process_name(name: str, logger: Optional[logging.Logger] = None) -> bool:
    """Set the current process name on macOS when PyObjC is available.

    The name is what System Settings lists under Privacy > Calendars.
    """
    if not is_macos():
        return False

    try:
        from Foundation import NSProcessInfo  # type: ignore
    except ImportError:
        if logger:
            logger.debug("PyObjC not installed; cannot set process name")
        return False

    try:
        process_info = NSProcessInfo.processInfo()
        if process_info.processName() == name:
            return True
        process_info.setProcessName_(name)
        return True
    except Exception as exc:  # pragma: no cover
        if logger:
            logger.warning("Failed to set process name: %s", exc)
        return False


def _run_open(args: List[str], logger: Optional[logging.Logger] = None) -> bool:
    if not is_macos():
        if logger:
            logger.debug("Not on macOS; skipping 'open %s'", " ".join(args))
        return False

    try:
        result = subprocess.run(
            ["open", *args],
            capture_output=True,
            text=True,
            check=False
        )
    except OSError as exc:
        if logger:
            logger.error("Failed to run 'open': %s", exc)
        return False

    if result.returncode != 0:
        if logger:
            logger.error("'open %s' failed: %s", " ".join(args), result.stderr.strip())
        return False
    return True


def open_privacy_settings(logger: Optional[logging.Logger] = None) -> bool:
    """Open the Calendars pane of System Settings > Privacy & Security."""
    return _run_open([PRIVACY_CALENDARS_URL], logger=logger)


def open_calendar_app(logger: Optional[logging.Logger] = None) -> bool:
    """Bring the Calendar app to the front."""
    return _run_open(["-a", "Calendar"], logger=logger)
