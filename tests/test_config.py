"""
Tests for configuration loading and path resolution (cal_session/core/{config,paths}.py).
"""

import sys
from pathlib import Path
from unittest.mock import patch

from cal_session.core.config import (
    get_default_config_path, get_log_dir, load_config, save_config
)
from cal_session.core.models import SessionConfig
from cal_session.core.paths import PathManager


class TestPathManager:

    def test_env_override(self, isolated_home):
        manager = PathManager()

        assert manager.working_dir == isolated_home.resolve()
        assert manager.config_path == isolated_home.resolve() / "config.json"
        assert manager.log_dir == isolated_home.resolve() / "logs"

    def test_platform_default(self, monkeypatch, tmp_path):
        monkeypatch.delenv("CAL_SESSION_HOME", raising=False)
        with patch.object(Path, "home", return_value=tmp_path), \
                patch.object(sys, "platform", "darwin"):
            manager = PathManager()
            assert manager.working_dir == tmp_path / "Library" / "Application Support" / "cal-session"

    def test_linux_default(self, monkeypatch, tmp_path):
        monkeypatch.delenv("CAL_SESSION_HOME", raising=False)
        with patch.object(Path, "home", return_value=tmp_path), \
                patch.object(sys, "platform", "linux"):
            manager = PathManager()
            assert manager.working_dir == tmp_path / ".config" / "cal-session"

    def test_ensure_directories(self, isolated_home):
        PathManager().ensure_directories()

        assert (isolated_home / "logs").is_dir()


class TestConfigIO:

    def test_default_path_lives_in_working_dir(self, isolated_home):
        assert get_default_config_path() == isolated_home.resolve() / "config.json"

    def test_load_without_file(self):
        assert load_config() == SessionConfig()

    def test_round_trip_default_location(self, isolated_home):
        save_config(SessionConfig(window_days=10))

        assert (isolated_home / "config.json").exists()
        assert load_config().window_days == 10

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "elsewhere" / "custom.json"

        save_config(SessionConfig(default_duration_minutes=15), str(path))

        assert load_config(str(path)).default_duration_minutes == 15

    def test_log_dir_created(self, isolated_home):
        assert get_log_dir().is_dir()
