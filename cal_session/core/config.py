"""
Configuration management for cal-session.
"""

import os
from pathlib import Path
from typing import Optional

from .models import SessionConfig
from .paths import get_path_manager


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    return get_path_manager().config_path


def load_config(config_path: Optional[str] = None) -> SessionConfig:
    """
    Load configuration from file or return defaults.

    Args:
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        SessionConfig object
    """
    if config_path is None:
        config_path = str(get_default_config_path())

    return SessionConfig.load_from_file(config_path)


def save_config(config: SessionConfig, config_path: Optional[str] = None):
    """
    Save configuration to file.

    Args:
        config: SessionConfig object to save
        config_path: Optional path to save to. Uses default if not provided.
    """
    if config_path is None:
        manager = get_path_manager()
        manager.ensure_directories()
        config_path = str(manager.config_path)

    os.makedirs(os.path.dirname(os.path.abspath(config_path)), exist_ok=True)

    config.save_to_file(config_path)


def get_log_dir() -> Path:
    """Get the log directory."""
    manager = get_path_manager()
    manager.ensure_directories()
    return manager.log_dir
