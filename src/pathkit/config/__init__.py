"""Configuration exports for pathkit."""

from __future__ import annotations

from .config import (
    DIR_MODE_DEFAULT,
    ENV_LOG_FILE,
    ENV_LOG_LEVEL,
    FILE_MODE_DEFAULT,
    LOG_LEVEL_DEFAULT,
    Settings,
)
from .paths import ENV_CONFIG_FILE, config_path, default_config_path

__all__ = [
    "DIR_MODE_DEFAULT",
    "ENV_CONFIG_FILE",
    "ENV_LOG_FILE",
    "ENV_LOG_LEVEL",
    "FILE_MODE_DEFAULT",
    "LOG_LEVEL_DEFAULT",
    "Settings",
    "config_path",
    "default_config_path",
]
