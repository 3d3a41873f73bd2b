"""Path value abstraction over local filesystem primitives."""

from __future__ import annotations

from .config import Settings
from .errors import FilesystemOperationError, PathError, ResolutionError, SettingsError
from .home import expand_user, home_directory
from .local import LocalPath
from .platform.logging import setup_logger
from .protocol import PathProtocol

__version__ = "0.1.0"

__all__ = [
    "FilesystemOperationError",
    "LocalPath",
    "PathError",
    "PathProtocol",
    "ResolutionError",
    "Settings",
    "SettingsError",
    "expand_user",
    "home_directory",
    "setup_logger",
]
