"""Exception types raised by pathkit."""

from __future__ import annotations


class PathError(Exception):
    """Base class for errors raised by path operations."""


class ResolutionError(PathError):
    """Raised when a path cannot be resolved to an existing absolute location."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path: str | None = path


class FilesystemOperationError(PathError):
    """Raised when an operating-system primitive fails for a path.

    The originating ``OSError`` is chained as ``__cause__``.
    """

    def __init__(self, operation: str, path: str, error: OSError) -> None:
        super().__init__(f"{operation} failed for {path}: {error.strerror or error}")
        self.operation: str = operation
        self.path: str = path
        self.errno: int | None = error.errno


class SettingsError(PathError, ValueError):
    """Raised when configuration values cannot be parsed."""


__all__ = [
    "FilesystemOperationError",
    "PathError",
    "ResolutionError",
    "SettingsError",
]
