"""
Summary: Decompose, join and resolve path strings independently of the backing filesystem.
Why: Share one resolution policy between the local and in-memory path implementations.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Sequence
from types import ModuleType
from typing import Final

from pathkit.errors import ResolutionError
from pathkit.platform.logging import logger

UNRESOLVED_MESSAGE: Final[str] = "unable to resolve path to file"


def split_parts(value: str, flavour: ModuleType = os.path) -> list[str]:
    """Split ``value`` on the flavour separator, dropping blank segments.

    Args:
        value: Raw path string.
        flavour: ``os.path``-compatible module (``posixpath`` or ``ntpath``).

    Returns:
        list[str]: Non-empty segments in left-to-right order.
    """
    return [segment for segment in value.split(flavour.sep) if segment.strip()]


def clean(value: str, flavour: ModuleType = os.path) -> str:
    """Normalize ``value`` like ``normpath`` without keeping a POSIX ``//`` prefix."""

    if not value:
        return ""
    cleaned = flavour.normpath(value)
    if flavour.sep == "/" and cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


def join_segments(segments: Sequence[str], flavour: ModuleType = os.path) -> str:
    """Join ``segments`` with the flavour separator and clean the result.

    Empty segments are skipped. Segments after the first are appended even when
    they start with a separator, so ``["a", "/b"]`` becomes ``a/b``.

    Args:
        segments: Ordered path segments.
        flavour: ``os.path``-compatible module.

    Returns:
        str: Cleaned path, or ``""`` when every segment is empty.
    """
    present = [segment for segment in segments if segment]
    if not present:
        return ""

    separators = flavour.sep + (flavour.altsep or "")
    joined = present[0]
    for segment in present[1:]:
        joined = flavour.join(joined, segment.lstrip(separators))
    return clean(joined, flavour)


def absolutize(
    value: str,
    *,
    getcwd: Callable[[], str] | None = None,
    flavour: ModuleType = os.path,
) -> str:
    """Return the cleaned absolute form of ``value`` against the working directory.

    Raises:
        ResolutionError: If the working directory cannot be determined.
    """
    if flavour.isabs(value):
        return clean(value, flavour)
    try:
        cwd = (getcwd or os.getcwd)()
    except OSError as exc:
        raise ResolutionError("unable to determine the working directory", path=value) from exc
    return clean(flavour.join(cwd, value), flavour)


def resolve_absolute(
    value: str,
    *,
    exists: Callable[[str], bool],
    getcwd: Callable[[], str] | None = None,
    flavour: ModuleType = os.path,
) -> str:
    """Resolve ``value`` to an existing absolute path.

    The working-directory form is tried first. When it does not exist the
    segments of the original value are re-rooted under the filesystem root and
    tried once more.

    Args:
        value: Raw path string, possibly relative or missing its leading separator.
        exists: Existence check for candidate paths.
        getcwd: Working directory lookup.
        flavour: ``os.path``-compatible module.

    Returns:
        str: The first candidate that exists.

    Raises:
        ResolutionError: If the working directory is unavailable or neither
            candidate exists.
    """
    candidate = absolutize(value, getcwd=getcwd, flavour=flavour)
    if exists(candidate):
        return candidate

    rooted = join_segments([flavour.sep, *split_parts(value, flavour)], flavour)
    logger.debug(
        "Retrying %s as %s",
        value,
        rooted,
        extra={"path_event": "path.resolve.fallback", "path": rooted},
    )
    if exists(rooted):
        return rooted

    logger.debug(
        "Unable to resolve %s",
        value,
        extra={"path_event": "path.resolve.failed", "path": value},
    )
    raise ResolutionError(UNRESOLVED_MESSAGE, path=value)


__all__ = [
    "UNRESOLVED_MESSAGE",
    "absolutize",
    "clean",
    "join_segments",
    "resolve_absolute",
    "split_parts",
]
