"""Rich handler rendering structured path events.

Where: platform/logging/handlers.py
What: Console handler that styles path events and compacts long paths.
Why: Keep presentation details out of the path operations that emit records.
"""

from __future__ import annotations

import logging
import sys
from pathlib import PurePath, PurePosixPath, PureWindowsPath
from typing import Any, ClassVar

if sys.version_info >= (3, 12):
    from typing import override
else:
    from typing_extensions import override

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text


class PathRichHandler(RichHandler):
    """Rich handler that displays paths with highlighted separators."""

    _EVENT_STYLES: ClassVar[dict[str, tuple[str, str, str]]] = {
        "path.touch": ("📄", "green", "Touched "),
        "path.unlink": ("🗑️", "yellow", "Unlinked "),
        "path.rmdir": ("🗑️", "yellow", "Removed directory "),
        "path.rmtree": ("🧹", "yellow", "Removed tree "),
        "path.mkdir": ("📁", "green", "Created directory "),
        "path.chmod": ("🔐", "cyan", "Changed mode "),
        "path.read": ("📖", "blue", "Read "),
        "path.resolve.fallback": ("↪️", "blue", "Re-rooted "),
        "path.resolve.failed": ("❓", "yellow", "Unresolved "),
        "path.error": ("❌", "red", "Failed "),
    }
    _PATH_SEGMENT_LIMIT: ClassVar[int] = 4

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        """Initialize the handler with compact defaults.

        Args:
            *args: Positional arguments to pass to RichHandler.
            **kwargs: Keyword arguments to pass to RichHandler.
        """
        kwargs.setdefault("show_time", False)
        kwargs.setdefault("show_path", False)
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = False
        super().__init__(*args, **kwargs)

    def _format_path(self, path: str, base: str | None = None) -> Text:
        """Format a path with colored separators and compact rendering.

        Args:
            path: Absolute or relative path string to format.
            base: Optional base path used to relativize ``path`` when possible.

        Returns:
            Text: Formatted path with colored separators and ellipsis truncation.
        """
        pure_path = self._to_pure_path(path)
        base_path = self._to_pure_path(base) if base else None

        display_path: PurePath = pure_path
        if base_path is not None and pure_path.is_relative_to(base_path):
            relative_path = pure_path.relative_to(base_path)
            if str(relative_path) not in {"", "."}:
                display_path = relative_path

        is_windows = isinstance(display_path, PureWindowsPath)
        separator = "\\" if is_windows else "/"
        anchor = display_path.anchor
        body_parts = [part for part in display_path.parts if part and part != anchor]

        truncated = len(body_parts) > self._PATH_SEGMENT_LIMIT
        if truncated:
            body_parts = body_parts[-self._PATH_SEGMENT_LIMIT:]

        display = anchor.rstrip("\\/") + separator if anchor else ""
        if truncated:
            display += "…" + separator
        display += separator.join(body_parts)
        return self._style_path_string(display or ".", separator)

    @staticmethod
    def _to_pure_path(raw_path: str) -> PurePath:
        """Return a platform-aware ``PurePath`` for the given raw string."""

        if "\\" in raw_path:
            return PureWindowsPath(raw_path)
        return PurePosixPath(raw_path)

    @staticmethod
    def _style_path_string(path_string: str, separator: str) -> Text:
        """Apply Rich styling to the rendered path string."""

        text = Text()
        separator_chars = {separator, "…"}
        if separator == "\\":
            separator_chars.add("/")

        for char in path_string:
            color = "magenta" if char in separator_chars else "white"
            _ = text.append(char, style=Style(color=color))
        return text

    def _render_path_event(self, record: logging.LogRecord) -> Text | None:
        """Render records carrying a ``path_event`` extra."""

        event = getattr(record, "path_event", None)
        if not isinstance(event, str):
            return None

        icon, color, prefix = self._EVENT_STYLES.get(event, ("ℹ️", "blue", ""))
        text = Text()
        _ = text.append(f"{icon} ", style=Style(color=color, bold=True))
        _ = text.append(prefix, style=Style(color=color))

        path = getattr(record, "path", None)
        if path:
            _ = text.append_text(
                self._format_path(str(path), base=getattr(record, "base_path", None))
            )

        details: list[str] = []
        mode = getattr(record, "mode", None)
        if isinstance(mode, int):
            details.append(f"mode={mode:o}")
        operation = getattr(record, "operation", None)
        if event == "path.error" and operation:
            details.append(str(operation))
        error_message = getattr(record, "error_message", None)
        if error_message:
            details.append(str(error_message))
        if details:
            _ = text.append(" (" + ", ".join(details) + ")", style=Style(color=color))
        return text

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        """Render path events with dedicated styling, other records as usual."""

        event_text = self._render_path_event(record)
        if event_text is not None:
            return event_text
        return super().render_message(record, message)


__all__ = ["PathRichHandler"]
