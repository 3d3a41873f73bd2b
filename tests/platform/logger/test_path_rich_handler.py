"""Tests for the ``PathRichHandler`` path formatting utilities."""

from __future__ import annotations

import logging
import logging.handlers
from collections.abc import Iterator
from io import StringIO
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console
from rich.text import Text

from pathkit.config import Settings
from pathkit.platform.logging import LOGGER_NAME, PathRichHandler, setup_logger


def _make_handler() -> PathRichHandler:
    """Create a handler instance with an in-memory console."""

    console = Console(file=StringIO(), force_terminal=True, soft_wrap=True)
    return PathRichHandler(console=console)


def _build_record(level: int = logging.DEBUG, msg: str = "", **extras: Any) -> logging.LogRecord:
    """Create a ``LogRecord`` populated with path extras for testing."""

    record = logging.LogRecord(
        name=LOGGER_NAME,
        level=level,
        pathname="test",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extras.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def restore_logger() -> Iterator[logging.Logger]:
    """Put the library logger back to its quiet default after a test."""

    logger = logging.getLogger(LOGGER_NAME)
    original_handlers = list(logger.handlers)
    original_level = logger.level
    yield logger
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers[:] = original_handlers
    logger.setLevel(original_level)


def test_render_message_truncates_long_absolute_paths() -> None:
    """Absolute paths with many segments are abbreviated with an ellipsis."""

    handler = _make_handler()
    record = _build_record(path_event="path.touch", path="/home/tester/projects/app/build/output/report.txt")

    rendered = handler.render_message(record, "")
    assert isinstance(rendered, Text)

    plain = rendered.plain
    assert "Touched" in plain
    assert "/…/app/build/output/report.txt" in plain


def test_render_message_relativizes_paths_to_base_directory() -> None:
    handler = _make_handler()
    record = _build_record(
        path_event="path.mkdir",
        path="/srv/data/cache/blobs",
        base_path="/srv/data",
        mode=0o755,
    )

    rendered = handler.render_message(record, "")
    assert isinstance(rendered, Text)

    plain = rendered.plain
    assert "cache/blobs" in plain
    assert "/srv" not in plain
    assert "mode=755" in plain


def test_render_message_windows_paths_keep_anchor() -> None:
    handler = _make_handler()
    record = _build_record(path_event="path.unlink", path="C:\\Users\\tester\\file.txt")

    rendered = handler.render_message(record, "")
    assert isinstance(rendered, Text)

    assert "C:\\Users\\tester\\file.txt" in rendered.plain


def test_render_message_error_details() -> None:
    handler = _make_handler()
    record = _build_record(
        path_event="path.error",
        path="/tmp/missing",
        operation="unlink",
        error_message="No such file or directory",
    )

    rendered = handler.render_message(record, "")
    assert isinstance(rendered, Text)

    plain = rendered.plain
    assert "Failed" in plain
    assert "(unlink, No such file or directory)" in plain


def test_render_message_plain_records_fall_back() -> None:
    handler = _make_handler()
    record = _build_record(level=logging.WARNING, msg="Cannot expand ~/x")

    rendered = handler.render_message(record, "Cannot expand ~/x")

    assert isinstance(rendered, Text)
    assert rendered.plain == "Cannot expand ~/x"


def test_setup_logger_uses_settings(tmp_path: Path, restore_logger: logging.Logger) -> None:
    config_file = tmp_path / "config.toml"
    _ = config_file.write_text(
        f'[pathkit]\nlog_level = "INFO"\nlog_file = "{(tmp_path / "logs" / "pathkit.log").as_posix()}"\n'
    )
    _ = Settings.load(config_file, env={})

    logger = setup_logger(console=Console(file=StringIO()))

    assert logger is restore_logger
    console_handlers = [h for h in logger.handlers if isinstance(h, PathRichHandler)]
    file_handlers = [
        h for h in logger.handlers if isinstance(h, logging.handlers.RotatingFileHandler)
    ]
    assert len(console_handlers) == 1
    assert console_handlers[0].level == logging.INFO
    assert len(file_handlers) == 1
    assert (tmp_path / "logs").is_dir()


def test_setup_logger_writes_path_events(tmp_path: Path, restore_logger: logging.Logger) -> None:
    log_file = tmp_path / "pathkit.log"
    stream = StringIO()

    logger = setup_logger(
        log_file=log_file,
        console_level=logging.DEBUG,
        console=Console(file=stream, width=200),
    )
    logger.debug("Touched /tmp/x", extra={"path_event": "path.touch", "path": "/tmp/x"})
    for handler in logger.handlers:
        handler.flush()

    assert "Touched /tmp/x" in stream.getvalue()
    assert "Touched /tmp/x" in log_file.read_text(encoding="utf-8")
    assert restore_logger is logger
