"""Shared pytest fixtures for pathkit tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from pathkit.config import Settings


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep tests away from the user's configuration and environment overrides."""

    monkeypatch.setenv("PATHKIT_CONFIG", str(tmp_path / "absent-config.toml"))
    monkeypatch.delenv("PATHKIT_LOG_LEVEL", raising=False)
    monkeypatch.delenv("PATHKIT_LOG_FILE", raising=False)
    Settings.reset()
    try:
        yield None
    finally:
        Settings.reset()


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from an empty working directory and return it."""

    directory = tmp_path / "work"
    directory.mkdir()
    monkeypatch.chdir(directory)
    return Path.cwd()
