"""Configuration management for pathkit."""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, ClassVar, Final

from pathkit.config.paths import config_path
from pathkit.errors import SettingsError
from pathkit.platform.logging import logger

DIR_MODE_DEFAULT: Final[int] = 0o777
FILE_MODE_DEFAULT: Final[int] = 0o666
LOG_LEVEL_DEFAULT: Final[str] = "WARNING"

ENV_LOG_LEVEL: Final[str] = "PATHKIT_LOG_LEVEL"
ENV_LOG_FILE: Final[str] = "PATHKIT_LOG_FILE"

_TABLE: Final[str] = "pathkit"


def _parse_mode(name: str, raw: Any) -> int:
    """Parse a permission mode given as an integer or an octal string.

    Args:
        name: Setting name used in error messages.
        raw: Integer, or string such as ``"0o755"`` or ``"755"``.

    Returns:
        int: Permission bits.

    Raises:
        SettingsError: If the value is not a valid mode.
    """
    if isinstance(raw, bool):
        raise SettingsError(f"{name} must be a permission mode, got {raw!r}")
    if isinstance(raw, int):
        mode = raw
    elif isinstance(raw, str):
        text = raw.strip().lower().removeprefix("0o")
        try:
            mode = int(text, 8)
        except ValueError as exc:
            raise SettingsError(f"{name} is not an octal mode: {raw!r}") from exc
    else:
        raise SettingsError(f"{name} must be a permission mode, got {raw!r}")

    if not 0 <= mode <= 0o7777:
        raise SettingsError(f"{name} is out of range: {raw!r}")
    return mode


def _parse_level(raw: Any) -> str:
    """Validate a logging level name."""

    level = str(raw).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise SettingsError(f"Unknown log level: {raw!r}")
    return level


@dataclass(frozen=True, slots=True)
class Settings:
    """Library settings."""

    # Mode for directories created by mkdir when none is given
    dir_mode: int = DIR_MODE_DEFAULT

    # Mode for files created by touch (before umask)
    file_mode: int = FILE_MODE_DEFAULT

    # Console level used by setup_logger
    log_level: str = LOG_LEVEL_DEFAULT

    # Optional log file used by setup_logger
    log_file: Path | None = None

    _instance: ClassVar["Settings | None"] = None
    _loaded_from: ClassVar[Path | None] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Settings":
        """Build settings from a parsed ``[pathkit]`` table.

        Raises:
            SettingsError: If a value is invalid or a key is unknown.
        """
        known = {"dir_mode", "file_mode", "log_level", "log_file"}
        unknown = sorted(set(data) - known)
        if unknown:
            raise SettingsError(f"Unknown settings: {', '.join(unknown)}")

        settings = cls()
        if "dir_mode" in data:
            settings = replace(settings, dir_mode=_parse_mode("dir_mode", data["dir_mode"]))
        if "file_mode" in data:
            settings = replace(settings, file_mode=_parse_mode("file_mode", data["file_mode"]))
        if "log_level" in data:
            settings = replace(settings, log_level=_parse_level(data["log_level"]))
        if data.get("log_file"):
            settings = replace(settings, log_file=Path(str(data["log_file"])))
        return settings

    @classmethod
    def load(
        cls,
        config_file: Path | str | None = None,
        env: Mapping[str, str] | None = None,
    ) -> "Settings":
        """Load settings from TOML and environment overrides, then cache them.

        Args:
            config_file: Explicit configuration file. Defaults to
                ``PATHKIT_CONFIG`` or the per-user location.
            env: Environment mapping. Defaults to ``os.environ``.

        Returns:
            Settings: The loaded instance, also stored as the current one.

        Raises:
            SettingsError: If the file cannot be parsed or holds invalid values.
        """
        mapping = env if env is not None else os.environ
        target = config_path(config_file, mapping)

        settings = cls()
        if target is not None and target.is_file():
            try:
                with target.open("rb") as handle:
                    document = tomllib.load(handle)
            except (OSError, tomllib.TOMLDecodeError) as exc:
                raise SettingsError(f"Failed to read configuration {target}: {exc}") from exc
            table = document.get(_TABLE, {})
            if not isinstance(table, dict):
                raise SettingsError(f"[{_TABLE}] in {target} must be a table")
            settings = cls.from_mapping(table)
            logger.debug("Configuration loaded from %s", target)
        else:
            target = None

        level = mapping.get(ENV_LOG_LEVEL, "").strip()
        if level:
            settings = replace(settings, log_level=_parse_level(level))
        log_file = mapping.get(ENV_LOG_FILE, "").strip()
        if log_file:
            settings = replace(settings, log_file=Path(log_file))

        cls._instance = settings
        cls._loaded_from = target
        return settings

    @classmethod
    def current(cls) -> "Settings":
        """Return the cached settings, loading them on first use.

        Invalid configuration is logged and replaced by the defaults so path
        operations never fail on settings. ``load`` still raises for callers
        that want validation.
        """
        if cls._instance is None:
            try:
                return cls.load()
            except SettingsError as exc:
                logger.warning("Ignoring invalid configuration, using defaults: %s", exc)
                cls._instance = cls()
                cls._loaded_from = None
        return cls._instance

    @classmethod
    def loaded_from(cls) -> Path | None:
        """Return the file the cached settings came from, if any."""

        return cls._loaded_from

    @classmethod
    def reset(cls) -> None:
        """Drop the cached settings so the next access reloads them."""

        cls._instance = None
        cls._loaded_from = None


__all__ = [
    "DIR_MODE_DEFAULT",
    "ENV_LOG_FILE",
    "ENV_LOG_LEVEL",
    "FILE_MODE_DEFAULT",
    "LOG_LEVEL_DEFAULT",
    "Settings",
]
