"""Shared path utilities for locating the configuration file.

Policy:
- An explicit path passed by the caller wins.
- Otherwise ``PATHKIT_CONFIG`` names the file.
- Otherwise ``<home>/.config/pathkit/config.toml`` is used when the home
  directory is known.
"""

from __future__ import annotations

import os
from pathlib import Path
from collections.abc import Mapping
from typing import Callable, Final

from pathkit.home import expand_user, home_directory

ENV_CONFIG_FILE: Final[str] = "PATHKIT_CONFIG"


def resolve_overridable_path(
    *,
    explicit_path: Path | str | None,
    env: Mapping[str, str] | None,
    env_var: str | None,
    default_factory: Callable[[], Path | None],
) -> Path | None:
    """Resolve a configuration path honoring explicit and environment overrides."""

    mapping = env if env is not None else os.environ
    if explicit_path is not None:
        return Path(expand_user(str(explicit_path), mapping)).resolve()

    if env_var:
        candidate = (mapping.get(env_var) or "").strip()
        if candidate:
            return Path(expand_user(candidate, mapping)).resolve()

    default_path = default_factory()
    return default_path.resolve() if default_path is not None else None


def default_config_path(env: Mapping[str, str] | None = None) -> Path | None:
    """Get the default path to the TOML config file, if a home directory is known."""

    home = home_directory(env)
    if home is None:
        return None
    return Path(home) / ".config" / "pathkit" / "config.toml"


def config_path(
    explicit_path: Path | str | None = None,
    env: Mapping[str, str] | None = None,
) -> Path | None:
    """Return the configuration file location after applying overrides."""

    return resolve_overridable_path(
        explicit_path=explicit_path,
        env=env,
        env_var=ENV_CONFIG_FILE,
        default_factory=lambda: default_config_path(env),
    )


__all__ = [
    "ENV_CONFIG_FILE",
    "config_path",
    "default_config_path",
    "resolve_overridable_path",
]
