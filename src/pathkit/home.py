"""
Summary: Discover the invoking user's home directory and expand leading tildes.
Why: Keep home lookup to environment and OS facilities without extra dependencies.
"""

from __future__ import annotations

import ntpath
import os
import posixpath
from collections.abc import Mapping

from pathkit.platform.logging import logger
from pathkit.resolution import clean


def _password_database_home() -> str | None:
    """Return the home recorded for the current uid, if the platform has one."""

    if os.name == "nt":
        return None

    import pwd

    try:
        return pwd.getpwuid(os.getuid()).pw_dir or None
    except KeyError:
        return None


def home_directory(
    env: Mapping[str, str] | None = None,
    *,
    windows: bool | None = None,
) -> str | None:
    """Return the home directory of the invoking user.

    Windows consults ``HOME``, ``USERPROFILE`` and then ``HOMEDRIVE`` plus
    ``HOMEPATH``. Other platforms consult ``HOME`` and then the password
    database.

    Args:
        env: Environment mapping. Defaults to ``os.environ``.
        windows: Force the Windows lookup policy. Defaults to the running platform.

    Returns:
        str | None: Home directory, or ``None`` when nothing is configured.
    """
    mapping = env if env is not None else os.environ
    if windows is None:
        windows = os.name == "nt"

    home = mapping.get("HOME", "").strip()
    if home:
        return home

    if windows:
        profile = mapping.get("USERPROFILE", "").strip()
        if profile:
            return profile
        drive = mapping.get("HOMEDRIVE", "").strip()
        path = mapping.get("HOMEPATH", "").strip()
        if drive and path:
            return drive + path
        return None

    return _password_database_home()


def expand_user(
    value: str,
    env: Mapping[str, str] | None = None,
    *,
    windows: bool | None = None,
) -> str:
    """Expand a leading ``~`` or ``~/`` in ``value``.

    ``~user`` forms and values without a leading tilde are returned unchanged.
    When no home directory can be found the value is returned unchanged and a
    warning is logged.
    """
    if not value.startswith("~"):
        return value

    if windows is None:
        windows = os.name == "nt"
    flavour = ntpath if windows else posixpath
    separators = flavour.sep + (flavour.altsep or "")

    rest = value[1:]
    if rest and rest[0] not in separators:
        return value

    home = home_directory(env, windows=windows)
    if home is None:
        logger.warning("Cannot expand %s: home directory is unknown", value)
        return value

    rest = rest.lstrip(separators)
    if not rest:
        return clean(home, flavour)
    return clean(flavour.join(home, rest), flavour)


__all__ = ["expand_user", "home_directory"]
