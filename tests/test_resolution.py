"""
Summary: Validate decomposition, joining and two-step resolution of path strings.
Why: The re-rooting fallback and its terminal failure are the load-bearing path policy.
"""

from __future__ import annotations

import errno
import logging
import ntpath
import posixpath

import pytest

from pathkit.errors import ResolutionError
from pathkit.resolution import (
    UNRESOLVED_MESSAGE,
    absolutize,
    clean,
    join_segments,
    resolve_absolute,
    split_parts,
)


def _cwd(path: str):
    return lambda: path


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("/tmp", ["tmp"]),
        ("tmp", ["tmp"]),
        ("/a//b/", ["a", "b"]),
        ("a/ /b/\t/c", ["a", "b", "c"]),
        ("", []),
        ("/", []),
    ],
)
def test_split_parts_discards_blank_segments(value: str, expected: list[str]) -> None:
    """Leading, doubled and whitespace-only segments never appear in parts."""

    assert split_parts(value, posixpath) == expected


def test_split_parts_uses_flavour_separator() -> None:
    """Windows values split on backslashes only."""

    assert split_parts("C:\\Users\\tester", ntpath) == ["C:", "Users", "tester"]


@pytest.mark.parametrize(
    ("segments", "expected"),
    [
        (["/", "tmp"], "/tmp"),
        (["tmp"], "tmp"),
        (["a", "/b"], "a/b"),
        (["a", "", "b"], "a/b"),
        (["a", ".", "b", "..", "c"], "a/c"),
        (["//x"], "/x"),
        ([], ""),
        (["", ""], ""),
    ],
)
def test_join_segments_cleans_result(segments: list[str], expected: str) -> None:
    """Joining inserts separators and cleans instead of concatenating."""

    assert join_segments(segments, posixpath) == expected


def test_join_segments_windows_root() -> None:
    """A leading separator segment roots Windows segments too."""

    assert join_segments(["\\", "tmp"], ntpath) == "\\tmp"


def test_clean_preserves_empty_value() -> None:
    """Cleaning an empty string does not invent a current-directory dot."""

    assert clean("", posixpath) == ""
    assert clean("a/../", posixpath) == "."


def test_absolutize_joins_working_directory() -> None:
    """Relative values are resolved against the working directory and cleaned."""

    assert absolutize("tmp", getcwd=_cwd("/work"), flavour=posixpath) == "/work/tmp"
    assert absolutize("../x/./y", getcwd=_cwd("/work/sub"), flavour=posixpath) == "/work/x/y"


def test_absolutize_leaves_working_directory_alone_for_absolute_values() -> None:
    """Absolute values are only cleaned."""

    def _fail() -> str:
        raise AssertionError("working directory must not be consulted")

    assert absolutize("/a/./b/../c", getcwd=_fail, flavour=posixpath) == "/a/c"


def test_absolutize_reports_missing_working_directory() -> None:
    """A failing working directory lookup becomes a ResolutionError."""

    def _gone() -> str:
        raise FileNotFoundError(errno.ENOENT, "No such file or directory")

    with pytest.raises(ResolutionError) as excinfo:
        _ = absolutize("tmp", getcwd=_gone, flavour=posixpath)

    assert isinstance(excinfo.value.__cause__, FileNotFoundError)
    assert excinfo.value.path == "tmp"


def test_resolve_absolute_prefers_working_directory_candidate() -> None:
    """The working-directory form wins when it exists."""

    existing = {"/work/tmp", "/tmp"}

    resolved = resolve_absolute(
        "tmp", exists=existing.__contains__, getcwd=_cwd("/work"), flavour=posixpath
    )

    assert resolved == "/work/tmp"


def test_resolve_absolute_reroots_in_order() -> None:
    """The rooted candidate is checked only after the working-directory form."""

    checked: list[str] = []

    def _exists(candidate: str) -> bool:
        checked.append(candidate)
        return candidate == "/tmp"

    resolved = resolve_absolute("tmp", exists=_exists, getcwd=_cwd("/work"), flavour=posixpath)

    assert resolved == "/tmp"
    assert checked == ["/work/tmp", "/tmp"]


def test_resolve_absolute_fails_terminally() -> None:
    """Neither candidate existing raises the terminal resolution error."""

    checked: list[str] = []

    def _exists(candidate: str) -> bool:
        checked.append(candidate)
        return False

    with pytest.raises(ResolutionError) as excinfo:
        _ = resolve_absolute("foo", exists=_exists, getcwd=_cwd("/work"), flavour=posixpath)

    assert str(excinfo.value) == UNRESOLVED_MESSAGE == "unable to resolve path to file"
    assert excinfo.value.path == "foo"
    assert checked == ["/work/foo", "/foo"]


@pytest.mark.parametrize("value", ["usr/lib", "a/b/c", "single"])
def test_rooted_parts_resolve_like_direct_absolutization(value: str) -> None:
    """Re-rooting parts reaches the same location as absolutizing from root."""

    existing = {"/" + value}
    rooted = join_segments(["/", *split_parts(value, posixpath)], posixpath)

    direct = resolve_absolute(value, exists=existing.__contains__, getcwd=_cwd("/"), flavour=posixpath)
    via_parts = resolve_absolute(
        rooted, exists=existing.__contains__, getcwd=_cwd("/elsewhere"), flavour=posixpath
    )

    assert direct == via_parts == "/" + value


def test_resolve_absolute_logs_fallback(caplog: pytest.LogCaptureFixture) -> None:
    """Retrying as a rooted path emits a structured debug record."""

    caplog.set_level(logging.DEBUG, logger="pathkit")

    _ = resolve_absolute(
        "tmp", exists=lambda candidate: candidate == "/tmp", getcwd=_cwd("/work"), flavour=posixpath
    )

    events = [getattr(record, "path_event", None) for record in caplog.records]
    assert "path.resolve.fallback" in events
    assert "path.resolve.failed" not in events
