"""
Summary: Protocol describing the capabilities of a path value.
Why: Let consumers depend on path behaviour while tests substitute other backings.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, Self, runtime_checkable


@runtime_checkable
class PathProtocol(Protocol):
    """Abstract path operations shared by local and in-memory paths."""

    @property
    def value(self) -> str:
        """Return the raw path string."""
        ...

    @classmethod
    def from_parts(cls, segments: Sequence[str]) -> Self:
        """Rebuild a path from ordered segments."""
        ...

    def parts(self) -> list[str]:
        """Return non-blank segments split on the separator."""
        ...

    def absolute(self) -> Self:
        """Return an existing absolute path; raise ResolutionError otherwise."""
        ...

    def cwd(self) -> Self:
        """Return the current working directory."""
        ...

    def parent(self) -> Self:
        """Return the directory containing the absolute path."""
        ...

    def touch(self) -> None:
        """Create the file, truncating it when it exists."""
        ...

    def unlink(self) -> None:
        """Remove a file or link."""
        ...

    def rmdir(self) -> None:
        """Remove an empty directory."""
        ...

    def rmtree(self, missing_ok: bool = False) -> None:
        """Remove a directory and everything below it."""
        ...

    def mkdir(self, mode: int | None = None, parents: bool = False) -> None:
        """Create a directory, optionally with missing parents."""
        ...

    def read_bytes(self) -> bytes:
        """Return the whole file contents."""
        ...

    def chmod(self, mode: int) -> None:
        """Change permission bits."""
        ...

    def join_path(self, *segments: str) -> Self:
        """Return a new path with ``segments`` appended."""
        ...

    def exists(self) -> bool:
        """Return True when the path exists."""
        ...

    def is_absolute(self) -> bool:
        """Return True when the raw value is absolute."""
        ...

    def is_file(self) -> bool:
        """Return True for regular files."""
        ...

    def is_dir(self) -> bool:
        """Return True for directories."""
        ...

    def expand_user(self) -> Self:
        """Return a path with a leading ``~`` expanded."""
        ...


__all__ = ["PathProtocol"]
