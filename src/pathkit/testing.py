"""
Summary: In-memory filesystem and path double satisfying PathProtocol.
Why: Let consuming code exercise path behaviour without touching the real disk.
"""

from __future__ import annotations

import errno
import os
import posixpath
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Self, final

from pathkit.config import Settings
from pathkit.errors import FilesystemOperationError, ResolutionError
from pathkit.home import expand_user
from pathkit.platform.logging import logger
from pathkit.resolution import absolutize, join_segments, resolve_absolute, split_parts


def _os_error(code: int, path: str) -> OSError:
    return OSError(code, os.strerror(code), path)


@dataclass
class MemoryFileSystem:
    """POSIX-flavoured tree of files and directories held in dictionaries.

    Keys are cleaned absolute paths. The root directory always exists.
    A ``cwd`` of ``None`` simulates a working directory that cannot be determined.
    """

    cwd: str | None = "/"
    home: str | None = "/home/tester"
    files: dict[str, bytes] = field(default_factory=dict)
    directories: set[str] = field(default_factory=lambda: {"/"})
    modes: dict[str, int] = field(default_factory=dict)

    def getcwd(self) -> str:
        if self.cwd is None:
            raise _os_error(errno.ENOENT, ".")
        return self.cwd

    def key(self, value: str) -> str:
        """Return the absolute key for ``value``.

        Raises:
            ResolutionError: If ``value`` is relative and no working directory is set.
        """
        return absolutize(value, getcwd=self.getcwd, flavour=posixpath)

    def contains(self, key: str) -> bool:
        return key in self.files or key in self.directories

    def children(self, key: str) -> list[str]:
        """Return every entry strictly below ``key``."""

        prefix = key.rstrip("/") + "/"
        return [
            entry
            for entry in (*self.files, *self.directories)
            if entry != key and entry.startswith(prefix)
        ]

    def makedirs(self, value: str) -> None:
        """Create ``value`` and its missing parents without any checks."""

        key = self.key(value)
        while key not in self.directories:
            self.directories.add(key)
            key = posixpath.dirname(key)

    def write(self, value: str, data: bytes = b"") -> None:
        """Store ``data`` at ``value``, creating parent directories."""

        key = self.key(value)
        self.makedirs(posixpath.dirname(key))
        self.files[key] = data


@final
@dataclass(frozen=True, slots=True)
class MemoryPath:
    """Path value whose filesystem effects land in a ``MemoryFileSystem``."""

    value: str
    fs: MemoryFileSystem = field(default_factory=MemoryFileSystem, compare=False, repr=False)

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_parts(cls, segments: Sequence[str], fs: MemoryFileSystem | None = None) -> Self:
        return cls(join_segments(segments, posixpath), fs if fs is not None else MemoryFileSystem())

    def _derive(self, value: str) -> Self:
        return type(self)(value, self.fs)

    def _key_for(self, operation: str) -> str:
        try:
            return self.fs.key(self.value)
        except ResolutionError:
            error = self._fail(operation, errno.ENOENT)
            raise error from error.__cause__

    def _fail(self, operation: str, code: int) -> FilesystemOperationError:
        os_error = _os_error(code, self.value)
        error = FilesystemOperationError(operation, self.value, os_error)
        error.__cause__ = os_error
        return error

    def _require_parent_dir(self, operation: str, key: str) -> None:
        parent = posixpath.dirname(key)
        if parent in self.fs.files:
            raise self._fail(operation, errno.ENOTDIR)
        if parent not in self.fs.directories:
            raise self._fail(operation, errno.ENOENT)

    def parts(self) -> list[str]:
        return split_parts(self.value, posixpath)

    def absolute(self) -> Self:
        resolved = resolve_absolute(
            self.value, exists=self.fs.contains, getcwd=self.fs.getcwd, flavour=posixpath
        )
        return self._derive(resolved)

    def cwd(self) -> Self:
        try:
            return self._derive(self.fs.getcwd())
        except OSError as exc:
            raise ResolutionError("unable to determine the working directory") from exc

    def parent(self) -> Self:
        return self._derive(posixpath.dirname(self.absolute().value))

    def touch(self) -> None:
        key = self._key_for("touch")
        if key in self.fs.directories:
            raise self._fail("touch", errno.EISDIR)
        self._require_parent_dir("touch", key)
        if key not in self.fs.files:
            self.fs.modes[key] = Settings.current().file_mode
        self.fs.files[key] = b""

    def unlink(self) -> None:
        key = self._key_for("unlink")
        if key in self.fs.directories:
            raise self._fail("unlink", errno.EISDIR)
        if key not in self.fs.files:
            raise self._fail("unlink", errno.ENOENT)
        del self.fs.files[key]
        _ = self.fs.modes.pop(key, None)

    def rmdir(self) -> None:
        key = self._key_for("rmdir")
        if key in self.fs.files:
            raise self._fail("rmdir", errno.ENOTDIR)
        if key not in self.fs.directories:
            raise self._fail("rmdir", errno.ENOENT)
        if key == "/":
            raise self._fail("rmdir", errno.EBUSY)
        if self.fs.children(key):
            raise self._fail("rmdir", errno.ENOTEMPTY)
        self.fs.directories.discard(key)
        _ = self.fs.modes.pop(key, None)

    def rmtree(self, missing_ok: bool = False) -> None:
        key = self._key_for("rmtree")
        if key in self.fs.files:
            raise self._fail("rmtree", errno.ENOTDIR)
        if key not in self.fs.directories:
            if missing_ok:
                return
            raise self._fail("rmtree", errno.ENOENT)
        if key == "/":
            raise self._fail("rmtree", errno.EBUSY)
        for entry in [key, *self.fs.children(key)]:
            _ = self.fs.files.pop(entry, None)
            self.fs.directories.discard(entry)
            _ = self.fs.modes.pop(entry, None)

    def mkdir(self, mode: int | None = None, parents: bool = False) -> None:
        if mode is None:
            mode = Settings.current().dir_mode
        key = self._key_for("mkdir")
        if key in self.fs.files:
            raise self._fail("mkdir", errno.EEXIST)
        if key in self.fs.directories:
            if parents:
                return
            raise self._fail("mkdir", errno.EEXIST)

        missing: list[str] = []
        current = key
        while current not in self.fs.directories:
            if current in self.fs.files:
                raise self._fail("mkdir", errno.ENOTDIR)
            missing.append(current)
            current = posixpath.dirname(current)
        if len(missing) > 1 and not parents:
            raise self._fail("mkdir", errno.ENOENT)

        for entry in missing:
            self.fs.directories.add(entry)
            self.fs.modes[entry] = mode

    def read_bytes(self) -> bytes:
        key = self._key_for("read")
        if key in self.fs.directories:
            raise self._fail("read", errno.EISDIR)
        if key not in self.fs.files:
            raise self._fail("read", errno.ENOENT)
        return self.fs.files[key]

    def chmod(self, mode: int) -> None:
        key = self._key_for("chmod")
        if not self.fs.contains(key):
            raise self._fail("chmod", errno.ENOENT)
        self.fs.modes[key] = mode

    def join_path(self, *segments: str) -> Self:
        return self._derive(join_segments([self.value, *segments], posixpath))

    def _lookup_key(self) -> str | None:
        try:
            return self.fs.key(self.value)
        except ResolutionError:
            return None

    def exists(self) -> bool:
        key = self._lookup_key()
        return key is not None and self.fs.contains(key)

    def is_absolute(self) -> bool:
        return posixpath.isabs(self.value)

    def is_file(self) -> bool:
        return self._lookup_key() in self.fs.files

    def is_dir(self) -> bool:
        return self._lookup_key() in self.fs.directories

    def expand_user(self) -> Self:
        if self.fs.home is None:
            logger.warning("Cannot expand %s: home directory is unknown", self.value)
            return self
        return self._derive(expand_user(self.value, {"HOME": self.fs.home}, windows=False))


__all__ = ["MemoryFileSystem", "MemoryPath"]
