"""
Summary: Path value backed by the local filesystem.
Why: Wrap operating-system path primitives behind one immutable value type.
"""

from __future__ import annotations

import os
import shutil
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Self, final

from pathkit.config import Settings
from pathkit.errors import FilesystemOperationError, ResolutionError
from pathkit.home import expand_user
from pathkit.platform.logging import logger
from pathkit.resolution import join_segments, resolve_absolute, split_parts


def _operation_failed(operation: str, path: str, error: OSError) -> FilesystemOperationError:
    """Log a failed primitive and build the error raised to the caller."""

    logger.debug(
        "%s failed for %s: %s",
        operation,
        path,
        error,
        extra={
            "path_event": "path.error",
            "path": path,
            "operation": operation,
            "error_message": error.strerror,
        },
    )
    return FilesystemOperationError(operation, path, error)


@final
@dataclass(frozen=True, slots=True)
class LocalPath:
    """A path string paired with operations on the local filesystem.

    The stored value is kept verbatim. Deriving operations return new
    instances and side-effecting operations never change the value.
    """

    value: str

    def __str__(self) -> str:
        return self.value

    def __fspath__(self) -> str:
        return self.value

    @classmethod
    def from_parts(cls, segments: Sequence[str]) -> Self:
        """Rebuild a path by joining ``segments`` with the platform separator."""

        return cls(join_segments(segments))

    def parts(self) -> list[str]:
        """Return the non-blank segments of the value, left to right."""

        return split_parts(self.value)

    def absolute(self) -> Self:
        """Return an absolute path that exists on disk.

        The working-directory form is tried first, then the value's segments
        re-rooted under the filesystem root.

        Raises:
            ResolutionError: If the working directory is unavailable or neither
                candidate exists.
        """
        return type(self)(resolve_absolute(self.value, exists=os.path.exists))

    def cwd(self) -> Self:
        """Return the current working directory.

        Raises:
            ResolutionError: If the working directory cannot be determined.
        """
        try:
            return type(self)(os.getcwd())
        except OSError as exc:
            raise ResolutionError("unable to determine the working directory") from exc

    def parent(self) -> Self:
        """Return the directory containing the resolved absolute path."""

        return type(self)(os.path.dirname(self.absolute().value))

    def touch(self) -> None:
        """Create the file empty, truncating any existing content."""

        mode = Settings.current().file_mode
        try:
            fd = os.open(self.value, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
        except OSError as exc:
            raise _operation_failed("touch", self.value, exc) from exc
        try:
            os.close(fd)
        except OSError as exc:
            raise _operation_failed("touch", self.value, exc) from exc
        logger.debug("Touched %s", self.value, extra={"path_event": "path.touch", "path": self.value})

    def unlink(self) -> None:
        """Remove a single file or link."""

        try:
            os.unlink(self.value)
        except OSError as exc:
            raise _operation_failed("unlink", self.value, exc) from exc
        logger.debug("Unlinked %s", self.value, extra={"path_event": "path.unlink", "path": self.value})

    def rmdir(self) -> None:
        """Remove an empty directory."""

        try:
            os.rmdir(self.value)
        except OSError as exc:
            raise _operation_failed("rmdir", self.value, exc) from exc
        logger.debug(
            "Removed directory %s", self.value, extra={"path_event": "path.rmdir", "path": self.value}
        )

    def rmtree(self, missing_ok: bool = False) -> None:
        """Remove a directory and everything below it.

        Args:
            missing_ok: Treat a missing path as already removed.
        """
        try:
            shutil.rmtree(self.value)
        except FileNotFoundError as exc:
            if not missing_ok:
                raise _operation_failed("rmtree", self.value, exc) from exc
            return
        except OSError as exc:
            raise _operation_failed("rmtree", self.value, exc) from exc
        logger.debug("Removed tree %s", self.value, extra={"path_event": "path.rmtree", "path": self.value})

    def mkdir(self, mode: int | None = None, parents: bool = False) -> None:
        """Create a directory.

        Args:
            mode: Permission bits before umask. Defaults to the configured ``dir_mode``.
            parents: Create missing parents; an existing directory is then not an error.
        """
        if mode is None:
            mode = Settings.current().dir_mode
        try:
            if parents:
                os.makedirs(self.value, mode, exist_ok=True)
            else:
                os.mkdir(self.value, mode)
        except OSError as exc:
            raise _operation_failed("mkdir", self.value, exc) from exc
        logger.debug(
            "Created directory %s",
            self.value,
            extra={"path_event": "path.mkdir", "path": self.value, "mode": mode},
        )

    def read_bytes(self) -> bytes:
        """Return the whole contents of the file."""

        try:
            with open(self.value, "rb") as handle:
                data = handle.read()
        except OSError as exc:
            raise _operation_failed("read", self.value, exc) from exc
        logger.debug("Read %s", self.value, extra={"path_event": "path.read", "path": self.value})
        return data

    def chmod(self, mode: int) -> None:
        """Change the permission bits of the path."""

        try:
            os.chmod(self.value, mode)
        except OSError as exc:
            raise _operation_failed("chmod", self.value, exc) from exc
        logger.debug(
            "Changed mode of %s",
            self.value,
            extra={"path_event": "path.chmod", "path": self.value, "mode": mode},
        )

    def join_path(self, *segments: str) -> Self:
        """Return a new path with ``segments`` appended to this one."""

        return type(self)(join_segments([self.value, *segments]))

    def exists(self) -> bool:
        return os.path.exists(self.value)

    def is_absolute(self) -> bool:
        return os.path.isabs(self.value)

    def is_file(self) -> bool:
        return os.path.isfile(self.value)

    def is_dir(self) -> bool:
        return os.path.isdir(self.value)

    def expand_user(self) -> Self:
        """Return a path with a leading ``~`` replaced by the home directory."""

        return type(self)(expand_user(self.value))


__all__ = ["LocalPath"]
