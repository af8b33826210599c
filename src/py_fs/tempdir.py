"""Temporary directories that clean up after themselves.

``temp_dir(prefix)`` on a backend creates a fresh directory and returns a
``TempDir``.  Use it as a context manager, or call ``cleanup()``::

    with fs.temp_dir("build") as tmp:
        fs.write_file(f"{tmp.path}/out.txt", b"...")
    # tmp.path is gone here

The handle only holds a weak reference to its filesystem, so keeping a
``TempDir`` around does not keep an emulator (and its tree) alive.
"""

from __future__ import annotations

import contextlib
import weakref
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from types import TracebackType

    from py_fs.interface import FileSystem


class TempDir:
    """A directory removed recursively on ``cleanup()`` or context exit."""

    def __init__(self, fs: FileSystem, path: str) -> None:
        """Wrap the already created directory *path* on *fs*."""
        self._fs = weakref.ref(fs)
        self._path = path
        self._removed = False

    @property
    def path(self) -> str:
        """Return the absolute path of the directory."""
        return self._path

    @property
    def removed(self) -> bool:
        """Return True once ``cleanup()`` has run."""
        return self._removed

    def cleanup(self) -> None:
        """Remove the directory and its content.

        Does nothing if already cleaned up, if the directory has vanished
        in the meantime, or if the filesystem no longer exists.
        """
        if self._removed:
            return
        self._removed = True
        fs = self._fs()
        if fs is None:
            return
        with contextlib.suppress(FileNotFoundError):
            fs.remove_dir_all(self._path)

    def __enter__(self) -> TempDir:
        """Return the handle itself."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Remove the directory on leaving the ``with`` block."""
        self.cleanup()

    def __str__(self) -> str:
        return self._path

    def __repr__(self) -> str:
        return f"TempDir({self._path!r})"
