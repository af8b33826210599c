"""Open file handles on the emulated filesystem.

A handle holds the ``File`` node it was opened on and its own offset,
the way a file descriptor holds an inode.  Reads look at the node's
current content, so a handle sees writes made after it was opened and
a file that shrank simply yields EOF.  Renaming, removing or
``chmod``-ing the path afterwards does not affect the handle.
"""

from __future__ import annotations

import io
import os
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Buffer
    from contextlib import AbstractContextManager

    from py_fs.fake.node import File


class FakeOpenFile(io.RawIOBase):
    """A read-only binary stream over one emulated file."""

    def __init__(self, node: File, path: str, lock: AbstractContextManager[Any]) -> None:
        """Read *node* (opened as absolute *path*) under *lock*, from offset 0."""
        super().__init__()
        self._node = node
        self._lock = lock
        self._offset = 0
        self.name = path

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return True

    def _check_open(self) -> None:
        if self.closed:
            msg = "I/O operation on closed file."
            raise ValueError(msg)

    def readinto(self, buffer: Buffer) -> int:
        """Read into *buffer* from the current offset.

        Raises:
            ValueError: If the handle is closed.

        """
        self._check_open()
        view = memoryview(buffer).cast("B")
        with self._lock:
            data = self._node.content[self._offset : self._offset + len(view)]
        view[: len(data)] = data
        self._offset += len(data)
        return len(data)

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        """Move the offset and return it.

        Raises:
            ValueError: If the resulting offset would be negative.

        """
        self._check_open()
        if whence == os.SEEK_SET:
            target = offset
        elif whence == os.SEEK_CUR:
            target = self._offset + offset
        elif whence == os.SEEK_END:
            with self._lock:
                target = len(self._node.content) + offset
        else:
            msg = f"invalid whence ({whence}, should be 0, 1 or 2)"
            raise ValueError(msg)
        if target < 0:
            msg = f"negative seek position {target}"
            raise ValueError(msg)
        self._offset = target
        return target

    def tell(self) -> int:
        return self._offset
