"""The filesystem capability — what code under test is allowed to call.

Production code takes a ``FileSystem`` and is handed ``OsFileSystem``;
tests hand it ``FakeFileSystem`` (or ``MockFileSystem`` when only the
calls matter).  All three satisfy this protocol structurally, so none of
them has to inherit from it.

Failures are raised as ``OSError`` subclasses; classify them with
``py_fs.errors.error_kind``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from py_fs.fake.node import Metadata
    from py_fs.paths import PathArg
    from py_fs.tempdir import TempDir


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for filesystem operations."""

    def current_dir(self) -> str:
        """Return the current working directory."""
        ...

    def set_current_dir(self, path: PathArg) -> None:
        """Change the current working directory."""
        ...

    def exists(self, path: PathArg) -> bool:
        """Return True if *path* exists (following symlinks)."""
        ...

    def is_dir(self, path: PathArg) -> bool:
        """Return True if *path* is a directory (following symlinks)."""
        ...

    def is_file(self, path: PathArg) -> bool:
        """Return True if *path* is a regular file (following symlinks)."""
        ...

    def is_symlink(self, path: PathArg) -> bool:
        """Return True if *path* itself is a symlink."""
        ...

    def metadata(self, path: PathArg) -> Metadata:
        """Return metadata, following symlinks."""
        ...

    def symlink_metadata(self, path: PathArg) -> Metadata:
        """Return metadata without following a final symlink."""
        ...

    def len(self, path: PathArg) -> int:
        """Return the length of *path*, or 0 if it cannot be resolved."""
        ...

    def create_dir(self, path: PathArg, *, parents: bool = False) -> None:
        """Create a directory, and with *parents* its missing ancestors."""
        ...

    def create_dir_all(self, path: PathArg) -> None:
        """Create a directory and all missing ancestors."""
        ...

    def read_dir(self, path: PathArg) -> list[str]:
        """Return the sorted names of a directory's entries."""
        ...

    def remove_dir(self, path: PathArg) -> None:
        """Remove an empty directory."""
        ...

    def remove_dir_all(self, path: PathArg) -> None:
        """Remove a directory tree."""
        ...

    def create_file(self, path: PathArg, content: bytes = b"") -> None:
        """Create a new file; fail if *path* is occupied."""
        ...

    def write_file(
        self,
        path: PathArg,
        content: bytes,
        *,
        append: bool = False,
        create: bool = True,
    ) -> None:
        """Write (or append) *content* to a file."""
        ...

    def overwrite_file(self, path: PathArg, content: bytes) -> None:
        """Replace the content of an existing file."""
        ...

    def read_file(self, path: PathArg) -> bytes:
        """Return the content of a file."""
        ...

    def read_file_to_string(self, path: PathArg) -> str:
        """Return the content of a file decoded as UTF-8."""
        ...

    def read_file_into(self, path: PathArg, sink: bytearray) -> int:
        """Append the content of a file to *sink*; return the count."""
        ...

    def open(self, path: PathArg) -> Any:
        """Open a file for binary reading."""
        ...

    def remove_file(self, path: PathArg) -> None:
        """Remove a file or symlink."""
        ...

    def copy_file(self, src: PathArg, dst: PathArg) -> None:
        """Copy a regular file's content."""
        ...

    def create_symlink(self, path: PathArg, target: PathArg) -> None:
        """Create a symlink at *path* pointing to *target*."""
        ...

    def read_link(self, path: PathArg) -> str:
        """Return a symlink's target."""
        ...

    def rename(self, src: PathArg, dst: PathArg) -> None:
        """Move a node."""
        ...

    def move(self, src: PathArg, dst: PathArg) -> None:
        """Alias of ``rename``."""
        ...

    def set_permissions(self, path: PathArg, mode: int) -> None:
        """Replace the permission bits of a node."""
        ...

    def set_mode(self, path: PathArg, mode: int) -> None:
        """Alias of ``set_permissions``."""
        ...

    def mode(self, path: PathArg) -> int:
        """Return the permission bits of a node."""
        ...

    def readonly(self, path: PathArg) -> bool:
        """Return True if the node has no write bit."""
        ...

    def set_readonly(self, path: PathArg, readonly: bool) -> None:  # noqa: FBT001
        """Clear or restore the write bits of a node."""
        ...

    def temp_dir(self, prefix: str) -> TempDir:
        """Create a self-removing temporary directory."""
        ...
