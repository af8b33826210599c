"""The real filesystem behind the same interface as the emulator.

``OsFileSystem`` is a thin pass-through to ``os``, ``shutil`` and
``pathlib``: it is what production code runs on, and it is the reference
the emulator is tested against.  Errors come straight from the OS.

Two calls are tightened beyond what the standard library does, and the
emulator behaves the same way:

- ``copy_file`` refuses anything but a regular file as the source
  (``shutil.copyfile`` would happily read from a FIFO), and reports a
  destination like ``new/`` as NotFound with a proper errno.
- ``remove_dir_all`` checks that every node of the tree can be removed
  *before* removing anything, so a failure never leaves half a tree
  behind.  It also refuses a path ending in ``.`` or ``..``, which
  ``shutil.rmtree`` would empty before failing.
"""

from __future__ import annotations

import os
import shutil
import stat
import tempfile
from pathlib import Path
from typing import BinaryIO

from py_fs.backend import Backend, operation, refuse_dot_removal
from py_fs.errors import ErrorKind, fs_error
from py_fs.fake.node import EXEC_BITS, READ_BITS, WRITE_BITS, FileType, Metadata
from py_fs.fake.permissions import set_readonly_bits
from py_fs.logging import Logger, LogLevel
from py_fs.paths import PathArg, fspath, split_path
from py_fs.tempdir import TempDir


def _to_metadata(st: os.stat_result) -> Metadata:
    if stat.S_ISDIR(st.st_mode):
        file_type = FileType.DIRECTORY
    elif stat.S_ISLNK(st.st_mode):
        file_type = FileType.SYMLINK
    else:
        file_type = FileType.FILE
    return Metadata(
        file_type=file_type,
        mode=stat.S_IMODE(st.st_mode),
        length=st.st_size,
        created_at=st.st_ctime,
        modified_at=st.st_mtime,
    )


class OsFileSystem(Backend):
    """Filesystem operations on the host OS."""

    source = "os"

    def __init__(self, *, logger: Logger | None = None) -> None:
        """Create a pass-through backend, optionally logging calls."""
        super().__init__(logger=logger)

    @operation(LogLevel.DEBUG)
    def current_dir(self) -> str:
        """Return the process's working directory."""
        return os.getcwd()

    @operation(LogLevel.INFO)
    def set_current_dir(self, path: PathArg) -> None:
        """Change the process's working directory."""
        os.chdir(fspath(path))

    @operation(LogLevel.DEBUG)
    def exists(self, path: PathArg) -> bool:
        """Return True if *path* exists (following symlinks)."""
        return os.path.exists(fspath(path))

    @operation(LogLevel.DEBUG)
    def is_dir(self, path: PathArg) -> bool:
        """Return True if *path* is a directory (following symlinks)."""
        return os.path.isdir(fspath(path))

    @operation(LogLevel.DEBUG)
    def is_file(self, path: PathArg) -> bool:
        """Return True if *path* is a regular file (following symlinks)."""
        return os.path.isfile(fspath(path))

    @operation(LogLevel.DEBUG)
    def is_symlink(self, path: PathArg) -> bool:
        """Return True if *path* itself is a symlink."""
        return os.path.islink(fspath(path))

    @operation(LogLevel.DEBUG)
    def metadata(self, path: PathArg) -> Metadata:
        """Return metadata, following symlinks."""
        return _to_metadata(os.stat(fspath(path)))

    @operation(LogLevel.DEBUG)
    def symlink_metadata(self, path: PathArg) -> Metadata:
        """Return metadata without following a final symlink."""
        return _to_metadata(os.lstat(fspath(path)))

    @operation(LogLevel.DEBUG)
    def len(self, path: PathArg) -> int:
        """Return the length of *path*, or 0 if it cannot be resolved."""
        try:
            return os.stat(fspath(path)).st_size
        except OSError:
            return 0

    @operation(LogLevel.INFO)
    def create_dir(self, path: PathArg, *, parents: bool = False) -> None:
        """Create a directory, and with *parents* its missing ancestors."""
        p = fspath(path)
        if parents:
            os.makedirs(p, exist_ok=True)
        else:
            os.mkdir(p)

    @operation(LogLevel.INFO)
    def create_dir_all(self, path: PathArg) -> None:
        """Create a directory and all missing ancestors."""
        os.makedirs(fspath(path), exist_ok=True)

    @operation(LogLevel.DEBUG)
    def read_dir(self, path: PathArg) -> list[str]:
        """Return the sorted names of a directory's entries."""
        return sorted(os.listdir(fspath(path)))

    @operation(LogLevel.INFO)
    def remove_dir(self, path: PathArg) -> None:
        """Remove an empty directory."""
        os.rmdir(fspath(path))

    @operation(LogLevel.INFO)
    def remove_dir_all(self, path: PathArg) -> None:
        """Remove a directory tree once every node in it proved removable.

        Every node must be readable and every non-empty directory must be
        writable and searchable; otherwise nothing is removed.

        Raises:
            FileNotFoundError: If *path* does not exist.
            NotADirectoryError: If *path* is a file.
            PermissionError: If a node fails the checks above or the
                parent is not writable; nothing is removed.
            OSError: If *path* is a symlink; (EINVAL) if it ends in
                ``.``; (ENOTEMPTY) if it ends in ``..``.

        """
        p = fspath(path)
        refuse_dot_removal(split_path(p).last, p)
        # a trailing separator would make lstat follow a final symlink
        st = os.lstat(p.rstrip(os.sep) or p)
        if stat.S_ISLNK(st.st_mode):
            msg = "Cannot call rmtree on a symbolic link"
            raise OSError(msg)
        if not stat.S_ISDIR(st.st_mode):
            raise fs_error(ErrorKind.NOT_A_DIRECTORY, p)
        parent = os.path.dirname(os.path.abspath(p))
        if not os.stat(parent).st_mode & WRITE_BITS:
            raise fs_error(ErrorKind.PERMISSION_DENIED, p)
        self._require_removable_tree(p, st.st_mode)
        shutil.rmtree(p)

    def _require_removable_tree(self, top: str, mode: int) -> None:
        if not mode & READ_BITS:
            raise fs_error(ErrorKind.PERMISSION_DENIED, top)
        with os.scandir(top) as it:
            entries = list(it)
        if entries and not (mode & WRITE_BITS and mode & EXEC_BITS):
            raise fs_error(ErrorKind.PERMISSION_DENIED, top)
        for entry in entries:
            st = entry.stat(follow_symlinks=False)
            if stat.S_ISDIR(st.st_mode):
                self._require_removable_tree(entry.path, st.st_mode)
            elif not st.st_mode & READ_BITS:
                raise fs_error(ErrorKind.PERMISSION_DENIED, entry.path)

    @operation(LogLevel.INFO)
    def create_file(self, path: PathArg, content: bytes = b"") -> None:
        """Create a new file; fail if *path* is occupied."""
        with open(fspath(path), "xb") as f:
            f.write(content)

    @operation(LogLevel.INFO)
    def write_file(
        self,
        path: PathArg,
        content: bytes,
        *,
        append: bool = False,
        create: bool = True,
    ) -> None:
        """Write (or append) *content* to a file, creating it if allowed."""
        flags = os.O_WRONLY | (os.O_APPEND if append else os.O_TRUNC)
        if create:
            flags |= os.O_CREAT
        fd = os.open(fspath(path), flags, 0o666)
        with os.fdopen(fd, "wb") as f:
            f.write(content)

    @operation(LogLevel.INFO)
    def overwrite_file(self, path: PathArg, content: bytes) -> None:
        """Replace the content of an existing file."""
        fd = os.open(fspath(path), os.O_WRONLY | os.O_TRUNC)
        with os.fdopen(fd, "wb") as f:
            f.write(content)

    @operation(LogLevel.DEBUG)
    def read_file(self, path: PathArg) -> bytes:
        """Return the content of a file."""
        return Path(fspath(path)).read_bytes()

    @operation(LogLevel.DEBUG)
    def read_file_to_string(self, path: PathArg) -> str:
        """Return the content of a file decoded as UTF-8."""
        return Path(fspath(path)).read_text(encoding="utf-8")

    @operation(LogLevel.DEBUG)
    def read_file_into(self, path: PathArg, sink: bytearray) -> int:
        """Append the content of a file to *sink*; return the count."""
        content = Path(fspath(path)).read_bytes()
        sink.extend(content)
        return len(content)

    @operation(LogLevel.DEBUG)
    def open(self, path: PathArg) -> BinaryIO:
        """Open a file for binary reading."""
        return open(fspath(path), "rb")  # noqa: SIM115

    @operation(LogLevel.INFO)
    def remove_file(self, path: PathArg) -> None:
        """Remove a file or symlink."""
        os.unlink(fspath(path))

    @operation(LogLevel.INFO)
    def copy_file(self, src: PathArg, dst: PathArg) -> None:
        """Copy a regular file's content to *dst*.

        Raises:
            FileNotFoundError: If *src* is missing or not a regular file,
                or *dst* ends with a separator and is not a directory.

        """
        s, d = fspath(src), fspath(dst)
        if not stat.S_ISREG(os.stat(s).st_mode):
            raise fs_error(ErrorKind.NOT_FOUND, s)
        if d.endswith(os.sep) and not os.path.isdir(d):
            # shutil.copyfile raises this one without an errno
            raise fs_error(ErrorKind.NOT_FOUND, d)
        shutil.copyfile(s, d)

    @operation(LogLevel.INFO)
    def create_symlink(self, path: PathArg, target: PathArg) -> None:
        """Create a symlink at *path* pointing to *target*."""
        os.symlink(fspath(target), fspath(path))

    @operation(LogLevel.DEBUG)
    def read_link(self, path: PathArg) -> str:
        """Return a symlink's target."""
        return os.readlink(fspath(path))

    @operation(LogLevel.INFO)
    def rename(self, src: PathArg, dst: PathArg) -> None:
        """Move a node, replacing a compatible *dst*."""
        os.rename(fspath(src), fspath(dst))

    def move(self, src: PathArg, dst: PathArg) -> None:
        """Alias of ``rename``."""
        self.rename(src, dst)

    @operation(LogLevel.INFO)
    def set_permissions(self, path: PathArg, mode: int) -> None:
        """Replace the permission bits of a node."""
        os.chmod(fspath(path), mode)

    def set_mode(self, path: PathArg, mode: int) -> None:
        """Alias of ``set_permissions``."""
        self.set_permissions(path, mode)

    @operation(LogLevel.DEBUG)
    def mode(self, path: PathArg) -> int:
        """Return the permission bits of a node."""
        return stat.S_IMODE(os.stat(fspath(path)).st_mode)

    @operation(LogLevel.DEBUG)
    def readonly(self, path: PathArg) -> bool:
        """Return True if the node has no write bit."""
        return not os.stat(fspath(path)).st_mode & WRITE_BITS

    @operation(LogLevel.INFO)
    def set_readonly(self, path: PathArg, readonly: bool) -> None:  # noqa: FBT001
        """Clear or restore the write bits of a node."""
        p = fspath(path)
        current = stat.S_IMODE(os.stat(p).st_mode)
        os.chmod(p, set_readonly_bits(current, readonly=readonly))

    @operation(LogLevel.INFO)
    def temp_dir(self, prefix: str) -> TempDir:
        """Create ``<tmp>/<prefix>/<prefix>_<random>`` and return its handle."""
        base = os.path.join(tempfile.gettempdir(), prefix)
        os.makedirs(base, exist_ok=True)
        return TempDir(self, tempfile.mkdtemp(prefix=f"{prefix}_", dir=base))
