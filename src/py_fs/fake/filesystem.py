"""The in-memory filesystem emulator.

``FakeFileSystem`` implements the same operations as ``OsFileSystem``
but keeps everything in a tree of nodes owned by the instance.  Each
call follows the same recipe:

1. take the instance lock (calls from several threads are serialized);
2. resolve the path(s) with the ``Resolver``;
3. check permissions on every node the call touches;
4. validate the *whole* operation;
5. only then mutate the tree, in a single step.

Step 4 before step 5 is what makes every call atomic: a failing call
raises before anything changed, so there is never partial state to
clean up.  This matters most for ``remove_dir_all`` (one unreadable file
deep in the tree aborts the whole removal) and ``rename``.
``create_dir_all`` is the exception: it replays ``os.makedirs`` one
``mkdir`` at a time, so it undoes its own directories when a later step
fails.

Failures are raised as the ``OSError`` subclasses Linux would produce,
checked in the order the kernel checks them: lookup errors, then
existence, then permission on the parent, then the node's type.
"""

from __future__ import annotations

import contextlib
import errno
import posixpath
import random
import shutil
import string
import threading
from typing import Any

from py_fs.backend import Backend, operation, refuse_dot_removal
from py_fs.config import FsConfig
from py_fs.errors import ErrorKind, fs_error
from py_fs.fake.node import MODE_MASK, Directory, File, Metadata, Node, Symlink
from py_fs.fake.open_file import FakeOpenFile
from py_fs.fake.permissions import Access, check, require, require_all, set_readonly_bits
from py_fs.fake.resolver import Resolution, Resolver
from py_fs.fake.tree import Tree
from py_fs.logging import Logger, LogLevel
from py_fs.paths import CURRENT_DIR, DOT_NAMES, PathArg, fspath, join
from py_fs.tempdir import TempDir


class FakeFileSystem(Backend):
    """An in-memory filesystem with symlinks and permission bits.

    The filesystem starts with an empty root directory at ``/``, which
    is also the initial current directory.  Instances share nothing.
    """

    source = "fake"

    def __init__(self, config: FsConfig | None = None, *, logger: Logger | None = None) -> None:
        """Create a filesystem holding only the root directory."""
        super().__init__(logger=logger)
        self._config = config or FsConfig()
        self._tree = Tree(self._config)
        self._resolver = Resolver(self._tree, max_symlink_depth=self._config.max_symlink_depth)
        self._cwd = "/"
        self._lock = threading.RLock()

    @property
    def config(self) -> FsConfig:
        """Return the settings this instance was built with."""
        return self._config

    def _guard(self) -> contextlib.AbstractContextManager[Any]:
        return self._lock

    def _resolve(
        self,
        path: str,
        *,
        follow_symlinks: bool = True,
        enforce_trailing: bool = True,
    ) -> Resolution:
        return self._resolver.resolve(
            path,
            cwd=self._cwd,
            follow_symlinks=follow_symlinks,
            enforce_trailing=enforce_trailing,
        )

    def _existing(self, path: str, *, follow_symlinks: bool = True) -> Node:
        node = self._resolve(path, follow_symlinks=follow_symlinks).node
        if node is None:
            raise fs_error(ErrorKind.NOT_FOUND, path)
        return node

    # -- current directory -------------------------------------------------

    @operation(LogLevel.DEBUG)
    def current_dir(self) -> str:
        """Return the canonical current directory.

        Raises:
            FileNotFoundError: If the directory was removed since.

        """
        try:
            node = self._resolve(self._cwd).node
        except FileNotFoundError:
            node = None
        if not isinstance(node, Directory):
            raise fs_error(ErrorKind.NOT_FOUND, self._cwd)
        return self._cwd

    @operation(LogLevel.INFO)
    def set_current_dir(self, path: PathArg) -> None:
        """Change the directory relative paths are resolved against.

        Raises:
            FileNotFoundError: If *path* does not exist.
            NotADirectoryError: If *path* is not a directory.
            PermissionError: If the directory is not searchable.

        """
        p = fspath(path)
        res = self._resolve(p)
        if res.node is None:
            raise fs_error(ErrorKind.NOT_FOUND, p)
        if not isinstance(res.node, Directory):
            raise fs_error(ErrorKind.NOT_A_DIRECTORY, p)
        require(res.node, Access.EXECUTE, p)
        self._cwd = res.path

    # -- queries -----------------------------------------------------------

    def _probe(self, path: PathArg, *, follow_symlinks: bool = True) -> Node | None:
        try:
            return self._resolve(fspath(path), follow_symlinks=follow_symlinks).node
        except OSError:
            return None

    @operation(LogLevel.DEBUG)
    def exists(self, path: PathArg) -> bool:
        """Return True if *path* resolves to a node (following symlinks)."""
        return self._probe(path) is not None

    @operation(LogLevel.DEBUG)
    def is_dir(self, path: PathArg) -> bool:
        """Return True if *path* resolves to a directory."""
        return isinstance(self._probe(path), Directory)

    @operation(LogLevel.DEBUG)
    def is_file(self, path: PathArg) -> bool:
        """Return True if *path* resolves to a regular file."""
        return isinstance(self._probe(path), File)

    @operation(LogLevel.DEBUG)
    def is_symlink(self, path: PathArg) -> bool:
        """Return True if *path* itself is a symlink (dangling or not)."""
        return isinstance(self._probe(path, follow_symlinks=False), Symlink)

    @operation(LogLevel.DEBUG)
    def metadata(self, path: PathArg) -> Metadata:
        """Return metadata of the node *path* resolves to (like ``stat``)."""
        p = fspath(path)
        return self._existing(p).to_metadata(self._config.dir_size)

    @operation(LogLevel.DEBUG)
    def symlink_metadata(self, path: PathArg) -> Metadata:
        """Return metadata without following a final symlink (like ``lstat``)."""
        p = fspath(path)
        return self._existing(p, follow_symlinks=False).to_metadata(self._config.dir_size)

    @operation(LogLevel.DEBUG)
    def len(self, path: PathArg) -> int:
        """Return the length of *path*, or 0 if it cannot be resolved."""
        node = self._probe(path)
        return node.size(self._config.dir_size) if node is not None else 0

    # -- directories -------------------------------------------------------

    @operation(LogLevel.INFO)
    def create_dir(self, path: PathArg, *, parents: bool = False) -> None:
        """Create a directory.

        With *parents*, missing ancestors are created too and an existing
        directory at *path* is accepted (like ``os.makedirs(exist_ok=True)``).

        Raises:
            FileExistsError: If *path* is occupied (by a non-directory,
                when *parents* is set).
            FileNotFoundError: If an ancestor is missing and *parents*
                is not set.
            PermissionError: If the parent directory is not writable.

        """
        p = fspath(path)
        if parents:
            self._create_dir_all(p)
            return
        self._mkdir(p, [])

    @operation(LogLevel.INFO)
    def create_dir_all(self, path: PathArg) -> None:
        """Create *path* and any missing ancestors."""
        self._create_dir_all(fspath(path))

    def _create_dir_all(self, p: str) -> None:
        created: list[tuple[Directory, str, float]] = []
        try:
            self._make_dirs(p, created)
        except OSError:
            for parent, name, stamp in reversed(created):
                self._tree.detach(parent, name)
                parent.modified_at = stamp
            raise

    def _make_dirs(self, p: str, created: list[tuple[Directory, str, float]]) -> None:
        # Same recursion as os.makedirs, so "link/.." climbs out of the
        # link's target exactly as the real call does.
        head, tail = posixpath.split(p)
        if not tail:
            head, tail = posixpath.split(head)
        if head and tail and self._probe(head) is None:
            with contextlib.suppress(FileExistsError):
                self._make_dirs(head, created)
            if tail == CURRENT_DIR:
                return
        try:
            self._mkdir(p, created)
        except OSError:
            if not isinstance(self._probe(p), Directory):
                raise

    def _mkdir(self, p: str, created: list[tuple[Directory, str, float]]) -> None:
        res = self._resolve(p, follow_symlinks=False, enforce_trailing=False)
        if res.node is not None:
            raise fs_error(ErrorKind.ALREADY_EXISTS, p)
        parent = self._parent_of(res, p)
        require(parent, Access.WRITE, p)
        stamp = parent.modified_at
        self._tree.attach(parent, res.name, self._tree.new_dir())
        created.append((parent, res.name, stamp))

    @operation(LogLevel.DEBUG)
    def read_dir(self, path: PathArg) -> list[str]:
        """Return the sorted names of the direct children of a directory.

        Raises:
            FileNotFoundError: If *path* does not exist.
            NotADirectoryError: If *path* is not a directory.
            PermissionError: If the directory lacks read or execute.

        """
        p = fspath(path)
        node = self._existing(p)
        if not isinstance(node, Directory):
            raise fs_error(ErrorKind.NOT_A_DIRECTORY, p)
        require_all(node, (Access.READ, Access.EXECUTE), p)
        return sorted(node.children)

    @operation(LogLevel.INFO)
    def remove_dir(self, path: PathArg) -> None:
        """Remove an empty directory.

        Raises:
            FileNotFoundError: If *path* does not exist.
            PermissionError: If the parent directory is not writable.
            NotADirectoryError: If *path* is a file or a symlink.
            OSError: (EINVAL) If *path* ends in ``.``; (ENOTEMPTY) if it
                ends in ``..`` or the directory has entries; (EBUSY) for
                the root.

        """
        p = fspath(path)
        res = self._resolve(p, follow_symlinks=False, enforce_trailing=False)
        refuse_dot_removal(res.last, p)
        if res.node is None:
            raise fs_error(ErrorKind.NOT_FOUND, p)
        parent = self._parent_of(res, p)
        require(parent, Access.WRITE, p)
        if not isinstance(res.node, Directory):
            raise fs_error(ErrorKind.NOT_A_DIRECTORY, p)
        if not res.node.is_empty():
            raise fs_error(ErrorKind.DIRECTORY_NOT_EMPTY, p)
        self._tree.detach(parent, res.name)

    @operation(LogLevel.INFO)
    def remove_dir_all(self, path: PathArg) -> None:
        """Remove a directory and everything below it.

        Nothing is removed unless the parent is writable, every node of
        the tree is readable, and every non-empty directory in it is
        writable and searchable.  Symlinks inside the tree are removed,
        never followed.

        Raises:
            FileNotFoundError: If *path* does not exist.
            NotADirectoryError: If *path* is a file.
            PermissionError: If any node of the subtree fails the checks
                above, or the parent is not writable.
            OSError: If *path* is a symlink or the root; (EINVAL) if it
                ends in ``.``; (ENOTEMPTY) if it ends in ``..``.

        """
        p = fspath(path)
        res = self._resolve(p, follow_symlinks=False, enforce_trailing=False)
        refuse_dot_removal(res.last, p)
        node = res.node
        if node is None:
            raise fs_error(ErrorKind.NOT_FOUND, p)
        if isinstance(node, Symlink):
            msg = "Cannot call rmtree on a symbolic link"
            raise OSError(msg)
        if not isinstance(node, Directory):
            raise fs_error(ErrorKind.NOT_A_DIRECTORY, p)
        parent = self._parent_of(res, p)
        require(parent, Access.WRITE, p)
        self._require_removable(node, p)
        self._tree.detach(parent, res.name)

    def _require_removable(self, top: Directory, path: str) -> None:
        nodes: list[tuple[str, Node]] = [(path, top)]
        nodes.extend((posixpath.join(path, rel), child) for rel, child in self._tree.walk(top))
        for where, node in nodes:
            require(node, Access.READ, where)
            if isinstance(node, Directory) and node.children:
                # unlinking an entry needs write and search on its directory
                require_all(node, (Access.WRITE, Access.EXECUTE), where)

    # -- files -------------------------------------------------------------

    @operation(LogLevel.INFO)
    def create_file(self, path: PathArg, content: bytes = b"") -> None:
        """Create a new file holding *content*.

        Raises:
            IsADirectoryError: If *path* ends with a separator.
            FileExistsError: If *path* is occupied, even by a dangling symlink.
            FileNotFoundError: If the parent directory does not exist.
            PermissionError: If the parent directory is not writable.

        """
        p = fspath(path)
        res = self._resolve(p, follow_symlinks=False, enforce_trailing=False)
        if res.trailing_sep:
            raise fs_error(ErrorKind.IS_A_DIRECTORY, p)
        if res.node is not None:
            raise fs_error(ErrorKind.ALREADY_EXISTS, p)
        parent = self._parent_of(res, p)
        require(parent, Access.WRITE, p)
        self._tree.attach(parent, res.name, self._tree.new_file(content))

    @operation(LogLevel.INFO)
    def write_file(
        self,
        path: PathArg,
        content: bytes,
        *,
        append: bool = False,
        create: bool = True,
    ) -> None:
        """Replace (or extend, with *append*) the content of a file.

        A missing file is created when *create* is set.  Writing through
        a dangling symlink creates the link's target.

        Raises:
            FileNotFoundError: If the file is missing and *create* is off,
                or its directory does not exist.
            IsADirectoryError: If *path* is a directory, or *create* is
                set and *path* ends with a separator.
            PermissionError: If the file (or, for a new file, its
                directory) is not writable.

        """
        p = fspath(path)
        self._write(p, bytes(content), append=append, create=create)

    @operation(LogLevel.INFO)
    def overwrite_file(self, path: PathArg, content: bytes) -> None:
        """Replace the content of an existing file; never create one."""
        p = fspath(path)
        self._write(p, bytes(content), append=False, create=False)

    def _write(self, p: str, content: bytes, *, append: bool, create: bool) -> None:
        if create:
            # O_CREAT with a trailing separator is EISDIR whatever is there
            res = self._resolve(p, enforce_trailing=False)
            if res.trailing_sep:
                raise fs_error(ErrorKind.IS_A_DIRECTORY, p)
        else:
            res = self._resolve(p)
        node = res.node
        if node is None:
            if not create:
                raise fs_error(ErrorKind.NOT_FOUND, p)
            parent = self._parent_of(res, p)
            require(parent, Access.WRITE, p)
            self._tree.attach(parent, res.name, self._tree.new_file(content))
            return
        if isinstance(node, Directory):
            raise fs_error(ErrorKind.IS_A_DIRECTORY, p)
        require(node, Access.WRITE, p)
        assert isinstance(node, File)  # noqa: S101
        node.content = node.content + content if append else content
        node.touch()

    def _readable_file(self, p: str) -> File:
        node = self._existing(p)
        require(node, Access.READ, p)
        if isinstance(node, Directory):
            raise fs_error(ErrorKind.IS_A_DIRECTORY, p)
        assert isinstance(node, File)  # noqa: S101
        return node

    @operation(LogLevel.DEBUG)
    def read_file(self, path: PathArg) -> bytes:
        """Return the content of a file, following symlinks.

        Raises:
            FileNotFoundError: If *path* does not exist.
            PermissionError: If the file is not readable.
            IsADirectoryError: If *path* is a directory.

        """
        return self._readable_file(fspath(path)).content

    @operation(LogLevel.DEBUG)
    def read_file_to_string(self, path: PathArg) -> str:
        """Return the content of a file decoded as UTF-8."""
        return self._readable_file(fspath(path)).content.decode("utf-8")

    @operation(LogLevel.DEBUG)
    def read_file_into(self, path: PathArg, sink: bytearray) -> int:
        """Append the content of a file to *sink*, returning the byte count."""
        content = self._readable_file(fspath(path)).content
        sink.extend(content)
        return len(content)

    @operation(LogLevel.DEBUG)
    def open(self, path: PathArg) -> FakeOpenFile:
        """Open a file for reading.

        Access is checked now.  The handle keeps the file it opened, like
        a file descriptor: later writes are visible through it, while a
        rename, removal or chmod of the path is not.
        """
        p = fspath(path)
        node = self._readable_file(p)
        return FakeOpenFile(node, join(self._cwd, p), self._lock)

    @operation(LogLevel.INFO)
    def remove_file(self, path: PathArg) -> None:
        """Remove a file or a symlink (never the symlink's target).

        Raises:
            FileNotFoundError: If *path* does not exist.
            PermissionError: If the parent directory is not writable.
            IsADirectoryError: If *path* is a directory.
            NotADirectoryError: If *path* ends with a separator but names
                a file or a symlink.

        """
        p = fspath(path)
        res = self._resolve(p, follow_symlinks=False, enforce_trailing=False)
        if res.last in DOT_NAMES:
            raise fs_error(ErrorKind.IS_A_DIRECTORY, p)
        if res.node is None:
            raise fs_error(ErrorKind.NOT_FOUND, p)
        if res.trailing_sep:
            kind = ErrorKind.IS_A_DIRECTORY if isinstance(res.node, Directory) else ErrorKind.NOT_A_DIRECTORY
            raise fs_error(kind, p)
        if res.parent is not None:
            require(res.parent, Access.WRITE, p)
        if isinstance(res.node, Directory):
            raise fs_error(ErrorKind.IS_A_DIRECTORY, p)
        self._tree.detach(self._parent_of(res, p), res.name)

    @operation(LogLevel.INFO)
    def copy_file(self, src: PathArg, dst: PathArg) -> None:
        """Copy the content of regular file *src* to *dst*.

        An existing *dst* keeps its own mode; a new one gets the default
        file mode.

        Raises:
            FileNotFoundError: If *src* is missing or not a regular file,
                or *dst* ends with a separator and is not a directory.
            PermissionError: If *src* is unreadable, or *dst* (or its
                directory, for a new file) is not writable.
            IsADirectoryError: If *dst* is a directory.
            shutil.SameFileError: If both paths name the same file.

        """
        s, d = fspath(src), fspath(dst)
        source = self._resolve(s).node
        if not isinstance(source, File):
            raise fs_error(ErrorKind.NOT_FOUND, s)
        require(source, Access.READ, s)
        content = source.content

        res = self._resolve(d, enforce_trailing=False)
        target = res.node
        if res.trailing_sep:
            kind = ErrorKind.IS_A_DIRECTORY if isinstance(target, Directory) else ErrorKind.NOT_FOUND
            raise fs_error(kind, d)
        if target is source:
            msg = f"{s!r} and {d!r} are the same file"
            raise shutil.SameFileError(msg)
        if target is None:
            parent = self._parent_of(res, d)
            require(parent, Access.WRITE, d)
            self._tree.attach(parent, res.name, self._tree.new_file(content))
            return
        if isinstance(target, Directory):
            raise fs_error(ErrorKind.IS_A_DIRECTORY, d)
        require(target, Access.WRITE, d)
        assert isinstance(target, File)  # noqa: S101
        target.content = content
        target.touch()

    # -- symlinks ----------------------------------------------------------

    @operation(LogLevel.INFO)
    def create_symlink(self, path: PathArg, target: PathArg) -> None:
        """Create a symlink at *path* pointing to *target*.

        The target is stored verbatim and may be relative, absolute, or
        dangling; it is only interpreted when the link is traversed.

        Raises:
            FileExistsError: If *path* is occupied.
            FileNotFoundError: If the parent directory does not exist, or
                *path* is free but ends with a separator.
            PermissionError: If the parent directory is not writable.

        """
        p = fspath(path)
        res = self._resolve(p, follow_symlinks=False, enforce_trailing=False)
        if res.node is not None:
            raise fs_error(ErrorKind.ALREADY_EXISTS, p)
        if res.trailing_sep:
            raise fs_error(ErrorKind.NOT_FOUND, p)
        parent = self._parent_of(res, p)
        require(parent, Access.WRITE, p)
        self._tree.attach(parent, res.name, self._tree.new_symlink(fspath(target)))

    @operation(LogLevel.DEBUG)
    def read_link(self, path: PathArg) -> str:
        """Return the target stored in a symlink.

        Raises:
            FileNotFoundError: If *path* does not exist.
            OSError: (EINVAL) If *path* is not a symlink.

        """
        p = fspath(path)
        node = self._existing(p, follow_symlinks=False)
        if not isinstance(node, Symlink):
            raise fs_error(ErrorKind.INVALID_INPUT, p)
        return node.target

    # -- moving ------------------------------------------------------------

    @operation(LogLevel.INFO)
    def rename(self, src: PathArg, dst: PathArg) -> None:
        """Move the node at *src* to *dst*, replacing a compatible *dst*.

        Neither path's final symlink is followed, even with a trailing
        separator: a link is moved as a link.  The move detaches the
        subtree and reattaches it in one step.

        Raises:
            FileNotFoundError: If *src* or the parent of *dst* is missing.
            OSError: (EBUSY) If either path is the root or ends in ``.``
                or ``..``; (EINVAL) if a directory would move inside
                itself; (ENOTEMPTY) if *dst* is a non-empty directory or
                an ancestor of *src*.
            PermissionError: If either parent directory is not writable.
            NotADirectoryError: If a directory would replace a
                non-directory, or a non-directory is named with a
                trailing separator.
            IsADirectoryError: If a non-directory would replace a directory.

        """
        s, d = fspath(src), fspath(dst)
        source = self._resolve(s, follow_symlinks=False, enforce_trailing=False)
        dest = self._resolve(d, follow_symlinks=False, enforce_trailing=False)
        for res, shown in ((source, s), (dest, d)):
            if res.last in DOT_NAMES:
                raise fs_error(ErrorKind.OTHER, shown, err_no=errno.EBUSY)
        src_parent = self._parent_of(source, s)
        dst_parent = self._parent_of(dest, d)
        moving = source.node
        if moving is None:
            raise fs_error(ErrorKind.NOT_FOUND, s)
        if not isinstance(moving, Directory) and (source.trailing_sep or dest.trailing_sep):
            raise fs_error(ErrorKind.NOT_A_DIRECTORY, s if source.trailing_sep else d)

        replaced = dest.node
        if replaced is moving:
            return
        if isinstance(moving, Directory) and any(a is moving for a in dest.ancestors):
            raise fs_error(ErrorKind.INVALID_INPUT, d)
        if replaced is not None and any(a is replaced for a in source.ancestors):
            raise fs_error(ErrorKind.DIRECTORY_NOT_EMPTY, d)
        require(src_parent, Access.WRITE, s)
        require(dst_parent, Access.WRITE, d)
        if replaced is not None:
            if isinstance(moving, Directory) and not isinstance(replaced, Directory):
                raise fs_error(ErrorKind.NOT_A_DIRECTORY, d)
            if not isinstance(moving, Directory) and isinstance(replaced, Directory):
                raise fs_error(ErrorKind.IS_A_DIRECTORY, d)
            if isinstance(replaced, Directory) and not replaced.is_empty():
                raise fs_error(ErrorKind.DIRECTORY_NOT_EMPTY, d)

        self._tree.detach(src_parent, source.name)
        self._tree.replace(dst_parent, dest.name, moving)

    def move(self, src: PathArg, dst: PathArg) -> None:
        """Alias of ``rename``."""
        self.rename(src, dst)

    # -- permissions -------------------------------------------------------

    @operation(LogLevel.INFO)
    def set_permissions(self, path: PathArg, mode: int) -> None:
        """Replace the permission bits of the node *path* resolves to.

        Only that node changes; descendants keep their own bits.
        """
        p = fspath(path)
        node = self._existing(p)
        node.mode = mode & MODE_MASK

    def set_mode(self, path: PathArg, mode: int) -> None:
        """Alias of ``set_permissions``."""
        self.set_permissions(path, mode)

    @operation(LogLevel.DEBUG)
    def mode(self, path: PathArg) -> int:
        """Return the permission bits of the node *path* resolves to."""
        return self._existing(fspath(path)).mode

    @operation(LogLevel.DEBUG)
    def readonly(self, path: PathArg) -> bool:
        """Return True if the node *path* resolves to has no write bit."""
        return not check(self._existing(fspath(path)), Access.WRITE)

    @operation(LogLevel.INFO)
    def set_readonly(self, path: PathArg, readonly: bool) -> None:  # noqa: FBT001
        """Clear (or restore) every write bit of the node *path* resolves to."""
        node = self._existing(fspath(path))
        node.mode = set_readonly_bits(node.mode, readonly=readonly)

    # -- temporary directories ---------------------------------------------

    @operation(LogLevel.INFO)
    def temp_dir(self, prefix: str) -> TempDir:
        """Create a uniquely named directory under the configured temp root.

        The directory lives at ``<temp_root>/<prefix>/<prefix>_<suffix>``
        and is removed by ``TempDir.cleanup()`` or on leaving a ``with``.
        """
        alphabet = string.ascii_letters + string.digits
        base = posixpath.join(self._config.temp_root, prefix)
        while True:
            suffix = "".join(random.choices(alphabet, k=self._config.temp_suffix_length))  # noqa: S311
            path = posixpath.join(base, f"{prefix}_{suffix}")
            if self._probe(path, follow_symlinks=False) is None:
                break
        self._create_dir_all(path)
        return TempDir(self, path)

    # -- snapshots ---------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Serialize the tree (see ``Tree.to_dict``)."""
        with self._lock:
            return self._tree.to_dict()

    def _parent_of(self, res: Resolution, path: str) -> Directory:
        """Return the owning directory, or raise EBUSY for the root."""
        if res.parent is None:
            raise fs_error(ErrorKind.OTHER, path, err_no=errno.EBUSY)
        return res.parent
