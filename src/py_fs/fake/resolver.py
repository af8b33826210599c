"""Path resolution — turning a path string into a place in the tree.

``/foo/link/baz.txt`` is walked component by component from the root
(or from the current directory for relative paths):

- ``.`` is skipped; ``..`` climbs to the parent of the directory we are
  *actually* in, so ``link/..`` is the parent of the link's target.
- Entering a directory needs its execute bit.
- A symlink met in the middle of the path is always expanded: its
  target's components are pushed onto the front of the work queue.  An
  absolute target restarts the walk at the root, a relative one carries
  on from the directory holding the link.
- A symlink as the *final* component is expanded only when the caller
  asks to follow it (``stat`` vs ``lstat``).

Symlinks may form cycles, so every expansion is counted and the walk
gives up with ``ELOOP`` after ``max_symlink_depth`` expansions.

The result is a ``Resolution``: the directory that owns (or would own)
the final name, the name, and the node if it exists.  Returning the
location of a *missing* final component is what lets ``create_file``,
``write_file`` and friends share one walk with ``read_file``.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, replace

from py_fs.config import MAX_SYMLINK_DEPTH
from py_fs.errors import ErrorKind, fs_error
from py_fs.fake.node import Directory, Node, Symlink
from py_fs.fake.permissions import Access, require
from py_fs.fake.tree import Tree
from py_fs.paths import CURRENT_DIR, PARENT_DIR, join, split_path, to_path_string


@dataclass(frozen=True)
class Resolution:
    """Where a path landed.

    Attributes:
        parent: Directory owning the final name (None for the root).
        name: The final component ("" for the root).
        node: The node found there, or None if nothing exists yet.
        path: Canonical absolute path of the location (no symlinks).
        ancestors: Directories from the root down to ``parent``.
        trailing_sep: The caller's path ended with a separator.
        last: The final component exactly as the caller wrote it, so
            callers can tell ``d/.`` from ``d``.

    """

    parent: Directory | None
    name: str
    node: Node | None
    path: str
    ancestors: tuple[Directory, ...]
    trailing_sep: bool = False
    last: str = ""


class Resolver:
    """Walk paths against a ``Tree``, expanding symlinks on the way."""

    def __init__(self, tree: Tree, *, max_symlink_depth: int = MAX_SYMLINK_DEPTH) -> None:
        """Bind the resolver to a tree and a symlink expansion limit."""
        self._tree = tree
        self._max_depth = max_symlink_depth

    def resolve(
        self,
        path: str,
        *,
        cwd: str = "/",
        follow_symlinks: bool = True,
        enforce_trailing: bool = True,
        display: str | None = None,
    ) -> Resolution:
        """Resolve *path* to a location in the tree.

        Args:
            path: Absolute path, or relative to *cwd*.
            cwd: Canonical absolute current directory.
            follow_symlinks: Expand a symlink in the final position.
            enforce_trailing: Treat a trailing separator as "must be a
                directory": a final symlink is then always followed and a
                non-directory is NotADirectory.  Calls that create or
                unlink the final name turn this off and judge the
                separator themselves, as the kernel does.
            display: Path to report in errors (defaults to *path*).

        Raises:
            FileNotFoundError: The path is empty, an intermediate component is
                missing, or a dangling symlink is traversed.
            NotADirectoryError: A non-directory is used as a directory.
            PermissionError: A directory on the way is not searchable.
            OSError: (ELOOP) Too many symlinks were expanded.

        """
        shown = display if display is not None else path
        if not path:
            # like the kernel, "" names nothing (it is not the cwd)
            raise fs_error(ErrorKind.NOT_FOUND, shown)
        parsed = split_path(join(cwd, path))
        must_be_dir = enforce_trailing and parsed.trailing_sep
        result = self._walk(
            deque(parsed.components),
            follow_final=follow_symlinks or must_be_dir,
            shown=shown,
        )
        if must_be_dir and result.node is not None and not isinstance(result.node, Directory):
            raise fs_error(ErrorKind.NOT_A_DIRECTORY, shown)
        return replace(result, trailing_sep=parsed.trailing_sep, last=parsed.last)

    def _walk(self, pending: deque[str], *, follow_final: bool, shown: str) -> Resolution:
        root = self._tree.root
        trail: list[tuple[str, Directory]] = []
        current = root
        expansions = 0

        while pending:
            name = pending.popleft()
            if name == CURRENT_DIR:
                continue
            require(current, Access.EXECUTE, shown)
            if name == PARENT_DIR:
                if trail:
                    trail.pop()
                current = trail[-1][1] if trail else root
                continue

            child = current.children.get(name)
            if isinstance(child, Symlink) and (pending or follow_final):
                expansions += 1
                if expansions > self._max_depth:
                    raise fs_error(ErrorKind.TOO_MANY_LINKS, shown)
                if not child.target:
                    raise fs_error(ErrorKind.NOT_FOUND, shown)
                target = split_path(child.target)
                if target.absolute:
                    trail.clear()
                    current = root
                pending.extendleft(reversed(target.components))
                continue

            if child is None:
                if pending:
                    raise fs_error(ErrorKind.NOT_FOUND, shown)
                return self._located(trail, current, name, None)
            if isinstance(child, Directory):
                if not pending:
                    return self._located(trail, current, name, child)
                trail.append((name, child))
                current = child
                continue
            # A file, or a symlink we were told not to follow.
            if pending:
                raise fs_error(ErrorKind.NOT_A_DIRECTORY, shown)
            return self._located(trail, current, name, child)

        return self._here(trail)

    def _located(
        self,
        trail: list[tuple[str, Directory]],
        parent: Directory,
        name: str,
        node: Node | None,
    ) -> Resolution:
        names = [n for n, _ in trail]
        names.append(name)
        return Resolution(
            parent=parent,
            name=name,
            node=node,
            path=to_path_string(names),
            ancestors=(self._tree.root, *(d for _, d in trail)),
        )

    def _here(self, trail: list[tuple[str, Directory]]) -> Resolution:
        """Describe the directory the walk ended in (via ``.``, ``..`` or ``/``)."""
        root = self._tree.root
        if not trail:
            return Resolution(parent=None, name="", node=root, path="/", ancestors=())
        name, node = trail[-1]
        above = trail[:-1]
        parent = above[-1][1] if above else root
        return Resolution(
            parent=parent,
            name=name,
            node=node,
            path=to_path_string([n for n, _ in trail]),
            ancestors=(root, *(d for _, d in above)),
        )
