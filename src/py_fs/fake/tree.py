"""Tree store — owns the root directory and every node below it.

All structural mutation of the emulated filesystem goes through here:
nodes are created with the configured default modes, attached under a
parent name, detached, or swapped in place.  The store enforces the two
structural invariants:

- names are unique within one directory;
- a name is non-empty and contains no separator (and is not ``.``/``..``).

Nothing here looks at paths or permissions; that is the resolver's and
the engine's job.  The tree only knows parents, names, and children.
"""

from __future__ import annotations

import base64
from collections.abc import Iterator
from typing import Any

from py_fs.config import FsConfig
from py_fs.errors import ErrorKind, fs_error
from py_fs.fake.node import Directory, File, Node, Symlink
from py_fs.paths import is_valid_name


class Tree:
    """A single rooted tree of nodes.  The root is always a directory."""

    def __init__(self, config: FsConfig | None = None) -> None:
        """Create a tree holding only an empty root directory."""
        self._config = config or FsConfig()
        self.root = Directory(mode=self._config.dir_mode)

    def new_file(self, content: bytes = b"") -> File:
        """Create a detached file with the default file mode."""
        return File(mode=self._config.file_mode, content=bytes(content))

    def new_dir(self) -> Directory:
        """Create a detached, empty directory with the default mode."""
        return Directory(mode=self._config.dir_mode)

    def new_symlink(self, target: str) -> Symlink:
        """Create a detached symlink storing *target* verbatim."""
        return Symlink(mode=self._config.symlink_mode, target=target)

    def attach(self, parent: Directory, name: str, node: Node) -> None:
        """Link *node* into *parent* under *name*.

        Raises:
            FileExistsError: If *name* is already taken in *parent*.
            OSError: (EINVAL) If *name* is not a valid entry name.

        """
        if not is_valid_name(name):
            raise fs_error(ErrorKind.INVALID_INPUT, name)
        if name in parent.children:
            raise fs_error(ErrorKind.ALREADY_EXISTS, name)
        parent.children[name] = node
        parent.touch()

    def detach(self, parent: Directory, name: str) -> Node:
        """Unlink and return the child called *name*.

        Raises:
            FileNotFoundError: If *parent* has no such child.

        """
        node = parent.children.pop(name, None)
        if node is None:
            raise fs_error(ErrorKind.NOT_FOUND, name)
        parent.touch()
        return node

    def replace(self, parent: Directory, name: str, node: Node) -> None:
        """Put *node* under *name*, dropping whatever was there before."""
        parent.children[name] = node
        parent.touch()

    def walk(self, directory: Directory, prefix: str = "") -> Iterator[tuple[str, Node]]:
        """Yield ``(relative_path, node)`` for every descendant of *directory*.

        Symlinks are yielded as nodes but never followed, so the walk
        stays inside the owned subtree even when links form cycles.
        """
        for name, child in directory.children.items():
            rel = f"{prefix}/{name}" if prefix else name
            yield rel, child
            if isinstance(child, Directory):
                yield from self.walk(child, rel)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the whole tree to a JSON-compatible dictionary.

        File data is base64-encoded so binary content survives JSON
        serialization.  Two snapshots compare equal exactly when the
        trees hold the same names, types, modes, contents, and times.
        """
        return _node_to_dict(self.root)


def _node_to_dict(node: Node) -> dict[str, Any]:
    data: dict[str, Any] = {
        "file_type": node.file_type.value,
        "mode": node.mode,
        "created_at": node.created_at,
        "modified_at": node.modified_at,
    }
    if isinstance(node, File):
        data["content"] = base64.b64encode(node.content).decode("ascii")
    elif isinstance(node, Symlink):
        data["target"] = node.target
    elif isinstance(node, Directory):
        data["children"] = {name: _node_to_dict(child) for name, child in sorted(node.children.items())}
    return data
