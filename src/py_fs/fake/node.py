"""Nodes — the three kinds of entry the emulated tree is made of.

- **File** owns its bytes.
- **Directory** owns a ``dict[str, Node]`` of children.  A name lives in
  the parent's dict, not in the node, so renaming a node is just moving
  it between dict keys.
- **Symlink** owns a target path *string*.  The target is never an
  ownership edge: it may be relative, absolute, dangling, or point back
  up the tree.

Every node also carries permission bits and timestamps.  ``Metadata`` is
the read-only snapshot handed out to callers (the emulator's ``stat``).
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import StrEnum
from typing import ClassVar

READ_BITS = 0o444
WRITE_BITS = 0o222
EXEC_BITS = 0o111
MODE_MASK = 0o7777


class FileType(StrEnum):
    """The kind of object a node represents."""

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"


@dataclass(frozen=True)
class Metadata:
    """Read-only snapshot of a node's attributes (returned by metadata)."""

    file_type: FileType
    mode: int
    length: int
    created_at: float
    modified_at: float

    @property
    def readable(self) -> bool:
        """Return True if any read bit is set."""
        return bool(self.mode & READ_BITS)

    @property
    def writable(self) -> bool:
        """Return True if any write bit is set."""
        return bool(self.mode & WRITE_BITS)

    @property
    def executable(self) -> bool:
        """Return True if any execute bit is set."""
        return bool(self.mode & EXEC_BITS)

    @property
    def readonly(self) -> bool:
        """Return True if no write bit is set."""
        return not self.writable

    def is_file(self) -> bool:
        return self.file_type is FileType.FILE

    def is_dir(self) -> bool:
        return self.file_type is FileType.DIRECTORY

    def is_symlink(self) -> bool:
        return self.file_type is FileType.SYMLINK


@dataclass(kw_only=True)
class Node:
    """Fields shared by every node in the tree."""

    file_type: ClassVar[FileType]

    mode: int
    created_at: float = field(default_factory=time.time)
    modified_at: float = 0.0

    def __post_init__(self) -> None:
        """Start with modified == created unless told otherwise."""
        if not self.modified_at:
            self.modified_at = self.created_at

    def size(self, dir_size: int) -> int:
        """Return the length reported by metadata."""
        raise NotImplementedError

    def touch(self) -> None:
        """Record a modification now."""
        self.modified_at = time.time()

    def to_metadata(self, dir_size: int = 4096) -> Metadata:
        """Create a read-only snapshot of this node."""
        return Metadata(
            file_type=self.file_type,
            mode=self.mode,
            length=self.size(dir_size),
            created_at=self.created_at,
            modified_at=self.modified_at,
        )


@dataclass(kw_only=True)
class File(Node):
    """A regular file holding raw bytes."""

    file_type: ClassVar[FileType] = FileType.FILE

    content: bytes = b""

    def size(self, dir_size: int) -> int:
        return len(self.content)


@dataclass(kw_only=True)
class Directory(Node):
    """A directory mapping child names to nodes."""

    file_type: ClassVar[FileType] = FileType.DIRECTORY

    children: dict[str, Node] = field(default_factory=dict)  # pyright: ignore[reportUnknownVariableType]

    def size(self, dir_size: int) -> int:
        return dir_size

    def is_empty(self) -> bool:
        return not self.children


@dataclass(kw_only=True)
class Symlink(Node):
    """A symbolic link storing its target path verbatim."""

    file_type: ClassVar[FileType] = FileType.SYMLINK

    target: str = ""

    def size(self, dir_size: int) -> int:
        # Linux reports the byte length of the target for lstat().st_size
        return len(self.target.encode())
