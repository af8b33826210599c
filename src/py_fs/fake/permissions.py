"""Permission model — may this access happen on this node?

Each node carries ``rwx`` bits.  The emulator models a single caller and
has no users or groups, so a bit counts as granted when it is set in any
of the user/group/other positions.  There is no root
bypass: a test that revokes read permission sees reads fail.

What each access means depends on the node:

=============  ==========================  ===========================
Access         File                        Directory
=============  ==========================  ===========================
READ           read the content            list the entries
WRITE          change the content          create or remove entries
EXECUTE        (not used)                  enter it during resolution
=============  ==========================  ===========================

Permission is evaluated per node touched.  Recursive removal therefore
checks every node of the subtree, not just its root.
"""

from __future__ import annotations

from enum import StrEnum

from py_fs.errors import ErrorKind, fs_error
from py_fs.fake.node import EXEC_BITS, READ_BITS, WRITE_BITS, Node


class Access(StrEnum):
    """A kind of access requested on a node."""

    READ = "read"
    WRITE = "write"
    EXECUTE = "execute"


_ACCESS_BITS: dict[Access, int] = {
    Access.READ: READ_BITS,
    Access.WRITE: WRITE_BITS,
    Access.EXECUTE: EXEC_BITS,
}


def check(node: Node, access: Access) -> bool:
    """Return True if *node*'s mode grants *access*."""
    return bool(node.mode & _ACCESS_BITS[access])


def require(node: Node, access: Access, path: str | None = None) -> None:
    """Raise unless *node* grants *access*.

    Raises:
        PermissionError: (EACCES) If the bit is not set.

    """
    if not check(node, access):
        raise fs_error(ErrorKind.PERMISSION_DENIED, path)


def require_all(node: Node, accesses: tuple[Access, ...], path: str | None = None) -> None:
    """Raise unless *node* grants every access in *accesses*."""
    for access in accesses:
        require(node, access, path)


def set_readonly_bits(mode: int, *, readonly: bool) -> int:
    """Return *mode* with every write bit cleared (or set)."""
    if readonly:
        return mode & ~WRITE_BITS
    return mode | WRITE_BITS
