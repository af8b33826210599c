"""Error taxonomy — the fixed set of ways a filesystem call can fail.

Code under test usually reacts to filesystem failures by *kind*: "the
file is missing", "I am not allowed", "it is a directory".  The emulator
has to report the same kind the real OS would, or tests written against
one backend stop meaning anything for the other.

We do not invent a parallel exception hierarchy.  Python already has
one: ``OSError(errno.ENOENT, ...)`` is automatically constructed as a
``FileNotFoundError``, ``EACCES`` as a ``PermissionError``, and so on.
The emulator raises exactly those, built from an errno and the OS's own
``strerror`` text, so the message is identical to a real failure.

``ErrorKind`` is the taxonomy on top: ``error_kind(exc)`` classifies any
``OSError``, whichever backend raised it.
"""

from __future__ import annotations

import errno
import os
from enum import StrEnum


class ErrorKind(StrEnum):
    """Enumerate the failure kinds every backend reports."""

    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    PERMISSION_DENIED = "permission_denied"
    NOT_A_DIRECTORY = "not_a_directory"
    IS_A_DIRECTORY = "is_a_directory"
    DIRECTORY_NOT_EMPTY = "directory_not_empty"
    TOO_MANY_LINKS = "too_many_links"
    INVALID_INPUT = "invalid_input"
    OTHER = "other"


_KIND_TO_ERRNO: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: errno.ENOENT,
    ErrorKind.ALREADY_EXISTS: errno.EEXIST,
    ErrorKind.PERMISSION_DENIED: errno.EACCES,
    ErrorKind.NOT_A_DIRECTORY: errno.ENOTDIR,
    ErrorKind.IS_A_DIRECTORY: errno.EISDIR,
    ErrorKind.DIRECTORY_NOT_EMPTY: errno.ENOTEMPTY,
    ErrorKind.TOO_MANY_LINKS: errno.ELOOP,
    ErrorKind.INVALID_INPUT: errno.EINVAL,
    ErrorKind.OTHER: errno.EBUSY,
}

_ERRNO_TO_KIND: dict[int, ErrorKind] = {
    errno.ENOENT: ErrorKind.NOT_FOUND,
    errno.EEXIST: ErrorKind.ALREADY_EXISTS,
    errno.EACCES: ErrorKind.PERMISSION_DENIED,
    errno.EPERM: ErrorKind.PERMISSION_DENIED,
    errno.ENOTDIR: ErrorKind.NOT_A_DIRECTORY,
    errno.EISDIR: ErrorKind.IS_A_DIRECTORY,
    errno.ENOTEMPTY: ErrorKind.DIRECTORY_NOT_EMPTY,
    errno.ELOOP: ErrorKind.TOO_MANY_LINKS,
    errno.EINVAL: ErrorKind.INVALID_INPUT,
}


def errno_for(kind: ErrorKind) -> int:
    """Return the errno the emulator uses for *kind*.

    ``OTHER`` has no natural errno; the emulator only raises it where
    Linux answers ``EBUSY`` (removing or renaming the root).
    """
    return _KIND_TO_ERRNO[kind]


def fs_error(kind: ErrorKind, path: str | None = None, *, err_no: int | None = None) -> OSError:
    """Build the ``OSError`` a real filesystem would raise for *kind*.

    Args:
        kind: The taxonomy kind of the failure.
        path: The path the caller passed, reported as ``filename``.
        err_no: Override the errno (only meaningful for ``OTHER``).

    Returns:
        An ``OSError`` instance; Python picks the builtin subclass
        (``FileNotFoundError``, ``PermissionError``, ...) from the errno.

    """
    code = err_no if err_no is not None else errno_for(kind)
    return OSError(code, os.strerror(code), path)


def error_kind(exc: OSError) -> ErrorKind:
    """Classify an ``OSError`` from any backend into an ``ErrorKind``."""
    if exc.errno is None:
        return ErrorKind.OTHER
    return _ERRNO_TO_KIND.get(exc.errno, ErrorKind.OTHER)
