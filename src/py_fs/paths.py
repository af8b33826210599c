"""Path grammar — turning path strings into components and back.

The only "wire format" an in-memory filesystem has is the path string.
To behave like the real thing it has to parse paths the way POSIX does:

- ``/`` is the only separator, and runs of separators collapse
  (``/a//b`` is ``/a/b``).
- A leading ``/`` makes a path **absolute**; anything else is relative
  to the current directory.
- ``.`` and ``..`` are kept as components.  They are NOT folded away
  lexically, because ``link/..`` means "the parent of wherever *link*
  points", which only the resolver knows.
- A trailing separator (``dir/``) is remembered: the final component
  must then be a directory, and a symlink there is always followed.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

SEPARATOR = "/"
CURRENT_DIR = "."
PARENT_DIR = ".."
DOT_NAMES = (CURRENT_DIR, PARENT_DIR)

PathArg = str | bytes | os.PathLike[str] | os.PathLike[bytes]


@dataclass(frozen=True)
class ParsedPath:
    """A path string split into its parts."""

    absolute: bool
    components: tuple[str, ...]
    trailing_sep: bool = False

    @property
    def last(self) -> str:
        """Return the final component as written (``"."`` and ``".."`` included)."""
        return self.components[-1] if self.components else ""


def fspath(path: PathArg) -> str:
    """Convert any accepted path argument into a ``str``.

    Raises:
        TypeError: If *path* is not a str, bytes, or path-like object.
        ValueError: If the path contains a NUL byte.

    """
    raw = os.fspath(path)
    text = os.fsdecode(raw) if isinstance(raw, bytes) else raw
    if "\x00" in text:
        msg = "embedded null byte"
        raise ValueError(msg)
    return text


def split_path(path: PathArg) -> ParsedPath:
    """Split a path into components.

    Examples::

        "/foo/bar"  → ParsedPath(True, ("foo", "bar"))
        "foo//bar/" → ParsedPath(False, ("foo", "bar"), trailing_sep=True)
        "/"         → ParsedPath(True, ())

    """
    text = fspath(path)
    absolute = text.startswith(SEPARATOR)
    components = tuple(part for part in text.split(SEPARATOR) if part)
    trailing_sep = text.endswith(SEPARATOR) and bool(components)
    return ParsedPath(absolute=absolute, components=components, trailing_sep=trailing_sep)


def to_path_string(components: tuple[str, ...] | list[str], *, absolute: bool = True) -> str:
    """Join components back into a path string."""
    body = SEPARATOR.join(components)
    if absolute:
        return SEPARATOR + body
    return body or CURRENT_DIR


def join(base: str, path: PathArg) -> str:
    """Join *path* onto *base* unless *path* is already absolute."""
    text = fspath(path)
    if text.startswith(SEPARATOR):
        return text
    if not text:
        return base
    return base.rstrip(SEPARATOR) + SEPARATOR + text


def is_valid_name(name: str) -> bool:
    """Return True if *name* can be stored as a directory entry."""
    return bool(name) and SEPARATOR not in name and name not in DOT_NAMES
