"""Emulator configuration — the knobs a test suite may want to turn.

Defaults mirror a typical Linux box: new files are ``rw-r--r--``, new
directories ``rwxr-xr-x``, symlinks ``rwxrwxrwx``, and at most 40
symlinks are followed while resolving one path (``SYMLOOP_MAX``).

Configuration can also come from environment variables, the way a
process inherits its settings from its parent::

    PY_FS_MAX_SYMLINK_DEPTH=8
    PY_FS_FILE_MODE=600        (octal)
    PY_FS_TEMP_ROOT=/var/tmp
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields

MAX_SYMLINK_DEPTH = 40
"""Maximum symlink resolution depth — matches Linux's SYMLOOP_MAX."""

ENV_PREFIX = "PY_FS_"

_OCTAL_FIELDS = frozenset({"file_mode", "dir_mode", "symlink_mode"})


@dataclass(frozen=True)
class FsConfig:
    """Settings shared by one emulator instance."""

    max_symlink_depth: int = MAX_SYMLINK_DEPTH
    file_mode: int = 0o644
    dir_mode: int = 0o755
    symlink_mode: int = 0o777
    dir_size: int = 4096
    temp_root: str = "/tmp"  # noqa: S108
    temp_suffix_length: int = 10

    def __post_init__(self) -> None:
        """Reject settings no filesystem could honour."""
        if self.max_symlink_depth < 0:
            msg = f"max_symlink_depth must be non-negative, got {self.max_symlink_depth}"
            raise ValueError(msg)
        for name in _OCTAL_FIELDS:
            value = getattr(self, name)
            if not 0 <= value <= 0o7777:
                msg = f"{name} out of range: {value:o}"
                raise ValueError(msg)
        if not self.temp_root.startswith("/"):
            msg = f"temp_root must be absolute: {self.temp_root}"
            raise ValueError(msg)

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> FsConfig:
        """Build a config from ``PY_FS_*`` variables in *environ*.

        Unknown variables are ignored.  Modes are parsed as octal,
        other integers as decimal.

        Raises:
            ValueError: If a value cannot be parsed or is out of range.

        """
        overrides: dict[str, int | str] = {}
        for f in fields(cls):
            raw = environ.get(ENV_PREFIX + f.name.upper())
            if raw is None:
                continue
            if f.name == "temp_root":
                overrides[f.name] = raw
            elif f.name in _OCTAL_FIELDS:
                overrides[f.name] = int(raw, 8)
            else:
                overrides[f.name] = int(raw)
        return cls(**overrides)  # type: ignore[arg-type]
