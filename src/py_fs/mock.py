"""A stateless filesystem whose every operation is a ``unittest.mock.Mock``.

Use it when a test cares about *which* calls code makes rather than what
they do to a tree.  Each operation returns a harmless default until the
test programs it::

    fs = MockFileSystem()
    fs.read_file.return_value = b"hello"
    fs.fail("write_file", ErrorKind.PERMISSION_DENIED, "/etc/passwd")

    run_code_under_test(fs)

    fs.read_file.assert_called_once_with("/config.toml")

Nothing is ever stored: ``write_file`` followed by ``read_file`` still
returns the programmed (or default) value.
"""

from __future__ import annotations

import io
from typing import Any
from unittest.mock import Mock

from py_fs.errors import ErrorKind, fs_error
from py_fs.fake.node import FileType, Metadata
from py_fs.tempdir import TempDir

_EMPTY_METADATA = Metadata(file_type=FileType.FILE, mode=0o644, length=0, created_at=0.0, modified_at=0.0)

_DEFAULTS: dict[str, Any] = {
    "current_dir": "",
    "set_current_dir": None,
    "exists": True,
    "is_dir": True,
    "is_file": True,
    "is_symlink": False,
    "metadata": _EMPTY_METADATA,
    "symlink_metadata": _EMPTY_METADATA,
    "len": 0,
    "create_dir": None,
    "create_dir_all": None,
    "read_dir": [],
    "remove_dir": None,
    "remove_dir_all": None,
    "create_file": None,
    "write_file": None,
    "overwrite_file": None,
    "read_file": b"",
    "read_file_to_string": "",
    "read_file_into": 0,
    "remove_file": None,
    "copy_file": None,
    "create_symlink": None,
    "read_link": "",
    "rename": None,
    "move": None,
    "set_permissions": None,
    "set_mode": None,
    "mode": 0o644,
    "readonly": False,
    "set_readonly": None,
}

OPERATIONS: tuple[str, ...] = (*_DEFAULTS, "open", "temp_dir")
"""Every operation name a ``MockFileSystem`` provides."""


class MockFileSystem:
    """A ``FileSystem`` made of independent ``Mock`` objects."""

    def __init__(self) -> None:
        """Create fresh mocks, each returning its default."""
        self._install()

    def _install(self) -> None:
        for name, value in _DEFAULTS.items():
            setattr(self, name, Mock(name=f"MockFileSystem.{name}", return_value=value))
        # new objects per call, so two opened handles do not share an offset
        self.open = Mock(name="MockFileSystem.open", side_effect=lambda *_a, **_k: io.BytesIO())
        self.temp_dir = Mock(name="MockFileSystem.temp_dir", return_value=TempDir(self, ""))

    def fail(self, operation: str, kind: ErrorKind, path: str | None = None) -> None:
        """Make *operation* raise the ``OSError`` for *kind* on every call.

        Raises:
            AttributeError: If *operation* is not a filesystem operation.

        """
        if operation not in OPERATIONS:
            msg = f"MockFileSystem has no operation {operation!r}"
            raise AttributeError(msg)
        mock: Mock = getattr(self, operation)
        mock.side_effect = fs_error(kind, path)

    def reset(self) -> None:
        """Forget recorded calls and programmed results on every mock."""
        self._install()
