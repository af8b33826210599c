"""Tests for the error taxonomy.

Every failure is an ``OSError`` whose builtin subclass is chosen by
Python from the errno.  ``error_kind`` must classify errors raised by
the emulator and by the real OS identically.
"""

import errno
import os

import pytest

from py_fs.errors import ErrorKind, error_kind, errno_for, fs_error


class TestFsError:
    """Verify the exceptions built for each kind."""

    @pytest.mark.parametrize(
        ("kind", "exc_type"),
        [
            (ErrorKind.NOT_FOUND, FileNotFoundError),
            (ErrorKind.ALREADY_EXISTS, FileExistsError),
            (ErrorKind.PERMISSION_DENIED, PermissionError),
            (ErrorKind.NOT_A_DIRECTORY, NotADirectoryError),
            (ErrorKind.IS_A_DIRECTORY, IsADirectoryError),
        ],
    )
    def test_builtin_subclass(self, kind: ErrorKind, exc_type: type[OSError]) -> None:
        """The errno should select the matching builtin exception class."""
        assert isinstance(fs_error(kind, "/x"), exc_type)

    def test_message_matches_os(self) -> None:
        """The description should be the OS's own strerror text."""
        exc = fs_error(ErrorKind.NOT_FOUND, "/missing")
        assert exc.strerror == os.strerror(errno.ENOENT)
        assert exc.filename == "/missing"

    def test_str_contains_path(self) -> None:
        """str() should read like a real OS error."""
        exc = fs_error(ErrorKind.IS_A_DIRECTORY, "/d")
        assert str(exc) == f"[Errno {errno.EISDIR}] {os.strerror(errno.EISDIR)}: '/d'"

    def test_errno_override(self) -> None:
        """OTHER can carry a specific errno."""
        exc = fs_error(ErrorKind.OTHER, "/", err_no=errno.EBUSY)
        assert exc.errno == errno.EBUSY

    def test_directory_not_empty_uses_enotempty(self) -> None:
        """A non-empty directory is ENOTEMPTY, never EEXIST."""
        assert errno_for(ErrorKind.DIRECTORY_NOT_EMPTY) == errno.ENOTEMPTY


class TestErrorKind:
    """Verify classification of arbitrary OSErrors."""

    def test_round_trip_for_every_kind(self) -> None:
        """Every kind built by fs_error should classify back to itself."""
        for kind in ErrorKind:
            assert error_kind(fs_error(kind)) is kind

    def test_eperm_is_permission_denied(self) -> None:
        """EPERM and EACCES are both permission failures."""
        assert error_kind(OSError(errno.EPERM, "nope")) is ErrorKind.PERMISSION_DENIED

    def test_unmapped_errno_is_other(self) -> None:
        """An errno outside the taxonomy falls back to OTHER."""
        assert error_kind(OSError(errno.EIO, "io")) is ErrorKind.OTHER

    def test_missing_errno_is_other(self) -> None:
        """A bare OSError (like shutil's symlink refusal) is OTHER."""
        assert error_kind(OSError("Cannot call rmtree on a symbolic link")) is ErrorKind.OTHER

    def test_real_os_error(self, tmp_path: os.PathLike[str]) -> None:
        """Errors raised by the OS itself should classify too."""
        with pytest.raises(OSError) as info:  # noqa: PT011
            os.stat(os.path.join(tmp_path, "missing"))
        assert error_kind(info.value) is ErrorKind.NOT_FOUND
