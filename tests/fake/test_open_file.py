"""Tests for open file handles on the emulator."""

import io
import os

import pytest

from py_fs.fake.filesystem import FakeFileSystem
from py_fs.fake.open_file import FakeOpenFile


def _fs_with_file(content: bytes = b"0123456789") -> FakeFileSystem:
    """Create an emulator holding ``/f``."""
    fs = FakeFileSystem()
    fs.create_file("/f", content)
    return fs


class TestOpen:
    """Verify access is checked when opening."""

    def test_returns_binary_stream(self) -> None:
        """open() gives a readable raw stream."""
        handle = _fs_with_file().open("/f")
        assert isinstance(handle, FakeOpenFile)
        assert isinstance(handle, io.RawIOBase)
        assert handle.readable()
        assert not handle.writable()

    def test_missing(self) -> None:
        """Opening a missing file is NotFound."""
        with pytest.raises(FileNotFoundError):
            FakeFileSystem().open("/nope")

    def test_directory(self) -> None:
        """Opening a directory is IsADirectory."""
        with pytest.raises(IsADirectoryError):
            FakeFileSystem().open("/")

    def test_unreadable(self) -> None:
        """Opening needs the read bit."""
        fs = _fs_with_file()
        fs.set_permissions("/f", 0o200)
        with pytest.raises(PermissionError):
            fs.open("/f")

    def test_relative_path_is_made_absolute(self) -> None:
        """A handle keeps working after the cwd changes."""
        fs = _fs_with_file()
        fs.create_dir("/other")
        handle = fs.open("f")
        fs.set_current_dir("/other")
        assert handle.name == "/f"
        assert handle.read() == b"0123456789"


class TestRead:
    """Verify reading through a handle."""

    def test_read_all(self) -> None:
        """read() returns the whole content, then EOF."""
        handle = _fs_with_file().open("/f")
        assert handle.read() == b"0123456789"
        assert handle.read() == b""

    def test_read_in_chunks(self) -> None:
        """Each read continues at the handle's offset."""
        handle = _fs_with_file().open("/f")
        assert handle.read(4) == b"0123"
        assert handle.read(4) == b"4567"
        assert handle.tell() == 8

    def test_sees_later_writes(self) -> None:
        """Content is read on demand, not snapshotted at open."""
        fs = _fs_with_file()
        handle = fs.open("/f")
        fs.write_file("/f", b"abcdefghij")
        assert handle.read(3) == b"abc"

    def test_shrunk_file_is_eof(self) -> None:
        """A file truncated under the handle yields EOF, not an error."""
        fs = _fs_with_file()
        handle = fs.open("/f")
        handle.read(8)
        fs.write_file("/f", b"xy")
        assert handle.read() == b""

    def test_removed_file_still_reads(self) -> None:
        """A handle keeps the file it opened after the name is removed."""
        fs = _fs_with_file()
        handle = fs.open("/f")
        fs.remove_file("/f")
        assert handle.read(4) == b"0123"
        assert not fs.exists("/f")

    def test_renamed_file_still_reads(self) -> None:
        """Renaming the file does not affect an open handle."""
        fs = _fs_with_file()
        handle = fs.open("/f")
        fs.rename("/f", "/g")
        assert handle.read() == b"0123456789"

    def test_replaced_name_keeps_old_file(self) -> None:
        """A handle reads the file it opened, not whatever now has the name."""
        fs = _fs_with_file()
        handle = fs.open("/f")
        fs.create_file("/g", b"other")
        fs.rename("/g", "/f")
        assert handle.read() == b"0123456789"

    def test_access_checked_only_at_open(self) -> None:
        """Dropping the read bit after open does not stop the handle."""
        fs = _fs_with_file()
        handle = fs.open("/f")
        fs.set_permissions("/f", 0)
        assert handle.read(2) == b"01"
        with pytest.raises(PermissionError):
            fs.open("/f")

    def test_closed_handle(self) -> None:
        """A closed handle refuses reads."""
        handle = _fs_with_file().open("/f")
        handle.close()
        with pytest.raises(ValueError, match="closed"):
            handle.read(1)

    def test_context_manager(self) -> None:
        """Handles close on leaving a with block."""
        with _fs_with_file().open("/f") as handle:
            data = handle.read()
        assert data == b"0123456789"
        assert handle.closed

    def test_buffered_wrapper(self) -> None:
        """The raw handle works under io.BufferedReader."""
        reader = io.BufferedReader(_fs_with_file(b"line1\nline2\n").open("/f"))
        assert reader.readline() == b"line1\n"
        assert reader.readline() == b"line2\n"


class TestSeek:
    """Verify moving the offset."""

    def test_seek_set(self) -> None:
        """SEEK_SET moves to an absolute offset."""
        handle = _fs_with_file().open("/f")
        handle.seek(5)
        assert handle.read(2) == b"56"

    def test_seek_cur(self) -> None:
        """SEEK_CUR moves relative to the offset."""
        handle = _fs_with_file().open("/f")
        handle.read(2)
        handle.seek(3, os.SEEK_CUR)
        assert handle.read(1) == b"5"

    def test_seek_end(self) -> None:
        """SEEK_END moves relative to the current length."""
        handle = _fs_with_file().open("/f")
        assert handle.seek(-2, os.SEEK_END) == 8
        assert handle.read() == b"89"

    def test_negative_position(self) -> None:
        """A negative resulting offset is rejected."""
        handle = _fs_with_file().open("/f")
        with pytest.raises(ValueError, match="negative"):
            handle.seek(-1)
