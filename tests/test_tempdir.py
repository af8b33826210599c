"""Tests for self-removing temporary directories."""

import gc
import re

from py_fs.config import FsConfig
from py_fs.fake.filesystem import FakeFileSystem
from py_fs.tempdir import TempDir

SUFFIX = re.compile(r"^/tmp/build/build_[A-Za-z0-9]{10}$")


class TestFakeTempDir:
    """Verify temp_dir on the emulator."""

    def test_path_layout(self) -> None:
        """The directory is <root>/<prefix>/<prefix>_<10 alphanumerics>."""
        fs = FakeFileSystem()
        tmp = fs.temp_dir("build")
        assert SUFFIX.match(tmp.path)
        assert fs.is_dir(tmp.path)

    def test_unique(self) -> None:
        """Two temp dirs with one prefix never collide."""
        fs = FakeFileSystem()
        assert fs.temp_dir("t").path != fs.temp_dir("t").path

    def test_cleanup_removes_only_the_directory(self) -> None:
        """cleanup() removes the directory and keeps the prefix directory."""
        fs = FakeFileSystem()
        tmp = fs.temp_dir("build")
        fs.write_file(f"{tmp.path}/out", b"x")
        tmp.cleanup()
        assert tmp.removed
        assert not fs.exists(tmp.path)
        assert fs.is_dir("/tmp/build")

    def test_context_manager(self) -> None:
        """Leaving the with block removes the directory."""
        fs = FakeFileSystem()
        with fs.temp_dir("ctx") as tmp:
            path = tmp.path
            assert fs.is_dir(path)
        assert not fs.exists(path)

    def test_cleanup_twice(self) -> None:
        """A second cleanup() is a no-op."""
        fs = FakeFileSystem()
        tmp = fs.temp_dir("x")
        tmp.cleanup()
        tmp.cleanup()
        assert not fs.exists(tmp.path)

    def test_already_removed(self) -> None:
        """A directory removed by hand does not break cleanup()."""
        fs = FakeFileSystem()
        tmp = fs.temp_dir("x")
        fs.remove_dir(tmp.path)
        tmp.cleanup()
        assert tmp.removed

    def test_configured_root_and_suffix(self) -> None:
        """The temp root and suffix length come from the config."""
        fs = FakeFileSystem(FsConfig(temp_root="/var/tmp", temp_suffix_length=4))
        tmp = fs.temp_dir("p")
        assert re.match(r"^/var/tmp/p/p_[A-Za-z0-9]{4}$", tmp.path)

    def test_does_not_keep_filesystem_alive(self) -> None:
        """The handle only weakly references its filesystem."""
        tmp = FakeFileSystem().temp_dir("gone")
        gc.collect()
        tmp.cleanup()
        assert tmp.removed

    def test_str_is_path(self) -> None:
        """str() of the handle is its path."""
        tmp = TempDir(FakeFileSystem(), "/tmp/x")
        assert str(tmp) == "/tmp/x"
        assert repr(tmp) == "TempDir('/tmp/x')"
