"""Tests for emulator configuration."""

import pytest

from py_fs.config import MAX_SYMLINK_DEPTH, FsConfig
from py_fs.fake.filesystem import FakeFileSystem


class TestDefaults:
    """Verify the Linux-like defaults."""

    def test_max_symlink_depth_is_forty(self) -> None:
        """MAX_SYMLINK_DEPTH should be 40, matching Linux's SYMLOOP_MAX."""
        expected_depth = 40
        assert expected_depth == MAX_SYMLINK_DEPTH
        assert FsConfig().max_symlink_depth == expected_depth

    def test_default_modes(self) -> None:
        """Files rw-r--r--, directories rwxr-xr-x, symlinks rwxrwxrwx."""
        config = FsConfig()
        assert config.file_mode == 0o644
        assert config.dir_mode == 0o755
        assert config.symlink_mode == 0o777

    def test_default_temp_root(self) -> None:
        """Temporary directories live under /tmp by default."""
        assert FsConfig().temp_root == "/tmp"  # noqa: S108


class TestValidation:
    """Verify out-of-range settings are rejected."""

    def test_negative_depth_raises(self) -> None:
        """The symlink bound cannot be negative."""
        with pytest.raises(ValueError, match="max_symlink_depth"):
            FsConfig(max_symlink_depth=-1)

    def test_mode_out_of_range_raises(self) -> None:
        """Modes must fit in 0o7777."""
        with pytest.raises(ValueError, match="file_mode"):
            FsConfig(file_mode=0o10000)

    def test_relative_temp_root_raises(self) -> None:
        """The temp root must be absolute."""
        with pytest.raises(ValueError, match="absolute"):
            FsConfig(temp_root="tmp")


class TestFromEnv:
    """Verify reading overrides from an environment mapping."""

    def test_empty_environment_gives_defaults(self) -> None:
        """No PY_FS_ variables means the defaults."""
        assert FsConfig.from_env({}) == FsConfig()

    def test_modes_are_octal(self) -> None:
        """Mode variables are parsed as octal."""
        config = FsConfig.from_env({"PY_FS_FILE_MODE": "600"})
        assert config.file_mode == 0o600

    def test_integers_are_decimal(self) -> None:
        """Other integers are parsed as decimal."""
        config = FsConfig.from_env({"PY_FS_MAX_SYMLINK_DEPTH": "8"})
        expected_depth = 8
        assert config.max_symlink_depth == expected_depth

    def test_temp_root_is_a_string(self) -> None:
        """The temp root is taken verbatim."""
        assert FsConfig.from_env({"PY_FS_TEMP_ROOT": "/var/tmp"}).temp_root == "/var/tmp"

    def test_unrelated_variables_are_ignored(self) -> None:
        """Only PY_FS_ variables are read."""
        assert FsConfig.from_env({"HOME": "/root", "FILE_MODE": "7"}) == FsConfig()

    def test_garbage_raises(self) -> None:
        """An unparseable value should raise ValueError."""
        with pytest.raises(ValueError, match="invalid literal"):
            FsConfig.from_env({"PY_FS_DIR_MODE": "rwx"})


class TestConfiguredEmulator:
    """Verify the emulator honours its configuration."""

    def test_new_files_use_configured_mode(self) -> None:
        """create_file should apply the configured file mode."""
        fs = FakeFileSystem(FsConfig(file_mode=0o600))
        fs.create_file("/f")
        assert fs.mode("/f") == 0o600

    def test_new_directories_use_configured_mode(self) -> None:
        """create_dir should apply the configured directory mode."""
        fs = FakeFileSystem(FsConfig(dir_mode=0o700))
        fs.create_dir("/d")
        assert fs.mode("/d") == 0o700

    def test_symlink_bound_is_configurable(self) -> None:
        """A lower bound should reject shorter chains."""
        fs = FakeFileSystem(FsConfig(max_symlink_depth=1))
        fs.create_file("/f")
        fs.create_symlink("/l1", "/f")
        fs.create_symlink("/l2", "/l1")
        assert fs.read_file("/l1") == b""
        with pytest.raises(OSError, match="Too many levels"):
            fs.read_file("/l2")

    def test_config_is_exposed(self) -> None:
        """The emulator should expose the config it was built with."""
        config = FsConfig(dir_size=512)
        assert FakeFileSystem(config).config is config
