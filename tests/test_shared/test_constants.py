"""Tests for shared constants values."""
from __future__ import annotations

from src.self_update import __version__
from src.shared.constants import (
    DEFAULT_INSTALL_DIR,
    DEFAULT_TOOL_NAME,
    EPHEMERAL_PATH_MARKERS,
    EXECUTABLE_MODE,
    INSTALL_TEMP_SUFFIX,
    SHORT_COMMIT_LENGTH,
    VERSION,
)


class TestInstallConstants:
    def test_default_install_dir_is_relative_to_home(self):
        assert DEFAULT_INSTALL_DIR == ".local/bin"
        assert not DEFAULT_INSTALL_DIR.startswith("/")

    def test_executable_mode(self):
        assert EXECUTABLE_MODE == 0o755

    def test_temp_suffix(self):
        assert INSTALL_TEMP_SUFFIX == ".new"

    def test_ephemeral_markers(self):
        assert "/tmp" in EPHEMERAL_PATH_MARKERS
        assert "go-build" in EPHEMERAL_PATH_MARKERS


class TestToolConstants:
    def test_tool_name(self):
        assert DEFAULT_TOOL_NAME == "gt"

    def test_short_commit_length(self):
        assert SHORT_COMMIT_LENGTH == 7


class TestVersion:
    def test_version_is_semver(self):
        parts = VERSION.split(".")
        assert len(parts) == 3
        assert all(p.isdigit() for p in parts)

    def test_package_version_matches(self):
        assert __version__ == VERSION
