"""Tests for environment-driven settings."""
from __future__ import annotations

import pytest

from src.shared.config import SharedConfig, UpdaterSettings

_ENV_VARS = ("LOG_LEVEL", "GT_ROOT", "GT_INSTALL_PATH", "GT_UPDATE_CONFIG")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)


class TestSharedConfig:
    def test_default_values(self):
        config = SharedConfig()
        assert config.log_level == "warning"

    def test_env_override_log_level(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        config = SharedConfig()
        assert config.log_level == "debug"


class TestUpdaterSettings:
    def test_default_values(self):
        settings = UpdaterSettings()
        assert settings.root is None
        assert settings.install_path is None
        assert settings.config_path is None

    def test_inherits_shared_defaults(self):
        assert UpdaterSettings().log_level == "warning"

    def test_env_override_root(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("GT_ROOT", "/src/gastown")
        assert UpdaterSettings().root == "/src/gastown"

    def test_env_override_install_path(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("GT_INSTALL_PATH", "/opt/bin/gt")
        assert UpdaterSettings().install_path == "/opt/bin/gt"

    def test_env_override_config_path(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("GT_UPDATE_CONFIG", "/etc/gt/update.yaml")
        assert UpdaterSettings().config_path == "/etc/gt/update.yaml"

    def test_populate_by_name(self):
        settings = UpdaterSettings(root="/explicit")
        assert settings.root == "/explicit"
