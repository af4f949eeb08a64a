"""Tests for src.self_update.cli."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from src.self_update import __version__
from src.self_update.cli import app, build_updater
from src.self_update.config import UpdaterConfig
from src.self_update.exceptions import BuildFailedError, ConfigError
from src.self_update.models import UpdateOutcome, UpdateResult
from src.self_update.repo import GitRepoLocator
from src.shared.config import UpdaterSettings

runner = CliRunner()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path):
    for var in ("GT_ROOT", "GT_INSTALL_PATH", "GT_UPDATE_CONFIG", "LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    # Keep the real user config out of the tests
    monkeypatch.setenv("HOME", str(tmp_path))


@pytest.fixture
def mock_updater():
    updater = MagicMock()
    updater.run.return_value = UpdateResult(outcome=UpdateOutcome.INSTALLED)
    with patch("src.self_update.cli.build_updater", return_value=updater) as factory:
        yield factory, updater


class TestUpdateCommand:
    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_defaults(self, mock_updater):
        factory, updater = mock_updater
        result = runner.invoke(app, ["update"])
        assert result.exit_code == 0
        updater.run.assert_called_once_with(force=False, dry_run=False)

    def test_force_short_flag(self, mock_updater):
        _, updater = mock_updater
        result = runner.invoke(app, ["update", "-f"])
        assert result.exit_code == 0
        updater.run.assert_called_once_with(force=True, dry_run=False)

    def test_force_and_dry_run(self, mock_updater):
        _, updater = mock_updater
        result = runner.invoke(app, ["update", "--force", "--dry-run"])
        assert result.exit_code == 0
        updater.run.assert_called_once_with(force=True, dry_run=True)

    def test_install_path_passed_through(self, mock_updater, tmp_path):
        factory, _ = mock_updater
        target = tmp_path / "bin" / "gt"
        runner.invoke(app, ["update", "--install-path", str(target)])
        assert factory.call_args.kwargs["install_path"] == target

    def test_config_file_is_loaded(self, mock_updater, tmp_path):
        factory, _ = mock_updater
        cfg = tmp_path / "update.yaml"
        cfg.write_text("tool:\n  name: bd\n", encoding="utf-8")
        result = runner.invoke(app, ["update", "--config", str(cfg)])
        assert result.exit_code == 0
        config = factory.call_args.args[0]
        assert config.tool.name == "bd"

    def test_update_error_exits_nonzero(self, mock_updater):
        _, updater = mock_updater
        updater.run.side_effect = BuildFailedError("go build", 2)
        with patch("src.self_update.display.print_error_panel") as panel:
            result = runner.invoke(app, ["update", "--force"])
        assert result.exit_code == 1
        panel.assert_called_once()
        assert isinstance(panel.call_args.args[0], BuildFailedError)

    def test_malformed_config_shows_error_panel(self, mock_updater, tmp_path):
        factory, _ = mock_updater
        cfg = tmp_path / "update.yaml"
        cfg.write_text("- not\n- a mapping\n", encoding="utf-8")
        with patch("src.self_update.display.print_error_panel") as panel:
            result = runner.invoke(app, ["update", "--config", str(cfg)])
        assert result.exit_code == 1
        assert isinstance(panel.call_args.args[0], ConfigError)
        factory.assert_not_called()

    def test_aborted_run_exits_zero(self, mock_updater):
        _, updater = mock_updater
        updater.run.return_value = UpdateResult(outcome=UpdateOutcome.ABORTED)
        assert runner.invoke(app, ["update"]).exit_code == 0


class TestBuildUpdater:
    def test_env_override_sets_repo_root(self, monkeypatch, tmp_path):
        monkeypatch.setenv("GT_ROOT", str(tmp_path / "gastown"))
        updater = build_updater(UpdaterConfig(), UpdaterSettings())
        assert isinstance(updater.locator, GitRepoLocator)
        assert updater.locator.root_override == str(tmp_path / "gastown")

    def test_cli_install_path_beats_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("GT_INSTALL_PATH", "/from/env/gt")
        updater = build_updater(
            UpdaterConfig(), UpdaterSettings(), install_path=tmp_path / "gt"
        )
        assert updater.install_path == tmp_path / "gt"

    def test_env_install_path_beats_config(self, monkeypatch):
        monkeypatch.setenv("GT_INSTALL_PATH", "/from/env/gt")
        config = UpdaterConfig()
        config.install.path = "/from/config/gt"
        updater = build_updater(config, UpdaterSettings())
        assert updater.install_path == "/from/env/gt"

    def test_config_root_used_without_env(self):
        config = UpdaterConfig()
        config.repo.root = "/src/gastown"
        updater = build_updater(config, UpdaterSettings())
        assert updater.locator.root_override == "/src/gastown"

    def test_checker_inspects_install_override(self, tmp_path):
        target = tmp_path / "opt" / "gt"
        target.parent.mkdir()
        target.write_bytes(b"old binary")
        with patch("src.self_update.cli.current_tool_binary") as which_gt:
            which_gt.return_value = lambda: "/usr/local/bin/gt"
            updater = build_updater(
                UpdaterConfig(), UpdaterSettings(), install_path=target
            )
        assert updater.checker.binary == str(target)

    def test_checker_inspects_env_install_path(self, monkeypatch, tmp_path):
        target = tmp_path / "gt"
        target.write_bytes(b"old binary")
        monkeypatch.setenv("GT_INSTALL_PATH", str(target))
        with patch("src.self_update.cli.current_tool_binary") as which_gt:
            which_gt.return_value = lambda: "/usr/local/bin/gt"
            updater = build_updater(UpdaterConfig(), UpdaterSettings())
        assert updater.checker.binary == str(target)

    def test_missing_override_target_leaves_staleness_unknown(self, tmp_path):
        with patch("src.self_update.cli.current_tool_binary") as which_gt:
            which_gt.return_value = lambda: "/usr/local/bin/gt"
            updater = build_updater(
                UpdaterConfig(), UpdaterSettings(), install_path=tmp_path / "gt"
            )
        assert updater.checker.binary is None

    def test_checker_uses_path_binary_without_override(self):
        with patch("src.self_update.cli.current_tool_binary") as which_gt:
            which_gt.return_value = lambda: "/usr/local/bin/gt"
            updater = build_updater(UpdaterConfig(), UpdaterSettings())
        assert updater.checker.binary == "/usr/local/bin/gt"
