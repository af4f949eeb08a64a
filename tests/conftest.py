"""Shared test fixtures for the gt-update test suite."""
from __future__ import annotations

import io
from pathlib import Path
from typing import Callable, Generator

import pytest
from rich.console import Console

import src.self_update.display as display_mod
from src.self_update.config import UpdaterConfig
from src.self_update.models import CommandResult, StalenessReport
from src.self_update.pipeline import Updater
from tests.fixtures.fakes import FakeRunner, ScriptedPrompter, StaticChecker, StaticLocator

HEAD_COMMIT = "abc123def4567890abc123def4567890abc12345"


@pytest.fixture
def repo_root(tmp_path: Path) -> Path:
    """A directory laid out like a gt checkout."""
    root = tmp_path / "gastown"
    (root / ".git").mkdir(parents=True)
    (root / "cmd" / "gt").mkdir(parents=True)
    return root


@pytest.fixture
def build_tmp(tmp_path: Path) -> Path:
    """Private temp directory for build artifacts."""
    path = tmp_path / "buildtmp"
    path.mkdir()
    return path


@pytest.fixture
def install_target(tmp_path: Path) -> Path:
    return tmp_path / "home" / ".local" / "bin" / "gt"


@pytest.fixture
def git_runner() -> FakeRunner:
    """A runner whose git answers describe a healthy repository."""
    return FakeRunner(
        {
            ("git", "describe"): CommandResult(0, "v0.4.1-3-gabc123d\n"),
            ("git", "rev-parse", "HEAD"): CommandResult(0, HEAD_COMMIT + "\n"),
        }
    )


@pytest.fixture
def captured_output() -> Generator[io.StringIO, None, None]:
    """Route display output (stdout and stderr consoles) into one buffer."""
    buf = io.StringIO()
    original, original_err = display_mod._console, display_mod._err_console
    display_mod._console = Console(file=buf, width=200, highlight=False)
    display_mod._err_console = Console(file=buf, width=200, highlight=False)
    try:
        yield buf
    finally:
        display_mod._console = original
        display_mod._err_console = original_err


@pytest.fixture
def make_updater(
    repo_root: Path, build_tmp: Path, install_target: Path, git_runner: FakeRunner
) -> Callable[..., Updater]:
    """Factory for an :class:`Updater` wired to fakes.

    Keyword arguments override the default collaborators.
    """

    def _make(**overrides) -> Updater:
        kwargs = {
            "locator": StaticLocator(repo_root),
            "checker": StaticChecker(StalenessReport(error="unknown")),
            "runner": git_runner,
            "prompter": ScriptedPrompter(),
            "install_path": install_target,
            "platform": "linux",
            "temp_dir": build_tmp,
        }
        config = overrides.pop("config", UpdaterConfig())
        kwargs.update(overrides)
        return Updater(config, **kwargs)

    return _make
