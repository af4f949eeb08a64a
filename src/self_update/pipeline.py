"""Self-update pipeline -- rebuild and reinstall the tool from source.

Drives a strictly linear workflow:

    locate repo → staleness check → install location → toolchain check
    → (dry-run plan) → (confirm) → version info → generate → build
    → verify → atomic install → (codesign) → report

.. rubric:: Key design decisions

* **Flags are parameters** -- ``force`` and ``dry_run`` are arguments of
  :meth:`Updater.run`, never module state.
* **Fatal vs advisory steps** -- fatal steps raise an ``UpdateError``
  subclass and abort the run; advisory steps (codesigning) only record a
  failed :class:`StepOutcome`.
* **try/finally cleanup** -- the temporary build artifact is removed on
  every exit path once the build step has been reached.
"""

from __future__ import annotations

import logging
import os
import sys
import tempfile
import time
from pathlib import Path
from typing import Callable

from src.self_update import display
from src.self_update.config import UpdaterConfig
from src.self_update.exceptions import (
    BuildArtifactMissingError,
    BuildFailedError,
    GenerateFailedError,
    RepoNotFoundError,
    StepFailedError,
    ToolchainMissingError,
)
from src.self_update.install_location import determine_install_location
from src.self_update.installer import atomic_install
from src.self_update.models import (
    BuildInfo,
    StalenessReport,
    StepKind,
    StepOutcome,
    UpdateOutcome,
    UpdateResult,
)
from src.self_update.protocols import (
    CommandRunner,
    Prompter,
    RepoLocator,
    StalenessChecker,
)
from src.self_update.version_info import build_ldflags, get_version_info

logger = logging.getLogger(__name__)

_DECLINE_ANSWERS = {"n", "no"}


class ConsolePrompter:
    """Asks for confirmation on the terminal."""

    def ask(self, question: str) -> str:
        try:
            return display.ask(question)
        except EOFError:
            return ""


class Updater:
    """Rebuilds the tool from its repository and installs it atomically.

    Collaborators are injected so each step can be exercised without a
    real toolchain.
    """

    def __init__(
        self,
        config: UpdaterConfig,
        *,
        locator: RepoLocator,
        checker: StalenessChecker,
        runner: CommandRunner,
        prompter: Prompter | None = None,
        install_path: str | Path | None = None,
        current_executable: Callable[[], str | None] | None = None,
        platform: str = sys.platform,
        temp_dir: str | Path | None = None,
    ) -> None:
        self.config = config
        self.locator = locator
        self.checker = checker
        self.runner = runner
        self.prompter = prompter or ConsolePrompter()
        self.install_path = install_path or config.install.path or None
        self.current_executable = current_executable
        self.platform = platform
        self.temp_dir = Path(temp_dir) if temp_dir else Path(tempfile.gettempdir())

    @property
    def tool_name(self) -> str:
        return self.config.tool.name

    @property
    def codesign_enabled(self) -> bool:
        return self.config.install.codesign and self.platform == "darwin"

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def run(self, force: bool = False, dry_run: bool = False) -> UpdateResult:
        """Run the update.

        Returns normally on success, including the up-to-date, dry-run and
        aborted outcomes.

        Raises:
            UpdateError: On any fatal condition; nothing after the failing
                step is executed.
        """
        repo_root = self._locate_repo()
        display.print_repo_found(self.tool_name, repo_root)
        result = UpdateResult(outcome=UpdateOutcome.INSTALLED, repo_root=repo_root)

        report = self._check_staleness(repo_root)
        result.staleness = report
        if report is not None and report.error is None:
            if not report.is_stale:
                display.print_up_to_date(report, force)
                if not force:
                    result.outcome = UpdateOutcome.UP_TO_DATE
                    return result
            else:
                display.print_stale(report)

        install_path = determine_install_location(
            self.tool_name,
            override=self.install_path,
            current_executable=self.current_executable,
            ephemeral_markers=self.config.install.ephemeral_markers,
            default_dir=self.config.install.default_dir,
        )
        result.install_path = install_path

        toolchain = self.runner.which(self.config.tool.toolchain)
        display.print_build_config(
            repo_root, install_path, toolchain or self.config.tool.toolchain
        )
        if toolchain is None:
            raise ToolchainMissingError(self.config.tool.toolchain)

        if dry_run:
            display.print_dry_run_plan(
                repo_root,
                install_path,
                codesign=self.codesign_enabled,
                toolchain=self.config.tool.toolchain,
            )
            result.outcome = UpdateOutcome.DRY_RUN
            return result

        if not force and not self._confirm():
            display.print_aborted()
            result.outcome = UpdateOutcome.ABORTED
            return result

        display.print_building(self.tool_name)
        info = get_version_info(repo_root, self.runner, vcs=self.config.tool.vcs)
        result.build_info = info
        result.steps.append(StepOutcome("version_info", detail=info.version))

        self._generate(repo_root, result)

        tmp_binary = self._temp_binary_path()
        try:
            self._build(repo_root, tmp_binary, info, result)
            if not tmp_binary.exists():
                raise BuildArtifactMissingError(tmp_binary)
            result.steps.append(StepOutcome("verify"))

            display.print_step(f"Installing to {install_path}...")
            atomic_install(tmp_binary, install_path)
            result.steps.append(StepOutcome("install", detail=str(install_path)))
        finally:
            self._remove_artifact(tmp_binary)

        if self.codesign_enabled:
            display.print_step("Codesigning for macOS...")
            self._run_advisory("codesign", ["codesign", "-s", "-", "-f", str(install_path)], result)

        display.print_success(self.tool_name, install_path, info)
        result.outcome = UpdateOutcome.INSTALLED
        return result

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _locate_repo(self) -> Path:
        try:
            return Path(self.locator.locate())
        except Exception as exc:
            raise RepoNotFoundError(exc) from exc

    def _check_staleness(self, repo_root: Path) -> StalenessReport | None:
        """Return the checker's report; a failing checker means "unknown"."""
        try:
            report = self.checker.check(repo_root)
        except Exception as exc:
            logger.debug("Staleness check failed: %s", exc)
            return None
        if report.error is not None:
            logger.debug("Staleness unknown: %s", report.error)
        return report

    def _confirm(self) -> bool:
        answer = self.prompter.ask("\nContinue with rebuild? [Y/n] ")
        return answer.strip().lower() not in _DECLINE_ANSWERS

    def _generate(self, repo_root: Path, result: UpdateResult) -> None:
        display.print_step(f"Running {self.config.tool.toolchain} generate...")
        args = [self.config.tool.toolchain, *self.config.tool.generate_args]
        self._run_fatal("generate", args, repo_root, GenerateFailedError, result)

    def _build(
        self, repo_root: Path, output: Path, info: BuildInfo, result: UpdateResult
    ) -> None:
        display.print_step("Building binary...")
        args = [
            self.config.tool.toolchain,
            "build",
            "-ldflags",
            build_ldflags(info, self.config.tool.ldflags_module),
            "-o",
            str(output),
            self.config.tool.build_package,
        ]
        self._run_fatal("build", args, repo_root, BuildFailedError, result)

    def _run_fatal(
        self,
        name: str,
        args: list[str],
        cwd: Path,
        error_cls: type[StepFailedError],
        result: UpdateResult,
    ) -> None:
        label = f"{self.config.tool.toolchain} {name}"
        try:
            completed = self.runner.run(
                args, cwd=cwd, capture_output=False, stream_stderr=True
            )
        except OSError as exc:
            raise error_cls(label, None, exc) from exc
        if not completed.ok:
            raise error_cls(label, completed.returncode)
        result.steps.append(StepOutcome(name))

    def _run_advisory(self, name: str, args: list[str], result: UpdateResult) -> None:
        """Run a best-effort step; failures are logged and recorded only."""
        try:
            completed = self.runner.run(args)
        except OSError as exc:
            outcome = StepOutcome(name, StepKind.ADVISORY, ok=False, detail=str(exc))
        else:
            outcome = StepOutcome(
                name,
                StepKind.ADVISORY,
                ok=completed.ok,
                detail=completed.stderr.strip() if not completed.ok else "",
            )
        if not outcome.ok:
            logger.warning("%s failed (ignored): %s", name, outcome.detail or "non-zero exit")
        result.steps.append(outcome)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _temp_binary_path(self) -> Path:
        stamp = int(time.time())
        return self.temp_dir / f"{self.tool_name}-build-{stamp}-{os.getpid()}"

    @staticmethod
    def _remove_artifact(path: Path) -> None:
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as exc:
            logger.warning("Could not remove build artifact %s: %s", path, exc)
