"""Runtime-checkable protocols for the updater's collaborators."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, Sequence, runtime_checkable

from src.self_update.models import CommandResult, StalenessReport


@runtime_checkable
class RepoLocator(Protocol):
    """Finds the root of the tool's source repository."""

    def locate(self) -> Path:
        """Return the repository root.

        Raises:
            Exception: Any error when no repository can be found; the
                updater wraps it in ``RepoNotFoundError``.
        """
        ...


@runtime_checkable
class StalenessChecker(Protocol):
    """Compares the installed binary with the repository HEAD."""

    def check(self, repo_root: Path) -> StalenessReport:
        """Return a report; problems are reported in ``error``."""
        ...


@runtime_checkable
class CommandRunner(Protocol):
    """Runs external commands and resolves executables."""

    def run(
        self,
        args: Sequence[str],
        *,
        cwd: Path | None = None,
        capture_output: bool = True,
        stream_stderr: bool = False,
    ) -> CommandResult:
        """Run *args* to completion and return its exit status.

        Raises:
            OSError: If the executable cannot be started.
        """
        ...

    def which(self, name: str) -> str | None:
        """Return the full path of *name* on the search path, or None."""
        ...


@runtime_checkable
class Prompter(Protocol):
    """Asks the user a question and returns the raw answer."""

    def ask(self, question: str) -> str:
        ...
