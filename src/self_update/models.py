"""Data models for the self-update pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from src.shared.constants import SHORT_COMMIT_LENGTH


class StepKind(str, Enum):
    """Whether a failing step aborts the pipeline."""
    FATAL = "fatal"
    ADVISORY = "advisory"


class UpdateOutcome(str, Enum):
    """How a successful run ended."""
    UP_TO_DATE = "up_to_date"
    DRY_RUN = "dry_run"
    ABORTED = "aborted"
    INSTALLED = "installed"


@dataclass(frozen=True)
class BuildInfo:
    """Version metadata embedded into the binary at link time."""
    version: str
    commit: str
    build_time: str

    @property
    def short_commit(self) -> str:
        return short_commit(self.commit)


@dataclass
class StalenessReport:
    """Comparison of the installed binary's commit with the repo HEAD."""
    binary_commit: str = ""
    repo_commit: str = ""
    commits_behind: int = 0
    is_stale: bool = False
    error: str | None = None


@dataclass
class StepOutcome:
    """Record of one executed pipeline step."""
    name: str
    kind: StepKind = StepKind.FATAL
    ok: bool = True
    detail: str = ""


@dataclass
class CommandResult:
    """Exit status and captured output of an external command."""
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


@dataclass
class UpdateResult:
    """Summary of a completed :meth:`Updater.run` call."""
    outcome: UpdateOutcome
    repo_root: Path | None = None
    install_path: Path | None = None
    build_info: BuildInfo | None = None
    staleness: StalenessReport | None = None
    steps: list[StepOutcome] = field(default_factory=list)

    @property
    def advisory_failures(self) -> list[StepOutcome]:
        return [
            s for s in self.steps if s.kind is StepKind.ADVISORY and not s.ok
        ]


def short_commit(commit: str) -> str:
    """Return the abbreviated form of a commit hash."""
    return commit[:SHORT_COMMIT_LENGTH]
