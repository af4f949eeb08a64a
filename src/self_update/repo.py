"""Default repository locator and staleness checker.

The host CLI owns the authoritative versions of both; these are thin
git-based stand-ins so the update command works on its own.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Sequence

from src.self_update.models import StalenessReport
from src.self_update.protocols import CommandRunner
from src.shared.constants import DEFAULT_VCS, ENV_ROOT_OVERRIDE

logger = logging.getLogger(__name__)

# "gt version v0.4.1 (commit 1a2b3c4)" or "... (1a2b3c4)"
_COMMIT_RE = re.compile(r"(?:commit[:\s]+|\()([0-9a-f]{7,40})\b", re.IGNORECASE)


class GitRepoLocator:
    """Finds the tool's source tree.

    A directory qualifies when it holds both ``.git`` and
    ``cmd/<tool_name>``.
    """

    def __init__(
        self,
        tool_name: str,
        *,
        root_override: str | Path | None = None,
        search_paths: Sequence[str | Path] = (),
        cwd: Path | None = None,
    ) -> None:
        self.tool_name = tool_name
        self.root_override = root_override
        self.search_paths = list(search_paths)
        self.cwd = cwd

    def is_repo(self, path: Path) -> bool:
        return (path / ".git").exists() and (path / "cmd" / self.tool_name).is_dir()

    def locate(self) -> Path:
        if self.root_override:
            root = Path(self.root_override).expanduser().resolve()
            if self.is_repo(root):
                return root
            raise FileNotFoundError(
                f"{ENV_ROOT_OVERRIDE}={self.root_override} is not a {self.tool_name} repository"
            )

        start = (self.cwd or Path.cwd()).resolve()
        for candidate in (start, *start.parents):
            if self.is_repo(candidate):
                return candidate

        for raw in self.search_paths:
            candidate = Path(raw).expanduser()
            if self.is_repo(candidate):
                return candidate.resolve()

        raise FileNotFoundError(
            f"no {self.tool_name} repository found from {start} or the search paths"
        )


class GitStalenessChecker:
    """Compares the commit baked into the installed binary with HEAD."""

    def __init__(
        self,
        binary: str | Path | None,
        runner: CommandRunner,
        *,
        vcs: str = DEFAULT_VCS,
    ) -> None:
        self.binary = binary
        self.runner = runner
        self.vcs = vcs

    def check(self, repo_root: Path) -> StalenessReport:
        report = StalenessReport()
        if not self.binary:
            report.error = "installed binary not found"
            return report

        try:
            version_out = self.runner.run([str(self.binary), "version"])
            head = self.runner.run([self.vcs, "rev-parse", "HEAD"], cwd=repo_root)
        except OSError as exc:
            report.error = str(exc)
            return report

        match = _COMMIT_RE.search(version_out.stdout)
        if not version_out.ok or match is None:
            report.error = "cannot read commit from installed binary"
            return report
        if not head.ok or not head.stdout.strip():
            report.error = "cannot read repository HEAD"
            return report

        report.binary_commit = match.group(1).lower()
        report.repo_commit = head.stdout.strip()
        report.is_stale = not report.repo_commit.startswith(report.binary_commit)
        if report.is_stale:
            report.commits_behind = self._commits_behind(repo_root, report.binary_commit)
        return report

    def _commits_behind(self, repo_root: Path, binary_commit: str) -> int:
        try:
            counted = self.runner.run(
                [self.vcs, "rev-list", "--count", f"{binary_commit}..HEAD"],
                cwd=repo_root,
            )
        except OSError:
            return 0
        if not counted.ok:
            return 0
        try:
            return int(counted.stdout.strip())
        except ValueError:
            return 0
