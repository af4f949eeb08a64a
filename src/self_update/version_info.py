"""Version metadata for the rebuilt binary."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from src.self_update.exceptions import CommitLookupError
from src.self_update.models import BuildInfo
from src.self_update.protocols import CommandRunner
from src.shared.constants import DEFAULT_VCS
from src.shared.utils import now_rfc3339

logger = logging.getLogger(__name__)

FALLBACK_VERSION = "dev"


def get_version_info(
    repo_root: Path,
    runner: CommandRunner,
    *,
    vcs: str = DEFAULT_VCS,
    now: datetime | None = None,
) -> BuildInfo:
    """Read the version label and commit hash from the repository.

    The descriptive label is optional and falls back to ``"dev"``; the
    commit hash is mandatory.

    Raises:
        CommitLookupError: If ``rev-parse HEAD`` fails or prints nothing.
    """
    version = FALLBACK_VERSION
    try:
        described = runner.run(
            [vcs, "describe", "--tags", "--always", "--dirty"], cwd=repo_root
        )
        if described.ok and described.stdout.strip():
            version = described.stdout.strip()
        else:
            logger.debug("describe failed (exit %d), using %r", described.returncode, version)
    except OSError as exc:
        logger.debug("describe could not run: %s", exc)

    try:
        head = runner.run([vcs, "rev-parse", "HEAD"], cwd=repo_root)
    except OSError as exc:
        raise CommitLookupError(repo_root, exc) from exc
    if not head.ok:
        raise CommitLookupError(
            repo_root, head.stderr.strip() or f"exit status {head.returncode}"
        )
    commit = head.stdout.strip()
    if not commit:
        raise CommitLookupError(repo_root, "empty output")

    return BuildInfo(version=version, commit=commit, build_time=now_rfc3339(now))


def build_ldflags(info: BuildInfo, module: str) -> str:
    """Return linker flags that set the version symbols in *module*."""
    return " ".join(
        [
            f"-X {module}.Version={info.version}",
            f"-X {module}.Commit={info.commit}",
            f"-X {module}.BuildTime={info.build_time}",
        ]
    )
