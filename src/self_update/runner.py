"""Blocking subprocess execution for the update pipeline."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Sequence

from src.self_update.models import CommandResult

logger = logging.getLogger(__name__)


class SubprocessRunner:
    """Runs external commands with ``subprocess.run``.

    No timeout is applied: the update is interactive and a hung
    toolchain is left for the user to interrupt.
    """

    def run(
        self,
        args: Sequence[str],
        *,
        cwd: Path | None = None,
        capture_output: bool = True,
        stream_stderr: bool = False,
    ) -> CommandResult:
        """Run *args* and return its exit status.

        With ``stream_stderr`` the child's standard error is passed
        through to ours so compiler diagnostics stay visible.
        """
        cmd = [str(a) for a in args]
        logger.debug("Running: %s (cwd=%s)", " ".join(cmd), cwd or ".")

        stdout = subprocess.PIPE if capture_output else subprocess.DEVNULL
        # None inherits our stderr file descriptor
        stderr = None if stream_stderr else subprocess.PIPE
        result = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd is not None else None,
            stdout=stdout,
            stderr=stderr,
            text=True,
            errors="replace",
        )
        return CommandResult(
            returncode=result.returncode,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
        )

    def which(self, name: str) -> str | None:
        return shutil.which(name)
