"""Custom exceptions for the self-update pipeline."""

from __future__ import annotations

from pathlib import Path

from src.shared.constants import ENV_ROOT_OVERRIDE


class UpdateError(Exception):
    """Base exception for all fatal update errors.

    ``str(error)`` is the one-line cause.  ``hint`` is an optional
    remediation shown below it.
    """

    stage: str = "update"

    def __init__(self, detail: str, hint: str = "") -> None:
        self.detail = detail
        self.hint = hint
        super().__init__(detail)


class ConfigError(UpdateError):
    """Raised when the config file cannot be parsed."""

    stage = "config"

    def __init__(self, path: Path | str, cause: object = "") -> None:
        self.path = Path(path)
        detail = f"reading config {path}"
        if cause:
            # YAML errors span several lines
            flat = " ".join(str(cause).split())
            detail = f"{detail}: {flat}"
        super().__init__(detail, hint="Fix the file or pass --config to use another one")


class RepoNotFoundError(UpdateError):
    """Raised when the gt source repository cannot be located."""

    stage = "locate"

    def __init__(self, cause: object = "") -> None:
        detail = "cannot locate gt source repository"
        if cause:
            detail = f"{detail}: {cause}"
        super().__init__(
            detail,
            hint=(
                "Make sure you have the gastown repository cloned and set "
                f"{ENV_ROOT_OVERRIDE} if needed"
            ),
        )


class InstallLocationError(UpdateError):
    """Raised when the fallback install path cannot be computed."""

    stage = "install-location"

    def __init__(self, cause: object = "") -> None:
        detail = "determining install location: cannot find home directory"
        if cause:
            detail = f"{detail}: {cause}"
        super().__init__(detail, hint="Pass --install-path to choose a target")


class ToolchainMissingError(UpdateError):
    """Raised when the build toolchain is not on the search path."""

    stage = "toolchain"

    def __init__(self, toolchain: str) -> None:
        self.toolchain = toolchain
        super().__init__(
            f"{toolchain} command not found",
            hint=f"Make sure {toolchain} is installed and in your PATH",
        )


class CommitLookupError(UpdateError):
    """Raised when the current commit hash cannot be read."""

    stage = "version-info"

    def __init__(self, repo_root: Path | str, cause: object = "") -> None:
        detail = f"getting version info: getting commit hash in {repo_root}"
        if cause:
            detail = f"{detail}: {cause}"
        super().__init__(detail)


class StepFailedError(UpdateError):
    """Raised when a fatal build step exits unsuccessfully."""

    def __init__(self, step: str, returncode: int | None, cause: object = "") -> None:
        self.returncode = returncode
        if returncode is not None:
            detail = f"{step} failed: exit status {returncode}"
        else:
            detail = f"{step} failed: {cause}"
        super().__init__(detail)


class GenerateFailedError(StepFailedError):
    """Raised when the code generation step fails."""

    stage = "generate"


class BuildFailedError(StepFailedError):
    """Raised when compiling the binary fails."""

    stage = "build"


class BuildArtifactMissingError(UpdateError):
    """Raised when the build exits cleanly but produced no binary."""

    stage = "verify"

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"build succeeded but binary not found at {path}")


class InstallFailedError(UpdateError):
    """Raised when the atomic install cannot complete."""

    stage = "install"

    def __init__(self, action: str, path: Path | str, cause: object = "") -> None:
        self.action = action
        self.path = Path(path)
        detail = f"installing binary: {action} {path}"
        if cause:
            detail = f"{detail}: {cause}"
        super().__init__(detail)
