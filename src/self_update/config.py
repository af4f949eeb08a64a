"""Configuration dataclasses and loader for the update command."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from src.self_update.exceptions import ConfigError
from src.shared.constants import (
    DEFAULT_INSTALL_DIR,
    DEFAULT_TOOL_NAME,
    DEFAULT_TOOLCHAIN,
    DEFAULT_VCS,
    EPHEMERAL_PATH_MARKERS,
)


@dataclass
class ToolConfig:
    """What to build and how."""

    name: str = DEFAULT_TOOL_NAME
    build_package: str = "./cmd/gt"
    ldflags_module: str = "github.com/steveyegge/gastown/internal/cmd"
    toolchain: str = DEFAULT_TOOLCHAIN
    vcs: str = DEFAULT_VCS
    generate_args: list[str] = field(default_factory=lambda: ["generate", "./..."])


@dataclass
class InstallConfig:
    """Where the rebuilt binary goes."""

    path: str = ""
    default_dir: str = DEFAULT_INSTALL_DIR
    ephemeral_markers: list[str] = field(
        default_factory=lambda: list(EPHEMERAL_PATH_MARKERS)
    )
    codesign: bool = True


@dataclass
class RepoConfig:
    """How the source repository is found."""

    root: str = ""
    search_paths: list[str] = field(
        default_factory=lambda: [
            "~/gt",
            "~/gastown",
            "~/src/gastown",
            "~/go/src/github.com/steveyegge/gastown",
        ]
    )


@dataclass
class UpdaterConfig:
    """Top-level configuration composing all sub-configs."""

    tool: ToolConfig = field(default_factory=ToolConfig)
    install: InstallConfig = field(default_factory=InstallConfig)
    repo: RepoConfig = field(default_factory=RepoConfig)
    log_format: str = "text"  # "text" or "json"


def load_updater_config(path: Path | str | None = None) -> UpdaterConfig:
    """Load update configuration from a YAML file.

    Missing sections fall back to defaults.  Unknown keys are silently
    ignored so that forward-compatible config files work.

    Args:
        path: Path to config YAML.  If ``None`` or the file does not
              exist, returns full defaults.

    Returns:
        Populated configuration dataclass.

    Raises:
        ConfigError: If the file is not valid YAML or not a mapping.
    """
    if path is None:
        return UpdaterConfig()

    path = Path(path).expanduser()
    if not path.exists():
        return UpdaterConfig()

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(path, exc) from exc
    if not isinstance(raw, dict):
        raise ConfigError(
            path, f"expected a mapping at the top level, got {type(raw).__name__}"
        )

    def _pick(data: Any, cls: type) -> dict[str, Any]:
        """Filter *data* to only keys accepted by *cls*."""
        if not isinstance(data, dict):
            return {}
        valid = {f.name for f in cls.__dataclass_fields__.values()}
        return {k: v for k, v in data.items() if k in valid}

    top_level = _pick(raw, UpdaterConfig)
    for key in ("tool", "install", "repo"):
        top_level.pop(key, None)

    return UpdaterConfig(
        tool=ToolConfig(**_pick(raw.get("tool"), ToolConfig)),
        install=InstallConfig(**_pick(raw.get("install"), InstallConfig)),
        repo=RepoConfig(**_pick(raw.get("repo"), RepoConfig)),
        **top_level,
    )
