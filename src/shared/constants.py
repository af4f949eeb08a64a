"""Shared constants for the gt self-update tool."""
from __future__ import annotations

# Application version
VERSION: str = "0.3.0"

# Application name used for loggers and the console script
APP_NAME: str = "gt-update"

# Tool being rebuilt and the toolchains it needs
DEFAULT_TOOL_NAME: str = "gt"
DEFAULT_TOOLCHAIN: str = "go"
DEFAULT_VCS: str = "git"

# Environment variables
ENV_ROOT_OVERRIDE: str = "GT_ROOT"
ENV_INSTALL_PATH: str = "GT_INSTALL_PATH"
ENV_CONFIG_PATH: str = "GT_UPDATE_CONFIG"
ENV_LOG_LEVEL: str = "LOG_LEVEL"

# Install location defaults (relative to the home directory)
DEFAULT_INSTALL_DIR: str = ".local/bin"
DEFAULT_CONFIG_PATH: str = "~/.config/gt/update.yaml"

# Path fragments that mark a binary as ephemeral (temp dir, go build cache)
EPHEMERAL_PATH_MARKERS: list[str] = ["/tmp", "go-build"]

# Permissions
EXECUTABLE_MODE: int = 0o755
DIRECTORY_MODE: int = 0o755

# Suffix of the sibling file used for atomic replacement
INSTALL_TEMP_SUFFIX: str = ".new"

# Length of commit hashes shown to the user
SHORT_COMMIT_LENGTH: int = 7
