"""Resolution of the path the rebuilt binary is installed to."""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import Callable, Sequence

from src.self_update.exceptions import InstallLocationError
from src.shared.constants import DEFAULT_INSTALL_DIR, EPHEMERAL_PATH_MARKERS
from src.shared.utils import path_has_marker

logger = logging.getLogger(__name__)


def current_tool_binary(tool_name: str) -> Callable[[], str | None]:
    """Return a resolver for the tool binary the user runs from ``PATH``."""

    def _resolve() -> str | None:
        return shutil.which(tool_name)

    return _resolve


def _home() -> Path:
    return Path.home()


def determine_install_location(
    tool_name: str,
    *,
    override: str | Path | None = None,
    current_executable: Callable[[], str | None] | None = None,
    home: Callable[[], Path] = _home,
    ephemeral_markers: Sequence[str] = tuple(EPHEMERAL_PATH_MARKERS),
    default_dir: str = DEFAULT_INSTALL_DIR,
) -> Path:
    """Find where to install the tool binary.

    Priority:

    1. *override*, when given.
    2. The current binary, resolved through symlinks, unless it lives in
       a temp directory or a build cache.  This is a best-effort guess.
    3. ``~/.local/bin/<tool_name>``.

    Raises:
        InstallLocationError: If the home directory cannot be determined.
    """
    if override:
        return Path(override).expanduser()

    resolver = current_executable or current_tool_binary(tool_name)
    try:
        current = resolver()
    except OSError as exc:
        logger.debug("Cannot resolve current binary: %s", exc)
        current = None

    if current:
        resolved = os.path.realpath(current)
        if not path_has_marker(resolved, ephemeral_markers):
            return Path(resolved)
        logger.debug("Ignoring ephemeral binary at %s", resolved)

    try:
        home_dir = home()
    except (RuntimeError, KeyError, OSError) as exc:
        raise InstallLocationError(exc) from exc

    return Path(home_dir) / default_dir / tool_name
