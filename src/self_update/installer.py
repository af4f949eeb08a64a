"""Atomic replacement of an installed, possibly running, binary."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from src.self_update.exceptions import InstallFailedError
from src.shared.constants import DIRECTORY_MODE, EXECUTABLE_MODE, INSTALL_TEMP_SUFFIX

logger = logging.getLogger(__name__)


def atomic_install(source: Path | str, dest: Path | str) -> None:
    """Copy *source* onto *dest* by writing a sibling file then renaming.

    Overwriting a running executable in place fails with "text file
    busy" on some platforms, while renaming over it always succeeds.
    The sibling ``<dest>.new`` never outlives a failed call.

    Args:
        source: The freshly built binary.
        dest: Target path; its parent directory is created if needed.

    Raises:
        InstallFailedError: On any filesystem failure.
    """
    source = Path(source)
    dest = Path(dest)

    try:
        dest.parent.mkdir(mode=DIRECTORY_MODE, parents=True, exist_ok=True)
    except OSError as exc:
        raise InstallFailedError("creating target directory", dest.parent, exc) from exc

    try:
        data = source.read_bytes()
    except OSError as exc:
        raise InstallFailedError("reading source", source, exc) from exc

    tmp_path = dest.with_name(dest.name + INSTALL_TEMP_SUFFIX)
    try:
        fd = os.open(
            str(tmp_path), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, EXECUTABLE_MODE
        )
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        # umask may have masked bits off at creation time
        os.chmod(tmp_path, EXECUTABLE_MODE)
    except OSError as exc:
        _remove_quietly(tmp_path)
        raise InstallFailedError("writing temp file", tmp_path, exc) from exc

    try:
        os.replace(str(tmp_path), str(dest))
    except OSError as exc:
        _remove_quietly(tmp_path)
        raise InstallFailedError("renaming temp file onto", dest, exc) from exc

    logger.debug("Installed %d bytes to %s", len(data), dest)


def _remove_quietly(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        pass
    except OSError as exc:
        logger.warning("Could not remove %s: %s", path, exc)
