"""Shared utility functions."""
from datetime import datetime, timezone


def now_rfc3339(now: datetime | None = None) -> str:
    """Return *now* (default: current time) as an RFC 3339 UTC timestamp."""
    moment = now or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def path_has_marker(path: str, markers: list[str] | tuple[str, ...]) -> bool:
    """Return True when any of *markers* occurs in *path*."""
    return any(marker and marker in path for marker in markers)
