"""Logging setup for the CLI: plain text or structured JSON lines."""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

_TEXT_FORMAT = "%(levelname)s %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """Custom JSON log formatter."""

    def __init__(self, service_name: str = "unknown") -> None:
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "service_name": self.service_name,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = str(record.exc_info[1])
        return json.dumps(log_entry)


def setup_logging(
    service_name: str,
    level: str = "WARNING",
    *,
    json_format: bool = False,
    logger_name: str = "src",
) -> logging.Logger:
    """Configure logging for the command line tool.

    Log records go to stderr so they never mix with the command's own
    output on stdout.

    Args:
        service_name: Name reported in JSON log entries.
        level: Log level string (e.g. "INFO", "DEBUG").
        json_format: Emit one JSON object per line instead of plain text.
        logger_name: Root of the logger hierarchy to configure.

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    logger.propagate = False

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler()
    if json_format:
        handler.setFormatter(JSONFormatter(service_name=service_name))
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT))
    logger.addHandler(handler)

    return logger
