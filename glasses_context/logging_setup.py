"""Logging helpers: file handlers for the query log and titled sections."""

from __future__ import annotations

import logging
from pathlib import Path

LOGGER_NAME = "glasses_context"
LOG_FILENAME = "context-query.log"
ERROR_LOG_FILENAME = "context-query-error.log"
LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def configure_logging(logs_dir: Path | str, level: int = logging.INFO) -> logging.Logger:
    """
    Attach file handlers to the package logger.

    Everything at ``level`` and above goes to ``context-query.log``; errors are
    also written to ``context-query-error.log``. Calling this twice for the
    same directory does not duplicate handlers.

    Args:
        logs_dir: Directory for log files (created if missing)
        level: Minimum level for the main log

    Returns:
        The configured package logger
    """
    logs_dir = Path(logs_dir)
    logs_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    existing = {
        getattr(h, "baseFilename", None)
        for h in logger.handlers
    }
    formatter = logging.Formatter(LOG_FORMAT)

    for filename, handler_level in (
        (LOG_FILENAME, level),
        (ERROR_LOG_FILENAME, logging.ERROR),
    ):
        path = str((logs_dir / filename).resolve())
        if path in existing:
            continue
        handler = logging.FileHandler(path, encoding="utf-8")
        handler.setLevel(handler_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def log_section(logger: logging.Logger, title: str, content: str) -> None:
    """Log ``content`` framed by a ``===== title =====`` header and footer."""
    logger.info(
        "\n===== %s =====\n%s\n%s",
        title,
        content,
        "=" * (len(title) + 12),
    )


__all__ = [
    "ERROR_LOG_FILENAME",
    "LOG_FILENAME",
    "LOGGER_NAME",
    "configure_logging",
    "log_section",
]
