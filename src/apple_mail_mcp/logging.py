"""Logging infrastructure for apple-mail-mcp.

Diagnostics always go to stderr, because stdout carries the MCP protocol
when the server runs over stdio. Optionally a rotating log file is written
as well:
- apple-mail-mcp.log: all records at or above the configured level

Usage:
    from apple_mail_mcp.logging import setup_logging, get_logger

    # Initialize once at startup
    setup_logging(debug=True)

    # Hand the logger to components that accept one
    executor = JXAExecutor(logger=get_logger(debug=True))

Components that take an optional logger fall back to ``discard_logger()``,
which swallows everything.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOGGER_NAME = "apple_mail_mcp"
LOG_FILE_NAME = "apple-mail-mcp.log"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"

# Default rotation settings
DEFAULT_MAX_BYTES = 5 * 1024 * 1024  # 5MB
DEFAULT_BACKUP_COUNT = 3

# Module-level state
_handlers: list[logging.Handler] = []
_discard_logger: logging.Logger | None = None
_initialized: bool = False


def setup_logging(
    log_level: str = "INFO",
    debug: bool = False,
    log_dir: Path | None = None,
    max_bytes: int | None = None,
    backup_count: int | None = None,
) -> logging.Logger:
    """Initialize the logging system.

    Args:
        log_level: Minimum log level when not debugging (default: INFO)
        debug: Force DEBUG level regardless of log_level
        log_dir: Directory for a rotating log file (default: no file)
        max_bytes: Max size per log file before rotation (default: 5MB)
        backup_count: Number of backup files to keep (default: 3)

    Returns:
        The configured package logger.
    """
    global _initialized

    reset_logging()

    logger = logging.getLogger(LOGGER_NAME)
    level = logging.DEBUG if debug else getattr(logging, log_level.upper(), logging.INFO)
    logger.setLevel(level)
    # Don't propagate to root; the MCP SDK configures its own handlers there
    logger.propagate = False

    formatter = logging.Formatter(LOG_FORMAT)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    _add_handler(logger, stream_handler)

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_dir / LOG_FILE_NAME,
            maxBytes=max_bytes or DEFAULT_MAX_BYTES,
            backupCount=backup_count if backup_count is not None else DEFAULT_BACKUP_COUNT,
        )
        file_handler.setFormatter(formatter)
        _add_handler(logger, file_handler)

    _initialized = True
    return logger


def _add_handler(logger: logging.Logger, handler: logging.Handler) -> None:
    logger.addHandler(handler)
    _handlers.append(handler)


def discard_logger() -> logging.Logger:
    """Get a logger that drops every record.

    Returns:
        Logger with only a NullHandler and propagation disabled.
    """
    global _discard_logger

    if _discard_logger is not None:
        return _discard_logger

    logger = logging.getLogger(f"{LOGGER_NAME}.discard")
    logger.propagate = False
    logger.disabled = True
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    _discard_logger = logger
    return logger


def get_logger(debug: bool = False, name: str | None = None) -> logging.Logger:
    """Get the logger to hand to a component.

    Args:
        debug: When False, the discard logger is returned.
        name: Optional child name under the package logger.

    Returns:
        The package logger (or a child of it), or the discard logger.
    """
    if not debug:
        return discard_logger()

    if not _initialized:
        setup_logging(debug=True)

    return logging.getLogger(f"{LOGGER_NAME}.{name}" if name else LOGGER_NAME)


def reset_logging() -> None:
    """Reset logging state (primarily for testing)."""
    global _handlers, _initialized

    logger = logging.getLogger(LOGGER_NAME)
    for handler in _handlers:
        handler.close()
        logger.removeHandler(handler)

    _handlers = []
    _initialized = False
