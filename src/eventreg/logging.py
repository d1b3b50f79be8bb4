"""Logging setup shared by the API, the CLI and every component.

All component loggers live under the ``eventreg`` namespace and are obtained
through ``get_logger``. ``setup_logging`` attaches a rotating file handler
(and optionally a console handler) to the namespace root once per process
start; calling it again replaces the handlers.
"""

from __future__ import annotations

import logging
import os
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

ROOT_LOGGER = "eventreg"

DEFAULT_LOG_DIR = "logs"
DEFAULT_LOG_FILE = "eventreg.log"
DEFAULT_MAX_BYTES = 10 * 1024 * 1024
DEFAULT_BACKUP_COUNT = 5
DEFAULT_LOG_LEVEL = "INFO"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Credentials sent to the cache endpoint and registrant mobile numbers
_REDACTIONS = [
    (re.compile(r"Bearer [a-zA-Z0-9._=-]+"), "Bearer [REDACTED]"),
    (re.compile(r"token=[a-zA-Z0-9._=-]+"), "token=[REDACTED]"),
    (re.compile(r"(?<!\d)(?:\+62|62|0)8\d{7,11}(?!\d)"), "[PHONE]"),
]


def _resolve_level(level: str | None) -> tuple[str, int]:
    name = (level or os.environ.get("EVENTREG_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
    return name, getattr(logging, name, logging.INFO)


def _file_handler(path: Path, max_bytes: int, backup_count: int) -> RotatingFileHandler:
    path.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )


def setup_logging(
    log_dir: str | Path | None = None,
    log_file: str = DEFAULT_LOG_FILE,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    level: str | None = None,
    console: bool = True,
) -> logging.Logger:
    """Configure the ``eventreg`` logger.

    Args:
        log_dir: Directory for the log file. Falls back to EVENTREG_LOG_DIR,
            then ``logs`` in the working directory.
        log_file: Log file name inside log_dir.
        max_bytes: Size at which the file is rotated.
        backup_count: Number of rotated files to keep.
        level: Level name. Falls back to EVENTREG_LOG_LEVEL, then INFO.
        console: Also write to stderr.

    Returns:
        The configured ``eventreg`` logger.
    """
    directory = Path(log_dir or os.environ.get("EVENTREG_LOG_DIR") or DEFAULT_LOG_DIR)
    level_name, log_level = _resolve_level(level)
    log_path = directory / log_file

    handlers: list[logging.Handler] = [_file_handler(log_path, max_bytes, backup_count)]
    if console:
        handlers.append(logging.StreamHandler())

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    logger = logging.getLogger(ROOT_LOGGER)
    for old in logger.handlers:
        old.close()
    logger.handlers.clear()
    logger.setLevel(log_level)
    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.info("Logging to %s at %s", log_path, level_name)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger for a component, e.g. ``get_logger("ledger")`` -> ``eventreg.ledger``."""
    if name != ROOT_LOGGER and not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def truncate_output(output: str, max_length: int = 500) -> str:
    """Shorten a response body for a log line, noting how much was cut."""
    if len(output) <= max_length:
        return output
    return output[:max_length] + f"... [truncated, {len(output) - max_length} more chars]"


def sanitize_for_log(text: str) -> str:
    """Mask bearer tokens, token parameters and mobile numbers in text."""
    for pattern, replacement in _REDACTIONS:
        text = pattern.sub(replacement, text)
    return text
