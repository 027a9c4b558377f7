"""Centralized logging configuration for ticketlink.

Console output is rendered as GitHub Actions workflow commands so warnings
and errors show up as annotations on the check run. A rotating file log can
be enabled for local runs.
"""

from __future__ import annotations

import logging
import os
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

# Default configuration
DEFAULT_LOG_FILE = "ticketlink.log"
DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_BACKUP_COUNT = 5
DEFAULT_LOG_LEVEL = "INFO"

# Log format
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def escape_command_data(text: str) -> str:
    """Escape text for use as workflow command data.

    Args:
        text: Message text.

    Returns:
        Text with '%', CR and LF percent-encoded.
    """
    return text.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class WorkflowCommandFormatter(logging.Formatter):
    """Formats records as GitHub Actions workflow commands.

    WARNING records become ``::warning::`` annotations and ERROR or higher
    become ``::error::`` annotations. Lower levels are printed as plain lines.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if record.levelno >= logging.ERROR:
            return f"::error::{escape_command_data(message)}"
        if record.levelno >= logging.WARNING:
            return f"::warning::{escape_command_data(message)}"
        if record.levelno <= logging.DEBUG:
            return f"::debug::{escape_command_data(message)}"
        return message


def setup_logging(
    log_dir: str | Path | None = None,
    log_file: str = DEFAULT_LOG_FILE,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    level: str | None = None,
    console: bool = True,
    annotations: bool = True,
) -> logging.Logger:
    """Set up logging for a check run.

    Args:
        log_dir: Directory for a rotating log file. Can be set with the
                 TICKETLINK_LOG_DIR environment variable. No file is written
                 when neither is given.
        log_file: Log file name. Defaults to 'ticketlink.log'.
        max_bytes: Maximum size per log file before rotation. Defaults to 10MB.
        backup_count: Number of backup files to keep. Defaults to 5.
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to INFO.
               Can be overridden with TICKETLINK_LOG_LEVEL environment variable.
        console: Whether to log to the console. Defaults to True.
        annotations: Whether console lines use workflow command syntax.

    Returns:
        The root ticketlink logger.
    """
    if log_dir is None:
        log_dir = os.environ.get("TICKETLINK_LOG_DIR") or None

    if level is None:
        level = os.environ.get("TICKETLINK_LOG_LEVEL", DEFAULT_LOG_LEVEL)
    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger("ticketlink")
    logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    if log_dir is not None:
        log_path = Path(log_dir) / log_file
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level)
        if annotations:
            console_handler.setFormatter(WorkflowCommandFormatter("%(message)s"))
        else:
            console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(console_handler)

    logger.debug("ticketlink logging initialized (level=%s, dir=%s)", level, log_dir)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a component.

    Args:
        name: Component name (e.g., 'runner', 'github.client').
              Will be prefixed with 'ticketlink.'.

    Returns:
        Logger instance for the component.
    """
    if not name.startswith("ticketlink."):
        name = f"ticketlink.{name}"
    return logging.getLogger(name)


def truncate_output(output: str, max_length: int = 2000) -> str:
    """Truncate long output for logging.

    Args:
        output: The output string to truncate.
        max_length: Maximum length before truncation.

    Returns:
        Truncated string with indicator if truncated.
    """
    if len(output) <= max_length:
        return output
    return output[:max_length] + f"\n... [truncated, {len(output) - max_length} more chars]"


def sanitize_for_log(text: str) -> str:
    """Remove sensitive data from log output.

    Args:
        text: Text that may contain sensitive data.

    Returns:
        Sanitized text safe for logging.
    """
    patterns = [
        (r"ghp_[a-zA-Z0-9]{36}", "[GITHUB_TOKEN]"),  # GitHub PAT
        (r"gho_[a-zA-Z0-9]{36}", "[GITHUB_TOKEN]"),  # GitHub OAuth
        (r"ghs_[a-zA-Z0-9]{36}", "[GITHUB_TOKEN]"),  # Actions installation token
        (r"github_pat_[a-zA-Z0-9_]{82}", "[GITHUB_TOKEN]"),  # Fine-grained PAT
        (r"Bearer [a-zA-Z0-9._-]+", "Bearer [REDACTED]"),
        (r"token=[a-zA-Z0-9._-]+", "token=[REDACTED]"),
    ]

    result = text
    for pat, replacement in patterns:
        result = re.sub(pat, replacement, result)

    return result
