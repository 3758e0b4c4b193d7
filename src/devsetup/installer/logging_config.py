"""
devsetup Logging Configuration

Configurable logging with debug mode support.
"""

import os
import logging
import sys
from pathlib import Path
from datetime import datetime
from typing import Optional


# Check for debug mode
DEBUG_MODE = os.environ.get("DEVSETUP_DEBUG", "").lower() in ("1", "true", "yes")


def setup_logging(
    level: Optional[int] = None,
    log_file: Optional[Path] = None,
    quiet: bool = False
) -> logging.Logger:
    """Set up logging configuration.

    Args:
        level: Logging level (default: DEBUG if DEVSETUP_DEBUG, else INFO)
        log_file: Optional path to log file
        quiet: If True, suppress console output

    Returns:
        Configured logger
    """
    # Determine log level
    if level is None:
        level = logging.DEBUG if DEBUG_MODE else logging.INFO

    # Get logger
    logger = logging.getLogger("devsetup")
    logger.setLevel(logging.DEBUG if log_file else level)
    logger.propagate = False

    # Clear existing handlers
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    # Console handler
    if not quiet:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)

        if DEBUG_MODE:
            console_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
        else:
            console_format = "%(message)s"

        console_handler.setFormatter(logging.Formatter(console_format))
        # Status lines are already on the rich console
        console_handler.addFilter(lambda record: not record.name.startswith("devsetup.ui"))
        logger.addHandler(console_handler)
    else:
        logger.addHandler(logging.NullHandler())

    # File handler (if specified)
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_format = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d: %(message)s"
        file_handler.setFormatter(logging.Formatter(file_format))
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = "devsetup") -> logging.Logger:
    """Get a logger with the devsetup configuration.

    Args:
        name: Logger name (will be prefixed with 'devsetup.')

    Returns:
        Configured logger
    """
    if not name.startswith("devsetup"):
        name = f"devsetup.{name}"

    return logging.getLogger(name)


def get_log_dir() -> Path:
    """Directory holding per-day run transcripts."""
    override = os.environ.get("DEVSETUP_LOG_DIR")
    if override:
        return Path(override).expanduser()
    state_home = os.environ.get("XDG_STATE_HOME") or str(Path.home() / ".local" / "state")
    return Path(state_home) / "devsetup"


def get_log_path() -> Path:
    """Get the default log file path."""
    return get_log_dir() / f"devsetup-{datetime.now().strftime('%Y-%m-%d')}.log"

