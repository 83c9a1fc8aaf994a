"""
Igor Logging Configuration

Configurable logging with debug mode support.
"""

import os
import logging
import sys
from pathlib import Path
from typing import Optional


# Check for debug mode
DEBUG_MODE = os.environ.get("IGOR_DEBUG", "").lower() in ("1", "true", "yes")


def setup_logging(
    level: Optional[int] = None,
    log_file: Optional[Path] = None,
    quiet: bool = False
) -> logging.Logger:
    """Set up logging configuration.

    Args:
        level: Logging level (default: DEBUG if IGOR_DEBUG, else INFO)
        log_file: Optional path to log file
        quiet: If True, suppress console output

    Returns:
        Configured logger
    """
    if level is None:
        level = logging.DEBUG if DEBUG_MODE else logging.INFO

    logger = logging.getLogger("igor")
    logger.setLevel(level)

    # Clear existing handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if not quiet:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)

        if DEBUG_MODE:
            console_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
        else:
            console_format = "%(message)s"

        console_handler.setFormatter(logging.Formatter(console_format))
        logger.addHandler(console_handler)
    else:
        # Keep records from reaching the root logger's last-resort handler
        logger.addHandler(logging.NullHandler())

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_format = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d: %(message)s"
        file_handler.setFormatter(logging.Formatter(file_format))
        logger.addHandler(file_handler)
        logger.setLevel(logging.DEBUG)

    return logger


def get_logger(name: str = "igor") -> logging.Logger:
    """Get a logger with the Igor configuration.

    Args:
        name: Logger name (will be prefixed with 'igor.')

    Returns:
        Configured logger
    """
    if not name.startswith("igor"):
        name = f"igor.{name}"

    return logging.getLogger(name)


# Environment variables reference
ENV_VARS = {
    "IGOR_DEBUG": "Enable debug logging (1, true, yes)",
    "IGOR_NO_COLOR": "Disable colored output (1, true, yes)",
    "IGOR_FRAME_INTERVAL": "Seconds between animation frames (e.g. 0.1)",
    "IGOR_CONFIG": "Path to a YAML config file",
}
