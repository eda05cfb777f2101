"""
Logging configuration for PermitRunner.

Console logging to stdout, colored when stdout is a terminal, with an
optional plain-text log file.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union


# ANSI color codes for terminal output
class Colors:
    RESET = '\033[0m'
    RED = '\033[91m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    MAGENTA = '\033[95m'
    CYAN = '\033[96m'


class ColoredFormatter(logging.Formatter):
    """Custom formatter with colors for console output."""

    LEVEL_COLORS = {
        logging.DEBUG: Colors.CYAN,
        logging.INFO: Colors.GREEN,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.RED,
    }

    def format(self, record):
        """Format log record with a colored level name."""
        original_levelname = record.levelname
        if record.levelno in self.LEVEL_COLORS:
            record.levelname = (
                f"{self.LEVEL_COLORS[record.levelno]}"
                f"{record.levelname:8s}"
                f"{Colors.RESET}"
            )
        try:
            return super().format(record)
        finally:
            # The record is shared with the file handler
            record.levelname = original_levelname


def setup_logging(
    level: str = "INFO",
    use_colors: bool = True,
    log_file: Optional[Union[str, Path]] = None
) -> None:
    """
    Set up logging configuration for PermitRunner.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        use_colors: Use colored output for console (default True)
        log_file: Also log to this file (its directory must exist)
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG)

    if use_colors and sys.stdout.isatty():
        console_format = (
            f"{Colors.CYAN}%(asctime)s{Colors.RESET} | "
            f"%(levelname)s | "
            f"{Colors.MAGENTA}%(name)s{Colors.RESET} | "
            f"%(message)s"
        )
        console_formatter = ColoredFormatter(
            console_format,
            datefmt='%H:%M:%S'
        )
    else:
        console_format = (
            "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
        )
        console_formatter = logging.Formatter(
            console_format,
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(Path(log_file))
        file_handler.setLevel(logging.DEBUG)

        file_format = (
            "%(asctime)s | %(levelname)-8s | %(name)s | "
            "%(filename)s:%(lineno)d | %(message)s"
        )
        file_handler.setFormatter(logging.Formatter(
            file_format,
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        root_logger.addHandler(file_handler)

    # asyncio is noisy at DEBUG
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def log_form_action(
    action: str,
    details: str,
    success: bool = True,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Log a browser action on the permit form in a structured format.

    Args:
        action: Action type (e.g., 'navigate', 'type', 'submit')
        details: Details about the action
        success: Whether the action succeeded
        logger: Logger instance (uses root if None)
    """
    if logger is None:
        logger = logging.getLogger()

    status = "✓" if success else "✗"
    level = logging.INFO if success else logging.ERROR

    message = f"{status} {action:15s} | {details}"
    logger.log(level, message)
