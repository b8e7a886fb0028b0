"""
Logging Configuration Module

Provides consistent logging setup for the loader, the splitter and the
command-line tools.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

ROOT_LOGGER = "pdf_token_chunker"

# Library packages log under their module names.
PACKAGE_LOGGERS = ("chunking", "pdf_loader")


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None
) -> logging.Logger:
    """
    Configure logging for the application.

    Args:
        level: Logging level (default: INFO)
        log_file: Optional path to log file
        format_string: Optional custom format string

    Returns:
        Configured application logger
    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    formatter = logging.Formatter(format_string, datefmt="%Y-%m-%d %H:%M:%S")

    handlers: list[logging.Handler] = []

    # Logs go to stderr; stdout carries the JSON output of the CLI.
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    for name in (ROOT_LOGGER, *PACKAGE_LOGGERS):
        logger = logging.getLogger(name)
        logger.setLevel(level)
        # Remove existing handlers to avoid duplicates
        logger.handlers.clear()
        for handler in handlers:
            logger.addHandler(handler)

    return logging.getLogger(ROOT_LOGGER)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a specific module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
