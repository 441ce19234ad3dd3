"""Centralized logging configuration for gendoc."""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

LOG_FILE_NAME = "gendoc.log"


def setup_logging(level: str = "INFO", log_dir: Optional[Path] = None):
    """
    Configure logging for the CLI.

    Args:
        level: Minimum level for the console sink
        log_dir: Directory for the rotating log file; no file sink when None

    Returns:
        logger: Configured logger instance
    """
    # Remove any existing handlers
    logger.remove()

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            sink=log_dir / LOG_FILE_NAME,
            rotation="10 MB",
            level="DEBUG",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
        )

    # Console output goes to stderr so stdout stays clean for command results
    logger.add(
        sink=sys.stderr,
        level=level.upper(),
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
    )

    return logger
