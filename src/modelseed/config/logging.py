"""Logging configuration for modelseed."""

import logging
import sys
from pathlib import Path
from typing import Optional
from .settings import get_settings


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None,
) -> None:
    """
    Configure logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for file logging
        format_string: Optional custom format string
    """
    settings = get_settings()
    log_level = (level or settings.log_level).upper()
    log_file_path = log_file or settings.log_file

    if format_string is None:
        format_string = (
            "%(asctime)s - %(name)s - %(levelname)s - "
            "[%(filename)s:%(lineno)d] - %(message)s"
        )

    root_logger = logging.getLogger("modelseed")
    root_logger.setLevel(getattr(logging, log_level))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, log_level))
    console_handler.setFormatter(logging.Formatter(format_string))
    root_logger.addHandler(console_handler)

    if log_file_path:
        file_handler = logging.FileHandler(log_file_path, encoding="utf-8")
        file_handler.setLevel(getattr(logging, log_level))
        file_handler.setFormatter(logging.Formatter(format_string))
        root_logger.addHandler(file_handler)

    root_logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    if not logging.getLogger("modelseed").handlers:
        setup_logging()

    if name.startswith("modelseed"):
        return logging.getLogger(name)
    return logging.getLogger(f"modelseed.{name}")
