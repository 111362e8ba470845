"""Logging configuration for model2schema."""

import logging
import sys
from pathlib import Path
from typing import Optional
from .settings import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Package root; every module logger is a child of it
ROOT_LOGGER = "model2schema"


def setup_logging(level: Optional[str] = None, log_file: Optional[Path] = None) -> None:
    """
    Route model2schema diagnostics to stderr and, optionally, a file.

    The library itself installs no handlers; the CLI calls this once per run.
    Calling it again replaces the previous handlers.

    Args:
        level: Logging level name; defaults to Settings.log_level
        log_file: Log file path; defaults to Settings.log_file
    """
    settings = get_settings()
    log_level = getattr(logging, (level or settings.log_level).upper())
    log_file_path = log_file or settings.log_file

    package_logger = logging.getLogger(ROOT_LOGGER)
    package_logger.setLevel(log_level)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    # stdout carries generated JSON
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file_path:
        handlers.append(logging.FileHandler(log_file_path, encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)

    package_logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, nested under the package root."""
    if name.startswith(ROOT_LOGGER):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
