"""Logging configuration for the portal."""

import logging
import os
import sys
from typing import Optional

from app import config

_logger: Optional[logging.Logger] = None


def setup_logger() -> logging.Logger:
    """Sets up and returns the application logger.

    Always logs to the console; also logs to ``config.LOG_FILE`` when it is set.
    """
    global _logger
    if _logger:
        return _logger

    logger = logging.getLogger("SubmissionPortal")
    logger.setLevel(config.LOG_LEVEL)

    # Prevent adding multiple handlers if called again
    if not logger.handlers:
        formatter = logging.Formatter(config.LOG_FORMAT)

        ch = logging.StreamHandler(sys.stdout)
        ch.setLevel(config.LOG_LEVEL)
        ch.setFormatter(formatter)
        logger.addHandler(ch)

        if config.LOG_FILE:
            try:
                log_dir = os.path.dirname(config.LOG_FILE)
                if log_dir:
                    os.makedirs(log_dir, exist_ok=True)

                fh = logging.FileHandler(config.LOG_FILE, mode="a", encoding="utf-8")
                fh.setLevel(config.LOG_LEVEL)
                fh.setFormatter(formatter)
                logger.addHandler(fh)
            except OSError as e:
                # Continue without file logging if it fails
                logger.error(f"Failed to create file handler for {config.LOG_FILE}: {e}")

    _logger = logger
    logger.debug("Logger initialized.")
    return logger


def get_logger() -> logging.Logger:
    """Returns the singleton logger instance, setting it up if necessary."""
    if _logger is None:
        return setup_logger()
    return _logger
