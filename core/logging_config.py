"""
Logging Configuration
Sets up file-based logging for the app, with a quieter console handler
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from core.config import Settings, load_settings

ROOT_LOGGER_NAME = "nodrunktext"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Max log file size (10MB)
MAX_BYTES = 10 * 1024 * 1024
BACKUP_COUNT = 5


def setup_file_logger(name: str, log_file: Path, level: int = logging.INFO) -> logging.Logger:
    """
    Set up a file-based logger with rotation

    Args:
        name: Logger name
        log_file: Path to log file
        level: Logging level

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=MAX_BYTES,
        backupCount=BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))

    # Only warnings and errors on the console
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    return logger


def setup_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """
    Configure the `nodrunktext` logger tree. Child loggers
    (`nodrunktext.policy`, `nodrunktext.store`, ...) propagate into it.
    """
    settings = settings or load_settings()
    level = getattr(logging, settings.log_level, logging.INFO)

    log_dir = settings.log_dir
    log_dir.mkdir(parents=True, exist_ok=True)

    logger = setup_file_logger(ROOT_LOGGER_NAME, log_dir / "nodrunktext.log", level)
    logger.info("Logging configured. Log files in: %s", log_dir)
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger under the app's logger tree, e.g. get_logger("policy").
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
