import logging
import sys
from typing import Iterable, Optional

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LEVEL = logging.INFO


def setup_logger(
    name: str,
    level: int = DEFAULT_LEVEL,
    log_file: Optional[str] = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """
    Configures and returns a logger writing to stderr and, optionally, a file.

    Args:
        name (str): Logger name, usually the module's __name__.
        level (int): Threshold for the logger and its handlers.
        log_file (str, optional): Append log lines to this file as well.
        log_format (str, optional): Format string for every handler.

    Returns:
        logging.Logger: The configured logger.
    """
    logger = logging.getLogger(name)
    # Calling twice for one name must not stack handlers
    if logger.hasHandlers():
        logger.handlers.clear()

    logger.setLevel(level)
    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
        logger.debug(f"Logging to console and {log_file} at {logging.getLevelName(level)}")

    return logger


def get_level_from_string(level_str: str) -> int:
    """Converts a log level name to a logging constant, INFO if unknown."""
    return LOG_LEVELS.get(level_str.lower(), DEFAULT_LEVEL)


def set_level(level: int, names: Iterable[str]) -> None:
    """Re-levels already configured loggers and their handlers."""
    for name in names:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
