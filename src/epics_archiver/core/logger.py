"""
Logging configuration for the archiver query pipeline.

Console output goes to stderr; stdout is reserved for JSON results. A DEBUG
file log is added only when a log file is configured.
"""

import logging
import sys
import time
from pathlib import Path
from typing import Optional

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

CONSOLE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

# Batch queries log from worker threads
FILE_FORMAT = (
    "%(asctime)s - %(levelname)s - [%(threadName)s] "
    "%(module)s:%(lineno)d - %(message)s"
)


def setup_logger(
    name: str = "epics_archiver",
    log_file: Optional[str] = None,
    log_level: str = "INFO"
) -> logging.Logger:
    """
    Configure the application logger.

    Args:
        name: Logger name
        log_file: Path of a DEBUG-level log file; console only when None
        log_level: Console level name (DEBUG, INFO, WARNING, ...)

    Returns:
        Configured logger instance
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logger = logging.getLogger(name)
    logger.handlers.clear()
    logger.propagate = False

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, DATE_FORMAT))
    logger.addHandler(console_handler)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, DATE_FORMAT))
        logger.addHandler(file_handler)
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(level)

    return logger


class LoggerContext:
    """Log the start, duration and outcome of a named operation."""

    def __init__(self, logger: logging.Logger, operation: str):
        self.logger = logger
        self.operation = operation
        self.elapsed: Optional[float] = None
        self._started = 0.0

    def __enter__(self):
        self._started = time.monotonic()
        self.logger.info(f"Starting {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.elapsed = time.monotonic() - self._started

        if exc_type is None:
            self.logger.info(f"Completed {self.operation} in {self.elapsed:.2f}s")
        else:
            self.logger.error(f"Failed {self.operation} after {self.elapsed:.2f}s: {exc_val}")

        return False
