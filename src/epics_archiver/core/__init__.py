"""
Core utilities for the archiver query pipeline.

Provides configuration management, logging, errors and date handling.
"""

from .config import Config
from .logger import setup_logger, LoggerContext
from . import constants
from .date_utils import DateUtils
from .errors import (
    ArchiverError,
    ConfigError,
    QueryError,
    UnknownEnumError,
    NetworkError,
    QueryCancelledError,
    DecodeError,
)

__all__ = [
    "Config",
    "setup_logger",
    "LoggerContext",
    "constants",
    "DateUtils",
    "ArchiverError",
    "ConfigError",
    "QueryError",
    "UnknownEnumError",
    "NetworkError",
    "QueryCancelledError",
    "DecodeError",
]
