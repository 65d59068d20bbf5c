"""Shared utilities: logging, exceptions, constants and paths"""

from .exceptions import (  # noqa: F401
    CloudAPIError,
    ConfigurationError,
    ErrorCategory,
    ErrorSeverity,
    TuyaTrayError,
)
from .logger import AppLogger, LogCategory, app_logger  # noqa: F401
from .helpers import get_app_data_dir, get_config_path, get_log_dir  # noqa: F401

__all__ = [
    "app_logger",
    "AppLogger",
    "LogCategory",
    "TuyaTrayError",
    "ConfigurationError",
    "CloudAPIError",
    "ErrorCategory",
    "ErrorSeverity",
    "get_app_data_dir",
    "get_config_path",
    "get_log_dir",
]
