"""Helper utilities"""

import os
import platform
from pathlib import Path

from .constants import Paths


def get_app_data_dir() -> Path:
    """Get application data directory

    Returns:
        Path to application data directory
    """
    if platform.system() == "Windows":
        app_data = os.environ.get("APPDATA", str(Path.home()))
        return Path(app_data) / Paths.CONFIG_DIR_NAME
    elif platform.system() == "Darwin":  # macOS
        return Path.home() / "Library" / "Application Support" / Paths.CONFIG_DIR_NAME
    else:  # Linux and others
        return Path.home() / ".config" / Paths.CONFIG_DIR_NAME


def get_config_path() -> Path:
    return get_app_data_dir() / Paths.CONFIG_FILE_NAME


def get_log_dir() -> Path:
    return get_app_data_dir() / Paths.LOG_DIR_NAME
