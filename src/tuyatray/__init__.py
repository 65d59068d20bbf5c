"""TuyaTray - system tray control for Tuya cloud devices

Lists the devices registered to a Tuya cloud account, polls their
status and toggles boolean properties from the tray menu.
"""

__version__ = "0.1.0"
__author__ = "TuyaTray contributors"
__description__ = "TuyaTray"

from .utils import app_logger

__all__ = ["app_logger", "__version__"]
