"""Tuya cloud access"""

from .models import Device, DeviceSnapshot, FetchResult, MenuSnapshot, StatusItem
from .client import TuyaCloudClient

__all__ = [
    "Device",
    "DeviceSnapshot",
    "FetchResult",
    "MenuSnapshot",
    "StatusItem",
    "TuyaCloudClient",
]
