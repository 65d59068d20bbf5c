"""Mock objects"""
from .cloud_mock import ImmediateExecutor, ManualExecutor, MockCloudClient

__all__ = [
    "ImmediateExecutor",
    "ManualExecutor",
    "MockCloudClient",
]
