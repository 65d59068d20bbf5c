"""Core interface definitions

Components depend on these interfaces rather than on concrete
implementations, which keeps the Qt shell and the cloud client
replaceable in tests.
"""

from .cloud import ICloudClient
from .config import IConfigStore

__all__ = ["ICloudClient", "IConfigStore"]
