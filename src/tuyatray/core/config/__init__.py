"""Configuration value and its JSON file store"""

from .configuration import Configuration
from .config_store import ConfigStore

__all__ = ["Configuration", "ConfigStore"]
