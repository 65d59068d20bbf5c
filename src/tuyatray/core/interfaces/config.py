"""Config store interface"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..config.configuration import Configuration


class IConfigStore(ABC):
    """Load and save the credential configuration"""

    @property
    @abstractmethod
    def config_path(self) -> Path:
        pass

    @abstractmethod
    def load(self) -> "Configuration":
        """Read the stored configuration, defaults when absent"""
        pass

    @abstractmethod
    def save(self, config: "Configuration") -> None:
        """Overwrite the stored configuration"""
        pass


__all__ = ["IConfigStore"]
