"""Cloud client interface"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ...cloud.models import Device, FetchResult, StatusItem


class ICloudClient(ABC):
    """Device listing, status and commands against the vendor cloud

    Implementations never raise on request failure; they return a
    failed FetchResult instead.
    """

    @property
    @abstractmethod
    def user_id(self) -> str:
        pass

    @abstractmethod
    def list_devices(self, user_id: str) -> "FetchResult[Device]":
        pass

    @abstractmethod
    def fetch_status(self, device_id: str) -> "FetchResult[StatusItem]":
        pass

    @abstractmethod
    def send_command(self, device_id: str, code: str, new_value: Any) -> "FetchResult[Any]":
        pass

    def toggle(self, device_id: str, code: str, current_value: Any) -> "FetchResult[Any]":
        """Flip a boolean status code"""
        return self.send_command(device_id, code, not current_value)


__all__ = ["ICloudClient"]
