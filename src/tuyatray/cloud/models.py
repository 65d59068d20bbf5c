"""Data models for Tuya cloud responses"""

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, Tuple, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Device:
    """A device registered to the user's cloud account"""

    id: str
    name: str
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Device":
        device_id = str(data.get("id", ""))
        return cls(id=device_id, name=data.get("name") or device_id, raw=dict(data))


@dataclass(frozen=True)
class StatusItem:
    """One named property of a device and its current value"""

    code: str
    value: Any

    @property
    def is_toggleable(self) -> bool:
        # bool only; ints such as countdown values are display-only
        return type(self.value) is bool

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "StatusItem":
        return cls(code=str(data.get("code", "")), value=data.get("value"))


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Outcome of one cloud call

    Separates "the call worked and returned nothing" from "the call failed",
    so callers can render each case differently.
    """

    items: Tuple[T, ...] = ()
    error: Optional[str] = None

    @classmethod
    def success(cls, items: Optional[List[T]] = None) -> "FetchResult[T]":
        return cls(items=tuple(items or ()))

    @classmethod
    def failure(cls, error: str) -> "FetchResult[T]":
        return cls(items=(), error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def is_empty(self) -> bool:
        return not self.items

    def __iter__(self):
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class DeviceSnapshot:
    """A device together with the status fetched for it in one poll"""

    device: Device
    status: FetchResult[StatusItem]


@dataclass(frozen=True)
class MenuSnapshot:
    """Everything one poll tick fetched

    ``generation`` identifies the client that produced the data; the
    scheduler drops snapshots whose generation is no longer current.
    """

    devices: FetchResult[DeviceSnapshot]
    generation: int = 0


__all__ = ["Device", "StatusItem", "FetchResult", "DeviceSnapshot", "MenuSnapshot"]
