"""Menu builder - pure transformation of poll results into a menu tree

Nothing here touches Qt. The tray widget renders the resulting
MenuNode tree and reports clicks back as the node's MenuAction.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Tuple

from ..cloud.models import Device, FetchResult, MenuSnapshot, StatusItem
from ..utils.constants import MenuLabels


class ActionType(Enum):
    TOGGLE = "toggle"
    OPEN_CONFIGURATION = "open_configuration"
    QUIT = "quit"


class NodeKind(Enum):
    ACTION = "action"
    SUBMENU = "submenu"
    SEPARATOR = "separator"
    INFO = "info"


@dataclass(frozen=True)
class MenuAction:
    """What a click on a menu entry asks for"""

    type: ActionType
    device_id: Optional[str] = None
    code: Optional[str] = None
    current_value: Any = None

    @classmethod
    def toggle(cls, device_id: str, code: str, current_value: Any) -> "MenuAction":
        return cls(ActionType.TOGGLE, device_id, code, current_value)


@dataclass(frozen=True)
class MenuNode:
    label: str = ""
    kind: NodeKind = NodeKind.ACTION
    enabled: bool = True
    action: Optional[MenuAction] = None
    children: Tuple["MenuNode", ...] = ()

    @property
    def clickable(self) -> bool:
        return self.enabled and self.action is not None

    @classmethod
    def separator(cls) -> "MenuNode":
        return cls(kind=NodeKind.SEPARATOR, enabled=False)

    @classmethod
    def info(cls, label: str) -> "MenuNode":
        """A disabled, informational entry"""
        return cls(label=label, kind=NodeKind.INFO, enabled=False)


def status_label(item: StatusItem) -> str:
    return f"{item.code} - {MenuLabels.ON if item.value else MenuLabels.OFF}"


def build_status_entry(device: Device, item: StatusItem) -> MenuNode:
    if item.is_toggleable:
        return MenuNode(
            label=status_label(item),
            action=MenuAction.toggle(device.id, item.code, item.value),
        )
    return MenuNode(label=status_label(item), enabled=False)


def build_device_menu(device: Device, status: FetchResult[StatusItem]) -> MenuNode:
    """One submenu per device, one entry per status code in vendor order"""
    if not status.ok:
        children: Tuple[MenuNode, ...] = (MenuNode.info(MenuLabels.STATUS_FAILED),)
    elif status.is_empty:
        children = (MenuNode.info(MenuLabels.NO_STATUS),)
    else:
        children = tuple(build_status_entry(device, item) for item in status)

    return MenuNode(label=device.name, kind=NodeKind.SUBMENU, children=children)


def _footer() -> List[MenuNode]:
    return [
        MenuNode.separator(),
        MenuNode(
            label=MenuLabels.OPEN_CONFIGURATION,
            action=MenuAction(ActionType.OPEN_CONFIGURATION),
        ),
        MenuNode(label=MenuLabels.QUIT, action=MenuAction(ActionType.QUIT)),
    ]


def build_tray_menu(snapshot: Optional[MenuSnapshot], configured: bool = True) -> List[MenuNode]:
    """Full tray menu: devices, separator, configuration, quit

    Args:
        snapshot: Result of the latest poll, None if nothing fetched yet
        configured: False when no complete configuration exists
    """
    if not configured:
        head = [MenuNode.info(MenuLabels.NOT_CONFIGURED)]
    elif snapshot is None:
        head = [MenuNode.info(MenuLabels.LOADING)]
    elif not snapshot.devices.ok:
        head = [MenuNode.info(MenuLabels.DEVICES_FAILED)]
    elif snapshot.devices.is_empty:
        head = [MenuNode.info(MenuLabels.NO_DEVICES)]
    else:
        head = [build_device_menu(entry.device, entry.status) for entry in snapshot.devices]

    return head + _footer()


__all__ = [
    "ActionType",
    "NodeKind",
    "MenuAction",
    "MenuNode",
    "status_label",
    "build_device_menu",
    "build_tray_menu",
]
