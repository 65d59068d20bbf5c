"""System tray widget - Pure UI component

Renders a MenuNode tree into the tray context menu and forwards
clicks. No business logic or state management.
"""

from typing import List, Optional, Sequence

from PySide6.QtCore import QObject, QRectF, Qt, Signal
from PySide6.QtGui import QAction, QColor, QIcon, QPainter, QPen, QPixmap
from PySide6.QtWidgets import QMenu, QSystemTrayIcon

from ...core.menu_builder import MenuNode, NodeKind
from ...utils import LogCategory, app_logger
from ...utils.constants import AppInfo, Timing


class TrayWidget(QObject):
    """Pure UI component for the system tray

    Responsible only for:
    - Creating and displaying the tray icon
    - Rendering the context menu from a MenuNode tree
    - Forwarding clicks as MenuAction values
    """

    # UI events (forwarded to controller)
    menu_action_triggered = Signal(object)  # MenuAction

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)

        self._tray_icon: Optional[QSystemTrayIcon] = None
        self._context_menu = QMenu()
        self._pending_nodes: Optional[List[MenuNode]] = None
        self._context_menu.aboutToHide.connect(self._apply_pending_menu)

        if not QSystemTrayIcon.isSystemTrayAvailable():
            # The menu is still built so the controller keeps working
            app_logger.warning(
                "System tray is not available on this system",
                LogCategory.UI,
                component="tray_widget",
            )
            return

        self._setup_tray_icon()

    def _setup_tray_icon(self) -> None:
        """Initialize the system tray icon"""
        self._tray_icon = QSystemTrayIcon(self._create_icon())
        self._tray_icon.setContextMenu(self._context_menu)
        self.set_tooltip(AppInfo.TOOLTIP)
        self._tray_icon.show()

    def _create_icon(self) -> QIcon:
        """Paint a power-button style tray icon

        Returns:
            QIcon for the tray
        """
        size = 32
        pixmap = QPixmap(size, size)
        pixmap.fill(QColor(0, 0, 0, 0))

        painter = QPainter(pixmap)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        # Rounded square background
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QColor(255, 98, 0))  # Tuya orange
        painter.drawRoundedRect(QRectF(1, 1, size - 2, size - 2), size * 0.22, size * 0.22)

        # Power symbol: open ring plus vertical bar
        pen = QPen(QColor(255, 255, 255))
        pen.setWidth(max(2, int(size * 0.09)))
        pen.setCapStyle(Qt.PenCapStyle.RoundCap)
        painter.setPen(pen)
        painter.setBrush(Qt.BrushStyle.NoBrush)

        ring = QRectF(size * 0.25, size * 0.27, size * 0.5, size * 0.5)
        # Qt angles are in 1/16th degree; leave a gap at the top
        painter.drawArc(ring, 120 * 16, 300 * 16)
        painter.drawLine(int(size / 2), int(size * 0.18), int(size / 2), int(size * 0.48))

        painter.end()

        return QIcon(pixmap)

    # ==================== Menu rendering ====================

    def set_menu(self, nodes: Sequence[MenuNode]) -> None:
        """Replace the context menu contents

        While the menu is open the update is deferred until it closes,
        so a poll never rebuilds the menu under the user's cursor.
        """
        if self._context_menu.isVisible():
            self._pending_nodes = list(nodes)
            return
        self._render(nodes)

    def _apply_pending_menu(self) -> None:
        if self._pending_nodes is not None:
            nodes, self._pending_nodes = self._pending_nodes, None
            self._render(nodes)

    def _render(self, nodes: Sequence[MenuNode]) -> None:
        for action in self._context_menu.actions():
            if action.menu() is not None:
                action.menu().deleteLater()
        self._context_menu.clear()
        self._populate(self._context_menu, nodes)

    def _populate(self, menu: QMenu, nodes: Sequence[MenuNode]) -> None:
        for node in nodes:
            if node.kind == NodeKind.SEPARATOR:
                menu.addSeparator()
            elif node.kind == NodeKind.SUBMENU:
                submenu = menu.addMenu(node.label)
                submenu.setEnabled(node.enabled)
                self._populate(submenu, node.children)
            else:
                menu.addAction(self._create_action(menu, node))

    def _create_action(self, menu: QMenu, node: MenuNode) -> QAction:
        action = QAction(node.label, menu)
        action.setEnabled(node.clickable)
        if node.clickable:
            action.triggered.connect(
                lambda checked=False, menu_action=node.action: self.menu_action_triggered.emit(
                    menu_action
                )
            )
        return action

    # ==================== Public UI Interface ====================

    @property
    def context_menu(self) -> QMenu:
        return self._context_menu

    def set_tooltip(self, tooltip: str) -> None:
        if self._tray_icon:
            self._tray_icon.setToolTip(tooltip)

    def show_message(
        self,
        title: str,
        message: str,
        icon: QSystemTrayIcon.MessageIcon = QSystemTrayIcon.MessageIcon.Information,
        timeout: int = Timing.NOTIFICATION_TIMEOUT_MS,
    ) -> bool:
        """Show a system tray message

        Returns:
            True if message was shown, False if not supported
        """
        if self._tray_icon and QSystemTrayIcon.supportsMessages():
            self._tray_icon.showMessage(title, message, icon, timeout)
            return True
        return False

    def cleanup(self) -> None:
        """Clean up resources"""
        if self._tray_icon:
            self._tray_icon.hide()
            self._tray_icon = None
        self._pending_nodes = None
        self._context_menu.clear()
