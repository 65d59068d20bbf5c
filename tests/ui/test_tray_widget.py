"""TrayWidget tests - menu rendering while the menu is open"""

import pytest
from PySide6.QtCore import QPoint

from tuyatray.cloud.models import FetchResult, MenuSnapshot
from tuyatray.core.menu_builder import build_tray_menu
from tuyatray.ui.tray import TrayWidget
from tuyatray.utils.constants import MenuLabels


@pytest.fixture
def widget(qtbot):
    widget = TrayWidget()
    yield widget
    widget.context_menu.hide()
    widget.cleanup()


def first_label(widget: TrayWidget) -> str:
    return widget.context_menu.actions()[0].text()


@pytest.mark.gui
class TestTrayWidget:
    def test_closed_menu_is_rendered_immediately(self, widget):
        widget.set_menu(build_tray_menu(None, configured=True))

        assert first_label(widget) == MenuLabels.LOADING

    def test_update_waits_until_open_menu_closes(self, qtbot, widget):
        widget.set_menu(build_tray_menu(None, configured=True))
        menu = widget.context_menu
        menu.popup(QPoint(0, 0))
        qtbot.waitUntil(menu.isVisible, timeout=1000)

        widget.set_menu(build_tray_menu(MenuSnapshot(FetchResult.failure("offline"))))
        assert first_label(widget) == MenuLabels.LOADING

        menu.hide()

        assert first_label(widget) == MenuLabels.DEVICES_FAILED

    def test_only_latest_deferred_update_is_applied(self, qtbot, widget):
        widget.set_menu(build_tray_menu(None, configured=True))
        menu = widget.context_menu
        menu.popup(QPoint(0, 0))
        qtbot.waitUntil(menu.isVisible, timeout=1000)

        widget.set_menu(build_tray_menu(MenuSnapshot(FetchResult.failure("offline"))))
        widget.set_menu(build_tray_menu(MenuSnapshot(FetchResult.success([]))))
        menu.hide()

        assert first_label(widget) == MenuLabels.NO_DEVICES
