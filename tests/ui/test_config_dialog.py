"""ConfigDialog tests - prefill and verbatim submission"""

import pytest
from PySide6.QtCore import Qt
from PySide6.QtWidgets import QDialogButtonBox, QLineEdit

from tuyatray.core.config import Configuration
from tuyatray.ui.dialogs import ConfigDialog


@pytest.fixture
def dialog(qtbot, complete_config):
    dialog = ConfigDialog(complete_config)
    qtbot.addWidget(dialog)
    return dialog


@pytest.mark.gui
class TestConfigDialog:
    def test_fields_are_prefilled(self, dialog):
        inputs = dialog.inputs
        assert inputs["base_url"].text() == "https://openapi.tuyaeu.com"
        assert inputs["access_key"].text() == "access-id"
        assert inputs["secret_key"].text() == "access-secret"
        assert inputs["user_id"].text() == "user-1"

    def test_has_four_inputs(self, dialog):
        assert len(dialog.findChildren(QLineEdit)) == 4

    def test_secret_key_is_masked(self, dialog):
        assert dialog.inputs["secret_key"].echoMode() == QLineEdit.EchoMode.Password

    def test_is_modal(self, dialog):
        assert dialog.windowModality() == Qt.WindowModality.ApplicationModal

    def test_save_emits_values_verbatim(self, qtbot, dialog):
        dialog.inputs["base_url"].setText("  https://openapi.tuyaus.com/ ")
        dialog.inputs["user_id"].setText("<new-user>")

        save_button = dialog.button_box.button(QDialogButtonBox.StandardButton.Save)
        with qtbot.waitSignal(dialog.config_submitted, timeout=1000) as blocker:
            qtbot.mouseClick(save_button, Qt.MouseButton.LeftButton)

        submitted = blocker.args[0]
        assert submitted == Configuration(
            base_url="  https://openapi.tuyaus.com/ ",
            access_key="access-id",
            secret_key="access-secret",
            user_id="<new-user>",
        )

    def test_empty_fields_are_submitted_without_validation(self, qtbot):
        dialog = ConfigDialog(Configuration())
        qtbot.addWidget(dialog)

        with qtbot.waitSignal(dialog.config_submitted, timeout=1000) as blocker:
            dialog.button_box.accepted.emit()

        assert blocker.args[0] == Configuration()
