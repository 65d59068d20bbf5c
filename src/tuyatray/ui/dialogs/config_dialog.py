"""Configuration dialog - four credential fields and a Save button"""

from typing import Dict, Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QGroupBox,
    QLabel,
    QLineEdit,
    QVBoxLayout,
    QWidget,
)

from ...core.config.configuration import Configuration
from ...utils import app_logger
from ...utils.constants import AppInfo


class ConfigDialog(QDialog):
    """Modal credential form

    Values are submitted verbatim; the controller persists them and
    rebuilds the cloud client.
    """

    config_submitted = Signal(object)  # Configuration

    FIELDS = (
        ("base_url", "Base URL:"),
        ("access_key", "Access Key:"),
        ("secret_key", "Secret Key:"),
        ("user_id", "User ID:"),
    )

    def __init__(self, config: Configuration, parent: Optional[QWidget] = None):
        super().__init__(parent)

        self._inputs: Dict[str, QLineEdit] = {}

        self.setWindowTitle(f"{AppInfo.NAME} - Configuration")
        self.setWindowModality(Qt.WindowModality.ApplicationModal)
        self.resize(400, 300)

        self._setup_ui()
        self.set_config(config)

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)

        title = QLabel("<h2>Configuration</h2>")
        layout.addWidget(title)

        group = QGroupBox("Tuya Cloud Credentials")
        form = QFormLayout(group)

        for attr, label in self.FIELDS:
            line_edit = QLineEdit()
            line_edit.setObjectName(attr)
            if attr == "secret_key":
                line_edit.setEchoMode(QLineEdit.EchoMode.Password)
            self._inputs[attr] = line_edit
            form.addRow(label, line_edit)

        layout.addWidget(group)

        self.button_box = QDialogButtonBox(QDialogButtonBox.StandardButton.Save)
        self.button_box.accepted.connect(self._on_save)
        layout.addWidget(self.button_box)

    # ==================== Public Interface ====================

    @property
    def inputs(self) -> Dict[str, QLineEdit]:
        return self._inputs

    def set_config(self, config: Configuration) -> None:
        for attr, _label in self.FIELDS:
            self._inputs[attr].setText(getattr(config, attr))

    def current_config(self) -> Configuration:
        return Configuration(
            **{attr: self._inputs[attr].text() for attr, _label in self.FIELDS}
        )

    # ==================== Handlers ====================

    def _on_save(self) -> None:
        config = self.current_config()
        app_logger.log_gui_operation(
            "Configuration submitted", f"complete={config.is_complete()}"
        )
        self.config_submitted.emit(config)
        self.accept()
