"""System tray controller - Business logic component

Handles the business logic behind the tray:
- Application state (configuration and cloud client)
- Poll scheduling and menu rendering
- Toggle commands, configuration window and quit
"""

from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Callable, Optional

from PySide6.QtCore import QObject, Signal
from PySide6.QtWidgets import QSystemTrayIcon

from ...cloud.client import TuyaCloudClient
from ...cloud.models import FetchResult, MenuSnapshot
from ...core.app_state import AppState, AppStateHolder, build_state
from ...core.config.configuration import Configuration
from ...core.interfaces.cloud import ICloudClient
from ...core.interfaces.config import IConfigStore
from ...core.menu_builder import ActionType, MenuAction, build_tray_menu
from ...core.poll_scheduler import PollScheduler
from ...utils import ConfigurationError, LogCategory, app_logger
from ...utils.constants import AppInfo, Timing
from ..dialogs.config_dialog import ConfigDialog
from .tray_widget import TrayWidget


class TrayController(QObject):
    """System tray controller

    Owns the application state and coordinates the tray widget, the
    poll scheduler and the configuration dialog.
    """

    exit_application_requested = Signal()
    # Internal: command finished on a worker thread -> GUI thread
    _command_finished = Signal(object, object)  # MenuAction, FetchResult

    def __init__(
        self,
        config_store: IConfigStore,
        client_factory: Callable[[Configuration], ICloudClient] = TuyaCloudClient,
        poll_interval_ms: int = Timing.POLL_INTERVAL_MS,
        command_executor: Optional[Executor] = None,
        scheduler_factory: Optional[Callable[..., PollScheduler]] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)

        self._component_name = "tray_controller"
        self._is_running = False

        self._config_store = config_store
        self._client_factory = client_factory
        self._poll_interval_ms = poll_interval_ms
        self._command_executor = command_executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="tuyatray-command"
        )
        self._scheduler_factory = scheduler_factory or PollScheduler

        self._state: Optional[AppStateHolder] = None
        self._scheduler: Optional[PollScheduler] = None
        self._tray_widget: Optional[TrayWidget] = None
        self._config_dialog: Optional[ConfigDialog] = None
        self._last_snapshot: Optional[MenuSnapshot] = None

        self._command_finished.connect(self._on_command_finished)

    # ==================== Lifecycle ====================

    def start(self) -> None:
        """Load configuration, show the tray and begin polling

        Raises:
            ConfigurationError: If the stored configuration is unreadable
        """
        if self._is_running:
            return

        config = self._config_store.load()
        self._state = AppStateHolder(build_state(config, self._client_factory), self._client_factory)

        self._tray_widget = TrayWidget(self)
        self._tray_widget.menu_action_triggered.connect(self._on_menu_action)

        self._scheduler = self._scheduler_factory(
            state_provider=lambda: self._state.current,
            interval_ms=self._poll_interval_ms,
            parent=self,
        )
        self._scheduler.snapshot_ready.connect(self._on_snapshot_ready)

        self._is_running = True
        self._render_menu()

        if self.state.configured:
            self._scheduler.start()
        else:
            app_logger.info(
                "Configuration incomplete, opening configuration window",
                LogCategory.STARTUP,
                {"missing": config.missing_fields()},
                self._component_name,
            )
            self.open_configuration()

    def stop(self) -> None:
        """Stop polling and release the tray icon"""
        if not self._is_running:
            return

        self._is_running = False
        if self._scheduler:
            self._scheduler.shutdown()
        self._command_executor.shutdown(wait=False, cancel_futures=True)
        if self._config_dialog is not None:
            self._config_dialog.close()
            self._config_dialog = None
        if self._tray_widget:
            self._tray_widget.cleanup()

    @property
    def is_running(self) -> bool:
        return self._is_running

    @property
    def state(self) -> AppState:
        return self._state.current

    @property
    def tray_widget(self) -> Optional[TrayWidget]:
        return self._tray_widget

    @property
    def scheduler(self) -> Optional[PollScheduler]:
        return self._scheduler

    @property
    def config_dialog(self) -> Optional[ConfigDialog]:
        return self._config_dialog

    # ==================== Menu ====================

    def _render_menu(self) -> None:
        if not self._tray_widget:
            return
        nodes = build_tray_menu(self._last_snapshot, configured=self.state.configured)
        self._tray_widget.set_menu(nodes)

    def _on_snapshot_ready(self, snapshot: MenuSnapshot) -> None:
        # Queued across threads; the state may have changed meanwhile
        if not self._is_running or snapshot.generation != self.state.generation:
            return
        self._last_snapshot = snapshot
        self._render_menu()

    def _on_menu_action(self, action: MenuAction) -> None:
        try:
            if action.type == ActionType.TOGGLE:
                self.toggle(action)
            elif action.type == ActionType.OPEN_CONFIGURATION:
                self.open_configuration()
            elif action.type == ActionType.QUIT:
                self._handle_quit()

            app_logger.log_gui_operation("Tray menu action triggered", action.type.value)

        except Exception as e:
            app_logger.log_error(e, f"tray_menu_action_{action.type.value}")

    # ==================== Business Logic Handlers ====================

    def toggle(self, action: MenuAction) -> Optional[Future]:
        """Send the inverted value for a boolean status code

        The command runs on a worker thread; the menu is rebuilt from a
        fresh fetch once it finishes, whether or not it succeeded.
        """
        client = self.state.client
        if client is None:
            return None

        future = self._command_executor.submit(
            client.toggle, action.device_id, action.code, action.current_value
        )
        future.add_done_callback(lambda f: self._emit_command_result(action, f))
        return future

    def _emit_command_result(self, action: MenuAction, future: Future) -> None:
        if future.cancelled():
            return
        try:
            result = future.result()
        except Exception as e:
            app_logger.log_error(e, "tray_toggle_command")
            result = FetchResult.failure(str(e))
        self._command_finished.emit(action, result)

    def _on_command_finished(self, action: MenuAction, result: FetchResult) -> None:
        if not self._is_running:
            return
        if not result.ok:
            app_logger.warning(
                "Command was not applied",
                LogCategory.API,
                {"device_id": action.device_id, "code": action.code, "error": result.error},
                self._component_name,
            )
            self.show_notification(
                f"{AppInfo.NAME} Error",
                f"Could not switch {action.code}: {result.error}",
                QSystemTrayIcon.MessageIcon.Warning,
            )
        self._scheduler.request_refresh()

    def open_configuration(self) -> ConfigDialog:
        """Show the configuration window, focusing it if already open"""
        if self._config_dialog is not None:
            self._config_dialog.raise_()
            self._config_dialog.activateWindow()
            return self._config_dialog

        dialog = ConfigDialog(self.state.config)
        dialog.config_submitted.connect(self.apply_configuration)
        dialog.finished.connect(self._on_config_dialog_finished)
        self._config_dialog = dialog
        dialog.show()

        app_logger.log_gui_operation("Configuration window opened")
        return dialog

    def _on_config_dialog_finished(self, _result: int) -> None:
        if self._config_dialog is not None:
            self._config_dialog.deleteLater()
            self._config_dialog = None

    def apply_configuration(self, config: Configuration) -> None:
        """Persist the submitted configuration and rebuild the client"""
        try:
            self._config_store.save(config)
        except ConfigurationError as e:
            self.show_notification(
                f"{AppInfo.NAME} Error",
                e.message,
                QSystemTrayIcon.MessageIcon.Critical,
            )

        new_state = self._state.replace_config(config)
        self._last_snapshot = None
        self._render_menu()

        if new_state.configured:
            self._scheduler.start()
        else:
            self._scheduler.stop()

    def _handle_quit(self) -> None:
        self.exit_application_requested.emit()

    # ==================== Notifications ====================

    def show_notification(
        self,
        title: str,
        message: str,
        icon: QSystemTrayIcon.MessageIcon = QSystemTrayIcon.MessageIcon.Information,
    ) -> bool:
        if self._tray_widget:
            return self._tray_widget.show_message(title, message, icon)
        return False
