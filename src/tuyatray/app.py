"""Application entry point

Sets up logging, the Qt application and the tray controller, then
runs the event loop until the user picks Quit.
"""

import sys
from typing import List, Optional

from PySide6.QtWidgets import QApplication

from .core.config.config_store import ConfigStore
from .ui.tray.tray_controller import TrayController
from .utils import ConfigurationError, LogCategory, app_logger, get_log_dir
from .utils.constants import AppInfo


def create_application(argv: Optional[List[str]] = None) -> QApplication:
    app = QApplication.instance() or QApplication(argv if argv is not None else sys.argv)
    app.setApplicationName(AppInfo.NAME)
    app.setApplicationVersion(AppInfo.VERSION)
    # Tray apps keep running when the configuration window closes
    app.setQuitOnLastWindowClosed(False)
    return app


def main(argv: Optional[List[str]] = None) -> int:
    log_file = app_logger.configure(get_log_dir())
    app_logger.log_startup()
    app_logger.info("Logging initialized", LogCategory.STARTUP, {"log_file": str(log_file)})

    app = create_application(argv)
    controller = TrayController(ConfigStore())

    try:
        controller.start()
    except ConfigurationError as e:
        app_logger.critical(
            "Cannot start with unreadable configuration",
            exception=e,
            category=LogCategory.CONFIG,
            context=e.to_dict(),
        )
        app_logger.shutdown()
        raise

    controller.exit_application_requested.connect(app.quit)
    app.aboutToQuit.connect(controller.stop)

    exit_code = app.exec()

    app_logger.log_shutdown()
    app_logger.shutdown()
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
