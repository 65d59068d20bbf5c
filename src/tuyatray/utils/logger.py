"""Unified logging - one app_logger interface on top of loguru

Usage:
    from tuyatray.utils import app_logger

    app_logger.info("Tray started", LogCategory.UI)
    app_logger.log_api_call("list_devices", 0.42, success=True)
    app_logger.log_error(exc, "tray_menu_action")

Every record carries ``category`` and ``component`` extras so the
file sink can be filtered per concern.
"""

import json
import sys
import threading
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger as _loguru

from .constants import Paths


class LogCategory(Enum):
    """Log categories (used for filtering)"""

    STARTUP = "startup"
    CONFIG = "config"
    API = "api"
    POLL = "poll"
    UI = "ui"
    ERROR = "error"


FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[category]: <8} | "
    "[{extra[component]}] {message}"
)
CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> <level>{level: <8}</level> | "
    "{extra[category]} | {message}"
)

_loguru.configure(extra={"category": LogCategory.STARTUP.value, "component": "app"})


def _format_context(context: Optional[Dict[str, Any]]) -> str:
    if not context:
        return ""
    return " | " + json.dumps(
        context, ensure_ascii=False, separators=(",", ":"), default=str
    )


class AppLogger:
    """Application logger adapter

    Thin wrapper that keeps the category/component/context call style
    used throughout the code base while loguru does the routing.
    """

    _default_sink_removed = False

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._sink_ids: List[int] = []
        self._log_file: Optional[Path] = None

    # ============ Setup ============

    def configure(
        self,
        log_dir: Path,
        file_level: str = "INFO",
        console_level: str = "WARNING",
    ) -> Path:
        """Install the file and console sinks

        Args:
            log_dir: Directory for the rotating log file
            file_level: Minimum level written to the file
            console_level: Minimum level echoed to stderr

        Returns:
            Path of the log file
        """
        with self._lock:
            if self._sink_ids:
                self._remove_sinks()
            elif not AppLogger._default_sink_removed:
                # loguru's stock stderr handler (id 0) would duplicate ours
                try:
                    _loguru.remove(0)
                except ValueError:
                    pass
                AppLogger._default_sink_removed = True

            log_dir.mkdir(parents=True, exist_ok=True)
            self._log_file = log_dir / Paths.LOG_FILE_NAME

            self._sink_ids.append(
                _loguru.add(
                    self._log_file,
                    level=file_level,
                    format=FILE_FORMAT,
                    rotation="1 MB",
                    retention=3,
                    encoding="utf-8",
                    enqueue=True,
                )
            )
            self._sink_ids.append(
                _loguru.add(sys.stderr, level=console_level, format=CONSOLE_FORMAT)
            )

        return self._log_file

    @property
    def log_file(self) -> Optional[Path]:
        return self._log_file

    def shutdown(self) -> None:
        """Flush queued records and detach sinks"""
        with self._lock:
            self._remove_sinks()

    def _remove_sinks(self) -> None:
        for sink_id in self._sink_ids:
            try:
                _loguru.remove(sink_id)
            except ValueError:
                pass
        self._sink_ids.clear()

    # ============ Core API ============

    def _write(
        self,
        level: str,
        message: str,
        category: LogCategory,
        context: Optional[Dict[str, Any]] = None,
        component: Optional[str] = None,
        exception: Optional[BaseException] = None,
    ) -> None:
        bound = _loguru.bind(
            category=category.value, component=component or category.value
        )
        if exception is not None:
            bound = bound.opt(exception=exception)
        bound.log(level, message + _format_context(context))

    def debug(
        self,
        message: str,
        category: LogCategory = LogCategory.STARTUP,
        context: Optional[Dict[str, Any]] = None,
        component: Optional[str] = None,
    ) -> None:
        self._write("DEBUG", message, category, context, component)

    def info(
        self,
        message: str,
        category: LogCategory = LogCategory.STARTUP,
        context: Optional[Dict[str, Any]] = None,
        component: Optional[str] = None,
    ) -> None:
        self._write("INFO", message, category, context, component)

    def warning(
        self,
        message: str,
        category: LogCategory = LogCategory.ERROR,
        context: Optional[Dict[str, Any]] = None,
        component: Optional[str] = None,
    ) -> None:
        self._write("WARNING", message, category, context, component)

    def error(
        self,
        message: str,
        exception: Optional[BaseException] = None,
        category: LogCategory = LogCategory.ERROR,
        context: Optional[Dict[str, Any]] = None,
        component: Optional[str] = None,
    ) -> None:
        ctx = dict(context or {})
        if exception is not None:
            ctx["exception"] = str(exception)
            ctx["exception_type"] = type(exception).__name__
        self._write("ERROR", message, category, ctx, component)

    def critical(
        self,
        message: str,
        exception: Optional[BaseException] = None,
        category: LogCategory = LogCategory.ERROR,
        context: Optional[Dict[str, Any]] = None,
        component: Optional[str] = None,
    ) -> None:
        self._write(
            "CRITICAL", message, category, context, component, exception=exception
        )

    # ============ Convenience ============

    def log_error(self, error: BaseException, context: str) -> None:
        """Log an exception with its full traceback"""
        self._write(
            "ERROR",
            f"Error in {context}",
            LogCategory.ERROR,
            {"error_details": str(error), "exception_type": type(error).__name__},
            component=context,
            exception=error,
        )

    def log_api_call(
        self,
        service: str,
        response_time: float,
        success: bool,
        error: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        message = (
            f"API Call: {service} - {'Success' if success else 'Failed'} "
            f"in {response_time:.2f}s"
        )
        ctx = {"service": service, "response_time": f"{response_time:.2f}s"}
        if details:
            ctx.update(details)
        if error:
            ctx["error"] = error

        if success:
            self.info(message, LogCategory.API, ctx, "api")
        else:
            self.error(message, None, LogCategory.API, ctx, "api")

    def log_poll_event(self, event: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.debug(f"Poll: {event}", LogCategory.POLL, details, "poll")

    def log_gui_operation(self, operation: str, details: str = "", level: str = "INFO") -> None:
        message = f"GUI Operation: {operation}"
        if details:
            message += f" - {details}"
        log_func = getattr(self, level.lower(), self.info)
        log_func(message, LogCategory.UI, component="gui")

    def log_startup(self) -> None:
        self.info("TuyaTray starting up", LogCategory.STARTUP, component="startup")

    def log_shutdown(self) -> None:
        self.info("TuyaTray shutting down", LogCategory.STARTUP, component="shutdown")


app_logger = AppLogger()


__all__ = ["app_logger", "AppLogger", "LogCategory"]
