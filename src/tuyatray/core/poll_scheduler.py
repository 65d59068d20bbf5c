"""Poll scheduler - single-flight periodic refresh of devices and status

A QTimer fires every POLL_INTERVAL_MS on the GUI thread. Each refresh
runs on a worker thread: list devices, then fetch every device's status
concurrently, then deliver a MenuSnapshot through ``snapshot_ready``.

At most one refresh is in flight. Timer ticks that arrive while busy
are skipped; explicit requests (after a toggle or a config save) are
coalesced into a single follow-up refresh.
"""

import threading
import time
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer, Signal

from ..cloud.models import DeviceSnapshot, FetchResult, MenuSnapshot
from ..utils import app_logger
from ..utils.constants import Timing
from .app_state import AppState
from .interfaces.cloud import ICloudClient

STATUS_WORKERS = 8


def refresh_snapshot(
    client: ICloudClient, generation: int, status_executor: Optional[Executor] = None
) -> MenuSnapshot:
    """Fetch all devices and their status with one client

    Args:
        client: Client for this refresh
        generation: Generation of the state the client belongs to
        status_executor: Pool for per-device status fetches, None to
            fetch sequentially
    """
    devices = client.list_devices(client.user_id)
    if not devices.ok:
        return MenuSnapshot(FetchResult.failure(devices.error), generation)

    if status_executor is None:
        entries = [DeviceSnapshot(d, client.fetch_status(d.id)) for d in devices]
        return MenuSnapshot(FetchResult.success(entries), generation)

    futures = [(d, status_executor.submit(client.fetch_status, d.id)) for d in devices]
    entries = []
    for device, future in futures:
        try:
            status = future.result()
        except Exception as e:
            app_logger.log_error(e, f"poll_fetch_status_{device.id}")
            status = FetchResult.failure(str(e))
        entries.append(DeviceSnapshot(device, status))

    return MenuSnapshot(FetchResult.success(entries), generation)


class PollScheduler(QObject):
    """Single-flight poll loop

    Signals:
        snapshot_ready(MenuSnapshot): a refresh finished for the current
            generation
    """

    snapshot_ready = Signal(object)

    def __init__(
        self,
        state_provider: Callable[[], AppState],
        interval_ms: int = Timing.POLL_INTERVAL_MS,
        refresh_executor: Optional[Executor] = None,
        status_executor: Optional[Executor] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)

        self._state_provider = state_provider
        self._refresh_executor = refresh_executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="tuyatray-poll"
        )
        self._status_executor = status_executor or ThreadPoolExecutor(
            max_workers=STATUS_WORKERS, thread_name_prefix="tuyatray-status"
        )

        self._lock = threading.Lock()
        self._in_flight = False
        self._pending = False
        self._shutdown = False
        self._refresh_started_at = 0.0

        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._on_timer_tick)

    # ==================== Public Interface ====================

    @property
    def is_running(self) -> bool:
        return self._timer.isActive()

    @property
    def is_busy(self) -> bool:
        with self._lock:
            return self._in_flight

    @property
    def interval_ms(self) -> int:
        return self._timer.interval()

    def start(self) -> None:
        """Start the timer and refresh immediately"""
        if not self._timer.isActive():
            self._timer.start()
            app_logger.log_poll_event("Poll timer started", {"interval_ms": self.interval_ms})
        self.request_refresh()

    def stop(self) -> None:
        if self._timer.isActive():
            self._timer.stop()
            app_logger.log_poll_event("Poll timer stopped")

    def request_refresh(self) -> bool:
        """Refresh now, or once more after the current refresh finishes

        Returns:
            True if a refresh was started by this call
        """
        return self._schedule(explicit=True)

    def shutdown(self) -> None:
        """Stop polling and release the worker pools"""
        self.stop()
        with self._lock:
            self._shutdown = True
            self._pending = False
        self._refresh_executor.shutdown(wait=False, cancel_futures=True)
        self._status_executor.shutdown(wait=False, cancel_futures=True)

    # ==================== Scheduling ====================

    def _on_timer_tick(self) -> None:
        self._schedule(explicit=False)

    def _schedule(self, explicit: bool) -> bool:
        with self._lock:
            if self._shutdown:
                return False
            if self._in_flight:
                if explicit:
                    self._pending = True
                app_logger.log_poll_event(
                    "Refresh already in flight",
                    {"explicit": explicit, "queued": explicit},
                )
                return False

            state = self._state_provider()
            if state.client is None:
                return False

            self._in_flight = True
            self._refresh_started_at = time.time()

        try:
            future = self._refresh_executor.submit(
                refresh_snapshot, state.client, state.generation, self._status_executor
            )
        except RuntimeError as e:
            # executor already shut down
            with self._lock:
                self._in_flight = False
            app_logger.log_error(e, "poll_schedule")
            return False

        future.add_done_callback(self._on_refresh_done)
        return True

    def _on_refresh_done(self, future: Future) -> None:
        snapshot: Optional[MenuSnapshot] = None
        if not future.cancelled():
            try:
                snapshot = future.result()
            except Exception as e:
                app_logger.log_error(e, "poll_refresh")

        with self._lock:
            self._in_flight = False
            run_again = self._pending and not self._shutdown
            self._pending = False
            shutdown = self._shutdown
            duration = time.time() - self._refresh_started_at

        if snapshot is not None and not shutdown:
            current_generation = self._state_provider().generation
            if snapshot.generation == current_generation:
                app_logger.log_poll_event(
                    "Refresh completed",
                    {
                        "devices": len(snapshot.devices),
                        "ok": snapshot.devices.ok,
                        "duration": f"{duration:.3f}s",
                    },
                )
                self.snapshot_ready.emit(snapshot)
            else:
                app_logger.log_poll_event(
                    "Discarded stale snapshot",
                    {"generation": snapshot.generation, "current": current_generation},
                )

        if run_again:
            self._schedule(explicit=True)
