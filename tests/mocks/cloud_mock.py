"""Mock cloud client and executors"""

from concurrent.futures import Executor, Future
from typing import Any, Dict, List, Optional, Tuple

from tuyatray.cloud.models import Device, FetchResult, StatusItem
from tuyatray.core.interfaces.cloud import ICloudClient


class MockCloudClient(ICloudClient):
    """In-memory cloud client recording every call"""

    def __init__(
        self,
        devices: Optional[List[Dict[str, Any]]] = None,
        status: Optional[Dict[str, List[Dict[str, Any]]]] = None,
        user_id: str = "user-1",
        fail_devices: bool = False,
        fail_commands: bool = False,
    ):
        self._user_id = user_id
        self.devices = devices or []
        self.status = status or {}
        self.fail_devices = fail_devices
        self.fail_commands = fail_commands
        self.list_calls: List[str] = []
        self.status_calls: List[str] = []
        self.commands: List[Tuple[str, str, Any]] = []

    @property
    def user_id(self) -> str:
        return self._user_id

    def list_devices(self, user_id: str) -> FetchResult[Device]:
        self.list_calls.append(user_id)
        if self.fail_devices:
            return FetchResult.failure("list_devices failed: offline")
        return FetchResult.success([Device.from_api(d) for d in self.devices])

    def fetch_status(self, device_id: str) -> FetchResult[StatusItem]:
        self.status_calls.append(device_id)
        if device_id not in self.status:
            return FetchResult.failure("fetch_status failed: unknown device")
        return FetchResult.success([StatusItem.from_api(s) for s in self.status[device_id]])

    def send_command(self, device_id: str, code: str, new_value: Any) -> FetchResult[Any]:
        self.commands.append((device_id, code, new_value))
        if self.fail_commands:
            return FetchResult.failure("send_command failed: device offline")
        return FetchResult.success()


class ImmediateExecutor(Executor):
    """Runs submitted work synchronously on the calling thread"""

    def __init__(self):
        self.submitted = 0

    def submit(self, fn, *args, **kwargs):
        self.submitted += 1
        future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as e:
            future.set_exception(e)
        return future

    def shutdown(self, wait=True, *, cancel_futures=False):
        pass


class ManualExecutor(Executor):
    """Holds submitted work until the test runs it"""

    def __init__(self):
        self.queue: List[Tuple[Any, tuple, dict, Future]] = []
        self.shut_down = False

    def submit(self, fn, *args, **kwargs):
        if self.shut_down:
            raise RuntimeError("cannot schedule new futures after shutdown")
        future = Future()
        self.queue.append((fn, args, kwargs, future))
        return future

    def run_next(self) -> Any:
        fn, args, kwargs, future = self.queue.pop(0)
        try:
            result = fn(*args, **kwargs)
        except Exception as e:
            future.set_exception(e)
            return None
        future.set_result(result)
        return result

    def shutdown(self, wait=True, *, cancel_futures=False):
        self.shut_down = True
        if cancel_futures:
            for _fn, _args, _kwargs, future in self.queue:
                future.cancel()
            self.queue.clear()
