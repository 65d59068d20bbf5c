"""Token renewal under concurrent status fetches

Runs a real TuyaOpenAPI whose HTTP session is replaced by an in-memory
server, so signing and token bookkeeping are the SDK's own.
"""

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock
from urllib.parse import urlsplit

import pytest
from tuya_connector import TuyaOpenAPI

from tuyatray.cloud.client import TokenGate, TuyaCloudClient


def now_ms() -> int:
    return int(time.time() * 1000)


class FakeTuyaServer:
    """Answers token grants and device status like the Tuya OpenAPI"""

    def __init__(self):
        self._lock = threading.Lock()
        self.grants = 0
        self.refreshes = 0
        self.rejected = 0
        self.valid_tokens = set()

    def _issue_token(self) -> dict:
        with self._lock:
            self.grants += 1
            token = f"token-{self.grants}"
            self.valid_tokens.add(token)
        return {
            "success": True,
            "t": now_ms(),
            "result": {
                "access_token": token,
                "refresh_token": f"refresh-{self.grants}",
                "expire_time": 7200,
                "uid": "uid-1",
            },
        }

    def request(self, method, url, **kwargs):
        path = urlsplit(url).path
        headers = kwargs.get("headers") or {}
        # keep concurrent requests overlapping
        time.sleep(0.01)

        if path == "/v1.0/token":
            body = self._issue_token()
        elif path.startswith("/v1.0/token/"):
            with self._lock:
                self.refreshes += 1
            body = self._issue_token()
        elif headers.get("access_token") in self.valid_tokens:
            body = {"success": True, "t": now_ms(), "result": [{"code": "switch_1", "value": True}]}
        else:
            with self._lock:
                self.rejected += 1
            body = {"success": False, "t": now_ms(), "code": 1010, "msg": "token invalid"}

        response = MagicMock(ok=True, status_code=200)
        response.json.return_value = body
        return response


@pytest.fixture
def server():
    return FakeTuyaServer()


@pytest.fixture
def sdk_client(complete_config, server):
    apis = []

    def api_factory(endpoint, access_id, access_secret):
        api = TuyaOpenAPI(endpoint, access_id, access_secret)
        api.session = server
        apis.append(api)
        return api

    client = TuyaCloudClient(complete_config, api_factory=api_factory)
    return client, apis[0]


@pytest.mark.unit
class TestConcurrentTokenRenewal:
    def test_expiring_token_is_renewed_once_for_a_fan_out(self, sdk_client, server):
        client, api = sdk_client
        assert client.fetch_status("dev-0").ok
        assert server.grants == 1

        # inside the SDK's own one-minute renewal window
        api.token_info.expire_time = now_ms() + 30_000

        device_ids = [f"dev-{i}" for i in range(8)]
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(client.fetch_status, device_ids))

        failed = [r.error for r in results if not r.ok]
        assert failed == []
        assert server.grants == 2
        assert server.refreshes == 0
        assert server.rejected == 0

    def test_first_requests_share_one_grant(self, sdk_client, server):
        client, _api = sdk_client

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(client.fetch_status, [f"dev-{i}" for i in range(8)]))

        assert all(r.ok for r in results)
        assert server.grants == 1


@pytest.mark.unit
class TestTokenGate:
    def test_renewal_waits_for_in_flight_requests(self):
        gate = TokenGate()
        order = []
        request_entered = threading.Event()
        release_request = threading.Event()

        def run_request():
            with gate.request():
                request_entered.set()
                release_request.wait(timeout=2)
                order.append("request")

        def run_renewal():
            with gate.renewal():
                order.append("renewal")

        worker = threading.Thread(target=run_request)
        worker.start()
        assert request_entered.wait(timeout=2)

        renewer = threading.Thread(target=run_renewal)
        renewer.start()
        time.sleep(0.05)
        assert order == []

        release_request.set()
        worker.join(timeout=2)
        renewer.join(timeout=2)
        assert order == ["request", "renewal"]

    def test_requests_wait_for_renewal(self):
        gate = TokenGate()
        order = []
        renewal_entered = threading.Event()
        release_renewal = threading.Event()

        def run_renewal():
            with gate.renewal():
                renewal_entered.set()
                release_renewal.wait(timeout=2)
                order.append("renewal")

        def run_request():
            with gate.request():
                order.append("request")

        renewer = threading.Thread(target=run_renewal)
        renewer.start()
        assert renewal_entered.wait(timeout=2)

        worker = threading.Thread(target=run_request)
        worker.start()
        time.sleep(0.05)
        assert order == []

        release_renewal.set()
        renewer.join(timeout=2)
        worker.join(timeout=2)
        assert order == ["renewal", "request"]
