"""pytest configuration and shared fixtures"""
import os
import sys
import time
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

# Qt must not need a display in CI
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tuyatray.core.config import ConfigStore, Configuration  # noqa: E402

from mocks import MockCloudClient  # noqa: E402


def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "unit: unit tests without Qt")
    config.addinivalue_line("markers", "gui: tests that need a QApplication (pytest-qt)")


# ============= Configuration Fixtures =============

@pytest.fixture
def complete_config():
    return Configuration(
        base_url="https://openapi.tuyaeu.com",
        access_key="access-id",
        secret_key="access-secret",
        user_id="user-1",
    )


@pytest.fixture
def config_path(tmp_path):
    """Isolated config file path (never the real user config)"""
    return tmp_path / "TuyaTray" / "config.json"


@pytest.fixture
def config_store(config_path):
    return ConfigStore(config_path)


# ============= Cloud Fixtures =============

@pytest.fixture
def tuya_api():
    """Mock TuyaOpenAPI instance with successful defaults"""
    api = MagicMock()
    api.token_info = None

    def connect():
        api.token_info = SimpleNamespace(
            access_token="token",
            refresh_token="refresh",
            expire_time=int(time.time() * 1000) + 7200 * 1000,
        )
        return {"success": True, "result": {"access_token": "token", "expire_time": 7200}}

    api.connect.side_effect = connect
    api.get.return_value = {"success": True, "result": []}
    api.post.return_value = {"success": True, "result": True}
    return api


@pytest.fixture
def api_factory(tuya_api):
    return MagicMock(return_value=tuya_api)


@pytest.fixture
def cloud_client():
    """Mock client with one switch device and one sensor"""
    return MockCloudClient(
        devices=[
            {"id": "dev-1", "name": "Desk Lamp"},
            {"id": "dev-2", "name": "Heater"},
        ],
        status={
            "dev-1": [
                {"code": "switch_1", "value": True},
                {"code": "countdown_1", "value": 120},
            ],
            "dev-2": [{"code": "switch", "value": False}],
        },
    )
