"""Application entry point tests"""

import pytest

from tuyatray import app as app_module
from tuyatray.core.config import ConfigStore
from tuyatray.utils import ConfigurationError


@pytest.mark.gui
def test_malformed_config_aborts_startup(qtbot, tmp_path, config_path, monkeypatch):
    config_path.parent.mkdir(parents=True)
    config_path.write_text("{not json", encoding="utf-8")
    log_dir = tmp_path / "logs"
    monkeypatch.setattr(app_module, "get_log_dir", lambda: log_dir)
    monkeypatch.setattr(app_module, "ConfigStore", lambda: ConfigStore(config_path))

    with pytest.raises(ConfigurationError):
        app_module.main([])

    log_text = (log_dir / "app.log").read_text(encoding="utf-8")
    assert "CRITICAL" in log_text
    assert "Cannot start with unreadable configuration" in log_text
