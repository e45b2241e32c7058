import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "groupstool"))
import groupstool.core.config as config
from groupstool.core.log import configure_logging


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the config file at a temp dir and drop GROUPSTOOL_* env vars."""
    for name in ("GROUPSTOOL_BASE_URL", "GROUPSTOOL_TIMEOUT", "GROUPSTOOL_CA_FILE"):
        monkeypatch.delenv(name, raising=False)
    path = tmp_path / ".groupstool.json"
    monkeypatch.setattr(config, "CONFIG_PATH", path)
    configure_logging(False)
    return path
