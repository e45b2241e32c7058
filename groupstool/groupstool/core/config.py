"""Configuration helpers for groupstool."""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import GroupsToolError

CONFIG_PATH = Path(os.path.expanduser("~")) / ".groupstool.json"
# Groups Web Service endpoint used when no base URL is configured
DEFAULT_BASE = "https://groups.uw.edu/group_sws/v3"
# Seconds to wait for the service before giving up
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class Settings:
    base_url: str = DEFAULT_BASE
    timeout: float = DEFAULT_TIMEOUT
    ca_file: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _read_config_file() -> Dict[str, Any]:
    """Return the saved settings, or an empty dict if the file is missing or unusable."""
    if not CONFIG_PATH.exists():
        return {}
    try:
        cfg = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return cfg if isinstance(cfg, dict) else {}


def load_config() -> Dict[str, Any]:
    """Load configuration from disk and environment."""
    cfg = _read_config_file()
    if os.getenv("GROUPSTOOL_BASE_URL"):
        cfg["base_url"] = os.getenv("GROUPSTOOL_BASE_URL")
    if os.getenv("GROUPSTOOL_TIMEOUT"):
        cfg["timeout"] = os.getenv("GROUPSTOOL_TIMEOUT")
    if os.getenv("GROUPSTOOL_CA_FILE"):
        cfg["ca_file"] = os.getenv("GROUPSTOOL_CA_FILE")
    return cfg


def save_config(
    base_url: str | None,
    timeout: float | None = None,
    ca_file: str | None = None,
) -> Path:
    """Persist configuration to CONFIG_PATH."""
    cfg = _read_config_file()
    if base_url is not None:
        cfg["base_url"] = base_url.rstrip("/")
    if timeout is not None:
        cfg["timeout"] = _parse_timeout(timeout)
    if ca_file is not None:
        cfg["ca_file"] = ca_file
    CONFIG_PATH.write_text(json.dumps(cfg, ensure_ascii=False, indent=2), encoding="utf-8")
    return CONFIG_PATH


def _parse_timeout(value: Any) -> float:
    if isinstance(value, bool):
        raise GroupsToolError(f"Invalid timeout: {value!r}")
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        raise GroupsToolError(f"Invalid timeout: {value!r}") from None
    if timeout <= 0:
        raise GroupsToolError(f"Timeout must be positive, got {value!r}")
    return timeout


def _optional_str(cfg: Dict[str, Any], key: str) -> Optional[str]:
    value = cfg.get(key)
    if value in (None, ""):
        return None
    if not isinstance(value, str):
        raise GroupsToolError(f"Invalid {key} in {CONFIG_PATH}: {value!r}")
    return value


def get_settings() -> Settings:
    """Build :class:`Settings` from the config file, environment and defaults."""
    cfg = load_config()
    base = (_optional_str(cfg, "base_url") or DEFAULT_BASE).rstrip("/")
    timeout = cfg.get("timeout")
    return Settings(
        base_url=base,
        timeout=DEFAULT_TIMEOUT if timeout in (None, "") else _parse_timeout(timeout),
        ca_file=_optional_str(cfg, "ca_file"),
    )
