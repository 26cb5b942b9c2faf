from __future__ import annotations

# notestore/config.py
import os
from typing import Any

import yaml

DEFAULTS: dict[str, Any] = {
    "db_path": None,
    "test_db_path": None,
    "lock_timeout": None,
    "log_level": "INFO",
    "atomic_cascade": True,
}


def config_path() -> str:
    return os.environ.get("NOTESTORE_CONFIG") or os.path.join(os.getcwd(), "config.yaml")


def _read_config_yaml(path: str) -> dict:
    if not os.path.exists(path):
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        return {}
    return cfg if isinstance(cfg, dict) else {}


def read_config(path: str | None = None) -> dict:
    """
    Load config.yaml and coerce the known keys; unknown keys are dropped.
    A missing or unreadable file yields DEFAULTS.
    """
    raw = _read_config_yaml(path or config_path())
    out = dict(DEFAULTS)
    for k in ("db_path", "test_db_path"):
        v = raw.get(k)
        if isinstance(v, str) and v.strip():
            out[k] = os.path.expanduser(v.strip())
    timeout = raw.get("lock_timeout")
    if isinstance(timeout, (int, float)) and not isinstance(timeout, bool):
        out["lock_timeout"] = float(timeout) if timeout >= 0 else None
    level = raw.get("log_level")
    if isinstance(level, str) and level.strip():
        out["log_level"] = level.strip().upper()
    if isinstance(raw.get("atomic_cascade"), bool):
        out["atomic_cascade"] = raw["atomic_cascade"]
    return out


def default_data_dir() -> str:
    base = os.environ.get("XDG_DATA_HOME") or os.path.join(os.path.expanduser("~"), ".local", "share")
    return os.path.join(base, "recallify")


def is_test_env() -> bool:
    return (os.environ.get("APP_ENV") == "test") or (os.environ.get("PYTEST_CURRENT_TEST") is not None)
