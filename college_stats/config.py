from __future__ import annotations

# college_stats/config.py
import os

import yaml

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# both anchored at the project root so the CLI behaves the same from any cwd
DEFAULTS = {
    "db_path": os.path.join(PROJECT_ROOT, "college_statistics.db"),
    "export_dir": os.path.join(PROJECT_ROOT, "exports"),
}

_KEYS = ("db_path", "test_db_path", "export_dir")


def config_path() -> str:
    return os.environ.get("COLLEGE_CONFIG", os.path.join(PROJECT_ROOT, "config.yaml"))


def read_config_yaml(path: str | None = None) -> dict:
    """Read the string settings we know about from config.yaml.

    `path` defaults to COLLEGE_CONFIG, then config.yaml at the project root.
    A missing or unreadable file yields an empty dict; callers fall back to DEFAULTS.
    """
    cfg_path = path or config_path()
    if not os.path.exists(cfg_path):
        return {}
    try:
        with open(cfg_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        return {}
    if not isinstance(cfg, dict):
        return {}
    out = {}
    for k in _KEYS:
        v = cfg.get(k)
        if isinstance(v, str) and v.strip():
            out[k] = v.strip()
    return out


def get_export_dir(cfg_path: str | None = None) -> str:
    return read_config_yaml(cfg_path).get("export_dir", DEFAULTS["export_dir"])
