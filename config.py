from __future__ import annotations

import os
import yaml
from pathlib import Path
from typing import Dict, Any

USER_CONFIG_PATH = Path.home() / ".fitdb_config.yaml"
DEFAULT_DB_PATH = Path.home() / ".local" / "share" / "fitdb" / "fit.db"
DEFAULT_LOG_PATH = Path.home() / ".local" / "state" / "fitdb" / "fitdb.log"
DEFAULT_THEME = "dark-olive"
DEFAULT_TICK_INTERVAL = 0.15


def get_config_path() -> Path:
    override = os.getenv("FITDB_CONFIG")
    return Path(override).expanduser() if override else USER_CONFIG_PATH


def _load_config() -> Dict[str, Any]:
    path = get_config_path()
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError):
        return {}
    return data if isinstance(data, dict) else {}


def _save_config(data: Dict[str, Any]) -> None:
    path = get_config_path()
    if not data:
        if path.exists():
            path.unlink()
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data, allow_unicode=True), encoding="utf-8")


def get_db_path() -> Path:
    env_path = os.getenv("FITDB_DB_PATH")
    if env_path:
        return Path(env_path).expanduser()
    value = str(_load_config().get("db_path", "") or "").strip()
    return Path(value).expanduser() if value else DEFAULT_DB_PATH


def set_db_path(value: str) -> None:
    data = _load_config()
    value = (value or "").strip()
    if value:
        data["db_path"] = value
    else:
        data.pop("db_path", None)
    _save_config(data)


def get_log_path() -> Path:
    env_path = os.getenv("FITDB_LOG_FILE")
    if env_path:
        return Path(env_path).expanduser()
    value = str(_load_config().get("log_file", "") or "").strip()
    return Path(value).expanduser() if value else DEFAULT_LOG_PATH


def get_theme() -> str:
    return str(_load_config().get("theme", "") or "").strip() or DEFAULT_THEME


def get_tick_interval() -> float:
    raw = _load_config().get("tick_interval", DEFAULT_TICK_INTERVAL)
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return DEFAULT_TICK_INTERVAL
    return value if value > 0 else DEFAULT_TICK_INTERVAL
