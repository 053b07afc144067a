# godist/core/config.py
from __future__ import annotations
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

# ---- schema & defaults -------------------------------------------------------
SCHEMA_VERSION = 1
DEFAULT_URL = "https://golang.google.cn/dl/"
DEFAULT_TIMEOUT = 30.0
DEFAULT_CHUNK_SIZE = 128 * 1024

DEFAULT_CFG: Dict[str, Any] = {
    "schema": SCHEMA_VERSION,
    "source_url": "",              # empty -> DEFAULT_URL
    "timeout": DEFAULT_TIMEOUT,    # seconds, per network call
    "chunk_size": DEFAULT_CHUNK_SIZE,
    "verbose": False,
}

# ---- locations ---------------------------------------------------------------
# Override with env vars:
#   GODIST_CONFIG=<full path to config.json>
#   GODIST_DIR=<directory to place config.json>
def _windows_roaming_dir() -> Path:
    return Path(os.environ.get("APPDATA", Path.home() / "AppData/Roaming"))

def _xdg_config_home() -> Path:
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))

def config_dir() -> Path:
    env_dir = os.environ.get("GODIST_DIR")
    if env_dir:
        return Path(env_dir).expanduser().resolve()
    if os.name == "nt":
        return (_windows_roaming_dir() / "godist").resolve()
    return (_xdg_config_home() / "godist").resolve()

def config_path() -> Path:
    env_path = os.environ.get("GODIST_CONFIG")
    if env_path:
        return Path(env_path).expanduser().resolve()
    return config_dir() / "config.json"

# ---- load / save -------------------------------------------------------------
def _merge_defaults(cfg: Dict[str, Any]) -> Dict[str, Any]:
    out = DEFAULT_CFG.copy()
    out.update(cfg or {})
    if "schema" not in out:
        out["schema"] = SCHEMA_VERSION
    return out

def load_cfg() -> Dict[str, Any]:
    p = config_path()
    if not p.exists():
        return DEFAULT_CFG.copy()
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        # Keep a .bad copy and start fresh
        logger.warning("Unreadable config %s (%s); moving it aside", p, e)
        try:
            p.replace(p.with_suffix(".bad.json"))
        except OSError:
            logger.debug("Could not move %s aside", p)
        return DEFAULT_CFG.copy()
    if not isinstance(raw, dict):
        return DEFAULT_CFG.copy()
    return _merge_defaults(raw)

def save_cfg(cfg: Dict[str, Any]) -> None:
    p = config_path()
    p.parent.mkdir(parents=True, exist_ok=True)
    tmp = p.with_suffix(".tmp")
    data = _merge_defaults(cfg)
    tmp.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    tmp.replace(p)

def source_url(cfg: Dict[str, Any]) -> str:
    return (cfg.get("source_url") or "").strip() or DEFAULT_URL

def timeout(cfg: Dict[str, Any]) -> float:
    try:
        t = float(cfg.get("timeout") or DEFAULT_TIMEOUT)
    except (TypeError, ValueError):
        return DEFAULT_TIMEOUT
    return t if t > 0 else DEFAULT_TIMEOUT
