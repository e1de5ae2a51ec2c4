# govledger/config.py
import copy
import logging
import os
from typing import Any, Dict, List

import yaml

log = logging.getLogger(__name__)

CONFIG_FILENAME = "govledger_config.yaml"

# -------- Defaults (non-secret) --------
_DEFAULT: Dict[str, Any] = {
    "server": {
        "host": "127.0.0.1",  # uvicorn bind address
        "port": 8000,  # uvicorn port
    },
    "cors": {
        # Origins allowed to call the governance API from a browser
        "origins": [
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ]
    },
    "logging": {
        "level": "INFO",
        "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    },
}

# -------- ENV overrides --------
_ENV_MAP = {
    ("server", "host"): ("GOVLEDGER_HOST", str),
    ("server", "port"): ("GOVLEDGER_PORT", int),
    ("logging", "level"): ("GOVLEDGER_LOG_LEVEL", str),
}


def _deep_merge(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(base)
    for k, v in (overlay or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def _apply_env_overrides(cfg: Dict[str, Any]) -> Dict[str, Any]:
    for (section, key), (env_name, cast) in _ENV_MAP.items():
        val = os.getenv(env_name)
        if val is None:
            continue
        try:
            casted = cast(val)
        except ValueError:
            log.warning("ignoring %s=%r: not a valid %s", env_name, val, cast.__name__)
            continue
        cfg[section] = dict(cfg.get(section) or {})
        cfg[section][key] = casted
    return cfg


def load_config(repo_root: str) -> Dict[str, Any]:
    """
    Loads the YAML config from repo_root/govledger_config.yaml.
    Returns defaults if the file doesn't exist or can't be parsed.
    Also applies ENV overrides for host / port / log level.
    """
    path = os.path.join(repo_root, CONFIG_FILENAME)
    cfg = copy.deepcopy(_DEFAULT)

    if os.path.exists(path):
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f) or {}
            if isinstance(data, dict):
                cfg = _deep_merge(cfg, data)
            else:
                log.warning("%s: expected a mapping, using defaults", path)
        except (OSError, yaml.YAMLError) as e:
            log.warning("%s unreadable, using defaults: %s", path, e)

    cfg = _apply_env_overrides(cfg)

    # Normalize CORS origins to a list
    origins = cfg.get("cors", {}).get("origins")
    if isinstance(origins, str):
        cfg["cors"]["origins"] = [origins]

    return cfg


def configure_logging(cfg: Dict[str, Any]) -> None:
    level = get_log_level(cfg)
    logging.basicConfig(level=level, format=get_log_format(cfg))
    # basicConfig is a no-op once the root logger has handlers.
    logging.getLogger().setLevel(level)


# -------- Small helpers used by the app --------
def get_bind_host(cfg: Dict[str, Any]) -> str:
    return str(cfg.get("server", {}).get("host", "127.0.0.1"))


def get_bind_port(cfg: Dict[str, Any]) -> int:
    return int(cfg.get("server", {}).get("port", 8000))


def get_cors_origins(cfg: Dict[str, Any]) -> List[str]:
    return list(cfg.get("cors", {}).get("origins", []))


def get_log_level(cfg: Dict[str, Any]) -> str:
    return str(cfg.get("logging", {}).get("level", "INFO")).upper()


def get_log_format(cfg: Dict[str, Any]) -> str:
    return str(cfg.get("logging", {}).get("format") or _DEFAULT["logging"]["format"])
