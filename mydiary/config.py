from __future__ import annotations

# mydiary/config.py
import logging
import os

import yaml

# 配置解析顺序（优先级从高到低）：
# 1) environment variables (MYDIARY_*)
# 2) config.yaml (path from MYDIARY_CONFIG, else project root)
# 3) DEFAULTS
_PROJECT_ROOT = os.path.dirname(os.path.dirname(__file__))

DEFAULTS = {
    "data_dir": "",  # empty -> platform data directory
    "notifier_buffer": "16",
    "log_level": "INFO",
}

_ENV_KEYS = {
    "data_dir": "MYDIARY_DATA_DIR",
    "notifier_buffer": "MYDIARY_NOTIFIER_BUFFER",
    "log_level": "MYDIARY_LOG_LEVEL",
}


def config_path(path: str | None = None) -> str:
    return path or os.environ.get("MYDIARY_CONFIG") or os.path.join(_PROJECT_ROOT, "config.yaml")


def _read_config_yaml(path: str | None = None) -> dict:
    cfg_path = config_path(path)
    if not os.path.exists(cfg_path):
        return {}
    try:
        with open(cfg_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logging.getLogger(__name__).warning("ignoring unreadable config %s: %s", cfg_path, e)
        return {}
    if not isinstance(cfg, dict):
        return {}
    out = {}
    for k in DEFAULTS:
        v = cfg.get(k)
        if v is not None and str(v).strip():
            out[k] = str(v).strip()
    return out


def _to_int(value: str, default: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return int(default)


def get_config(path: str | None = None) -> dict:
    cfg = dict(DEFAULTS)
    cfg.update(_read_config_yaml(path))
    for k, env in _ENV_KEYS.items():
        v = os.environ.get(env)
        if v:
            cfg[k] = v

    # 转换为正确类型 & 默认兜底
    return {
        "data_dir": cfg["data_dir"] or None,
        "notifier_buffer": max(1, _to_int(cfg["notifier_buffer"], DEFAULTS["notifier_buffer"])),
        "log_level": str(cfg["log_level"]).upper(),
    }


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=level or get_config()["log_level"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
