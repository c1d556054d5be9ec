from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

DEFAULT_CONFIG: Dict[str, Any] = {
    "project": {"name": "crashguard"},
    "runtime": {
        "output_dir": "results",
        "log_level": "INFO",
        "save_metrics": True,
    },
    "detection": {
        "vehicle": "scooter",
        "window_size": 10,
        "min_readings": 5,
        "confirm_span": 3,
        "confirm_min_hits": 2,
        "confirm_bonus": 15,
        "noise_penalty": 20,
    },
    "monitor": {"poll_every": 1},
    "alerts": {"event_log": True},
}


def load_yaml(path: str | Path) -> Dict[str, Any]:
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config not found: {config_path.resolve()}")
    with config_path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config root must be a mapping: {config_path}")
    return data


def merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursive dict merge; values from `override` win. Inputs are not modified."""
    out = deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = merge(out[key], value)
        else:
            out[key] = deepcopy(value)
    return out


def load_config(path: Optional[str | Path] = None) -> Dict[str, Any]:
    if path is None:
        return deepcopy(DEFAULT_CONFIG)
    return merge(DEFAULT_CONFIG, load_yaml(path))


def get(cfg: Dict[str, Any], key: str, default: Any = None) -> Any:
    """
    Dot-access helper:
      get(cfg, "detection.window_size", 10)
    """
    cur: Any = cfg
    for part in key.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return default
        cur = cur[part]
    return cur
