from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from dotenv import find_dotenv, load_dotenv

CONFIG_ENV_VAR = "SELENE_CONFIG"
BUNDLED_CONFIG = Path(__file__).resolve().parents[1] / "config" / "default.yaml"

# used for any key the YAML file leaves out
BUILTIN_DEFAULTS: Dict[str, Any] = {
    "helius": {
        "cluster": "mainnet-beta",
        "timeout_sec": 10,
        "connect_timeout_sec": 5,
        "log_bodies": False,
    },
    "relay": {
        "host": "0.0.0.0",
        "port": 3030,
        "explorer_tx_url": "https://xray.helius.xyz/tx/",
        "name_cache_shards": 16,
    },
    "logging": {"level": "INFO"},
}


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively overlay ``override`` on a copy of ``base``."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """Load settings: built-in defaults, then the YAML file, with ``.env`` in the environment.

    The file is ``path``, else ``$SELENE_CONFIG``, else the bundled
    ``config/default.yaml``. A missing file is an error only when it was named
    explicitly.
    """
    load_dotenv(find_dotenv(usecwd=True))

    explicit = path or os.getenv(CONFIG_ENV_VAR)
    config_path = Path(explicit) if explicit else BUNDLED_CONFIG
    if not config_path.exists():
        if explicit:
            raise FileNotFoundError(f"Config file not found: {config_path}")
        return copy.deepcopy(BUILTIN_DEFAULTS)

    with config_path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")
    return merge_config(BUILTIN_DEFAULTS, data)


def config_section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = config.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(f"Config section '{name}' must be a mapping")
    return section


__all__ = ["BUILTIN_DEFAULTS", "config_section", "load_config", "merge_config"]
