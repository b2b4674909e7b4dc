# recon/config.py
import math
import os
from pathlib import Path

import yaml

CONFIG_FILENAME = "subchase-config.yaml"
ENV_PREFIX = "SC_"

DEFAULTS = {
    "server": "8.8.8.8:53",
    "workers": 100,
    "timeout": 2.0,
    "max_hops": 10,
}

# setting name -> converter
_TYPES = {
    "server": str,
    "workers": int,
    "timeout": float,
    "max_hops": int,
}


def _coerce(key, value, origin):
    try:
        value = _TYPES[key](value)
    except (TypeError, ValueError):
        print(f"[!] Ignoring invalid {key} from {origin}: {value!r}")
        return None
    if key == "timeout" and (not math.isfinite(value) or value <= 0):
        print(f"[!] Ignoring invalid timeout from {origin}: {value!r}")
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    return value


def _load_file(path):
    """Read the YAML config file; missing or broken files give an empty dict."""
    config_path = Path(path) if path else Path.cwd() / CONFIG_FILENAME
    if not config_path.exists():
        if path:
            print(f"[!] Config file not found: {config_path}")
        return {}
    try:
        with open(config_path, 'r', encoding='utf-8', errors='ignore') as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        print(f"[!] Failed to load config {config_path}: {e}")
        return {}
    if not isinstance(raw, dict):
        print(f"[!] Config {config_path} must contain a mapping, ignoring it")
        return {}
    norm = {}
    for k, v in raw.items():
        key = str(k).strip().lower().replace('-', '_')
        if key not in DEFAULTS or v is None:
            continue
        v = _coerce(key, v, config_path.name)
        if v is not None:
            norm[key] = v
    return norm


def _load_env(environ=None):
    environ = os.environ if environ is None else environ
    found = {}
    for key in DEFAULTS:
        name = f"{ENV_PREFIX}{key.upper()}"
        raw = environ.get(name)
        if raw is None or not raw.strip():
            continue
        v = _coerce(key, raw.strip(), name)
        if v is not None:
            found[key] = v
    return found


def load_config(path=None, environ=None):
    """Resolve settings: defaults < YAML file < SC_* environment variables.

    Command-line flags are applied on top of this by the caller.
    """
    settings = dict(DEFAULTS)
    settings.update(_load_file(path))
    settings.update(_load_env(environ))
    return settings
