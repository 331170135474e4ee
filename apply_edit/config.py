"""
Configuration — loads settings from .apply_edit.yaml, environment variables,
and built-in defaults (in that priority order: CLI args > env > YAML > defaults).
"""

import os

import yaml


_DEFAULTS = {
    "encoding": "utf-8",
    "atomic_write": True,
    "color": True,
    "log_dir": "",
    "metrics": False,
    "metrics_dir": ".apply_edit",
}

# Config file search locations
_CONFIG_FILENAMES = [".apply_edit.yaml", ".apply_edit.yml"]


def _find_config_file(explicit_path: str | None = None) -> str | None:
    """Find the config file. Checks explicit path, CWD, then user home."""
    if explicit_path:
        if os.path.isfile(explicit_path):
            return explicit_path
        return None

    # Search CWD first, then home directory
    search_dirs = [os.getcwd(), os.path.expanduser("~")]
    for d in search_dirs:
        for name in _CONFIG_FILENAMES:
            path = os.path.join(d, name)
            if os.path.isfile(path):
                return path
    return None


def _load_yaml(path: str) -> dict:
    """Load YAML file, returns empty dict on failure."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return data if isinstance(data, dict) else {}
    except (OSError, yaml.YAMLError):
        return {}


class Config:
    """Application configuration.

    Settings are resolved in priority order:
    1. CLI arguments (handled by caller)
    2. Environment variables
    3. .apply_edit.yaml config file
    4. Built-in defaults
    """

    def __init__(self, yaml_data: dict | None = None):
        yd = yaml_data or {}

        # Helper: env var > yaml > default
        def _get(env_key: str, yaml_key: str, default, cast=str):
            env_val = os.getenv(env_key)
            if env_val is not None:
                return cast(env_val)
            yaml_val = yd.get(yaml_key)
            if yaml_val is not None:
                return cast(yaml_val)
            return default

        def _get_bool(env_key: str, yaml_key: str, default: bool) -> bool:
            env_val = os.getenv(env_key)
            if env_val is not None:
                return env_val.lower() == "true"
            yaml_val = yd.get(yaml_key)
            if yaml_val is not None:
                return bool(yaml_val)
            return default

        self.ENCODING = _get("APPLY_EDIT_ENCODING", "encoding",
                             _DEFAULTS["encoding"])
        self.ATOMIC_WRITE = _get_bool("APPLY_EDIT_ATOMIC_WRITE", "atomic_write",
                                      _DEFAULTS["atomic_write"])
        self.COLOR = _get_bool("APPLY_EDIT_COLOR", "color", _DEFAULTS["color"])

        # File logging is off unless a directory is configured
        self.LOG_DIR = _get("APPLY_EDIT_LOG_DIR", "log_dir",
                            _DEFAULTS["log_dir"])

        # Edit log (JSONL)
        self.METRICS_ENABLED = _get_bool("APPLY_EDIT_METRICS", "metrics",
                                         _DEFAULTS["metrics"])
        self.METRICS_DIR = _get("APPLY_EDIT_METRICS_DIR", "metrics_dir",
                                _DEFAULTS["metrics_dir"])

    @classmethod
    def load(cls, config_path: str | None = None) -> "Config":
        """Load config from YAML file (if found) + env vars + defaults."""
        path = _find_config_file(config_path)
        yaml_data = _load_yaml(path) if path else {}
        return cls(yaml_data)
