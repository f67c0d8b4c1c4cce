"""
Configuration — loads settings from .text_editor.yaml, environment variables,
and built-in defaults (in that priority order: CLI args > env > YAML > defaults).
"""

import logging
import os

import yaml

logger = logging.getLogger(__name__)


_DEFAULTS = {
    "max_file_bytes": 400 * 1024,
    "max_chars": 400_000,
    "snippet_lines": 4,
    "encoding": "utf-8",
    "lock_mode": "path",
    "log_dir": ".text_editor/logs",
    "metrics_enabled": False,
    "metrics_dir": ".text_editor",
}

# Config file search locations
_CONFIG_FILENAMES = [".text_editor.yaml", ".text_editor.yml"]


def _find_config_file(explicit_path: str | None = None) -> str | None:
    """Find the config file. Checks explicit path, CWD, then user home."""
    if explicit_path:
        if os.path.isfile(explicit_path):
            return explicit_path
        return None

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
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("[Config] Could not load %s: %s", path, exc)
        return {}


class Config:
    """Text editor configuration.

    Settings are resolved in priority order:
    1. CLI arguments (handled by caller)
    2. Environment variables
    3. .text_editor.yaml config file
    4. Built-in defaults
    """

    def __init__(self, yaml_data: dict | None = None):
        yd = yaml_data or {}

        # Helper: env var > yaml > default
        def _get(env_key: str, yaml_key: str, cast=str):
            env_val = os.getenv(env_key)
            if env_val is not None:
                return cast(env_val)
            yaml_val = yd.get(yaml_key)
            if yaml_val is not None:
                return cast(yaml_val)
            return _DEFAULTS[yaml_key]

        def _get_bool(env_key: str, yaml_key: str) -> bool:
            env_val = os.getenv(env_key)
            if env_val is not None:
                return env_val.lower() in ("1", "true", "yes")
            yaml_val = yd.get(yaml_key)
            if yaml_val is not None:
                return bool(yaml_val)
            return _DEFAULTS[yaml_key]

        # View limits
        self.MAX_FILE_BYTES = _get("TEXT_EDITOR_MAX_FILE_BYTES", "max_file_bytes", cast=int)
        self.MAX_CHARS = _get("TEXT_EDITOR_MAX_CHARS", "max_chars", cast=int)

        # Lines of context around a str_replace
        self.SNIPPET_LINES = _get("TEXT_EDITOR_SNIPPET_LINES", "snippet_lines", cast=int)

        self.ENCODING = _get("TEXT_EDITOR_ENCODING", "encoding")

        self.LOCK_MODE = _get("TEXT_EDITOR_LOCK_MODE", "lock_mode").lower()
        if self.LOCK_MODE not in ("path", "global"):
            logger.warning(
                "[Config] Unknown lock_mode %r, using 'path'", self.LOCK_MODE)
            self.LOCK_MODE = "path"

        self.LOG_DIR = _get("TEXT_EDITOR_LOG_DIR", "log_dir")

        self.METRICS_ENABLED = _get_bool("TEXT_EDITOR_METRICS", "metrics_enabled")
        self.METRICS_DIR = _get("TEXT_EDITOR_METRICS_DIR", "metrics_dir")

    @classmethod
    def load(cls, config_path: str | None = None) -> "Config":
        """Load config from YAML file (if found) + env vars + defaults."""
        path = _find_config_file(config_path)
        yaml_data = _load_yaml(path) if path else {}
        return cls(yaml_data)
