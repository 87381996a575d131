"""Configuration getter functions."""

import logging
import os
from pathlib import Path
from typing import Any

from headit.modules.sync.debounce import DEFAULT_INTERVAL

from .env_loader import get_data_dir, load_data_dir_env, load_global_config

logger = logging.getLogger(__name__)

DEFAULT_SYNC_TIMEOUT = 5.0

# Where each key lives in ~/.headit/config.yml
YAML_PATHS: dict[str, tuple[str, ...]] = {
    "HEADIT_ENDPOINT": ("sync", "endpoint"),
    "HEADIT_DEBOUNCE_MS": ("sync", "debounce_ms"),
    "HEADIT_SYNC_TIMEOUT": ("sync", "timeout"),
    "HEADIT_LOG_FILE": ("log", "file"),
    "HEADIT_DEBUG": ("log", "debug"),
}


def _lookup_yaml(config: dict[str, Any], key: str) -> Any:
    if key in config:
        return config[key]
    node: Any = config
    for part in YAML_PATHS.get(key, ()):
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return node if key in YAML_PATHS else None


def get_config(key: str, default: Any = None) -> Any:
    """
    Get configuration value with priority:
    1. Environment variable
    2. Data directory .env file
    3. Global config file
    4. Default value

    Args:
        key: Configuration key (environment variable name)
        default: Default value if not found

    Returns:
        Configuration value or default
    """
    env_value = os.environ.get(key)
    if env_value:
        return env_value

    env_file = load_data_dir_env()
    if env_file.get(key):
        return env_file[key]

    value = _lookup_yaml(load_global_config(), key)
    if value is not None:
        return value

    return default


def _get_float(key: str, default: float) -> float:
    raw = get_config(key)
    if raw is None or raw == "":
        return default
    try:
        value = float(raw)
    except (TypeError, ValueError):
        logger.warning("Invalid %s=%r, using %s", key, raw, default)
        return default
    if value < 0:
        logger.warning("Negative %s=%r, using %s", key, raw, default)
        return default
    return value


def get_db_path() -> Path:
    """Path of the SQLite storage database."""
    return get_data_dir() / "headit.db"


def get_debounce_interval() -> float:
    """Debounce quiet period in seconds (configured in milliseconds)."""
    millis = _get_float("HEADIT_DEBOUNCE_MS", DEFAULT_INTERVAL * 1000)
    return millis / 1000


def get_sync_timeout() -> float:
    """HTTP timeout in seconds for sync requests."""
    return _get_float("HEADIT_SYNC_TIMEOUT", DEFAULT_SYNC_TIMEOUT) or DEFAULT_SYNC_TIMEOUT


def get_endpoint_override() -> str | None:
    """Endpoint from config that wins over the stored setting, if any."""
    value = get_config("HEADIT_ENDPOINT")
    return str(value) if value else None


def get_log_file() -> Path:
    """Log file location, default <data dir>/headit.log."""
    value = get_config("HEADIT_LOG_FILE")
    if value:
        return Path(str(value)).expanduser()
    return get_data_dir() / "headit.log"


def is_debug_enabled_env() -> bool:
    """True when HEADIT_DEBUG (or log.debug in config.yml) is set."""
    value = get_config("HEADIT_DEBUG", False)
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")
