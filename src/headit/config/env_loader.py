"""Environment variable and configuration file loading."""

import os
from pathlib import Path
from typing import Any

import yaml

DATA_DIR_ENV = "HEADIT_DATA_DIR"


def get_global_config_dir() -> Path:
    """Return the ~/.headit directory (not created)."""
    return Path.home() / ".headit"


def get_data_dir() -> Path:
    """Return the data directory: $HEADIT_DATA_DIR or ~/.headit."""
    data_root = os.environ.get(DATA_DIR_ENV)
    if data_root:
        return Path(data_root).expanduser()
    return get_global_config_dir()


def load_env_file(env_path: Path) -> dict[str, str]:
    """Load environment variables from .env file."""
    env_vars = {}
    if env_path.exists():
        with open(env_path) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, value = line.split("=", 1)
                    # Remove quotes if present
                    value = value.strip().strip("\"'")
                    env_vars[key.strip()] = value
    return env_vars


def load_global_config() -> dict[str, Any]:
    """Load global configuration from ~/.headit/config.yml."""
    config_path = get_global_config_dir() / "config.yml"
    if config_path.exists():
        with open(config_path) as f:
            data = yaml.safe_load(f)
        return data if isinstance(data, dict) else {}
    return {}


def load_data_dir_env() -> dict[str, str]:
    """Load the .env file kept in the data directory."""
    return load_env_file(get_data_dir() / ".env")
