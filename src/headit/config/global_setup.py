"""Creation of the global config directory and file."""

from pathlib import Path

import yaml

from headit.modules.sync.debounce import DEFAULT_INTERVAL

from .env_loader import get_data_dir, get_global_config_dir
from .getters import DEFAULT_SYNC_TIMEOUT


def create_global_config() -> Path:
    """Create global config directory and file if they don't exist."""
    config_dir = get_global_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    config_path = config_dir / "config.yml"
    if not config_path.exists():
        default_config = {
            "sync": {
                "debounce_ms": int(DEFAULT_INTERVAL * 1000),
                "timeout": DEFAULT_SYNC_TIMEOUT,
            },
            "log": {
                "file": str(get_data_dir() / "headit.log"),
                "debug": False,
            },
        }
        with open(config_path, "w") as f:
            yaml.dump(default_config, f, default_flow_style=False)

    return config_path
