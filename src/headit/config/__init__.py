"""
Configuration management for headit.

Supports multiple configuration sources in order of priority:
1. Environment variables (highest priority)
2. Data directory .env file (~/.headit/.env or $HEADIT_DATA_DIR/.env)
3. Global config file (~/.headit/config.yml)
4. Default values (lowest priority)
"""

from .env_loader import (
    get_data_dir,
    get_global_config_dir,
    load_data_dir_env,
    load_env_file,
    load_global_config,
)
from .getters import (
    DEFAULT_SYNC_TIMEOUT,
    get_config,
    get_db_path,
    get_debounce_interval,
    get_endpoint_override,
    get_log_file,
    get_sync_timeout,
    is_debug_enabled_env,
)
from .global_setup import create_global_config

__all__ = [
    # env_loader
    "get_data_dir",
    "get_global_config_dir",
    "load_data_dir_env",
    "load_env_file",
    "load_global_config",
    # getters
    "DEFAULT_SYNC_TIMEOUT",
    "get_config",
    "get_db_path",
    "get_debounce_interval",
    "get_endpoint_override",
    "get_log_file",
    "get_sync_timeout",
    "is_debug_enabled_env",
    # global_setup
    "create_global_config",
]
