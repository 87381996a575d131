"""headit CLI - per-site header rules synced to a local injection service.

Command modules look symbols up here at call time, so tests can monkeypatch
``headit.cli.SQLiteStore``, ``headit.cli.get_db_path`` and friends.
"""

from headit.cli_commands import (  # noqa: F401  (registers commands)
    config_command,
    console_command,
    info_command,
    rules_command,
    sync_command,
)
from headit.cli_commands.shared import app, console
from headit.config import (
    create_global_config,
    get_data_dir,
    get_db_path,
    get_debounce_interval,
    get_endpoint_override,
    get_log_file,
    get_sync_timeout,
    is_debug_enabled_env,
)
from headit.db.kv_store import SQLiteStore
from headit.modules.settings import Settings
from headit.modules.sync import SyncClient
from headit.utils.debug import set_debug_enabled
from headit.utils.log_setup import setup_logging

__all__ = [
    "SQLiteStore",
    "Settings",
    "SyncClient",
    "app",
    "console",
    "create_global_config",
    "get_data_dir",
    "get_db_path",
    "get_debounce_interval",
    "get_endpoint_override",
    "get_log_file",
    "get_sync_timeout",
    "is_debug_enabled_env",
    "main",
    "set_debug_enabled",
    "setup_logging",
]


def main() -> None:
    """Entry point for the CLI."""
    app()
