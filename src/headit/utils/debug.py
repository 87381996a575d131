"""Debug utilities for sync visibility.

Thread-safe debug output with rich formatting for console sessions.
"""

import json
import threading
from typing import Any

from rich.console import Console
from rich.syntax import Syntax

# Thread-local storage for debug state
_debug_state = threading.local()


def set_debug_enabled(enabled: bool) -> None:
    """Set debug mode for the current thread/session."""
    _debug_state.enabled = enabled


def is_debug_enabled() -> bool:
    """Check if debug mode is enabled for the current thread/session."""
    return getattr(_debug_state, "enabled", False)


def debug_print(category: str, message: str, **data: Any) -> None:
    """Print debug information if debug mode is enabled.

    Args:
        category: Debug category (sync, edit, config)
        message: Main message to display
        **data: Additional key-value pairs to display
    """
    if not is_debug_enabled():
        return
    console = Console(stderr=True)
    console.print(f"[DEBUG:{category}] {message}", style="bold cyan")
    for key, value in data.items():
        if value is None:
            continue
        if isinstance(value, dict):
            try:
                json_str = json.dumps(value, indent=2)
                syntax = Syntax(json_str, "json", theme="monokai", line_numbers=False)
                console.print(f"  {key}:", style="dim")
                console.print(syntax)
            except (TypeError, ValueError):
                console.print(f"  {key}: {value}", style="dim")
        elif isinstance(value, list):
            console.print(f"  {key}: {', '.join(str(v) for v in value)}", style="dim")
        elif isinstance(value, str) and len(value) > 100:
            console.print(f"  {key}: {value[:100]}... ({len(value)} chars)", style="dim")
        else:
            console.print(f"  {key}: {value}", style="dim")


def debug_sync_result(
    status_code: int,
    elapsed: float,
    error: str | None = None,
) -> None:
    """Log a sync response in debug mode.

    Args:
        status_code: HTTP status, 0 when the request never completed
        elapsed: Request time in seconds
        error: Transport or status error, if any
    """
    if not is_debug_enabled():
        return
    debug_print(
        "sync",
        f"← {status_code or 'no response'} +{elapsed:.2f}s",
        Error=error or None,
    )
