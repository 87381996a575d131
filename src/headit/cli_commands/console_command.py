"""Interactive console CLI command."""

import os
from typing import Optional

import typer

from .shared import GLOBAL_HELP, HOST_HELP, app, build_session, console, require_scope


@app.command(name="console")
def console_cmd(
    host: Optional[str] = typer.Option(None, "--host", "-H", help=HOST_HELP),
    global_scope: bool = typer.Option(False, "--global", "-g", help=GLOBAL_HELP),
    text: bool = typer.Option(False, "--text", "-t", help="Start in free-text mode"),
) -> None:
    """Start the interactive rule editor."""
    from headit.console import ConsoleApp

    if os.environ.get("HEADIT_CONSOLE_ACTIVE") == "1":
        console.print(
            "[yellow]Console already running. Use 'exit' to leave the current session.[/yellow]"
        )
        return

    scope_host = require_scope(host, global_scope)
    session = build_session(scope_host, global_scope, text_mode=text)
    os.environ["HEADIT_CONSOLE_ACTIVE"] = "1"
    try:
        ConsoleApp(session).run()
    finally:
        os.environ.pop("HEADIT_CONSOLE_ACTIVE", None)
        session.storage.close()
