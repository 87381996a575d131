"""Manual sync CLI command."""

import typer

from .shared import app, build_session, console, print_sync_result, run_in_session


@app.command()
def sync(
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Send even when no rule is enabled, clearing the service",
    ),
) -> None:
    """Push the enabled rules to the injection service."""
    session = build_session()
    result = run_in_session(session, lambda s: s.sync_now(force=force))
    console.print(f"[dim]Endpoint: {session.settings.base_url}[/dim]")
    print_sync_result(result)
    if result is not None and not result.skipped and not result.ok:
        raise typer.Exit(1)
