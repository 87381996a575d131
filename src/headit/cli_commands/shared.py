"""Shared CLI app objects and session helpers."""

import inspect
from collections.abc import Callable
from importlib import import_module
from types import ModuleType
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from headit.modules.rules import Rule
from headit.modules.session import Editor, Scope, SyncSession, UIMode
from headit.modules.sync import SyncResult
from headit.utils.async_utils import safe_async_run

app = typer.Typer(
    name="headit",
    help="Per-site HTTP header rules, synced to a local injection service",
    no_args_is_help=True,
)
rules_app = typer.Typer(help="List and edit header rules", no_args_is_help=True)
app.add_typer(rules_app, name="rules")
console = Console()

HOST_HELP = "Host the rules belong to (e.g. example.com)"
GLOBAL_HELP = "Work on rules that apply to every host"


def cli_module() -> ModuleType:
    """Return ``headit.cli``; storage, client and config are looked up there per call."""
    return import_module("headit.cli")


def build_session(
    host: str = "",
    global_scope: bool = False,
    text_mode: bool = False,
) -> SyncSession:
    """Create a SyncSession over the on-disk storage using the current config."""
    cli = cli_module()
    mode = UIMode(
        scope=Scope.GLOBAL if global_scope else Scope.SCOPED,
        editor=Editor.FREE_TEXT if text_mode else Editor.TABLE,
    )
    storage = cli.SQLiteStore(cli.get_db_path())
    return SyncSession(
        storage,
        host=host,
        mode=mode,
        client=cli.SyncClient(timeout=cli.get_sync_timeout()),
        debounce_interval=cli.get_debounce_interval(),
        endpoint_override=cli.get_endpoint_override(),
    )


def require_scope(host: str | None, global_scope: bool) -> str:
    """Return the host to edit, exiting when neither --host nor --global is given."""
    if global_scope:
        return ""
    if not host:
        console.print("[red]Error: pass --host HOST or --global.[/red]")
        raise typer.Exit(1)
    return host


def run_in_session(
    session: SyncSession,
    action: Callable[[SyncSession], Any],
    sync: bool = False,
) -> Any:
    """
    Activate the session, run ``action`` and tear the session down.

    Bad indexes, unknown fields or settings end the command with exit code 1.
    """

    async def _run() -> Any:
        await session.activate(sync=sync)
        try:
            value = action(session)
            if inspect.isawaitable(value):
                value = await value
            return value
        finally:
            await session.deactivate()

    try:
        return safe_async_run(_run())
    except (IndexError, KeyError, ValueError) as exc:
        message = exc.args[0] if exc.args else exc
        console.print(f"[red]Error: {message}[/red]")
        raise typer.Exit(1) from exc
    finally:
        session.storage.close()


def render_rules_table(rows: list[tuple[int, Rule]], title: str = "Header rules") -> Table:
    """Build a rich table for ``(index, rule)`` rows."""
    table = Table(title=title)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Host", style="cyan")
    table.add_column("On", justify="center")
    table.add_column("Header", style="bold")
    table.add_column("Value")
    for idx, rule in rows:
        table.add_row(
            str(idx),
            rule.host or "[dim]*[/dim]",
            "[green]✓[/green]" if rule.enabled else "[dim]-[/dim]",
            rule.key or "[dim](empty)[/dim]",
            rule.value,
        )
    return table


def print_sync_result(result: SyncResult | None) -> None:
    """Report the outcome of the last sync of a command."""
    if result is None or result.skipped:
        console.print("[dim]Nothing to sync.[/dim]")
        return
    if result.ok:
        console.print(
            f"[green]Synced {result.hosts} host(s)[/green] "
            f"[dim](HTTP {result.status_code}, {result.response_time:.2f}s)[/dim]"
        )
        return
    console.print(
        f"[yellow]Saved locally, but sync failed: {result.error}[/yellow]\n"
        "[dim]The next edit or 'headit sync' will send the full state again.[/dim]"
    )
