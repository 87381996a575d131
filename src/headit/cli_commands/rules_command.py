"""Rule listing and editing CLI commands."""

import sys
from pathlib import Path
from typing import Optional

import typer

from headit.modules.rules import to_text

from .shared import (
    GLOBAL_HELP,
    HOST_HELP,
    build_session,
    console,
    print_sync_result,
    render_rules_table,
    require_scope,
    rules_app,
    run_in_session,
)


@rules_app.command("list")
def list_rules(
    host: Optional[str] = typer.Option(None, "--host", "-H", help=HOST_HELP),
    global_scope: bool = typer.Option(False, "--global", "-g", help=GLOBAL_HELP),
    text: bool = typer.Option(False, "--text", "-t", help="Print as 'key: value' lines"),
) -> None:
    """Show stored rules (all hosts unless --host or --global is given)."""
    filtered = global_scope or bool(host)
    session = build_session(host or "", global_scope)

    def _collect(s):
        if filtered:
            return s.visible_rules()
        return list(enumerate(s.rules))

    rows = run_in_session(session, _collect)

    if text:
        rules = [rule for _, rule in rows]
        output = to_text(rules)
        if output:
            console.print(output, markup=False, highlight=False)
        return

    if not rows:
        console.print("[dim]No rules stored.[/dim]")
        return
    console.print(render_rules_table(rows))


@rules_app.command("add")
def add(
    key: str = typer.Argument(..., help="Header name"),
    value: str = typer.Argument("", help="Header value"),
    host: Optional[str] = typer.Option(None, "--host", "-H", help=HOST_HELP),
    global_scope: bool = typer.Option(False, "--global", "-g", help=GLOBAL_HELP),
    enabled: Optional[bool] = typer.Option(
        None,
        "--enabled/--disabled",
        help="Initial state (default: the default-enabled setting)",
    ),
) -> None:
    """Add a header rule."""
    scope_host = require_scope(host, global_scope)
    session = build_session(scope_host, global_scope)
    index = run_in_session(session, lambda s: s.add_rule(key, value, enabled))
    rule = session.rules[index]
    state = "enabled" if rule.enabled else "disabled"
    console.print(f"[green]Added rule #{index}[/green] {rule.key}: {rule.value} ({state})")
    print_sync_result(session.last_result)


@rules_app.command("remove")
def remove(index: int = typer.Argument(..., help="Rule number from 'headit rules list'")) -> None:
    """Delete a rule."""
    session = build_session()
    rule = run_in_session(session, lambda s: s.remove_rule(index))
    console.print(f"[green]Removed rule #{index}[/green] {rule.key} ({rule.host or '*'})")
    print_sync_result(session.last_result)


@rules_app.command("toggle")
def toggle(
    index: int = typer.Argument(..., help="Rule number from 'headit rules list'"),
    enabled: Optional[bool] = typer.Option(None, "--on/--off", help="Set instead of flipping"),
) -> None:
    """Enable or disable a rule."""
    session = build_session()
    rule = run_in_session(session, lambda s: s.toggle_rule(index, enabled))
    state = "[green]enabled[/green]" if rule.enabled else "[yellow]disabled[/yellow]"
    console.print(f"Rule #{index} {rule.key} {state}")
    print_sync_result(session.last_result)


@rules_app.command("set")
def set_field(
    index: int = typer.Argument(..., help="Rule number from 'headit rules list'"),
    field: str = typer.Argument(..., help="key or value"),
    value: str = typer.Argument(..., help="New text"),
) -> None:
    """Change the header name or value of a rule."""
    session = build_session()
    rule = run_in_session(session, lambda s: s.edit_field(index, field.lower(), value))
    console.print(f"[green]Updated rule #{index}[/green] {rule.key}: {rule.value}")
    print_sync_result(session.last_result)


def _set_all(enabled: bool) -> None:
    session = build_session()
    run_in_session(session, lambda s: s.set_all(enabled))
    word = "Enabled" if enabled else "Disabled"
    console.print(f"[green]{word} {len(session.rules)} rule(s)[/green]")
    print_sync_result(session.last_result)


@rules_app.command("enable-all")
def enable_all() -> None:
    """Enable every rule (and make new rules enabled by default)."""
    _set_all(True)


@rules_app.command("disable-all")
def disable_all() -> None:
    """Disable every rule (and make new rules disabled by default)."""
    _set_all(False)


@rules_app.command("import")
def import_rules(
    file: str = typer.Argument(..., help="Text file with 'key: value' lines, or - for stdin"),
    host: Optional[str] = typer.Option(None, "--host", "-H", help=HOST_HELP),
    global_scope: bool = typer.Option(False, "--global", "-g", help=GLOBAL_HELP),
) -> None:
    """Replace a host's rules with the lines of a text file (# disables a line)."""
    scope_host = require_scope(host, global_scope)
    if file == "-":
        text = sys.stdin.read()
    else:
        path = Path(file)
        if not path.is_file():
            console.print(f"[red]Error: file not found: {file}[/red]")
            raise typer.Exit(1)
        text = path.read_text()

    session = build_session(scope_host, global_scope, text_mode=True)
    rules = run_in_session(session, lambda s: s.replace_text(text))
    console.print(f"[green]Imported {len(rules)} rule(s) for {scope_host or 'all hosts'}[/green]")
    print_sync_result(session.last_result)


@rules_app.command("export")
def export_rules(
    host: Optional[str] = typer.Option(None, "--host", "-H", help=HOST_HELP),
    global_scope: bool = typer.Option(False, "--global", "-g", help=GLOBAL_HELP),
) -> None:
    """Print a host's rules as text, ready for 'headit rules import'."""
    scope_host = require_scope(host, global_scope)
    session = build_session(scope_host, global_scope, text_mode=True)
    text = run_in_session(session, lambda s: s.render_text())
    if text:
        typer.echo(text)
