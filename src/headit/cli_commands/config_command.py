"""Configuration CLI command."""

from typing import Optional

import typer

from .shared import app, cli_module, console

SETTING_ALIASES = {
    "endpoint": "endpoint",
    "port": "endpoint",
    "api-base-url": "endpoint",
    "default-enabled": "default_enabled",
    "default_enabled": "default_enabled",
}


@app.command()
def config(
    action: str = typer.Argument("show", help="Action: show, init, set"),
    name: Optional[str] = typer.Argument(None, help="Setting for 'set': endpoint, default-enabled"),
    value: Optional[str] = typer.Argument(None, help="New value for 'set'"),
) -> None:
    """Show or change headit settings and configuration."""
    cli = cli_module()

    if action == "init":
        config_path = cli.create_global_config()
        console.print(f"[green]Created global config:[/green] {config_path}")
        return

    if action == "show":
        storage = cli.SQLiteStore(cli.get_db_path())
        try:
            settings = cli.Settings(storage, endpoint_override=cli.get_endpoint_override())
            console.print("[bold]Settings:[/bold]")
            for setting, current in settings.as_dict().items():
                if isinstance(current, bool):
                    current = str(current).lower()
                console.print(f"  {setting.replace('_', '-')}={current}")
            console.print(f"  [dim]effective endpoint: {settings.base_url}[/dim]")
            if settings.endpoint_override:
                console.print("  [dim](endpoint overridden by HEADIT_ENDPOINT)[/dim]")
        finally:
            storage.close()

        console.print("[bold]Configuration:[/bold]")
        console.print(f"  data dir={cli.get_data_dir()}")
        console.print(f"  database={cli.get_db_path()}")
        console.print(f"  log file={cli.get_log_file()}")
        console.print(f"  debounce={cli.get_debounce_interval() * 1000:.0f}ms")
        console.print(f"  sync timeout={cli.get_sync_timeout():g}s")
        return

    if action == "set":
        setting = SETTING_ALIASES.get((name or "").lower())
        if setting is None or value is None:
            console.print(
                "[red]Usage: headit config set endpoint|default-enabled VALUE[/red]"
            )
            raise typer.Exit(1)

        storage = cli.SQLiteStore(cli.get_db_path())
        try:
            settings = cli.Settings(storage)
            try:
                settings.set(setting, value)
            except ValueError as exc:
                console.print(f"[red]Error: {exc}[/red]")
                raise typer.Exit(1) from exc
            shown = settings.get(setting)
        finally:
            storage.close()
        if isinstance(shown, bool):
            shown = str(shown).lower()
        console.print(f"[green]{name} set to[/green] {shown}")
        return

    console.print(f"[red]Unknown action: {action}. Use 'show', 'init' or 'set'.[/red]")
    raise typer.Exit(1)
