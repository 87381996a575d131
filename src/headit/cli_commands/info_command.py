"""Version and global option handling."""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version

import typer

from .shared import app, cli_module, console


@app.callback()
def main_options(
    debug: bool = typer.Option(False, "--debug", help="Verbose logging and payload output"),
) -> None:
    """Per-site HTTP header rules, synced to a local injection service."""
    cli = cli_module()
    debug = debug or cli.is_debug_enabled_env()
    cli.setup_logging(cli.get_log_file(), debug=debug)
    cli.set_debug_enabled(debug)


@app.command()
def version() -> None:
    """Show the installed headit version."""
    try:
        current_version = pkg_version("headit")
    except PackageNotFoundError:
        current_version = "0.0.0+unknown"

    console.print(f"headit {current_version}")
