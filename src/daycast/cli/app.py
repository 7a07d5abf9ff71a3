"""
Main application entry point for the daycast CLI
"""

import typer
from typing import Optional
from rich.console import Console
from typing_extensions import Annotated

from daycast.cli import playlist, config
from daycast.cli.utils import get_app_state


console = Console()

app = typer.Typer(
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Main command groups
app.add_typer(playlist.app, name="playlist", help="Read and check daily playlists", rich_help_panel="📋 Main Commands")
app.add_typer(config.app, name="config", help="Manage daycast configuration", rich_help_panel="📋 Main Commands")


# aliases for commonly used subcommands
@app.command(
        name="load",
        rich_help_panel="✨ Quick Access",
        epilog="📝 this is an alias for [turquoise4]daycast playlist show[/]"
)
def alias_load(
    ctx: typer.Context,
    date: Annotated[Optional[str], typer.Option("--date", "-d", help="Broadcast date (YYYY-MM-DD)", show_default=False)] = None,
    path: Annotated[Optional[str], typer.Option("--playlist", "-p", help="Playlist file or URL, overrides the configured path", show_default=False)] = None,
    wait: Annotated[bool, typer.Option("--wait", "-w", help="Wait for the background validation to finish")] = False,
):
    """Reads the playlist of a broadcast day and prints its program"""

    playlist.show(ctx, date, path, wait)


@app.command(
        name="validate",
        rich_help_panel="✨ Quick Access",
        epilog="📝 this is an alias for [turquoise4]daycast playlist validate[/]"
)
def alias_validate(
    ctx: typer.Context,
    date: Annotated[Optional[str], typer.Option("--date", "-d", help="Broadcast date (YYYY-MM-DD)", show_default=False)] = None,
    path: Annotated[Optional[str], typer.Option("--playlist", "-p", help="Playlist file or URL, overrides the configured path", show_default=False)] = None,
):
    """Reads a playlist and validates it in the foreground"""

    playlist.validate(ctx, date, path)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Enable verbose output"),
    log_file: bool = typer.Option(False, "--log-file", help="Also write logs to the daycast data directory"),
    version: bool = typer.Option(False, "--version", "-v", help="Show version information"),
    ):

    if version:
        from importlib.metadata import version
        console.print(f"daycast v{version('daycast')}")
        raise typer.Exit()

    # Initialize the application state
    ctx.obj = get_app_state(verbose=verbose, log_file=log_file)


if __name__ == "__main__":
    app()
