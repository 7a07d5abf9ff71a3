"""
Command group of config-related commands for the daycast CLI
"""

import typer
from rich.console import Console
from typing_extensions import Annotated


console = Console()
app = typer.Typer(
    no_args_is_help=True,
    rich_markup_mode="rich",
    help="Manage daycast configuration",
)


@app.command(
    rich_help_panel="📋 View & Edit"
)
def show(
    ctx: typer.Context
):
    """Prints the config in a human-readable format"""

    config_manager = ctx.obj.get("config_manager")
    config = config_manager.config

    console.print(f"\n📝 [dim]{config_manager.config_file_path}[/]\n")

    # Playlist section
    console.print("[bold cyan]Playlist[/]\n", style="bold cyan")
    playlist = config.get("playlist")
    if playlist:
        console.print(f"  📂 Path: [yellow]{playlist.get('path', 'N/A')}[/]")
        console.print(f"  🕒 Day start: [green]{playlist.get('day_start', '00:00:00')}[/]")
        console.print(f"  ⏱️ Length: [green]{playlist.get('length', '24:00:00')}[/]")
    else:
        console.print("  ⚠️ No playlist configured")

    # Logging section
    console.print("\n[bold cyan]Logging[/]\n", style="bold cyan")
    console.print(f"  📊 Level: [yellow]{config.get('logging', {}).get('level', 'INFO')}[/]")

    # Validate and show any issues
    validation = config_manager.validate_config()
    if validation.failed or validation.warnings:
        console.print("\n[bold yellow]Configuration Issues:[/]")
        for key, result in validation.errors.items():
            for item in result:
                console.print(f"  ❗ [red]{key.upper()}:[/] {item}")
        for key, result in validation.warnings.items():
            for item in result:
                console.print(f"  ⚠️ [yellow]{key.upper()}:[/] {item}")
    console.print()


@app.command(
    rich_help_panel="📋 View & Edit",
    no_args_is_help=True,
)
def path(
    ctx: typer.Context,
    playlist_path: Annotated[str, typer.Argument(..., help="Playlist directory, file or URL", show_default=False)]
):
    """Sets where playlists are read from"""

    config_manager = ctx.obj.get("config_manager")

    if config_manager.set_playlist_path(playlist_path):
        console.print(f"✅ Playlist path set to [yellow]{playlist_path}[/]")
    else:
        console.print("🚫 Failed to update the playlist path, see the log for details")
        raise typer.Exit(code=1)
