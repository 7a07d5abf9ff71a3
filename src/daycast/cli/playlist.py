"""
Command group of playlist-related commands for the daycast CLI
"""

import threading
import typer
from typing import Optional
from rich.console import Console
from rich.table import Table
from typing_extensions import Annotated

from daycast.config import ConfigError
from daycast.models import Playlist, PlaylistFormatError
from daycast.utils import get_date, sec_to_time


console = Console()
app = typer.Typer(
    no_args_is_help=True,
    rich_markup_mode="rich",
    help="Read and check daily playlists",
)


def _get_config(ctx: typer.Context):
    config_manager = ctx.obj.get("config_manager")
    try:
        return config_manager.get_playout_config()
    except ConfigError as e:
        console.print(f"🚫 [red]Invalid configuration:[/] {e}")
        raise typer.Exit(code=1)


def print_playlist(playlist: Playlist) -> None:
    """Prints the annotated program of a playlist as a table"""

    console.print(f"\n📅 [bold cyan]{playlist.date}[/] [dim]({playlist.current_file})[/]")
    if playlist.modified:
        console.print(f"🕒 [dim]modified {playlist.modified}[/]")

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right")
    table.add_column("Begin")
    table.add_column("In", justify="right")
    table.add_column("Out", justify="right")
    table.add_column("Source")

    for item in playlist.program:
        table.add_row(
            str(item.index),
            sec_to_time(item.begin),
            f"{item.seek:.2f}",
            f"{item.out:.2f}",
            item.source or "[dim]filler[/]",
        )

    console.print(table)
    console.print(f"⏱️ Total length: [green]{sec_to_time(playlist.length)}[/]\n")


@app.command(
    rich_help_panel="📋 Playlist"
)
def show(
    ctx: typer.Context,
    date: Annotated[Optional[str], typer.Option("--date", "-d", help="Broadcast date (YYYY-MM-DD)", show_default=False)] = None,
    path: Annotated[Optional[str], typer.Option("--playlist", "-p", help="Playlist file or URL, overrides the configured path", show_default=False)] = None,
    wait: Annotated[bool, typer.Option("--wait", "-w", help="Wait for the background validation to finish")] = False,
):
    """Reads the playlist of a broadcast day and prints its program"""

    playlist_manager = ctx.obj.get("playlist_manager")
    config = _get_config(ctx)

    try:
        playlist = playlist_manager.read_json(config, path=path, date=date)
    except PlaylistFormatError as e:
        console.print(f"🚫 [red]Malformed playlist:[/] {e}")
        raise typer.Exit(code=1)

    print_playlist(playlist)

    if wait and playlist_manager.last_validation is not None:
        playlist_manager.last_validation.join()


@app.command(
    rich_help_panel="📋 Playlist"
)
def validate(
    ctx: typer.Context,
    date: Annotated[Optional[str], typer.Option("--date", "-d", help="Broadcast date (YYYY-MM-DD)", show_default=False)] = None,
    path: Annotated[Optional[str], typer.Option("--playlist", "-p", help="Playlist file or URL, overrides the configured path", show_default=False)] = None,
):
    """Reads a playlist and validates it in the foreground"""

    playlist_manager = ctx.obj.get("playlist_manager")
    config = _get_config(ctx)
    start_sec = config.playlist.start_sec

    if date is None:
        date = get_date(False, start_sec, 0.0)

    source = playlist_manager.resolve_path(config.playlist.path, date, path)
    result = playlist_manager.load(source, date, start_sec)

    if result.fatal:
        console.print(f"🚫 [red]Malformed playlist:[/] {result.error}")
        raise typer.Exit(code=1)
    if result.degraded:
        console.print(f"⚠️ [yellow]Playlist not available, filler used:[/] {source}")

    playlist = playlist_manager.annotate(result.playlist, start_sec)
    validation = playlist_manager.validator.validate(playlist, threading.Event(), config)

    if validation.passed and not validation.warnings:
        console.print(f"✅ Playlist {playlist.date} is valid")
        return

    for key, messages in validation.errors.items():
        for message in messages:
            console.print(f"  ❗ [red]{key.upper()}:[/] {message}")
    for key, messages in validation.warnings.items():
        for message in messages:
            console.print(f"  ⚠️ [yellow]{key.upper()}:[/] {message}")

    if validation.failed:
        raise typer.Exit(code=1)


@app.callback()
def callback(
    ctx: typer.Context
):
    """Read and check daily playlists"""
