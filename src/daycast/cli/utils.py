"""
Utility functions for the CLI.
"""

import logging
import typer
from rich.console import Console
from platformdirs import user_data_path

from daycast.config import ConfigManager, ConfigError
from daycast.playlist import PlaylistManager


def get_app_state(verbose: bool, log_file: bool = False) -> dict:
    """
    Get the current state of the application
    """

    console = Console()

    logger = logging.getLogger("daycast")
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="(%(name)s) %(message)s",
    )

    if log_file:
        logs_dir = user_data_path(appname="daycast", appauthor=False) / "logs"
        logs_dir.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(logs_dir / "daycast.log")
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
        logger.addHandler(handler)

    # Initialize configuration
    try:
        config_manager = ConfigManager()
    except ConfigError as e:
        console.print(f"[red]Error loading configuration:[/] {str(e)}")
        raise typer.Exit(code=1)

    if not verbose:
        logger.setLevel(config_manager.get_log_level())

    return {
        "config_manager": config_manager,
        "playlist_manager": PlaylistManager(),
    }
