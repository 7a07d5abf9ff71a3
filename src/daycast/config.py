# config.py

import shutil
import logging
import tomli, tomli_w
from pathlib import Path
from dataclasses import dataclass
from importlib.resources import files
from platformdirs import user_config_path
from typing import Dict, Optional, Any

from daycast.models import ValidationResult
from daycast.utils import time_to_sec, is_remote

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class ConfigError(ValueError):
    """Raised when the configuration cannot be loaded or is incomplete"""


@dataclass
class PlaylistConfig:
    """Playlist section of the configuration"""
    path: str
    day_start: str = "00:00:00"
    length: str = "24:00:00"
    start_sec: Optional[float] = None
    length_sec: Optional[float] = None

    def __post_init__(self):
        if self.start_sec is None:
            self.start_sec = time_to_sec(self.day_start)
        if self.length_sec is None:
            self.length_sec = time_to_sec(self.length)


@dataclass
class PlayoutConfig:
    """Active configuration handed to the playlist reader and validator"""
    playlist: PlaylistConfig


class ConfigManager:
    """Manages the daycast configuration file"""

    def __init__(self, config_dir: Optional[Path] = None):
        self.logger = logging.getLogger("daycast.config")
        self.logger.debug("🔧 Initializing ConfigManager")

        # Get directories and paths
        if config_dir is None:
            config_dir = user_config_path(appname="daycast", appauthor=False, ensure_exists=True)
        self.config_dir = Path(config_dir)
        self.config_file_path = self.config_dir / "config.toml"
        self.data_dir = files("daycast.data")

        self.config = self.load_config()

    def load_config(self) -> Dict[str, Any]:
        """Loads the configuration file"""

        self.logger.debug("🔁 Loading configuration")

        # Create a default config file if it doesn't exist
        if not self.config_file_path.exists():
            self.logger.debug("⚠️ Config file not found, creating default")
            self._create_default_config()

        # Check if the config file is empty
        if self.config_file_path.stat().st_size == 0:
            self.logger.debug("⚠️ Config file is empty, creating default")
            self._create_default_config()

        try:
            with open(self.config_file_path, "rb") as f:
                config = tomli.load(f)
        except (OSError, tomli.TOMLDecodeError) as e:
            self.logger.error(f"💀 Error loading configuration: {str(e)}")
            raise ConfigError(f"Failed to load configuration: {e}")

        # Cache the config for later use
        self.config = config
        return config

    def get_playout_config(self) -> PlayoutConfig:
        """Builds the typed configuration used by the playlist reader"""

        playlist = self.config.get("playlist", {})
        if "path" not in playlist:
            self.logger.error("💀 Missing 'path' in [playlist] section")
            raise ConfigError("Missing required config field: playlist.path")

        try:
            playlist_config = PlaylistConfig(
                path=str(Path(playlist["path"]).expanduser()) if not is_remote(playlist["path"]) else playlist["path"],
                day_start=playlist.get("day_start", "00:00:00"),
                length=playlist.get("length", "24:00:00"),
            )
        except ValueError as e:
            self.logger.error(f"💀 Invalid [playlist] section: {e}")
            raise ConfigError(f"Invalid playlist configuration: {e}")

        return PlayoutConfig(playlist=playlist_config)

    def get_log_level(self) -> int:
        """Gets the configured log level, INFO when unset or unknown"""

        level = self.config.get("logging", {}).get("level", "INFO")
        return LOG_LEVELS.get(str(level).upper(), logging.INFO)

    def validate_config(self) -> ValidationResult:
        """Validates the current configuration and returns validation results"""
        return self._validate(self.config)

    def _validate(self, config: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult()

        playlist = config.get("playlist")
        if not playlist:
            result.add("config_playlist", "error", "Config is missing [playlist] section")
            return result

        path = playlist.get("path")
        if not path:
            result.add("config_playlist", "error", "Playlist section is missing required field 'path'")
        elif not is_remote(path) and not Path(path).expanduser().exists():
            result.add("config_playlist", "warning", f"Playlist path {path} does not exist")

        for key in ("day_start", "length"):
            if key in playlist:
                try:
                    time_to_sec(playlist[key])
                except ValueError:
                    result.add("config_time", "error", f"Invalid time for '{key}': {playlist[key]}")

        level = config.get("logging", {}).get("level", "INFO")
        if not isinstance(level, str):
            result.add("config_logging", "error", f"Log level must be a name such as \"INFO\", got {level!r}")
        elif level.upper() not in LOG_LEVELS:
            result.add("config_logging", "warning", f"Unknown log level: {level}")

        return result

    def set_playlist_path(self, path: str) -> bool:
        """Sets the playlist storage root (directory, file or URL) in the config"""

        self.logger.debug(f"🔁 Setting playlist path to {path}")

        self.load_config()
        self.config.setdefault("playlist", {})["path"] = str(path)

        return self._save_config(self.config)

    def _create_default_config(self) -> None:
        """Creates a default configuration file"""

        default_config_path = self.data_dir / "config.toml"

        self.logger.debug("🔁 Copying default config")

        self.config_file_path.parent.mkdir(parents=True, exist_ok=True)
        with default_config_path.open("rb") as src, open(self.config_file_path, "wb") as dst:
            shutil.copyfileobj(src, dst)

        self.logger.debug("✅ Default configuration created")

    def _save_config(self, config: dict) -> bool:
        """Saves the configuration to the config file"""

        self.logger.debug("🔁 Saving configuration")

        validation = self._validate(config)
        if validation.failed:
            self.logger.error("💀 Configuration validation failed")
            for key, result in validation.errors.items():
                self.logger.error(f"    ❗ {key.upper()}: {result}")
            return False

        for key, result in validation.warnings.items():
            self.logger.warning(f"    ⚠️ {key.upper()}: {result}")

        try:
            self.config_file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_file_path, "wb") as f:
                tomli_w.dump(config, f)
        except OSError as e:
            self.logger.error(f"💀 Error saving configuration: {str(e)}")
            return False

        self.logger.debug("✅ Configuration saved")
        return True
