# playlist.py
import copy
import json
import logging
import threading
from pathlib import Path
from typing import Optional, Union

import requests

from daycast.config import PlayoutConfig
from daycast.models import Playlist, LoadResult, LoadStatus, PlaylistFormatError
from daycast.utils import get_date, is_remote, modified_time
from daycast.validate import PlaylistValidator


class PlaylistManager:
    """Reads the playlist of a broadcast day and prepares it for playout"""

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self.validator = PlaylistValidator()
        self.last_validation: Optional[threading.Thread] = None

    def read_json(
        self,
        config: PlayoutConfig,
        path: Optional[str] = None,
        is_terminated: Optional[threading.Event] = None,
        seek: bool = False,
        next_start: float = 0.0,
        date: Optional[str] = None
    ) -> Playlist:
        """Read the playlist for the current broadcast day

        Missing or unreachable sources give a filler playlist, malformed
        content raises PlaylistFormatError. A copy of the result is validated
        in the background.
        """
        start_sec = config.playlist.start_sec
        if date is None:
            date = get_date(seek, start_sec, next_start)

        source = self.resolve_path(config.playlist.path, date, path)
        playlist = self.load(source, date, start_sec).unwrap()

        self.annotate(playlist, start_sec)

        if is_terminated is None:
            is_terminated = threading.Event()
        self.dispatch_validation(playlist, is_terminated, config)

        return playlist

    def resolve_path(self, root: str, date: str, path: Optional[str] = None) -> str:
        """Get the playlist source for a date, an explicit path always wins"""
        if path:
            return path

        playlist_path = Path(root)
        if playlist_path.is_dir():
            year, month = date.split("-")[:2]
            playlist_path = playlist_path / year / month / f"{date}.json"

        return str(playlist_path)

    def load(self, source: str, date: str, start_sec: float) -> LoadResult:
        """Load and parse a playlist from a local file or a remote location"""
        if is_remote(source):
            result = self._load_remote(source, date, start_sec)
        else:
            result = self._load_file(source, date, start_sec)

        if result.playlist is not None:
            result.playlist.current_file = source
            result.playlist.start_sec = start_sec

        return result

    def _load_remote(self, source: str, date: str, start_sec: float) -> LoadResult:
        try:
            response = requests.get(source)
        except requests.RequestException as e:
            self.logger.error(f"Remote playlist {source}: {e}")
            return LoadResult(LoadStatus.DEGRADED, Playlist.filler(date, start_sec), e)

        if not 200 <= response.status_code < 300:
            self.logger.error(f"Get remote playlist {source} not success! ({response.status_code}): {response.text}")
            return LoadResult(
                LoadStatus.DEGRADED,
                Playlist.filler(date, start_sec),
                requests.HTTPError(f"{response.status_code} for {source}", response=response),
            )

        self.logger.info(f"Read remote playlist: {source}")

        try:
            playlist = self._parse(response.text)
        except PlaylistFormatError as e:
            self.logger.error(f"Could not read remote playlist {source}: {e}")
            return LoadResult(LoadStatus.FATAL, error=e)

        last_modified = response.headers.get("Last-Modified")
        if last_modified is not None:
            playlist.modified = last_modified

        return LoadResult(LoadStatus.LOADED, playlist)

    def _load_file(self, source: str, date: str, start_sec: float) -> LoadResult:
        if not Path(source).is_file():
            self.logger.error(f"Playlist {source} not exists!")
            return LoadResult(
                LoadStatus.DEGRADED,
                Playlist.filler(date, start_sec),
                FileNotFoundError(source),
            )

        self.logger.info(f"Read playlist: {source}")

        try:
            with open(source, "rb") as f:
                content = f.read()
        except OSError as e:
            self.logger.error(f"Could not open playlist file {source}: {e}")
            return LoadResult(LoadStatus.FATAL, error=PlaylistFormatError(f"Could not open playlist file: {e}"))

        try:
            playlist = self._parse(content)
        except PlaylistFormatError as e:
            self.logger.error(f"Could not read playlist file {source}: {e}")
            return LoadResult(LoadStatus.FATAL, error=e)

        modified = modified_time(source)
        if modified is not None:
            playlist.modified = modified

        return LoadResult(LoadStatus.LOADED, playlist)

    def _parse(self, content: Union[str, bytes]) -> Playlist:
        """Parse playlist JSON into a Playlist object"""
        try:
            if isinstance(content, bytes):
                content = content.decode("utf-8")
            data = json.loads(content)
        except UnicodeDecodeError as e:
            raise PlaylistFormatError(f"Playlist is not valid UTF-8: {e}")
        except ValueError as e:
            raise PlaylistFormatError(f"Invalid playlist JSON: {e}")

        return Playlist.from_dict(data)

    def annotate(self, playlist: Playlist, start_sec: float) -> Playlist:
        """Add begin, index and scheduling flags to every clip"""
        begin = start_sec

        for i, item in enumerate(playlist.program):
            item.begin = begin
            item.index = i
            item.last_ad = False
            item.next_ad = False
            item.process = True
            item.filter = []

            begin += item.out - item.seek

        return playlist

    def dispatch_validation(
        self,
        playlist: Playlist,
        is_terminated: threading.Event,
        config: PlayoutConfig
    ) -> threading.Thread:
        """Validate a copy of the playlist in a background thread without waiting for it"""
        snapshot = copy.deepcopy(playlist)
        config_copy = copy.deepcopy(config)

        thread = threading.Thread(
            target=self.validator.validate,
            args=(snapshot, is_terminated, config_copy),
            name=f"validate-{playlist.date}",
            daemon=True,
        )
        thread.start()
        self.last_validation = thread

        return thread
