# validate.py
import logging
import threading
from pathlib import Path
from typing import Optional

from daycast.config import PlayoutConfig
from daycast.models import Playlist, ValidationResult
from daycast.utils import is_remote, sec_to_time

# Tolerance when comparing accumulated float offsets
TIME_TOLERANCE = 0.001


class PlaylistValidator:
    """Validator for playlist integrity and timing"""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def validate(
        self,
        playlist: Playlist,
        is_terminated: Optional[threading.Event],
        config: PlayoutConfig
    ) -> ValidationResult:
        """Main validation entry point, stops early once is_terminated is set"""
        result = ValidationResult()
        date = playlist.date

        begin = config.playlist.start_sec
        length = config.playlist.length_sec + begin

        self.logger.debug(f"Validate playlist from: {date}")

        if not playlist.program:
            self._report(result, "playlist_program", "error", f"Playlist from {date} has no clips")
            return result

        for position, item in enumerate(playlist.program):
            if is_terminated is not None and is_terminated.is_set():
                self.logger.debug(f"Validation of {date} cancelled at position {position}")
                return result

            if not item.source:
                self._report(result, "playlist_source", "warning",
                             f"Clip on position {position} {sec_to_time(begin)} has no source, filler will be played")
            elif not is_remote(item.source) and not Path(item.source).is_file():
                self._report(result, "playlist_source", "error",
                             f"Source on position {position} {sec_to_time(begin)} not exists: {item.source}")

            if item.out - item.seek <= 0:
                self._report(result, "playlist_duration", "error",
                             f"Clip on position {position} has no playable length (in: {item.seek}, out: {item.out})")
            elif item.duration and item.out > item.duration + TIME_TOLERANCE:
                self._report(result, "playlist_duration", "warning",
                             f"Clip on position {position} ends after its duration ({item.out} > {item.duration})")

            if item.index is not None and item.index != position:
                self._report(result, "playlist_timing", "error",
                             f"Clip on position {position} carries index {item.index}")
            if item.begin is not None and abs(item.begin - begin) > TIME_TOLERANCE:
                self._report(result, "playlist_timing", "error",
                             f"Clip on position {position} begins at {sec_to_time(item.begin)}, expected {sec_to_time(begin)}")

            begin += item.out - item.seek

        if length > begin + 1.0:
            self._report(result, "playlist_length", "error",
                         f"Playlist from {date} not long enough, {sec_to_time(length - begin)} needed!")

        if result.passed:
            self.logger.debug(f"Playlist from {date} is valid")

        return result

    def _report(self, result: ValidationResult, check: str, level: str, message: str) -> None:
        result.add(check, level, message)
        if level == "error":
            self.logger.error(message)
        else:
            self.logger.warning(message)
