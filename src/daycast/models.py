# src/daycast/models.py
from enum import Enum
from dataclasses import dataclass, field
from typing import Optional, Dict, List, Any
from collections import defaultdict

# Length of the filler clip, in seconds
DUMMY_LEN = 60.0


class PlaylistFormatError(ValueError):
    """Raised when playlist content does not have the expected shape"""


# Playlist-related data structures
@dataclass
class Media:
    """A single clip of a playlist"""
    out: float
    seek: float = 0.0  # in-point, "in" on the wire
    duration: float = 0.0
    source: str = ""
    title: Optional[str] = None
    category: Optional[str] = None
    audio: Optional[str] = None
    custom_filter: Optional[str] = None

    # Values filled in while annotating, never read from the playlist file
    begin: Optional[float] = None
    index: Optional[int] = None
    last_ad: Optional[bool] = None
    next_ad: Optional[bool] = None
    process: Optional[bool] = None
    filter: Optional[List[str]] = None

    @classmethod
    def new(cls, index: int, source: str) -> "Media":
        """Create an empty clip at the given position"""
        return cls(out=0.0, source=source, index=index)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Media":
        """Build a clip from its JSON representation"""
        if not isinstance(data, dict):
            raise PlaylistFormatError(f"Program entry must be an object, got {type(data).__name__}")

        try:
            out = float(data["out"])
            seek = float(data.get("in", data.get("seek", 0.0)))
            duration = float(data.get("duration", out))
        except KeyError as e:
            raise PlaylistFormatError(f"Missing required clip field: {e}")
        except (TypeError, ValueError) as e:
            raise PlaylistFormatError(f"Invalid clip timing value: {e}")

        return cls(
            out=out,
            seek=seek,
            duration=duration,
            source=str(data.get("source") or ""),
            title=data.get("title"),
            category=data.get("category"),
            audio=data.get("audio"),
            custom_filter=data.get("custom_filter"),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "in": self.seek,
            "out": self.out,
            "duration": self.duration,
            "source": self.source,
        }
        for key in ("title", "category", "audio", "custom_filter"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data

    def __str__(self) -> str:
        """Human-readable representation of the clip"""
        name = self.title or self.source or "<filler>"
        return f"{name} ({self.out - self.seek:.2f}s)"


@dataclass
class Playlist:
    """Program of one broadcast day"""
    date: str
    program: List[Media] = field(default_factory=list)

    # Not part of the playlist file
    start_sec: Optional[float] = None
    current_file: Optional[str] = None
    modified: Optional[str] = None

    @classmethod
    def filler(cls, date: str, start_sec: float) -> "Playlist":
        """Playlist with a single filler clip, used when no real playlist is available"""
        media = Media.new(0, "")
        media.begin = start_sec
        media.duration = DUMMY_LEN
        media.out = DUMMY_LEN

        return cls(
            date=date,
            program=[media],
            start_sec=start_sec,
            modified="",
        )

    @classmethod
    def from_dict(cls, data: Any) -> "Playlist":
        """Build a playlist from its JSON representation"""
        if not isinstance(data, dict):
            raise PlaylistFormatError("Playlist must be a JSON object")

        try:
            date = data["date"]
            program = data["program"]
        except KeyError as e:
            raise PlaylistFormatError(f"Missing required playlist field: {e}")

        if not isinstance(date, str):
            raise PlaylistFormatError("Playlist 'date' must be a string")
        if not isinstance(program, list):
            raise PlaylistFormatError("Playlist 'program' must be a list")

        return cls(date=date, program=[Media.from_dict(item) for item in program])

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "program": [item.to_dict() for item in self.program],
        }

    @property
    def length(self) -> float:
        """Total played length of the program in seconds"""
        return sum(item.out - item.seek for item in self.program)

    def __str__(self) -> str:
        """Human-readable representation of the playlist"""
        return f"{self.date}: {len(self.program)} clips"


class LoadStatus(Enum):
    """Outcome of reading a playlist source"""
    LOADED = "loaded"        # Source read and parsed
    DEGRADED = "degraded"    # Source missing or unreachable, filler used
    FATAL = "fatal"          # Source content is malformed


@dataclass
class LoadResult:
    """Result of a playlist load, separating degraded from fatal outcomes"""
    status: LoadStatus
    playlist: Optional[Playlist] = None
    error: Optional[Exception] = None

    @property
    def degraded(self) -> bool:
        return self.status == LoadStatus.DEGRADED

    @property
    def fatal(self) -> bool:
        return self.status == LoadStatus.FATAL

    def unwrap(self) -> Playlist:
        """Return the playlist, raising the stored error for fatal results"""
        if self.status == LoadStatus.FATAL:
            raise self.error
        return self.playlist


class ValidationResult:
    """Findings of a playlist or config check, keyed by check name"""

    def __init__(self):
        self.messages = []

    def add(self, check: str, level: str, message: str):
        """
        Record a finding.
        :param check: Name of the check (e.g., "playlist_source").
        :param level: "error" or "warning".
        :param message: Text shown to the user.
        """

        self.messages.append({
            "check": check,
            "level": level,
            "message": message
        })

    def _by_level(self, level: str) -> dict:
        found = defaultdict(list)
        for msg in self.messages:
            if msg["level"] == level:
                found[msg["check"]].append(msg["message"])
        return found

    @property
    def errors(self) -> dict:
        return self._by_level("error")

    @property
    def warnings(self) -> dict:
        return self._by_level("warning")

    @property
    def passed(self) -> bool:
        """A check passes as long as it found no errors"""
        return len(self.errors) == 0

    @property
    def failed(self) -> bool:
        return not self.passed
