import logging
import threading
import pytest

from daycast.config import PlayoutConfig, PlaylistConfig
from daycast.models import Media, Playlist
from daycast.playlist import PlaylistManager
from daycast.validate import PlaylistValidator

# Fixture for PlaylistValidator.
@pytest.fixture
def validator():
    return PlaylistValidator()

# Fixture to simulate a media directory containing clips.
@pytest.fixture
def media_dir(tmp_path):
    media = tmp_path / "media"
    media.mkdir()
    (media / "intro.mp4").touch()
    (media / "show.mp4").touch()
    return media

def make_config(length="00:01:20", day_start="00:00:00"):
    return PlayoutConfig(playlist=PlaylistConfig(path="/nonexistent", day_start=day_start, length=length))

def make_playlist(*items, start_sec=0.0):
    playlist = Playlist(date="2024-01-01", program=list(items))
    return PlaylistManager().annotate(playlist, start_sec)

class TestPlaylistValidator:
    def test_valid_playlist(self, validator, media_dir):
        """Test that a playlist with existing sources and enough length passes."""
        playlist = make_playlist(
            Media(out=30.0, duration=30.0, source=str(media_dir / "intro.mp4")),
            Media(out=55.0, seek=5.0, duration=60.0, source=str(media_dir / "show.mp4")),
        )
        result = validator.validate(playlist, threading.Event(), make_config())
        assert result.passed
        assert not result.warnings

    def test_missing_source(self, validator, media_dir, caplog):
        """Test that a missing local source is reported."""
        playlist = make_playlist(
            Media(out=40.0, duration=40.0, source=str(media_dir / "intro.mp4")),
            Media(out=40.0, duration=40.0, source=str(media_dir / "gone.mp4")),
        )
        with caplog.at_level(logging.ERROR, logger="daycast.validate"):
            result = validator.validate(playlist, threading.Event(), make_config())
        assert not result.passed
        assert "playlist_source" in result.errors
        assert "gone.mp4" in result.errors["playlist_source"][0]
        assert "gone.mp4" in caplog.text

    def test_remote_source_is_not_checked_on_disk(self, validator):
        playlist = make_playlist(Media(out=80.0, duration=80.0, source="https://cdn.example.com/show.mp4"))
        result = validator.validate(playlist, threading.Event(), make_config())
        assert "playlist_source" not in result.errors

    def test_filler_clip_warns(self, validator):
        """Test that a clip without source only gives a warning."""
        playlist = Playlist.filler("2024-01-01", 0.0)
        PlaylistManager().annotate(playlist, 0.0)
        result = validator.validate(playlist, threading.Event(), make_config(length="00:01:00"))
        assert result.passed
        assert "playlist_source" in result.warnings

    def test_null_source_warns(self, validator):
        """Test that a null source in the JSON is treated like a missing one."""
        playlist = make_playlist(Media.from_dict({"out": 80.0, "source": None}))
        result = validator.validate(playlist, threading.Event(), make_config())
        assert "playlist_source" in result.warnings
        assert "playlist_source" not in result.errors

    def test_non_positive_duration(self, validator, media_dir):
        playlist = make_playlist(
            Media(out=10.0, seek=10.0, duration=10.0, source=str(media_dir / "intro.mp4")),
            Media(out=80.0, duration=80.0, source=str(media_dir / "show.mp4")),
        )
        result = validator.validate(playlist, threading.Event(), make_config())
        assert "playlist_duration" in result.errors

    def test_playlist_too_short(self, validator, media_dir):
        """Test that a playlist shorter than the day length is reported."""
        playlist = make_playlist(Media(out=30.0, duration=30.0, source=str(media_dir / "intro.mp4")))
        result = validator.validate(playlist, threading.Event(), make_config(length="24:00:00"))
        assert "playlist_length" in result.errors
        assert "23:59:30.000" in result.errors["playlist_length"][0]

    def test_timing_mismatch(self, validator, media_dir):
        """Test that begin values not matching the day start are reported."""
        playlist = make_playlist(
            Media(out=40.0, duration=40.0, source=str(media_dir / "intro.mp4")),
            Media(out=40.0, duration=40.0, source=str(media_dir / "show.mp4")),
            start_sec=100.0,
        )
        result = validator.validate(playlist, threading.Event(), make_config())
        assert "playlist_timing" in result.errors

    def test_stops_when_terminated(self, validator):
        """Test that validation stops once the termination event is set."""
        playlist = make_playlist(Media(out=80.0, duration=80.0, source="/missing/a.mp4"))
        is_terminated = threading.Event()
        is_terminated.set()
        result = validator.validate(playlist, is_terminated, make_config())
        assert result.messages == []

    def test_empty_program(self, validator):
        playlist = Playlist(date="2024-01-01", program=[])
        result = validator.validate(playlist, threading.Event(), make_config())
        assert "playlist_program" in result.errors
