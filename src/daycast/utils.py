# utils.py
import re
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional, Union

REMOTE_REGEX = re.compile(r"^(https?|rtmps?|rts?p|udp|tcp|srt)://.*", re.IGNORECASE)

DAY_SECONDS = 86400.0


def time_in_seconds(now: Optional[datetime] = None) -> float:
    """Seconds elapsed since local midnight"""
    now = now or datetime.now()
    return now.hour * 3600 + now.minute * 60 + now.second + now.microsecond / 1_000_000


def get_date(seek: bool, start: float, next_start: float, now: Optional[datetime] = None) -> str:
    """Get the broadcast date of the playlist to read

    When seeking into a day whose start lies after the current time of day,
    the running broadcast day began yesterday. When the day starts at midnight
    and the next clip already crosses it, tomorrow's playlist is wanted.
    """
    now = now or datetime.now()

    if seek and start > time_in_seconds(now):
        return (now - timedelta(days=1)).strftime("%Y-%m-%d")

    if start == 0.0 and next_start >= DAY_SECONDS:
        return (now + timedelta(days=1)).strftime("%Y-%m-%d")

    return now.strftime("%Y-%m-%d")


def is_remote(path: str) -> bool:
    """Check whether a source is a network location rather than a local path"""
    return bool(REMOTE_REGEX.match(str(path or "")))


def modified_time(path: Union[str, Path]) -> Optional[str]:
    """Get the local modification time of a file, if available"""
    try:
        mtime = Path(path).stat().st_mtime
    except OSError:
        return None

    return datetime.fromtimestamp(mtime).strftime("%Y-%m-%d %H:%M:%S")


def time_to_sec(time_str: Optional[str], now: Optional[datetime] = None) -> float:
    """Convert 'HH:MM:SS[.fff]' into seconds, 'now' or empty meaning the current time"""
    if not time_str or time_str.strip().lower() == "now":
        return time_in_seconds(now)

    parts = time_str.strip().split(":")
    if len(parts) != 3:
        raise ValueError(f"Invalid time format: {time_str}")

    hours, minutes, seconds = parts
    return int(hours) * 3600 + int(minutes) * 60 + float(seconds)


def sec_to_time(sec: float) -> str:
    """Convert seconds into 'HH:MM:SS.fff'"""
    millis = int(round(sec * 1000))
    hours, millis = divmod(millis, 3_600_000)
    minutes, millis = divmod(millis, 60_000)
    seconds, millis = divmod(millis, 1000)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}.{millis:03d}"
