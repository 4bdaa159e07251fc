"""
Time helpers shared by the loader and the query layer.

GTFS times are HH:MM:SS measured from the start of the service day, so hours
may go past 24 for trips running after midnight. They are compared as elapsed
seconds, never as wall-clock times.
"""
from typing import Optional


def parse_gtfs_time(time_str: Optional[str]) -> Optional[int]:
    """
    Convert a GTFS H:MM:SS time to seconds since the start of the service day.

    Returns None for blank or malformed values.
    """
    if not time_str:
        return None

    parts = time_str.strip().split(':')
    if len(parts) != 3:
        return None

    try:
        hours, minutes, seconds = map(int, parts)
    except ValueError:
        return None

    if hours < 0 or not 0 <= minutes < 60 or not 0 <= seconds < 60:
        return None
    return hours * 3600 + minutes * 60 + seconds


def normalize_gtfs_time(time_str: str) -> tuple[str, bool]:
    """
    Normalize GTFS time and determine if it's a next-day trip.

    Args:
        time_str: Time string in HH:MM:SS format (may be >= 24:00:00)

    Returns:
        Tuple of (normalized_time_str, is_next_day)
        - normalized_time_str: Time adjusted to 00:00:00-23:59:59 range
        - is_next_day: True if the original time was >= 24:00:00
    """
    seconds = parse_gtfs_time(time_str)
    if seconds is None:
        return time_str, False

    day_seconds = 24 * 3600
    return seconds_to_time(seconds % day_seconds), seconds >= day_seconds


def seconds_to_time(seconds: int) -> str:
    """Convert seconds since midnight to HH:MM:SS format."""
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    secs = seconds % 60
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
