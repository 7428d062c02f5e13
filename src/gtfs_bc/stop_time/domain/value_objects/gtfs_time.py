"""GTFS clock-time helpers.

Feed times are durations after service-day midnight, so hours can go past
24 (e.g. "25:30:00" is 1:30 the following morning).
"""

from typing import Optional


def time_to_seconds(time_str: Optional[str]) -> Optional[int]:
    """Convert HH:MM:SS to seconds. Handles times > 24:00:00.

    Returns None for blank values (non-timepoint stop times).
    """
    if time_str is None:
        return None
    time_str = time_str.strip()
    if not time_str:
        return None

    parts = time_str.split(":")
    if len(parts) not in (2, 3):
        raise ValueError(f"Invalid GTFS time: {time_str!r}")

    hours = int(parts[0])
    minutes = int(parts[1])
    seconds = int(parts[2]) if len(parts) > 2 else 0
    return hours * 3600 + minutes * 60 + seconds


def seconds_to_time(seconds: int) -> str:
    """Convert seconds since midnight to HH:MM:SS, keeping hours past 24."""
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    secs = seconds % 60
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
