"""Mini README: Display strings for video metadata.

Renders ``VideoMetadata`` the way the upload screen shows it. Kept apart from
the record itself so extraction stays typed.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, Optional, Tuple

from .extractor import VideoMetadata

UNKNOWN_SIZE = "Unknown size"
UNKNOWN_DATE = "Unknown date"
UNKNOWN_DURATION = "Unknown duration"
UNKNOWN_LOCATION = "Unknown lat/long"

BYTES_PER_MEGABYTE = 1_000_000


def format_file_size(size_bytes: Optional[int]) -> str:
    if size_bytes is None:
        return UNKNOWN_SIZE
    return f"{size_bytes / BYTES_PER_MEGABYTE:.2f} MB"


def format_created_at(created_at: Optional[datetime]) -> str:
    """Medium date with short time, e.g. ``Nov 8, 2024 at 2:30 PM``."""

    if created_at is None:
        return UNKNOWN_DATE
    hour = created_at.hour % 12 or 12
    return (
        f"{created_at.strftime('%b')} {created_at.day}, {created_at.year} "
        f"at {hour}:{created_at.minute:02d} {created_at.strftime('%p')}"
    )


def format_duration(duration_seconds: Optional[float]) -> str:
    if duration_seconds is None:
        return UNKNOWN_DURATION
    return f"{duration_seconds:.2f} seconds"


def format_location(location: Optional[Tuple[float, float]]) -> str:
    if location is None:
        return UNKNOWN_LOCATION
    latitude, longitude = location
    return f"{float(latitude)!r}, {float(longitude)!r}"


def describe(metadata: VideoMetadata) -> Dict[str, str]:
    """Return every field rendered for display."""

    return {
        "file_size": format_file_size(metadata.file_size_bytes),
        "created": format_created_at(metadata.created_at),
        "duration": format_duration(metadata.duration_seconds),
        "latlon": format_location(metadata.location),
    }
