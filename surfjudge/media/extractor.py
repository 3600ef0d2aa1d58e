"""Mini README: Metadata extraction for selected videos.

Structure:
    * VideoMetadata - immutable record of size, capture time, duration, location.
    * MetadataExtractor - reads each field independently from the file and asset.

Extraction never fails. A field that cannot be read is left as ``None`` and a
warning is logged; the remaining fields are still attempted.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple, TypeVar

from ..logging_utils import get_logger
from .assets import MediaAsset

LOGGER = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class VideoMetadata:
    """Typed metadata for one video; ``None`` marks an unknown field."""

    file_size_bytes: Optional[int] = None
    created_at: Optional[datetime] = None
    duration_seconds: Optional[float] = None
    location: Optional[Tuple[float, float]] = None

    def as_dict(self) -> Dict[str, Any]:
        """Export the record with JSON-friendly values."""

        return {
            "file_size_bytes": self.file_size_bytes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "duration_seconds": self.duration_seconds,
            "location": list(self.location) if self.location else None,
        }


class MetadataExtractor:
    """Collect metadata from the local file and the media-library asset."""

    def extract(self, asset: Optional[MediaAsset], file_path: Path) -> VideoMetadata:
        """Return a fresh metadata record; unreadable fields become ``None``."""

        LOGGER.info("Inspecting metadata for %s", file_path)
        file_size = self._read_field("file size", lambda: self._file_size(file_path))
        if asset is None:
            LOGGER.warning("No media-library asset for %s; only file size is available", file_path)
            metadata = VideoMetadata(file_size_bytes=file_size)
        else:
            metadata = VideoMetadata(
                file_size_bytes=file_size,
                created_at=self._read_field("creation date", lambda: self._creation_date(asset)),
                duration_seconds=self._read_field("duration", lambda: self._duration(asset)),
                location=self._read_field("location", lambda: self._location(asset)),
            )
        LOGGER.debug("Extracted metadata for %s: %s", file_path, metadata)
        return metadata

    @staticmethod
    def _read_field(label: str, reader: Callable[[], Optional[T]]) -> Optional[T]:
        try:
            value = reader()
        except Exception as exc:
            LOGGER.warning("Unable to read %s: %s", label, exc)
            return None
        if value is None:
            LOGGER.warning("%s not found", label.capitalize())
        return value

    @staticmethod
    def _file_size(file_path: Path) -> int:
        return Path(file_path).stat().st_size

    @staticmethod
    def _creation_date(asset: MediaAsset) -> Optional[datetime]:
        created = asset.creation_date()
        if created is not None and not isinstance(created, datetime):
            raise TypeError(f"creation date must be a datetime, got {type(created).__name__}")
        return created

    @staticmethod
    def _duration(asset: MediaAsset) -> Optional[float]:
        duration = asset.duration()
        return None if duration is None else float(duration)

    @staticmethod
    def _location(asset: MediaAsset) -> Optional[Tuple[float, float]]:
        location = asset.location()
        if location is None:
            return None
        latitude, longitude = location
        return (float(latitude), float(longitude))
