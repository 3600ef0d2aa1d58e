"""Mini README: Media-library asset handles consumed by metadata extraction.

Structure:
    * MetadataUnavailable - raised by an accessor whose field cannot be read.
    * MediaAsset - abstract handle exposing creation date, duration and location.
    * LibraryAsset - values supplied by a media library, CLI options or form fields.
    * ProbedAsset - reads the duration from the video file using OpenCV.

Every accessor may return ``None`` (the library has no value) or raise
``MetadataUnavailable`` (the value exists but could not be read). The extractor
treats both as "unknown".
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple

try:  # pragma: no cover - optional dependency guard
    import cv2  # type: ignore
except Exception:  # pragma: no cover - handled gracefully
    cv2 = None  # type: ignore

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

Coordinates = Tuple[float, float]


class MetadataUnavailable(Exception):
    """The asset carries the field but it could not be read."""


class MediaAsset(ABC):
    """Opaque reference to a media item in the device library."""

    @abstractmethod
    def creation_date(self) -> Optional[datetime]:
        """Return the capture timestamp if the library records one."""

    @abstractmethod
    def duration(self) -> Optional[float]:
        """Return the clip length in seconds."""

    @abstractmethod
    def location(self) -> Optional[Coordinates]:
        """Return ``(latitude, longitude)`` if the clip is geotagged."""


@dataclass(frozen=True, slots=True)
class LibraryAsset(MediaAsset):
    """Asset whose fields were handed over by the caller.

    Fields left as ``None`` are looked up on ``fallback`` when one is given.
    """

    created_at: Optional[datetime] = None
    duration_seconds: Optional[float] = None
    coordinates: Optional[Coordinates] = None
    fallback: Optional[MediaAsset] = None

    def creation_date(self) -> Optional[datetime]:
        if self.created_at is None and self.fallback is not None:
            return self.fallback.creation_date()
        return self.created_at

    def duration(self) -> Optional[float]:
        if self.duration_seconds is None and self.fallback is not None:
            return self.fallback.duration()
        return self.duration_seconds

    def location(self) -> Optional[Coordinates]:
        if self.coordinates is None and self.fallback is not None:
            return self.fallback.location()
        return self.coordinates


class ProbedAsset(MediaAsset):
    """Asset backed only by the video file; duration comes from its frame count."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def creation_date(self) -> Optional[datetime]:
        return None

    def duration(self) -> Optional[float]:
        if cv2 is None:
            raise MetadataUnavailable("OpenCV not available; cannot probe duration")
        capture = cv2.VideoCapture(str(self.path))  # type: ignore[attr-defined]
        try:
            if not capture.isOpened():
                raise MetadataUnavailable(f"Unable to open video file: {self.path}")
            frame_rate = capture.get(cv2.CAP_PROP_FPS) or 0.0  # type: ignore[attr-defined]
            frame_count = capture.get(cv2.CAP_PROP_FRAME_COUNT) or 0.0  # type: ignore[attr-defined]
        finally:
            capture.release()
        if frame_rate <= 0:
            raise MetadataUnavailable(f"Video reports no frame rate: {self.path}")
        LOGGER.debug(
            "Probed %s - frame_rate: %s frame_count: %s", self.path, frame_rate, frame_count
        )
        return float(frame_count) / float(frame_rate)

    def location(self) -> Optional[Coordinates]:
        return None
