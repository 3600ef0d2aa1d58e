"""Mini README: Media-library handles and metadata helpers for SurfJudge.

``assets`` models the handles a media library hands over, ``extractor`` turns
them into typed ``VideoMetadata`` and ``formatting`` renders that record for
display.
"""

from .assets import LibraryAsset, MediaAsset, MetadataUnavailable, ProbedAsset
from .extractor import MetadataExtractor, VideoMetadata
from .formatting import describe

__all__ = [
    "LibraryAsset",
    "MediaAsset",
    "MetadataExtractor",
    "MetadataUnavailable",
    "ProbedAsset",
    "VideoMetadata",
    "describe",
]
