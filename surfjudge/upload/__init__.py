"""Mini README: Outbound transfer of videos to the scoring service.

Currently exports the multipart ``UploadClient`` and the reply model it
decodes.
"""

from .client import ScoringResponse, UploadClient

__all__ = ["ScoringResponse", "UploadClient"]
