"""Mini README: Core package initializer for SurfJudge.

SurfJudge takes a surf video picked from a device library, records its basic
metadata, keeps a private copy and sends it to the scoring service. The
heavier modules (HTTP client, web interface) are imported from their own
subpackages so this initializer stays cheap.
"""

from .logging_utils import get_logger
from .results import Failure, FailureKind, Success

__all__ = ["Failure", "FailureKind", "Success", "get_logger"]
