"""Mini README: Tagged outcomes shared by the storage, upload and pipeline stages.

Structure:
    * FailureKind - enumeration of terminal failure categories.
    * Success - wraps the scoring service's result string.
    * Failure - carries the failure kind plus diagnostic detail.

Stages return these values instead of raising so callers can render a generic
failure state without guessing which exceptions might escape.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class FailureKind(str, Enum):
    """Categories of failure surfaced to callers."""

    STORAGE_FAILURE = "storage_failure"
    NETWORK_ERROR = "network_error"
    EMPTY_RESPONSE = "empty_response"
    DECODE_ERROR = "decode_error"
    CANCELLED = "cancelled"
    BUSY = "busy"


@dataclass(frozen=True, slots=True)
class Success:
    """Successful upload holding the decoded result string."""

    value: str


@dataclass(frozen=True, slots=True)
class Failure:
    """Terminal failure of a pipeline stage.

    ``status_code`` is populated when the scoring service answered, so a decode
    failure still records that the video was transmitted.
    """

    kind: FailureKind
    detail: str = ""
    status_code: Optional[int] = None


UploadResult = Union[Success, Failure]
