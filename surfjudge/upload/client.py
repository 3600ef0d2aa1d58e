"""Mini README: Multipart upload client for the surf scoring service.

Structure:
    * ScoringResponse - Pydantic model of the service reply ``{"result": str}``.
    * UploadClient - posts one video as ``multipart/form-data`` and decodes the reply.

The client sends a single ``file`` part typed ``video/mp4`` with a fresh random
boundary per request. It never retries and never raises for transport or
decode problems; every outcome is returned as ``Success`` or ``Failure``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Optional

import requests
from pydantic import BaseModel, Field, StrictStr, ValidationError

from ..configuration import SurfJudgeSettings, get_settings
from ..logging_utils import get_logger
from ..results import Failure, FailureKind, Success, UploadResult

if TYPE_CHECKING:
    from ..pipeline.ingestion import CancellationToken

LOGGER = get_logger(__name__)

VIDEO_CONTENT_TYPE = "video/mp4"
FILE_FIELD_NAME = "file"


class ScoringResponse(BaseModel):
    """Body returned by the scoring service."""

    result: StrictStr = Field(..., description="Human readable scoring summary.")

    class Config:
        extra = "forbid"


class UploadClient:
    """Send videos to the scoring endpoint over an injectable HTTP session."""

    def __init__(
        self,
        *,
        endpoint: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        settings: Optional[SurfJudgeSettings] = None,
    ) -> None:
        settings = settings or get_settings()
        self.endpoint = endpoint or settings.upload_endpoint
        self.timeout = timeout if timeout is not None else settings.request_timeout_seconds
        self._session = session or requests.Session()

    def build_request(self, file_path: Path, payload: bytes) -> requests.PreparedRequest:
        """Prepare the multipart POST carrying ``payload`` under the ``file`` field."""

        request = requests.Request(
            "POST",
            self.endpoint,
            files={FILE_FIELD_NAME: (Path(file_path).name, payload, VIDEO_CONTENT_TYPE)},
        )
        return request.prepare()

    def upload(
        self,
        file_path: Path,
        *,
        cancel_token: Optional["CancellationToken"] = None,
    ) -> UploadResult:
        """Upload the file and return the decoded scoring result."""

        if cancel_token is not None and cancel_token.cancelled:
            LOGGER.info("Upload of %s cancelled before sending", file_path)
            return Failure(FailureKind.CANCELLED, detail="cancelled before sending")

        try:
            payload = Path(file_path).read_bytes()
        except OSError as exc:
            LOGGER.error("Error reading video data from %s: %s", file_path, exc)
            return Failure(FailureKind.STORAGE_FAILURE, detail=str(exc))

        prepared = self.build_request(file_path, payload)
        LOGGER.info("Uploading %s (%s bytes) to %s", Path(file_path).name, len(payload), self.endpoint)
        try:
            response = self._session.send(prepared, timeout=self.timeout)
        except requests.RequestException as exc:
            LOGGER.error("Upload to %s failed: %s", self.endpoint, exc)
            return Failure(FailureKind.NETWORK_ERROR, detail=str(exc))

        if cancel_token is not None and cancel_token.cancelled:
            LOGGER.info("Upload of %s cancelled; discarding response", file_path)
            return Failure(
                FailureKind.CANCELLED,
                detail="cancelled while awaiting response",
                status_code=response.status_code,
            )

        body = response.content
        if not body:
            LOGGER.error("Scoring service returned an empty body (status %s)", response.status_code)
            return Failure(FailureKind.EMPTY_RESPONSE, status_code=response.status_code)

        LOGGER.debug("Raw response: %s", body.decode("utf-8", errors="replace"))
        return self.decode_result(body, status_code=response.status_code)

    @staticmethod
    def decode_result(body: bytes, *, status_code: Optional[int] = None) -> UploadResult:
        """Decode ``{"result": <string>}`` strictly; anything else is a decode failure."""

        try:
            data = json.loads(body)
        except ValueError as exc:
            LOGGER.error("Failed to decode response: %s", exc)
            return Failure(FailureKind.DECODE_ERROR, detail=str(exc), status_code=status_code)

        if not isinstance(data, dict):
            LOGGER.error("Failed to decode response: expected an object, got %s", type(data).__name__)
            return Failure(
                FailureKind.DECODE_ERROR,
                detail=f"expected a JSON object, got {type(data).__name__}",
                status_code=status_code,
            )
        try:
            parsed = ScoringResponse(**data)
        except ValidationError as exc:
            LOGGER.error("Failed to decode response: %s", exc)
            return Failure(FailureKind.DECODE_ERROR, detail=str(exc), status_code=status_code)
        return Success(parsed.result)
