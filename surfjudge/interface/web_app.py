"""Mini README: FastAPI host for the SurfJudge upload flow.

Structure:
    * create_application - application factory wiring the pipeline routes.

The interface stands in for the picker screen: a client posts the chosen
video together with whatever metadata its media library exposes, and gets
back the rendered metadata and the scoring result.
"""

from __future__ import annotations

import tempfile
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from ..logging_utils import get_logger
from ..media.assets import LibraryAsset, ProbedAsset
from ..media.formatting import describe
from ..pipeline import IngestionPipeline
from ..results import FailureKind

LOGGER = get_logger(__name__)

CLOSING_REMARK = "Nice surfing!"

FAILURE_STATUS: Dict[FailureKind, int] = {
    FailureKind.BUSY: 409,
    FailureKind.STORAGE_FAILURE: 500,
    FailureKind.NETWORK_ERROR: 502,
    FailureKind.EMPTY_RESPONSE: 502,
    FailureKind.DECODE_ERROR: 502,
}

DEFAULT_FILENAME = "upload.mp4"


def _safe_filename(filename: Optional[str]) -> str:
    """Reduce a client-supplied name to a plain base name inside the workspace."""

    name = Path(filename or "").name
    if name in {"", ".", ".."}:
        return DEFAULT_FILENAME
    return name


def create_application(pipeline: Optional[IngestionPipeline] = None) -> FastAPI:
    """Create the FastAPI application with routes and dependencies."""

    app = FastAPI(title="SurfJudge", version="0.1.0")
    ingestion = pipeline or IngestionPipeline()

    @app.get("/health")
    async def health() -> JSONResponse:
        return JSONResponse({"status": "ok", "busy": ingestion.busy})

    @app.post("/videos")
    async def upload_video(
        video: UploadFile = File(...),
        created_at: Optional[datetime] = Form(None),
        duration_seconds: Optional[float] = Form(None),
        latitude: Optional[float] = Form(None),
        longitude: Optional[float] = Form(None),
    ) -> JSONResponse:
        """Run the ingestion pipeline for an uploaded video."""

        if (latitude is None) != (longitude is None):
            raise HTTPException(
                status_code=422, detail="latitude and longitude must be provided together"
            )
        data = await video.read()
        filename = _safe_filename(video.filename)
        LOGGER.info("Received video upload %s (%s bytes)", filename, len(data))

        with tempfile.TemporaryDirectory(prefix="surfjudge-") as workspace:
            temp_path = Path(workspace) / filename
            try:
                temp_path.write_bytes(data)
            except OSError as exc:
                LOGGER.error("Unable to stage upload %s: %s", filename, exc)
                raise HTTPException(
                    status_code=500,
                    detail={"error": FailureKind.STORAGE_FAILURE.value, "detail": str(exc)},
                ) from exc
            asset = LibraryAsset(
                created_at=created_at,
                duration_seconds=duration_seconds,
                coordinates=(latitude, longitude) if latitude is not None else None,
                fallback=ProbedAsset(temp_path),
            )
            outcome = await run_in_threadpool(ingestion.run, asset, temp_path)

        if outcome.failure is not None:
            failure = outcome.failure
            raise HTTPException(
                status_code=FAILURE_STATUS.get(failure.kind, 500),
                detail={"error": failure.kind.value, "detail": failure.detail},
            )
        return JSONResponse(
            {
                "result": outcome.result,
                "message": CLOSING_REMARK,
                "metadata": describe(outcome.metadata),
                "stored_path": str(outcome.handle.path) if outcome.handle else None,
            }
        )

    return app
