"""Mini README: Orchestrates metadata extraction, storage and upload.

Structure:
    * CancellationToken - thread-safe flag honoured at the network step.
    * PipelineResult - outcome of one run plus the metadata and stored copy.
    * IngestionPipeline - runs extract -> persist -> upload for one selection.

Only one run may be in flight per pipeline; a selection made while another run
is still going is rejected with ``FailureKind.BUSY``. ``submit`` runs the same
sequence on a background worker and hands back a future that resolves once.
"""

from __future__ import annotations

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..configuration import FailedUploadPolicy, SurfJudgeSettings, get_settings
from ..logging_utils import get_logger
from ..media.assets import MediaAsset
from ..media.extractor import MetadataExtractor, VideoMetadata
from ..results import Failure, FailureKind, Success, UploadResult
from ..storage.local_store import LocalStore, StoredVideoHandle
from ..upload.client import UploadClient

LOGGER = get_logger(__name__)


class CancellationToken:
    """Flag a caller sets to abandon an in-flight upload."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


@dataclass(frozen=True, slots=True)
class PipelineResult:
    """What a single run produced."""

    outcome: UploadResult
    metadata: VideoMetadata
    handle: Optional[StoredVideoHandle] = None

    @property
    def ok(self) -> bool:
        return isinstance(self.outcome, Success)

    @property
    def result(self) -> Optional[str]:
        return self.outcome.value if isinstance(self.outcome, Success) else None

    @property
    def failure(self) -> Optional[Failure]:
        return self.outcome if isinstance(self.outcome, Failure) else None


class IngestionPipeline:
    """High-level orchestrator for extraction → storage → upload."""

    def __init__(
        self,
        *,
        settings: Optional[SurfJudgeSettings] = None,
        extractor: Optional[MetadataExtractor] = None,
        store: Optional[LocalStore] = None,
        client: Optional[UploadClient] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._extractor = extractor or MetadataExtractor()
        self._store = store or LocalStore(storage_directory=self._settings.storage_directory)
        self._client = client or UploadClient(settings=self._settings)
        self._in_flight = threading.Lock()
        self._executor: Optional[ThreadPoolExecutor] = None

    @property
    def busy(self) -> bool:
        """Whether a run is currently in progress."""

        return self._in_flight.locked()

    def run(
        self,
        asset: Optional[MediaAsset],
        source_path: Path,
        *,
        cancel_token: Optional[CancellationToken] = None,
    ) -> PipelineResult:
        """Process one selected video synchronously."""

        if not self._in_flight.acquire(blocking=False):
            return self._rejected(source_path)
        try:
            return self._process(asset, Path(source_path), cancel_token)
        finally:
            self._in_flight.release()

    def submit(
        self,
        asset: Optional[MediaAsset],
        source_path: Path,
        *,
        cancel_token: Optional[CancellationToken] = None,
    ) -> "Future[PipelineResult]":
        """Process one selected video on the background worker."""

        if not self._in_flight.acquire(blocking=False):
            future: "Future[PipelineResult]" = Future()
            future.set_result(self._rejected(source_path))
            return future
        try:
            return self._get_executor().submit(
                self._process_and_release, asset, Path(source_path), cancel_token
            )
        except RuntimeError:
            self._in_flight.release()
            raise

    def shutdown(self) -> None:
        """Stop the background worker after pending runs complete."""

        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def _process_and_release(
        self,
        asset: Optional[MediaAsset],
        source_path: Path,
        cancel_token: Optional[CancellationToken],
    ) -> PipelineResult:
        try:
            return self._process(asset, source_path, cancel_token)
        finally:
            self._in_flight.release()

    def _process(
        self,
        asset: Optional[MediaAsset],
        source_path: Path,
        cancel_token: Optional[CancellationToken],
    ) -> PipelineResult:
        LOGGER.info("Starting ingestion for %s", source_path)
        metadata = self._extractor.extract(asset, source_path)

        stored = self._store.persist(source_path, metadata)
        if isinstance(stored, Failure):
            LOGGER.warning("Skipping upload for %s: %s", source_path, stored.kind.value)
            return PipelineResult(outcome=stored, metadata=metadata)

        outcome = self._client.upload(stored.path, cancel_token=cancel_token)
        if isinstance(outcome, Failure):
            LOGGER.warning("Upload of %s failed: %s %s", stored.path, outcome.kind.value, outcome.detail)
            if self._settings.failed_upload_policy is FailedUploadPolicy.CLEANUP:
                self._store.discard(stored)
        else:
            LOGGER.info("Scoring result for %s: %s", stored.path.name, outcome.value)
        return PipelineResult(outcome=outcome, metadata=metadata, handle=stored)

    def _get_executor(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="surfjudge-ingest")
        return self._executor

    @staticmethod
    def _rejected(source_path: Path) -> PipelineResult:
        LOGGER.warning("Rejecting %s: another upload is in progress", source_path)
        return PipelineResult(
            outcome=Failure(FailureKind.BUSY, detail="another upload is in progress"),
            metadata=VideoMetadata(),
        )
