"""Mini README: Application-private storage for selected videos.

Structure:
    * StoredVideoHandle - location of a persisted copy plus its metadata.
    * LocalStore - copies footage into managed storage, last write wins.

Each source lands at ``storage_directory / <base name>``, so two videos with
the same name replace one another. The copy is written to a hidden temporary
file beside the destination and renamed over it, which means a reader sees
either the previous file or the complete new one, never a half-written copy.
Persist calls for the same destination are serialized.
"""

from __future__ import annotations

import os
import shutil
import tempfile
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

from ..configuration import get_settings
from ..logging_utils import get_logger
from ..media.extractor import VideoMetadata
from ..results import Failure, FailureKind

LOGGER = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class StoredVideoHandle:
    """A video persisted inside the storage directory."""

    path: Path
    metadata: VideoMetadata


class LocalStore:
    """Persist selected footage into the application-private directory."""

    def __init__(self, *, storage_directory: Optional[Path] = None) -> None:
        self.storage_directory = storage_directory or get_settings().storage_directory
        self._locks: Dict[Path, List] = {}
        self._locks_guard = threading.Lock()
        LOGGER.debug("Video storage directory set to %s", self.storage_directory)

    def destination_for(self, source_path: Path) -> Path:
        """Return where ``source_path`` will be stored."""

        return self.storage_directory / Path(source_path).name

    def persist(
        self,
        source_path: Path,
        metadata: VideoMetadata = VideoMetadata(),
    ) -> Union[StoredVideoHandle, Failure]:
        """Copy ``source_path`` into storage, replacing any previous copy."""

        source_path = Path(source_path)
        destination = self.destination_for(source_path)
        with self._lock_for(destination):
            temporary: Optional[Path] = None
            try:
                self.storage_directory.mkdir(parents=True, exist_ok=True)
                handle, name = tempfile.mkstemp(
                    prefix=f".{destination.name}.", suffix=".partial", dir=self.storage_directory
                )
                os.close(handle)
                temporary = Path(name)
                shutil.copyfile(source_path, temporary)
                if destination.exists():
                    LOGGER.debug("Replacing existing video at %s", destination)
                os.replace(temporary, destination)
            except OSError as exc:
                LOGGER.error("Failed to persist %s to %s: %s", source_path, destination, exc)
                if temporary is not None:
                    self._remove_quietly(temporary)
                return Failure(FailureKind.STORAGE_FAILURE, detail=str(exc))
        LOGGER.info("Video successfully stored at %s", destination)
        return StoredVideoHandle(path=destination, metadata=metadata)

    def discard(self, handle: StoredVideoHandle) -> bool:
        """Delete a stored copy; returns ``False`` if it could not be removed."""

        with self._lock_for(handle.path):
            try:
                handle.path.unlink()
            except FileNotFoundError:
                return False
            except OSError as exc:
                LOGGER.warning("Unable to delete stored video %s: %s", handle.path, exc)
                return False
        LOGGER.info("Deleted stored video %s", handle.path)
        return True

    @contextmanager
    def _lock_for(self, destination: Path) -> Iterator[None]:
        """Hold the lock for ``destination``; the entry is dropped once unused."""

        with self._locks_guard:
            entry = self._locks.setdefault(destination, [threading.Lock(), 0])
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._locks_guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._locks[destination]

    @staticmethod
    def _remove_quietly(path: Path) -> None:
        try:
            path.unlink()
        except OSError as exc:
            LOGGER.warning("Could not remove temporary file %s: %s", path, exc)
