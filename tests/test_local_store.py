"""Mini README: Tests for the application-private video store.

Checks last-write-wins replacement, failure handling without partial writes,
cleanup of stored copies and serialized concurrent writers.
"""

from __future__ import annotations

import threading
from pathlib import Path

from surfjudge.media import VideoMetadata
from surfjudge.results import Failure, FailureKind
from surfjudge.storage import LocalStore, StoredVideoHandle


def _write(path: Path, data: bytes) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path


def test_persist_copies_into_storage(tmp_path: Path, sample_video: Path) -> None:
    """Persisting copies the bytes and leaves the source in place."""

    store = LocalStore(storage_directory=tmp_path / "videos")
    metadata = VideoMetadata(file_size_bytes=sample_video.stat().st_size)

    handle = store.persist(sample_video, metadata)

    assert isinstance(handle, StoredVideoHandle)
    assert handle.path == tmp_path / "videos" / "wave.mp4"
    assert handle.path.read_bytes() == sample_video.read_bytes()
    assert handle.metadata is metadata
    assert sample_video.exists()


def test_persist_same_name_last_write_wins(tmp_path: Path) -> None:
    """Two sources sharing a base name leave one file holding the newest bytes."""

    store = LocalStore(storage_directory=tmp_path / "videos")
    first = _write(tmp_path / "morning" / "session.mp4", b"first session")
    second = _write(tmp_path / "evening" / "session.mp4", b"second, longer session")

    store.persist(first)
    handle = store.persist(second)

    assert isinstance(handle, StoredVideoHandle)
    assert [entry.name for entry in (tmp_path / "videos").iterdir()] == ["session.mp4"]
    assert handle.path.read_bytes() == b"second, longer session"


def test_persist_same_source_twice_is_idempotent(tmp_path: Path, sample_video: Path) -> None:
    """Persisting the same source twice leaves exactly one copy."""

    store = LocalStore(storage_directory=tmp_path / "videos")

    store.persist(sample_video)
    handle = store.persist(sample_video)

    assert isinstance(handle, StoredVideoHandle)
    assert list((tmp_path / "videos").iterdir()) == [handle.path]
    assert handle.path.read_bytes() == sample_video.read_bytes()


def test_persist_fails_when_destination_cannot_be_replaced(tmp_path: Path, sample_video: Path) -> None:
    """A directory at the destination yields a storage failure and no temp files."""

    storage = tmp_path / "videos"
    blocker = storage / sample_video.name
    blocker.mkdir(parents=True)
    (blocker / "keep.txt").write_text("occupied")

    result = LocalStore(storage_directory=storage).persist(sample_video)

    assert isinstance(result, Failure)
    assert result.kind is FailureKind.STORAGE_FAILURE
    assert blocker.is_dir()
    assert [entry.name for entry in storage.iterdir()] == [sample_video.name]


def test_persist_missing_source_keeps_previous_copy(tmp_path: Path) -> None:
    """A failed copy leaves the earlier stored file untouched."""

    store = LocalStore(storage_directory=tmp_path / "videos")
    original = _write(tmp_path / "a" / "clip.mp4", b"good copy")
    store.persist(original)
    original.unlink()

    result = store.persist(original)

    assert isinstance(result, Failure)
    assert result.kind is FailureKind.STORAGE_FAILURE
    assert (tmp_path / "videos" / "clip.mp4").read_bytes() == b"good copy"
    assert [entry.name for entry in (tmp_path / "videos").iterdir()] == ["clip.mp4"]


def test_persist_fails_when_storage_directory_is_a_file(tmp_path: Path, sample_video: Path) -> None:
    """An unusable storage directory is reported, not raised."""

    storage = _write(tmp_path / "videos", b"not a directory")

    result = LocalStore(storage_directory=storage).persist(sample_video)

    assert isinstance(result, Failure)
    assert result.kind is FailureKind.STORAGE_FAILURE
    assert storage.read_bytes() == b"not a directory"


def test_discard_removes_stored_copy(tmp_path: Path, sample_video: Path) -> None:
    """Discarding deletes the copy once and reports a second attempt."""

    store = LocalStore(storage_directory=tmp_path / "videos")
    handle = store.persist(sample_video)
    assert isinstance(handle, StoredVideoHandle)

    assert store.discard(handle) is True
    assert not handle.path.exists()
    assert store.discard(handle) is False


def test_concurrent_persists_leave_one_complete_file(tmp_path: Path) -> None:
    """Parallel writers to one destination leave a single complete file."""

    store = LocalStore(storage_directory=tmp_path / "videos")
    payloads = [bytes([index]) * 50_000 for index in range(8)]
    sources = [_write(tmp_path / f"src{index}" / "clip.mp4", data) for index, data in enumerate(payloads)]
    results = []

    def worker(source: Path) -> None:
        results.append(store.persist(source))

    threads = [threading.Thread(target=worker, args=(source,)) for source in sources]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=10)

    assert all(isinstance(result, StoredVideoHandle) for result in results)
    assert [entry.name for entry in (tmp_path / "videos").iterdir()] == ["clip.mp4"]
    assert (tmp_path / "videos" / "clip.mp4").read_bytes() in payloads


def test_destination_locks_are_released_after_use(tmp_path: Path) -> None:
    """The per-destination lock table does not grow with distinct filenames."""

    store = LocalStore(storage_directory=tmp_path / "videos")
    for index in range(50):
        handle = store.persist(_write(tmp_path / "src" / f"clip{index}.mp4", b"x"))
        assert isinstance(handle, StoredVideoHandle)
    store.discard(handle)

    assert store._locks == {}
