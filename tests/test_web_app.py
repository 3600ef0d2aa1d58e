"""Mini README: Tests for the FastAPI upload interface."""

from __future__ import annotations

from pathlib import Path

import pytest
import requests
from fastapi.testclient import TestClient

from surfjudge.configuration import SurfJudgeSettings
from surfjudge.interface import create_application
from surfjudge.interface.web_app import FAILURE_STATUS
from surfjudge.pipeline import IngestionPipeline
from surfjudge.results import FailureKind
from surfjudge.upload import UploadClient

from .conftest import FakeSession


def _client(settings: SurfJudgeSettings, session: FakeSession) -> TestClient:
    pipeline = IngestionPipeline(
        settings=settings, client=UploadClient(session=session, settings=settings)
    )
    return TestClient(create_application(pipeline))


def test_health_reports_idle_pipeline(settings: SurfJudgeSettings) -> None:
    """The health route reports an idle pipeline."""

    response = _client(settings, FakeSession()).get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "busy": False}


def test_upload_video_returns_result_and_metadata(settings: SurfJudgeSettings) -> None:
    """Posting a video returns the score and rendered metadata."""

    session = FakeSession()
    client = _client(settings, session)

    response = client.post(
        "/videos",
        files={"video": ("barrel.mp4", b"\x00\x01surf-bytes", "video/mp4")},
        data={
            "created_at": "2024-11-08T14:30:00",
            "duration_seconds": "42.5",
            "latitude": "34.0195",
            "longitude": "-118.4912",
        },
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["result"] == "3 maneuvers performed"
    assert payload["message"] == "Nice surfing!"
    assert payload["metadata"] == {
        "file_size": "0.00 MB",
        "created": "Nov 8, 2024 at 2:30 PM",
        "duration": "42.50 seconds",
        "latlon": "34.0195, -118.4912",
    }
    assert payload["stored_path"] == str(settings.storage_directory / "barrel.mp4")
    assert (settings.storage_directory / "barrel.mp4").read_bytes() == b"\x00\x01surf-bytes"
    assert len(session.sent) == 1


def test_upload_failure_maps_to_bad_gateway(settings: SurfJudgeSettings) -> None:
    """Upload failures surface as 502 with the failure kind."""

    client = _client(settings, FakeSession(error=requests.ConnectionError("refused")))

    response = client.post("/videos", files={"video": ("wave.mp4", b"data", "video/mp4")})

    assert response.status_code == 502
    assert response.json()["detail"]["error"] == "network_error"


def test_partial_coordinates_are_rejected(settings: SurfJudgeSettings) -> None:
    """A latitude without a longitude is rejected before upload."""

    session = FakeSession()

    response = _client(settings, session).post(
        "/videos",
        files={"video": ("wave.mp4", b"data", "video/mp4")},
        data={"latitude": "34.0195"},
    )

    assert response.status_code == 422
    assert session.sent == []


@pytest.mark.parametrize("filename", ["..", "."])
def test_dot_filenames_fall_back_to_default_name(settings: SurfJudgeSettings, filename: str) -> None:
    """Client names that resolve to a directory are stored under a default name."""

    session = FakeSession()

    response = _client(settings, session).post(
        "/videos",
        files={"video": (filename, b"data", "video/mp4")},
        data={"duration_seconds": "1"},
    )

    assert response.status_code == 200
    assert response.json()["stored_path"] == str(settings.storage_directory / "upload.mp4")
    assert (settings.storage_directory / "upload.mp4").read_bytes() == b"data"


def test_storage_failure_maps_to_server_error(tmp_path: Path) -> None:
    """An unusable storage directory is reported as a tagged 500."""

    data_directory = tmp_path / "data"
    data_directory.mkdir()
    (data_directory / "videos").write_bytes(b"blocking file")
    settings = SurfJudgeSettings(data_directory=data_directory, upload_endpoint="http://scoring.test/")
    session = FakeSession()

    response = _client(settings, session).post(
        "/videos", files={"video": ("wave.mp4", b"data", "video/mp4")}
    )

    assert response.status_code == 500
    assert response.json()["detail"]["error"] == "storage_failure"
    assert session.sent == []


def test_status_map_covers_only_reachable_failures() -> None:
    """The route maps every failure it can produce and nothing it cannot."""

    assert set(FAILURE_STATUS) == set(FailureKind) - {FailureKind.CANCELLED}
