"""Mini README: Shared fixtures for the SurfJudge test-suite.

Structure:
    * FakeSession - stands in for ``requests.Session`` and records each send.
    * settings - settings pointing storage at a temporary directory.
    * sample_video - small binary file used as the selected video.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, List, Optional, Tuple

import pytest
import requests

from surfjudge.configuration import SurfJudgeSettings

TEST_ENDPOINT = "http://scoring.test/upload_video"


class FakeSession:
    """Minimal ``requests.Session`` double returning a canned response."""

    def __init__(
        self,
        *,
        body: bytes = b'{"result": "3 maneuvers performed"}',
        status_code: int = 200,
        error: Optional[Exception] = None,
        before_send: Optional[Callable[[requests.PreparedRequest], None]] = None,
    ) -> None:
        self.body = body
        self.status_code = status_code
        self.error = error
        self.before_send = before_send
        self.sent: List[Tuple[requests.PreparedRequest, dict[str, Any]]] = []

    def send(self, request: requests.PreparedRequest, **kwargs: Any) -> requests.Response:
        self.sent.append((request, kwargs))
        if self.before_send is not None:
            self.before_send(request)
        if self.error is not None:
            raise self.error
        response = requests.Response()
        response.status_code = self.status_code
        response._content = self.body
        response.url = request.url
        return response


@pytest.fixture
def settings(tmp_path: Path) -> SurfJudgeSettings:
    return SurfJudgeSettings(
        data_directory=tmp_path / "data",
        upload_endpoint=TEST_ENDPOINT,
    )


@pytest.fixture
def sample_video(tmp_path: Path) -> Path:
    source_dir = tmp_path / "picker"
    source_dir.mkdir()
    path = source_dir / "wave.mp4"
    path.write_bytes(bytes(range(256)) * 64)
    return path
