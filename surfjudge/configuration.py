"""Mini README: Centralised configuration models and helpers for SurfJudge.

Structure:
    * FailedUploadPolicy - what happens to the stored copy when an upload fails.
    * SurfJudgeSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to read ``SURFJUDGE_`` environment variables (or a
    ``.env`` file). Components accept an explicit settings object so tests can
    point the storage directory and endpoint somewhere harmless.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, validator
from pydantic_settings import BaseSettings

DEFAULT_UPLOAD_ENDPOINT = "https://surfjudge-api-71248b819ca4.herokuapp.com/upload_video"


class FailedUploadPolicy(str, Enum):
    """Handling of the persisted copy after an unsuccessful upload."""

    RETAIN = "retain"
    CLEANUP = "cleanup"


class SurfJudgeSettings(BaseSettings):
    """Runtime configuration for the SurfJudge ingestion pipeline."""

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    data_directory: Path = Field(
        Path("data"),
        description="Application-private root; persisted videos live in its 'videos' folder.",
    )
    upload_endpoint: str = Field(
        DEFAULT_UPLOAD_ENDPOINT,
        description="Scoring service URL receiving the multipart video upload.",
    )
    request_timeout_seconds: Optional[float] = Field(
        None,
        description="Upload timeout in seconds. Leave unset to use the transport default.",
        gt=0,
    )
    failed_upload_policy: FailedUploadPolicy = Field(
        FailedUploadPolicy.RETAIN,
        description="Keep ('retain') or delete ('cleanup') the stored copy when an upload fails.",
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the HTTP interface to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Default port the HTTP interface exposes.",
        ge=1,
        le=65535,
    )
    log_level: str = Field("INFO", description="Root logging level.")

    class Config:
        env_prefix = "SURFJUDGE_"
        env_file = ".env"
        case_sensitive = False

    @validator("data_directory", pre=True)
    def _expand_path(cls, value: Optional[str | Path]) -> Path:
        """Ensure configured paths expand user directories and exist."""

        path = Path(value).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def storage_directory(self) -> Path:
        """Directory holding persisted videos."""

        return self.data_directory / "videos"


@lru_cache()
def get_settings() -> SurfJudgeSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return SurfJudgeSettings()
