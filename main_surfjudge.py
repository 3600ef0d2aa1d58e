"""Mini README: Entry point CLI for SurfJudge.

This script exposes a Typer CLI with two commands: ``upload`` runs the
ingestion pipeline for a single local video and prints its metadata and
score, and ``serve`` starts the FastAPI interface with uvicorn. Settings come
from ``SURFJUDGE_`` environment variables unless overridden on the command
line.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
import uvicorn

from surfjudge.configuration import get_settings
from surfjudge.logging_utils import configure_root_logger
from surfjudge.media.assets import LibraryAsset, ProbedAsset
from surfjudge.media.formatting import describe
from surfjudge.pipeline import IngestionPipeline
from surfjudge.upload import UploadClient

cli = typer.Typer(help="Score surf videos with the SurfJudge service.")


@cli.command()
def upload(
    video: Path = typer.Argument(..., exists=True, dir_okay=False, help="Video file to upload."),
    created_at: Optional[datetime] = typer.Option(None, help="Capture time recorded by the library."),
    duration: Optional[float] = typer.Option(None, help="Clip length in seconds."),
    latitude: Optional[float] = typer.Option(None, help="Latitude where the clip was shot."),
    longitude: Optional[float] = typer.Option(None, help="Longitude where the clip was shot."),
    endpoint: Optional[str] = typer.Option(None, help="Override the scoring endpoint URL."),
) -> None:
    """Extract metadata, store and upload a single video."""

    settings = get_settings()
    configure_root_logger(settings.log_level)
    if (latitude is None) != (longitude is None):
        raise typer.BadParameter("--latitude and --longitude must be given together")

    asset = LibraryAsset(
        created_at=created_at,
        duration_seconds=duration,
        coordinates=(latitude, longitude) if latitude is not None else None,
        fallback=ProbedAsset(video),
    )
    pipeline = IngestionPipeline(
        settings=settings,
        client=UploadClient(endpoint=endpoint, settings=settings),
    )
    outcome = pipeline.run(asset, video)

    display = describe(outcome.metadata)
    typer.echo(f"File size: {display['file_size']}")
    typer.echo(f"Creation date: {display['created']}")
    typer.echo(f"Duration: {display['duration']}")
    typer.echo(f"Latlon: {display['latlon']}")

    if outcome.failure is not None:
        typer.echo(
            f"Upload failed ({outcome.failure.kind.value}): {outcome.failure.detail}", err=True
        )
        raise typer.Exit(code=1)
    typer.echo(outcome.result)
    typer.echo("Nice surfing!")


@cli.command()
def serve(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI application using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(settings.log_level)

    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting SurfJudge on {effective_host}:{effective_port}.\n"
        f"Post videos to http://{browser_host}:{effective_port}/videos"
    )
    uvicorn.run(
        "surfjudge.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


if __name__ == "__main__":
    cli()
