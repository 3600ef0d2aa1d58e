"""Mini README: Pipeline orchestration for SurfJudge.

Exports the ``IngestionPipeline`` that strings extraction, storage and upload
together, along with its result and cancellation types.
"""

from .ingestion import CancellationToken, IngestionPipeline, PipelineResult

__all__ = ["CancellationToken", "IngestionPipeline", "PipelineResult"]
