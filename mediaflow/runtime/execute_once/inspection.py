"""
inspection.py - Inspect produced tracks before they are attached.

Only tracks are inspected. The inspected element replaces the executed one
entirely; any failure here aborts the step before attachment starts.
"""

from __future__ import annotations

import logging

from mediaflow.runtime.artifact_codec import ArtifactCodec
from mediaflow.runtime.engines.base import InspectionEngine
from mediaflow.runtime.errors import InspectionFailed, ResultParseFailed, StepOperationError
from mediaflow.runtime.jobs import JobBarrier
from mediaflow.runtime.types import Element, ElementType

logger = logging.getLogger(__name__)


def requires_inspection(artifact: Element) -> bool:
    return artifact.element_type == ElementType.TRACK


def maybe_inspect(
    engine: InspectionEngine,
    barrier: JobBarrier,
    codec: ArtifactCodec,
    artifact: Element,
) -> Element:
    """Return ``artifact`` unchanged, or its inspected replacement for tracks.

    Raises:
        InspectionFailed: If the inspection job cannot be submitted, fails,
            or its result cannot be decoded.
    """
    if not requires_inspection(artifact):
        return artifact

    try:
        job = engine.inspect(artifact.uri)
    except StepOperationError:
        raise
    except Exception as e:
        raise InspectionFailed(
            f"Could not submit inspection of {artifact.uri} to {engine.engine_id}: {e}",
            uri=artifact.uri,
        ) from e

    logger.debug("Submitted inspection job %s for %s", job.job_id, artifact.uri)

    if not barrier.wait_for_jobs(job).is_success():
        detail = f": {job.error}" if job.error else ""
        raise InspectionFailed(f"Media inspection of {artifact.uri} failed{detail}", uri=artifact.uri)
    if not job.has_payload():
        raise InspectionFailed(
            f"Media inspection of {artifact.uri} returned no element", uri=artifact.uri
        )

    try:
        return codec.decode(job.payload)
    except ResultParseFailed as e:
        raise InspectionFailed(
            f"Media inspection of {artifact.uri} returned an unreadable element: {e.message}",
            uri=artifact.uri,
        ) from e
