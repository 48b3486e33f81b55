"""
orchestrator.py - Submit the execution job and wait for it.

Exactly one execution job runs per step. A failed job, or a payload that
cannot be decoded, aborts the step before the work item is touched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from mediaflow.runtime.artifact_codec import ArtifactCodec
from mediaflow.runtime.engines.base import ExecutionEngine
from mediaflow.runtime.errors import ExecutionFailed, StepOperationError
from mediaflow.runtime.jobs import JobBarrier
from mediaflow.runtime.types import Element, Job, WorkItem

from .config import StepConfiguration

logger = logging.getLogger(__name__)


@dataclass
class ExecutionResult:
    """Finished execution job and the element it produced, if any."""

    job: Job
    artifact: Optional[Element] = None

    @property
    def produced_artifact(self) -> bool:
        return self.artifact is not None


def run_execution(
    engine: ExecutionEngine,
    barrier: JobBarrier,
    codec: ArtifactCodec,
    config: StepConfiguration,
    work_item: WorkItem,
) -> ExecutionResult:
    """Run the configured executable once and decode its result.

    Returns:
        ExecutionResult whose ``artifact`` is None when the job succeeded
        without producing anything.

    Raises:
        ExecutionFailed: If the job could not be submitted or did not succeed.
        ResultParseFailed: If the payload is not a valid element description.
    """
    try:
        job = engine.execute(
            config.exec_path,
            config.params,
            work_item,
            config.output_filename,
            config.expected_type,
        )
    except StepOperationError:
        raise
    except Exception as e:
        raise ExecutionFailed(f"Could not submit execution job to {engine.engine_id}: {e}") from e

    logger.debug(
        "Submitted %s job %s for work item %s", engine.engine_id, job.job_id, work_item.identifier
    )

    if not barrier.wait_for_jobs(job).is_success():
        detail = f": {job.error}" if job.error else ""
        raise ExecutionFailed(
            f"Execute operation failed (job {job.job_id} {job.status.value}){detail}",
            job_id=job.job_id,
        )

    if not job.has_payload():
        if config.output_filename:
            logger.warning(
                "Job %s succeeded without a result although output '%s' was configured",
                job.job_id,
                config.output_filename,
            )
        return ExecutionResult(job=job)

    return ExecutionResult(job=job, artifact=codec.decode(job.payload))
