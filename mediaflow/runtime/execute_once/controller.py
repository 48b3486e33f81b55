"""
controller.py - The execute-once workflow operation.

Runs an executable once with elements of the work item as input, inspects
the result if it is a track, and attaches it to the work item.

Usage:
    operation = ExecuteOnceOperation(engine, inspector, workspace, barrier)
    outcome = operation.execute(work_item, {
        "exec": "/bin/encode",
        "params": "-f mp4",
        "output-filename": "encoded.mp4",
        "expected-type": "track",
        "target-flavor": "presenter/delivery",
        "target-tags": "archive,-draft",
    })
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from mediaflow.runtime.artifact_codec import ArtifactCodec, JsonArtifactCodec
from mediaflow.runtime.engines.base import ExecutionEngine, InspectionEngine
from mediaflow.runtime.jobs import JobBarrier
from mediaflow.runtime.types import Element, StepOutcome, WorkItem
from mediaflow.runtime.workspace import Relocator

from .config import CONFIG_OPTIONS, StepConfiguration
from .inspection import maybe_inspect
from .orchestrator import run_execution
from .reconciler import attach_artifact

logger = logging.getLogger(__name__)

OPERATION_ID = "execute-once"
OPERATION_DESCRIPTION = "Executes a command line program once against a work item in a worker"


class ExecuteOnceOperation:
    """Workflow operation handler for a single external execution.

    Collaborators are passed in; the operation keeps no state between calls.

    Args:
        execution_engine: Runs the executable.
        inspection_engine: Inspects produced tracks.
        relocator: Moves the produced file into the work item's namespace.
        barrier: Blocks until submitted jobs finish.
        codec: Decodes job payloads. Defaults to the JSON codec.
        rollback_on_relocation_failure: Remove the element from the work
            item again when its file cannot be moved.
    """

    def __init__(
        self,
        execution_engine: ExecutionEngine,
        inspection_engine: InspectionEngine,
        relocator: Relocator,
        barrier: JobBarrier,
        codec: Optional[ArtifactCodec] = None,
        rollback_on_relocation_failure: bool = True,
    ):
        self._execution_engine = execution_engine
        self._inspection_engine = inspection_engine
        self._relocator = relocator
        self._barrier = barrier
        self._codec = codec or JsonArtifactCodec()
        self._rollback_on_relocation_failure = rollback_on_relocation_failure

    @property
    def operation_id(self) -> str:
        return OPERATION_ID

    @property
    def description(self) -> str:
        return OPERATION_DESCRIPTION

    @staticmethod
    def configuration_options() -> Dict[str, str]:
        """Option keys understood by this operation, with descriptions."""
        return dict(CONFIG_OPTIONS)

    def execute(self, work_item: WorkItem, options: Mapping[str, Any]) -> StepOutcome:
        """Run the step.

        Raises:
            StepOperationError: Any failure; see mediaflow.runtime.errors for
                the individual kinds.
        """
        config = StepConfiguration.from_mapping(options)
        logger.debug("Running %s operation on work item %s", OPERATION_ID, work_item.identifier)

        execution = run_execution(
            self._execution_engine, self._barrier, self._codec, config, work_item
        )

        element: Optional[Element] = None
        if execution.artifact is not None:
            artifact = maybe_inspect(
                self._inspection_engine, self._barrier, self._codec, execution.artifact
            )
            element = attach_artifact(
                work_item,
                artifact,
                self._relocator,
                output_filename=config.output_filename,
                target_flavor=config.target_flavor,
                tag_patch=config.target_tags,
                rollback_on_failure=self._rollback_on_relocation_failure,
            )

        logger.debug("%s operation on work item %s completed", OPERATION_ID, work_item.identifier)
        return StepOutcome.proceed(
            work_item,
            execution.job.elapsed_ms,
            element=element,
            job_id=execution.job.job_id,
        )

    def skip(self, work_item: WorkItem, options: Optional[Mapping[str, Any]] = None) -> StepOutcome:
        """Skip the step without submitting anything."""
        return StepOutcome.skipped(work_item)

    def destroy(self, work_item: WorkItem) -> None:
        # Nothing to clean up, the executed program owns its temporary files.
        return None
