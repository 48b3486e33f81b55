"""
stubs.py - Stub execution engine.

Zero-cost engine for testing and CI. No external program runs; a placeholder
file stands in for the program's output.
"""

from __future__ import annotations

import logging
import mimetypes
import uuid
from typing import Any, Dict, List, Optional

from mediaflow.runtime.artifact_codec import ArtifactCodec
from mediaflow.runtime.jobs import JobQueue
from mediaflow.runtime.types import Element, ElementType, Job, WorkItem, generate_element_id
from mediaflow.runtime.workspace import LocalWorkspace

from .base import ExecutionEngine

logger = logging.getLogger(__name__)


class StubExecutionEngine(ExecutionEngine):
    """Pretends to run the executable.

    Args:
        queue: Queue the jobs are dispatched on.
        workspace: Workspace providing scratch space for placeholder output.
        codec: Codec used to encode the result element.
        fail: If True, every job fails.

    Every call is recorded in ``submissions`` so callers can check what was
    submitted.
    """

    def __init__(
        self,
        queue: JobQueue,
        workspace: LocalWorkspace,
        codec: ArtifactCodec,
        fail: bool = False,
    ):
        self._queue = queue
        self._workspace = workspace
        self._codec = codec
        self._fail = fail
        self.submissions: List[Dict[str, Any]] = []

    @property
    def engine_id(self) -> str:
        return "stub-execute"

    def execute(
        self,
        executable: str,
        params: Optional[str],
        work_item: WorkItem,
        output_filename: Optional[str] = None,
        expected_type: Optional[ElementType] = None,
    ) -> Job:
        self.submissions.append(
            {
                "executable": executable,
                "params": params,
                "work_item_id": work_item.identifier,
                "output_filename": output_filename,
                "expected_type": expected_type,
            }
        )

        def work() -> str:
            if self._fail:
                raise RuntimeError(f"[STUB] {executable} failed")
            if not output_filename:
                return ""
            scratch = self._workspace.scratch_dir(uuid.uuid4().hex)
            output = scratch / output_filename
            output.write_text(f"[STUB] {executable} {params or ''}\n", encoding="utf-8")
            element = Element(
                element_type=expected_type or ElementType.OTHER,
                uri=output.resolve().as_uri(),
                identifier=generate_element_id(),
                mimetype=mimetypes.guess_type(output_filename)[0],
            )
            return self._codec.encode(element)

        return self._queue.dispatch("execute", work)
