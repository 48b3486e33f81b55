"""
local.py - Local subprocess execution engine.

Runs the configured executable on this machine. Placeholders in the
parameter string are resolved against the work item before the program runs:

    #{id}                    the work item identifier
    #{out}                   path of the output file (requires output-filename)
    #{flavor(type/subtype)}  local path of the first element with that flavor

Example params: ``-i #{flavor(presenter/source)} -f mp4 #{out}``
"""

from __future__ import annotations

import logging
import mimetypes
import re
import shlex
import subprocess
import uuid
from pathlib import Path
from typing import List, Optional

from mediaflow.runtime.artifact_codec import ArtifactCodec
from mediaflow.runtime.jobs import JobQueue
from mediaflow.runtime.types import (
    Element,
    ElementType,
    Flavor,
    Job,
    WorkItem,
    generate_element_id,
)
from mediaflow.runtime.workspace import LocalWorkspace, uri_to_path

from .base import ExecutionEngine

logger = logging.getLogger(__name__)

OUTPUT_PLACEHOLDER = "#{out}"
ID_PLACEHOLDER = "#{id}"
FLAVOR_PLACEHOLDER = re.compile(r"#\{flavor\(([^)]*)\)\}")

# Max chars of stderr carried into the job error
_STDERR_TAIL = 500


def resolve_params(
    params: Optional[str],
    elements: List[Element],
    work_item_id: str,
    output_path: Optional[Path],
) -> List[str]:
    """Split ``params`` and substitute placeholders.

    Raises:
        ValueError: If a placeholder cannot be resolved.
    """

    def _element_path(match: "re.Match[str]") -> str:
        flavor = Flavor.parse(match.group(1))
        for element in elements:
            if element.flavor == flavor:
                return str(uri_to_path(element.uri))
        raise ValueError(f"No element with flavor {flavor} in work item {work_item_id}")

    args: List[str] = []
    for token in shlex.split(params or ""):
        if OUTPUT_PLACEHOLDER in token:
            if output_path is None:
                raise ValueError(f"{OUTPUT_PLACEHOLDER} used without an output filename")
            token = token.replace(OUTPUT_PLACEHOLDER, str(output_path))
        token = token.replace(ID_PLACEHOLDER, work_item_id)
        args.append(FLAVOR_PLACEHOLDER.sub(_element_path, token))
    return args


class LocalExecutionEngine(ExecutionEngine):
    """Runs executables with subprocess.

    Args:
        queue: Queue the jobs are dispatched on.
        workspace: Workspace providing scratch space for the program output.
        codec: Codec used to encode the result element.
        timeout: Seconds before the program is killed. None for no limit.
    """

    def __init__(
        self,
        queue: JobQueue,
        workspace: LocalWorkspace,
        codec: ArtifactCodec,
        timeout: Optional[int] = None,
    ):
        self._queue = queue
        self._workspace = workspace
        self._codec = codec
        self._timeout = timeout

    @property
    def engine_id(self) -> str:
        return "local-execute"

    def execute(
        self,
        executable: str,
        params: Optional[str],
        work_item: WorkItem,
        output_filename: Optional[str] = None,
        expected_type: Optional[ElementType] = None,
    ) -> Job:
        # Snapshot the inputs; the work item is not read from the worker thread.
        elements = list(work_item.elements)
        work_item_id = work_item.identifier

        def work() -> str:
            output_path: Optional[Path] = None
            if output_filename:
                output_path = self._workspace.scratch_dir(uuid.uuid4().hex) / output_filename

            args = [executable] + resolve_params(params, elements, work_item_id, output_path)
            logger.debug("Running %s", " ".join(shlex.quote(a) for a in args))
            completed = subprocess.run(
                args,
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
            if completed.returncode != 0:
                stderr = (completed.stderr or "").strip()[-_STDERR_TAIL:]
                raise RuntimeError(
                    f"{executable} exited with status {completed.returncode}: {stderr}"
                )

            if output_path is None:
                return ""
            if not output_path.is_file():
                raise RuntimeError(f"{executable} did not create {output_filename}")

            element = Element(
                element_type=expected_type or ElementType.OTHER,
                uri=output_path.resolve().as_uri(),
                identifier=generate_element_id(),
                mimetype=mimetypes.guess_type(output_filename)[0],
            )
            return self._codec.encode(element)

        return self._queue.dispatch("execute", work)
