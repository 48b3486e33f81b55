"""
factory.py - Wire an ExecuteOnceOperation from runtime configuration.

Explicit arguments win over configuration:
1. mode / workspace_root / rollback arguments
2. Environment variables (MEDIAFLOW_*)
3. mediaflow/config/runtime.yaml
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from mediaflow.config.runtime_config import (
    VALID_ENGINE_MODES,
    get_engine_mode,
    get_execute_timeout_seconds,
    get_job_timeout_seconds,
    get_workspace_root,
    is_rollback_on_relocation_failure,
)
from mediaflow.runtime.artifact_codec import JsonArtifactCodec
from mediaflow.runtime.engines import (
    BasicInspectionEngine,
    ExecutionEngine,
    LocalExecutionEngine,
    StubExecutionEngine,
)
from mediaflow.runtime.jobs import JobBarrier, JobQueue
from mediaflow.runtime.workspace import LocalWorkspace

from .controller import ExecuteOnceOperation

logger = logging.getLogger(__name__)


def build_execute_once_operation(
    queue: JobQueue,
    mode: Optional[str] = None,
    workspace_root: Optional[Path] = None,
    rollback_on_relocation_failure: Optional[bool] = None,
) -> ExecuteOnceOperation:
    """Create an ExecuteOnceOperation whose jobs run on ``queue``.

    Args:
        queue: Job queue shared by the execution and inspection engines.
            The caller owns it and shuts it down.
        mode: "stub" or "local". If None, reads from configuration.
        workspace_root: Workspace directory. If None, reads from configuration.
        rollback_on_relocation_failure: If None, reads from configuration.

    Raises:
        ValueError: If mode is not recognized.
    """
    resolved_mode = (mode or get_engine_mode()).lower()
    if resolved_mode not in VALID_ENGINE_MODES:
        raise ValueError(
            f"Unknown engine mode: {mode}. Valid options: {', '.join(VALID_ENGINE_MODES)}"
        )

    workspace = LocalWorkspace(workspace_root or get_workspace_root())
    codec = JsonArtifactCodec()

    engine: ExecutionEngine
    if resolved_mode == "local":
        engine = LocalExecutionEngine(queue, workspace, codec, timeout=get_execute_timeout_seconds())
    else:
        engine = StubExecutionEngine(queue, workspace, codec)

    if rollback_on_relocation_failure is None:
        rollback_on_relocation_failure = is_rollback_on_relocation_failure()

    logger.debug(
        "build_execute_once_operation: mode=%s, workspace=%s, rollback=%s",
        resolved_mode,
        workspace.root,
        rollback_on_relocation_failure,
    )

    return ExecuteOnceOperation(
        execution_engine=engine,
        inspection_engine=BasicInspectionEngine(queue, codec),
        relocator=workspace,
        barrier=JobBarrier(queue, timeout=get_job_timeout_seconds()),
        codec=codec,
        rollback_on_relocation_failure=rollback_on_relocation_failure,
    )
