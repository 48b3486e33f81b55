"""
mediaflow.runtime.execute_once - Run an external program once per work item.

Package Structure:
    controller.py   - ExecuteOnceOperation (execute / skip / destroy)
    config.py       - StepConfiguration and the option catalog
    orchestrator.py - Submit the execution job and decode its result
    inspection.py   - Inspect produced tracks
    reconciler.py   - Attach the result to the work item
    factory.py      - Build an operation from runtime configuration

Usage:
    from mediaflow.runtime.execute_once import build_execute_once_operation
    from mediaflow.runtime.jobs import JobQueue

    with JobQueue() as queue:
        operation = build_execute_once_operation(queue, mode="stub")
        outcome = operation.execute(work_item, {"exec": "/bin/true"})
"""

from .config import CONFIG_OPTIONS, StepConfiguration
from .controller import OPERATION_ID, ExecuteOnceOperation
from .factory import build_execute_once_operation
from .inspection import maybe_inspect, requires_inspection
from .orchestrator import ExecutionResult, run_execution
from .reconciler import attach_artifact

__all__ = [
    "ExecuteOnceOperation",
    "OPERATION_ID",
    "StepConfiguration",
    "CONFIG_OPTIONS",
    "ExecutionResult",
    "run_execution",
    "maybe_inspect",
    "requires_inspection",
    "attach_artifact",
    "build_execute_once_operation",
]
