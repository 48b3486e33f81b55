# mediaflow/runtime package
# Workflow step runtime: element types, jobs, engines and the execute-once operation.
#
# Core components:
#   - types: Work item, element and job dataclasses
#   - jobs: In-process job queue and barrier
#   - engines: Execution and inspection engines
#   - workspace: Element storage relocation
#   - execute_once: The execute-once workflow operation
#
# Usage:
#     from mediaflow.runtime import ExecuteOnceOperation, WorkItem
#     outcome = operation.execute(work_item, options)

from .errors import (
    AttachFailed,
    ConfigurationInvalid,
    ExecutionFailed,
    InspectionFailed,
    RelocationFailed,
    ResultParseFailed,
    StepOperationError,
)
from .execute_once import ExecuteOnceOperation, build_execute_once_operation
from .types import (
    Element,
    ElementType,
    Flavor,
    StepAction,
    StepOutcome,
    WorkItem,
)

__all__ = [
    # Types
    "Element",
    "ElementType",
    "Flavor",
    "WorkItem",
    "StepAction",
    "StepOutcome",
    # Errors
    "StepOperationError",
    "ConfigurationInvalid",
    "ExecutionFailed",
    "ResultParseFailed",
    "InspectionFailed",
    "RelocationFailed",
    "AttachFailed",
    # Operation
    "ExecuteOnceOperation",
    "build_execute_once_operation",
]
