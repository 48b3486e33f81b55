"""
engines/ - Services a workflow step submits jobs to.

Interfaces:
- ExecutionEngine: runs an external program against a work item
- InspectionEngine: describes a media file as an element

Engines:
- StubExecutionEngine: placeholder output, no external program (CI safe)
- LocalExecutionEngine: runs the executable with subprocess
- BasicInspectionEngine: mimetype, size and checksum of a local file

Usage:
    >>> from mediaflow.runtime.engines import StubExecutionEngine
    >>> engine = StubExecutionEngine(queue, workspace, codec)
    >>> job = engine.execute("/bin/encode", "-f mp4", work_item, "out.mp4")
"""

from .base import ExecutionEngine, InspectionEngine
from .inspection import BasicInspectionEngine
from .local import LocalExecutionEngine, resolve_params
from .stubs import StubExecutionEngine

__all__ = [
    # Interfaces
    "ExecutionEngine",
    "InspectionEngine",
    # Engines
    "StubExecutionEngine",
    "LocalExecutionEngine",
    "BasicInspectionEngine",
    "resolve_params",
]
