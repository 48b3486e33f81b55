"""
base.py - Abstract base classes for the services a step submits jobs to.

- ExecutionEngine: runs an external program against a work item
- InspectionEngine: probes a media file and describes it as an element

Engines return a Job immediately; callers wait on it with a JobBarrier.
Engines do NOT own:
- Waiting for the job (that's the barrier's job)
- Attaching results to the work item (that's the step's job)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from mediaflow.runtime.types import ElementType, Job, WorkItem


class ExecutionEngine(ABC):
    """Runs an executable once and reports the produced element."""

    @property
    @abstractmethod
    def engine_id(self) -> str:
        """Unique identifier for this engine (e.g., 'stub-execute')."""
        ...

    @abstractmethod
    def execute(
        self,
        executable: str,
        params: Optional[str],
        work_item: WorkItem,
        output_filename: Optional[str] = None,
        expected_type: Optional[ElementType] = None,
    ) -> Job:
        """Submit one execution job.

        Args:
            executable: Path of the program to run.
            params: Space separated argument string. The engine resolves its
                own input selection from the work item.
            work_item: The work item the program works on (read only).
            output_filename: Name of the file the program produces, if any.
            expected_type: Element type the result should have.

        Returns:
            The submitted job. On success its payload is the encoded result
            element, or empty when nothing was produced.
        """
        ...


class InspectionEngine(ABC):
    """Describes a media file as an element with technical metadata."""

    @property
    @abstractmethod
    def engine_id(self) -> str:
        ...

    @abstractmethod
    def inspect(self, uri: str) -> Job:
        """Submit one inspection job for the file at ``uri``.

        Returns:
            The submitted job. On success its payload is the encoded
            inspected element.
        """
        ...
