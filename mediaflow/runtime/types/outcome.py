"""Step outcome reported back to the pipeline controller."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from .elements import Element, WorkItem, element_to_dict


class StepAction(str, Enum):
    """What the pipeline controller should do after the step."""

    CONTINUE = "continue"
    SKIP = "skip"


@dataclass
class StepOutcome:
    """Result of running (or skipping) a workflow step.

    Attributes:
        action: CONTINUE after a run, SKIP when the step was skipped.
        work_item: The work item, mutated in place when an element was attached.
        elapsed_ms: Elapsed time of the primary execution job (0 on skip).
        element: The element attached by this step, if any.
        job_id: ID of the primary execution job, if one ran.
    """

    action: StepAction
    work_item: WorkItem
    elapsed_ms: int = 0
    element: Optional[Element] = None
    job_id: Optional[str] = None

    @classmethod
    def proceed(
        cls,
        work_item: WorkItem,
        elapsed_ms: int,
        element: Optional[Element] = None,
        job_id: Optional[str] = None,
    ) -> "StepOutcome":
        return cls(StepAction.CONTINUE, work_item, elapsed_ms, element, job_id)

    @classmethod
    def skipped(cls, work_item: WorkItem) -> "StepOutcome":
        return cls(StepAction.SKIP, work_item, 0)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON reporting."""
        return {
            "action": self.action.value,
            "work_item_id": self.work_item.identifier,
            "elapsed_ms": self.elapsed_ms,
            "job_id": self.job_id,
            "element": element_to_dict(self.element) if self.element else None,
        }
