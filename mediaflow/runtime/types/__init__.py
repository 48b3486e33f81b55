"""
types - Core data types for the mediaflow runtime.

Usage:
    from mediaflow.runtime.types import (
        ElementType, Flavor, Element, WorkItem,
        Job, JobStatus,
        StepAction, StepOutcome,
        element_to_dict, element_from_dict,
        work_item_to_dict, work_item_from_dict,
    )
"""

from ._ids import (
    ElementId,
    JobId,
    WorkItemId,
    generate_element_id,
    generate_job_id,
)
from .elements import (
    DuplicateElementError,
    Element,
    ElementType,
    Flavor,
    InvalidFlavor,
    UnknownElementType,
    WorkItem,
    element_from_dict,
    element_to_dict,
    work_item_from_dict,
    work_item_to_dict,
)
from .jobs import Job, JobStatus
from .outcome import StepAction, StepOutcome

__all__ = [
    # IDs
    "ElementId",
    "JobId",
    "WorkItemId",
    "generate_element_id",
    "generate_job_id",
    # Elements
    "ElementType",
    "Flavor",
    "Element",
    "WorkItem",
    "UnknownElementType",
    "InvalidFlavor",
    "DuplicateElementError",
    "element_to_dict",
    "element_from_dict",
    "work_item_to_dict",
    "work_item_from_dict",
    # Jobs
    "Job",
    "JobStatus",
    # Outcome
    "StepAction",
    "StepOutcome",
]
