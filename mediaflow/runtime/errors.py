"""Step failure types.

Every failure of a workflow step surfaces as a StepOperationError. The
subclasses name the stage that failed so the pipeline controller can report
it, but all of them mean the same thing to the controller: the step failed.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class StepOperationError(Exception):
    """Uniform step failure."""

    kind = "step_failed"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for JSON serialization."""
        result: Dict[str, Any] = {"kind": self.kind, "message": self.message}
        if self.__cause__ is not None:
            result["cause"] = f"{type(self.__cause__).__name__}: {self.__cause__}"
        return result


class ConfigurationInvalid(StepOperationError):
    """A step option is missing or cannot be parsed. Raised before any job runs."""

    kind = "configuration_invalid"

    def __init__(self, message: str, option: Optional[str] = None) -> None:
        self.option = option
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        if self.option:
            result["option"] = self.option
        return result


class ExecutionFailed(StepOperationError):
    """The primary execution job reported failure."""

    kind = "execution_failed"

    def __init__(self, message: str, job_id: Optional[str] = None) -> None:
        self.job_id = job_id
        super().__init__(message)


class ResultParseFailed(StepOperationError):
    """A job payload could not be decoded into an element."""

    kind = "result_parse_failed"


class InspectionFailed(StepOperationError):
    """The inspection job failed or its payload could not be decoded."""

    kind = "inspection_failed"

    def __init__(self, message: str, uri: Optional[str] = None) -> None:
        self.uri = uri
        super().__init__(message)


class RelocationFailed(StepOperationError):
    """Moving an element's backing file into the workspace failed.

    Attributes:
        element_id: The element whose storage could not be moved.
        rolled_back: True when the element was removed from the work item
            again. False means the work item holds an element with an
            invalid storage reference and must be discarded by the caller.
    """

    kind = "relocation_failed"

    def __init__(
        self,
        message: str,
        element_id: Optional[str] = None,
        rolled_back: bool = False,
    ) -> None:
        self.element_id = element_id
        self.rolled_back = rolled_back
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["element_id"] = self.element_id
        result["rolled_back"] = self.rolled_back
        return result


class AttachFailed(StepOperationError):
    """Any other failure while attaching the result to the work item."""

    kind = "attach_failed"


__all__ = [
    "StepOperationError",
    "ConfigurationInvalid",
    "ExecutionFailed",
    "ResultParseFailed",
    "InspectionFailed",
    "RelocationFailed",
    "AttachFailed",
]
