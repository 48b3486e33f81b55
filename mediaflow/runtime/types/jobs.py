"""Job types for asynchronous work submitted to external services."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from ._ids import JobId
from ._time import _elapsed_ms


class JobStatus(str, Enum):
    """Lifecycle of a job."""

    QUEUED = "queued"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.SUCCEEDED, JobStatus.FAILED)


@dataclass
class Job:
    """An asynchronous unit of work.

    Attributes:
        job_id: Unique job identifier.
        operation: Name of the operation ("execute", "inspect", ...).
        status: Current lifecycle status.
        payload: Serialized result on success. Empty string or None means
            the job produced nothing.
        error: Failure reason when status is FAILED.
        created_at: When the job was queued.
        started_at: When a worker picked the job up.
        completed_at: When the job reached a terminal status.
    """

    job_id: JobId
    operation: str
    status: JobStatus = JobStatus.QUEUED
    payload: Optional[str] = None
    error: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @property
    def queue_time_ms(self) -> int:
        return _elapsed_ms(self.created_at, self.started_at)

    @property
    def run_time_ms(self) -> int:
        return _elapsed_ms(self.started_at, self.completed_at)

    @property
    def elapsed_ms(self) -> int:
        """Queue time plus run time."""
        return _elapsed_ms(self.created_at, self.completed_at)

    def has_payload(self) -> bool:
        return bool(self.payload and self.payload.strip())

