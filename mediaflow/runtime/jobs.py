"""
jobs.py - In-process job queue and job barrier.

Services submit work as jobs; callers block on a JobBarrier until every job
they care about reaches a terminal status. Workers run on a thread pool so a
job's queue time and run time are measured the same way a remote queue
would report them.

Usage:
    from mediaflow.runtime.jobs import JobBarrier, JobQueue

    with JobQueue(max_workers=2) as queue:
        job = queue.dispatch("execute", lambda: "payload")
        result = JobBarrier(queue).wait_for_jobs(job)
        if result.is_success():
            print(job.payload)
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Dict, Optional

from mediaflow.runtime.types import Job, JobId, JobStatus, generate_job_id

logger = logging.getLogger(__name__)

# A unit of work returns the job payload (None or "" for "nothing produced")
# and signals failure by raising.
JobWork = Callable[[], Optional[str]]


class JobQueue:
    """Thread-pool backed job queue."""

    def __init__(self, max_workers: int = 2):
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="mediaflow-job"
        )
        self._futures: Dict[JobId, Future] = {}
        self._lock = threading.Lock()

    def dispatch(self, operation: str, work: JobWork) -> Job:
        """Queue ``work`` as a new job and return the job immediately."""
        job = Job(job_id=generate_job_id(operation), operation=operation)
        future = self._executor.submit(self._run, job, work)
        with self._lock:
            self._futures[job.job_id] = future
        logger.debug("Dispatched job %s", job.job_id)
        return job

    def future_for(self, job: Job) -> Future:
        with self._lock:
            try:
                return self._futures[job.job_id]
            except KeyError:
                raise KeyError(f"Job {job.job_id} was not dispatched by this queue") from None

    def release(self, job: Job) -> None:
        """Forget a finished job. Unknown jobs are ignored."""
        with self._lock:
            self._futures.pop(job.job_id, None)

    @property
    def tracked_jobs(self) -> int:
        """Number of dispatched jobs not yet released."""
        with self._lock:
            return len(self._futures)

    def shutdown(self) -> None:
        """Wait for running jobs and release the worker threads."""
        self._executor.shutdown(wait=True)

    def __enter__(self) -> "JobQueue":
        return self

    def __exit__(self, *exc_info) -> None:
        self.shutdown()

    @staticmethod
    def _run(job: Job, work: JobWork) -> None:
        job.started_at = datetime.now(timezone.utc)
        job.status = JobStatus.RUNNING
        try:
            job.payload = work()
            job.status = JobStatus.SUCCEEDED
        except Exception as e:
            # A worker failure is job state, reported through the barrier.
            logger.warning("Job %s failed: %s", job.job_id, e)
            job.error = str(e) or type(e).__name__
            job.status = JobStatus.FAILED
        finally:
            job.completed_at = datetime.now(timezone.utc)


@dataclass
class BarrierResult:
    """Terminal status per job, as observed by the barrier."""

    statuses: Dict[JobId, JobStatus] = field(default_factory=dict)

    def is_success(self) -> bool:
        return bool(self.statuses) and all(
            s == JobStatus.SUCCEEDED for s in self.statuses.values()
        )

    def failed_jobs(self) -> Dict[JobId, JobStatus]:
        return {k: v for k, v in self.statuses.items() if v != JobStatus.SUCCEEDED}


class JobBarrier:
    """Blocks until the given jobs finish.

    Args:
        queue: The queue the jobs were dispatched on.
        timeout: Seconds to wait before giving up. None waits forever. Jobs
            still running at the timeout are reported with their current
            (non-terminal) status, which makes the result unsuccessful.

    Finished jobs are released from the queue once observed, so each job
    is waited on once. Jobs still running stay tracked and can be waited on
    again.
    """

    def __init__(self, queue: JobQueue, timeout: Optional[float] = None):
        self._queue = queue
        self._timeout = timeout

    def wait_for_jobs(self, *jobs: Job) -> BarrierResult:
        futures = {self._queue.future_for(job): job for job in jobs}
        done, not_done = wait(futures, timeout=self._timeout)
        for future in done:
            self._queue.release(futures[future])
        if not_done:
            logger.warning(
                "%d of %d job(s) did not finish within %ss",
                len(not_done),
                len(futures),
                self._timeout,
            )
        return BarrierResult(statuses={job.job_id: job.status for job in jobs})
