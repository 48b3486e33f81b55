"""Tests for mediaflow.runtime.jobs (queue and barrier)."""

import threading

import pytest

from mediaflow.runtime.jobs import BarrierResult, JobBarrier, JobQueue
from mediaflow.runtime.types import Job, JobStatus


class TestJobQueue:
    """Jobs run on worker threads and record their lifecycle."""

    def test_successful_job(self, queue, barrier):
        job = queue.dispatch("execute", lambda: "payload")
        result = barrier.wait_for_jobs(job)
        assert result.is_success()
        assert job.status is JobStatus.SUCCEEDED
        assert job.payload == "payload"
        assert job.started_at is not None and job.completed_at is not None
        assert job.job_id.startswith("execute-")

    def test_failing_job_records_error(self, queue, barrier):
        def work():
            raise RuntimeError("exit status 2")

        job = queue.dispatch("execute", work)
        result = barrier.wait_for_jobs(job)
        assert not result.is_success()
        assert job.status is JobStatus.FAILED
        assert job.error == "exit status 2"
        assert result.failed_jobs() == {job.job_id: JobStatus.FAILED}

    def test_future_for_unknown_job(self, queue):
        with pytest.raises(KeyError):
            queue.future_for(Job(job_id="elsewhere", operation="execute"))

    def test_context_manager_shuts_down(self):
        with JobQueue(max_workers=1) as q:
            job = q.dispatch("execute", lambda: None)
        assert job.status is JobStatus.SUCCEEDED


class TestJobBarrier:
    """The barrier waits only for the jobs it is given."""

    def test_waits_for_all_given_jobs(self, queue, barrier):
        jobs = [queue.dispatch("execute", lambda i=i: str(i)) for i in range(3)]
        result = barrier.wait_for_jobs(*jobs)
        assert result.is_success()
        assert [j.payload for j in jobs] == ["0", "1", "2"]

    def test_timeout_reports_unfinished_job(self, queue):
        release = threading.Event()
        job = queue.dispatch("execute", lambda: release.wait(5) and "late")
        try:
            result = JobBarrier(queue, timeout=0.05).wait_for_jobs(job)
            assert not result.is_success()
            assert result.statuses[job.job_id] in (JobStatus.QUEUED, JobStatus.RUNNING)
            assert queue.future_for(job) is not None
        finally:
            release.set()

    def test_empty_result_is_not_success(self):
        assert not BarrierResult().is_success()

    def test_finished_jobs_are_released(self, queue, barrier):
        jobs = [queue.dispatch("execute", lambda: "done") for _ in range(3)]
        barrier.wait_for_jobs(*jobs)
        assert queue.tracked_jobs == 0
        with pytest.raises(KeyError):
            queue.future_for(jobs[0])

    def test_release_ignores_unknown_jobs(self, queue):
        queue.release(Job(job_id="elsewhere", operation="execute"))
        assert queue.tracked_jobs == 0
