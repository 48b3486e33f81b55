"""
Test fixtures and fakes for the mediaflow runtime tests.

Provides a job queue per test, a temporary workspace, a sample work item and
fake engines whose jobs run on the real queue so the barrier is exercised.
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

# Add repo root to path for imports
_repo_root = Path(__file__).resolve().parents[1]
if str(_repo_root) not in sys.path:
    sys.path.insert(0, str(_repo_root))

from mediaflow.config.runtime_config import reset_config
from mediaflow.runtime.artifact_codec import JsonArtifactCodec
from mediaflow.runtime.engines.base import ExecutionEngine, InspectionEngine
from mediaflow.runtime.jobs import JobBarrier, JobQueue
from mediaflow.runtime.types import (
    Element,
    ElementType,
    Flavor,
    Job,
    WorkItem,
)
from mediaflow.runtime.workspace import LocalWorkspace

_ENV_VARS = (
    "MEDIAFLOW_ENGINE_MODE",
    "MEDIAFLOW_WORKSPACE_ROOT",
    "MEDIAFLOW_JOB_WORKERS",
    "MEDIAFLOW_JOB_TIMEOUT",
)


# ============================================================================
# Fake Engines
# ============================================================================


class FakeExecutionEngine(ExecutionEngine):
    """Execution engine returning a canned payload (or failing)."""

    def __init__(self, queue: JobQueue, payload: str = "", fail: bool = False):
        self._queue = queue
        self.payload = payload
        self.fail = fail
        self.calls: List[Dict[str, Any]] = []
        self.jobs: List[Job] = []

    @property
    def engine_id(self) -> str:
        return "fake-execute"

    def execute(self, executable, params, work_item, output_filename=None, expected_type=None):
        self.calls.append(
            {
                "executable": executable,
                "params": params,
                "work_item": work_item,
                "output_filename": output_filename,
                "expected_type": expected_type,
            }
        )

        def work():
            if self.fail:
                raise RuntimeError("encoder crashed")
            return self.payload

        job = self._queue.dispatch("execute", work)
        self.jobs.append(job)
        return job


class FakeInspectionEngine(InspectionEngine):
    """Inspection engine returning a canned payload (or failing)."""

    def __init__(self, queue: JobQueue, payload: str = "", fail: bool = False):
        self._queue = queue
        self.payload = payload
        self.fail = fail
        self.calls: List[str] = []

    @property
    def engine_id(self) -> str:
        return "fake-inspect"

    def inspect(self, uri):
        self.calls.append(uri)

        def work():
            if self.fail:
                raise RuntimeError("unreadable media")
            return self.payload

        return self._queue.dispatch("inspect", work)


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def clean_runtime_config(monkeypatch):
    """Isolate tests from MEDIAFLOW_* variables and the config cache."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def queue():
    q = JobQueue(max_workers=2)
    yield q
    q.shutdown()


@pytest.fixture
def barrier(queue):
    return JobBarrier(queue, timeout=10)


@pytest.fixture
def codec():
    return JsonArtifactCodec()


@pytest.fixture
def workspace(tmp_path: Path) -> LocalWorkspace:
    return LocalWorkspace(tmp_path / "workspace")


@pytest.fixture
def work_item(tmp_path: Path) -> WorkItem:
    """Work item with one source track."""
    source = tmp_path / "media" / "source.mp4"
    source.parent.mkdir(parents=True)
    source.write_bytes(b"source-bytes")
    return WorkItem(
        identifier="wi-1",
        elements=[
            Element(
                element_type=ElementType.TRACK,
                uri=source.as_uri(),
                identifier="src-1",
                flavor=Flavor("presenter", "source"),
                tags={"source"},
            )
        ],
    )


@pytest.fixture
def produced_file(tmp_path: Path) -> Path:
    """A file standing in for the output of an external program."""
    path = tmp_path / "scratch" / "output.bin"
    path.parent.mkdir(parents=True)
    path.write_bytes(b"produced-bytes")
    return path


def make_payload(
    codec: JsonArtifactCodec,
    element_type: ElementType,
    uri: str,
    identifier: Optional[str] = "result-1",
    **kwargs: Any,
) -> str:
    """Encode an element description as a job payload."""
    return codec.encode(
        Element(element_type=element_type, uri=uri, identifier=identifier, **kwargs)
    )
