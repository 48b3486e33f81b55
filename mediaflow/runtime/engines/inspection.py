"""
inspection.py - Basic file inspection engine.

Reports what can be read from the file itself: media type (by extension),
size and a sha256 checksum. It does not decode media, so duration and codec
information stay unset.
"""

from __future__ import annotations

import hashlib
import mimetypes

from mediaflow.runtime.artifact_codec import ArtifactCodec
from mediaflow.runtime.jobs import JobQueue
from mediaflow.runtime.types import Element, ElementType, Job
from mediaflow.runtime.workspace import uri_to_path

from .base import InspectionEngine

_CHUNK_SIZE = 1024 * 1024


class BasicInspectionEngine(InspectionEngine):
    """Inspects local files and describes them as tracks."""

    def __init__(self, queue: JobQueue, codec: ArtifactCodec):
        self._queue = queue
        self._codec = codec

    @property
    def engine_id(self) -> str:
        return "basic-inspect"

    def inspect(self, uri: str) -> Job:
        def work() -> str:
            path = uri_to_path(uri)
            if not path.is_file():
                raise FileNotFoundError(f"Cannot inspect {uri}: no such file")

            digest = hashlib.sha256()
            with open(path, "rb") as f:
                for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
                    digest.update(chunk)

            element = Element(
                element_type=ElementType.TRACK,
                uri=uri,
                mimetype=mimetypes.guess_type(path.name)[0],
                size=path.stat().st_size,
                checksum=f"sha256:{digest.hexdigest()}",
            )
            return self._codec.encode(element)

        return self._queue.dispatch("inspect", work)
