"""
workspace.py - Element storage relocation.

Element files produced by jobs live in scratch space until the step attaches
them. Relocation moves them into the work item's namespace:

    <root>/<work item id>/<element id>/<filename>

Usage:
    from mediaflow.runtime.workspace import LocalWorkspace

    workspace = LocalWorkspace(Path("/var/mediaflow"))
    uri = workspace.move("file:///tmp/out.mp4", "wi-1", "el-1", "encoded.mp4")
"""

from __future__ import annotations

import logging
import shutil
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional
from urllib.parse import unquote, urlparse

from mediaflow.runtime.errors import RelocationFailed

logger = logging.getLogger(__name__)

SCRATCH_DIR = "scratch"


def uri_to_path(uri: str) -> Path:
    """Resolve a ``file://`` URI or plain filesystem path to a Path.

    Raises:
        ValueError: If the URI uses a scheme other than ``file``.
    """
    parsed = urlparse(uri)
    if parsed.scheme in ("", "file"):
        return Path(unquote(parsed.path) if parsed.scheme else uri)
    raise ValueError(f"Unsupported storage scheme '{parsed.scheme}' in {uri}")


def is_path_segment(value: str) -> bool:
    """True if ``value`` names exactly one entry inside a directory."""
    return bool(value) and value not in (".", "..") and "/" not in value and "\\" not in value


def _check_segment(name: str, value: str) -> None:
    if not is_path_segment(value):
        raise RelocationFailed(f"Invalid {name} for workspace path: {value!r}")


class Relocator(ABC):
    """Moves element storage into a work item's namespace."""

    @abstractmethod
    def move(
        self,
        source_uri: str,
        namespace: str,
        element_id: str,
        filename: Optional[str] = None,
    ) -> str:
        """Move ``source_uri`` and return the new location.

        Raises:
            RelocationFailed: If the storage could not be moved.
        """
        ...


class LocalWorkspace(Relocator):
    """Filesystem workspace rooted at ``root``."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def path_for(self, namespace: str, element_id: str, filename: str) -> Path:
        return self.root / namespace / element_id / filename

    def scratch_dir(self, name: str) -> Path:
        """Create and return a scratch directory for a job's output."""
        path = self.root / SCRATCH_DIR / name
        path.mkdir(parents=True, exist_ok=True)
        return path

    def move(
        self,
        source_uri: str,
        namespace: str,
        element_id: str,
        filename: Optional[str] = None,
    ) -> str:
        try:
            source = uri_to_path(source_uri)
        except ValueError as e:
            raise RelocationFailed(str(e), element_id=element_id) from e

        target_name = filename or source.name
        _check_segment("namespace", namespace)
        _check_segment("element id", element_id)
        _check_segment("filename", target_name)

        target = self.path_for(namespace, element_id, target_name)
        if not source.is_file():
            raise RelocationFailed(
                f"Cannot move {source_uri}: no such file", element_id=element_id
            )

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.move(str(source), str(target))
        except OSError as e:
            raise RelocationFailed(
                f"Cannot move {source_uri} to {target}: {e}", element_id=element_id
            ) from e

        logger.debug("Moved %s to %s", source, target)
        return target.resolve().as_uri()
