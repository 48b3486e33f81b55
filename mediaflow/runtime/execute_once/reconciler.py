"""
reconciler.py - Attach a produced element to the work item.

Order matters:
1. add the element to the work item (assigns an id if it has none)
2. move its file into <work item id>/<element id>/<filename>
3. point the element at the moved file
4. overwrite the flavor, if one is configured
5. apply the tag patch, if one is configured

Flavor and tags are only touched once the move has succeeded.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from mediaflow.runtime.errors import AttachFailed, RelocationFailed
from mediaflow.runtime.tag_patch import apply_tag_patch
from mediaflow.runtime.types import DuplicateElementError, Element, Flavor, WorkItem
from mediaflow.runtime.workspace import Relocator

logger = logging.getLogger(__name__)


def attach_artifact(
    work_item: WorkItem,
    artifact: Element,
    relocator: Relocator,
    output_filename: Optional[str] = None,
    target_flavor: Optional[Flavor] = None,
    tag_patch: Optional[Sequence[str]] = None,
    rollback_on_failure: bool = True,
) -> Element:
    """Attach ``artifact`` to ``work_item`` and return it.

    Args:
        work_item: Work item receiving the element.
        artifact: Element to attach. Mutated in place.
        relocator: Moves the element's file into the work item namespace.
        output_filename: Final path segment of the moved file. Defaults to
            the current file name.
        target_flavor: Replaces the element's flavor when set.
        tag_patch: Tag patch tokens applied to the element's tags.
        rollback_on_failure: When the move fails, remove the element from
            the work item again instead of leaving it with a stale location.

    Raises:
        AttachFailed: If the element cannot be added to the work item, or the
            relocator fails in an unexpected way. The element is rolled back
            as for RelocationFailed.
        RelocationFailed: If the element's file cannot be moved.
    """
    try:
        work_item.add(artifact)
    except DuplicateElementError as e:
        raise AttachFailed(str(e)) from e

    try:
        uri = relocator.move(artifact.uri, work_item.identifier, artifact.identifier, output_filename)
    except (RelocationFailed, OSError) as e:
        _release(work_item, artifact, rollback_on_failure)
        message = e.message if isinstance(e, RelocationFailed) else str(e)
        raise RelocationFailed(
            message, element_id=artifact.identifier, rolled_back=rollback_on_failure
        ) from e
    except Exception as e:
        _release(work_item, artifact, rollback_on_failure)
        raise AttachFailed(
            f"Attaching element {artifact.identifier} to work item "
            f"{work_item.identifier} failed: {e}"
        ) from e

    artifact.uri = uri

    if target_flavor is not None:
        artifact.flavor = target_flavor

    if tag_patch:
        artifact.tags = apply_tag_patch(artifact.tags, tag_patch)

    logger.info(
        "Attached %s element %s to work item %s at %s",
        artifact.element_type.value,
        artifact.identifier,
        work_item.identifier,
        uri,
    )
    return artifact


def _release(work_item: WorkItem, artifact: Element, rollback: bool) -> None:
    if rollback:
        work_item.remove(artifact.identifier)
        logger.warning(
            "Relocation of element %s failed, removed it from work item %s",
            artifact.identifier,
            work_item.identifier,
        )
    else:
        logger.warning(
            "Relocation of element %s failed, work item %s keeps a stale reference to %s",
            artifact.identifier,
            work_item.identifier,
            artifact.uri,
        )
