"""Work item and element types.

A work item (media package) owns a mutable collection of typed elements.
Each element has an identifier, a storage location, an optional two-part
flavor and a set of free-form tags.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Set

from ._ids import ElementId, WorkItemId, generate_element_id


class UnknownElementType(ValueError):
    """Raised when a string does not name an ElementType."""

    def __init__(self, value: str) -> None:
        self.value = value
        accepted = ", ".join(t.value for t in ElementType)
        super().__init__(f"'{value}' is not a valid element type (accepted: {accepted})")


class InvalidFlavor(ValueError):
    """Raised when a flavor string is not of the form type/subtype."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"'{value}' is not a valid flavor (expected 'type/subtype')")


class DuplicateElementError(ValueError):
    """Raised when an element identifier is already present in a work item."""

    def __init__(self, element_id: str, work_item_id: str) -> None:
        self.element_id = element_id
        self.work_item_id = work_item_id
        super().__init__(
            f"Element '{element_id}' already exists in work item '{work_item_id}'"
        )


class ElementType(str, Enum):
    """Closed set of element kinds a work item can hold."""

    MANIFEST = "manifest"
    TIMELINE = "timeline"
    TRACK = "track"
    CATALOG = "catalog"
    ATTACHMENT = "attachment"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str) -> "ElementType":
        """Case-insensitive lookup by name.

        Raises:
            UnknownElementType: If ``value`` names no member.
        """
        candidate = (value or "").strip().lower()
        for member in cls:
            if member.value == candidate:
                return member
        raise UnknownElementType(value)


@dataclass(frozen=True)
class Flavor:
    """Two-part classification label, rendered as ``type/subtype``."""

    type: str
    subtype: str

    @classmethod
    def parse(cls, value: str) -> "Flavor":
        """Parse ``type/subtype``.

        Raises:
            InvalidFlavor: If either part is missing.
        """
        text = (value or "").strip()
        type_, sep, subtype = text.partition("/")
        type_, subtype = type_.strip(), subtype.strip()
        if not sep or not type_ or not subtype:
            raise InvalidFlavor(value)
        return cls(type=type_, subtype=subtype)

    def __str__(self) -> str:
        return f"{self.type}/{self.subtype}"


@dataclass
class Element:
    """A single media package element.

    Attributes:
        element_type: Kind of element (track, catalog, ...).
        uri: Storage location of the element's backing file.
        identifier: Unique id within the owning work item. Assigned on
            insertion when missing.
        flavor: Optional classification label.
        tags: Free-form tags (set semantics).
        mimetype: Media type, when known.
        size: Size in bytes, when known.
        checksum: Content checksum as ``<algorithm>:<hex>``, when known.
        duration_ms: Playback duration for tracks, when known.
    """

    element_type: ElementType
    uri: str
    identifier: Optional[ElementId] = None
    flavor: Optional[Flavor] = None
    tags: Set[str] = field(default_factory=set)
    mimetype: Optional[str] = None
    size: Optional[int] = None
    checksum: Optional[str] = None
    duration_ms: Optional[int] = None

    def add_tag(self, tag: str) -> None:
        self.tags.add(tag)

    def remove_tag(self, tag: str) -> None:
        self.tags.discard(tag)

    def contains_tag(self, tag: str) -> bool:
        return tag in self.tags


@dataclass
class WorkItem:
    """Mutable collection of elements, identified by a stable id.

    The identifier doubles as the storage namespace when element files are
    relocated into the workspace.
    """

    identifier: WorkItemId
    elements: List[Element] = field(default_factory=list)

    def add(self, element: Element) -> Element:
        """Insert an element, assigning an identifier if it has none.

        Raises:
            DuplicateElementError: If an element with the same id is present.
        """
        if element.identifier is None:
            element.identifier = generate_element_id()
        elif self.get(element.identifier) is not None:
            raise DuplicateElementError(element.identifier, self.identifier)
        self.elements.append(element)
        return element

    def remove(self, element_id: ElementId) -> Optional[Element]:
        """Remove and return the element with ``element_id`` (None if absent)."""
        for index, element in enumerate(self.elements):
            if element.identifier == element_id:
                return self.elements.pop(index)
        return None

    def get(self, element_id: ElementId) -> Optional[Element]:
        for element in self.elements:
            if element.identifier == element_id:
                return element
        return None

    def elements_with_flavor(self, flavor: Flavor) -> List[Element]:
        return [e for e in self.elements if e.flavor == flavor]

    def __contains__(self, element_id: object) -> bool:
        return any(e.identifier == element_id for e in self.elements)

    def __iter__(self) -> Iterator[Element]:
        return iter(list(self.elements))

    def __len__(self) -> int:
        return len(self.elements)


# =============================================================================
# Serialization Functions
# =============================================================================


def element_to_dict(element: Element) -> Dict[str, Any]:
    """Convert Element to a dictionary for JSON serialization.

    Tags are emitted sorted so the output is deterministic.
    """
    result: Dict[str, Any] = {
        "id": element.identifier,
        "type": element.element_type.value,
        "uri": element.uri,
        "flavor": str(element.flavor) if element.flavor else None,
        "tags": sorted(element.tags),
    }
    if element.mimetype is not None:
        result["mimetype"] = element.mimetype
    if element.size is not None:
        result["size"] = element.size
    if element.checksum is not None:
        result["checksum"] = element.checksum
    if element.duration_ms is not None:
        result["duration_ms"] = element.duration_ms
    return result


def element_from_dict(data: Dict[str, Any]) -> Element:
    """Create Element from dictionary.

    Raises:
        KeyError: If ``type`` or ``uri`` is missing.
        UnknownElementType: If ``type`` is not a known element type.
        InvalidFlavor: If ``flavor`` is present but malformed.
    """
    flavor = data.get("flavor")
    return Element(
        element_type=ElementType.parse(data["type"]),
        uri=data["uri"],
        identifier=data.get("id"),
        flavor=Flavor.parse(flavor) if flavor else None,
        tags=set(data.get("tags") or []),
        mimetype=data.get("mimetype"),
        size=data.get("size"),
        checksum=data.get("checksum"),
        duration_ms=data.get("duration_ms"),
    )


def work_item_to_dict(work_item: WorkItem) -> Dict[str, Any]:
    """Convert WorkItem to a dictionary for JSON serialization."""
    return {
        "id": work_item.identifier,
        "elements": [element_to_dict(e) for e in work_item.elements],
    }


def work_item_from_dict(data: Dict[str, Any]) -> WorkItem:
    """Create WorkItem from dictionary.

    Elements keep their listed order; duplicate ids are rejected.
    """
    work_item = WorkItem(identifier=data["id"])
    for element_data in data.get("elements", []):
        work_item.add(element_from_dict(element_data))
    return work_item
