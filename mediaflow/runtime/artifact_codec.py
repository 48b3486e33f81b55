"""
artifact_codec.py - Element exchange format.

Jobs hand element descriptions back as serialized payloads. The codec turns
a payload into an Element and back. The JSON codec validates every payload
against ``schemas/element.schema.json`` before building the Element.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema

from mediaflow.runtime.errors import ResultParseFailed
from mediaflow.runtime.types import Element, element_from_dict, element_to_dict

logger = logging.getLogger(__name__)

ELEMENT_SCHEMA_PATH = Path(__file__).parent.parent / "schemas" / "element.schema.json"

# Cached schema to avoid repeated file reads
_ELEMENT_SCHEMA: Optional[Dict[str, Any]] = None


def _load_element_schema() -> Dict[str, Any]:
    """Load the element schema, caching result."""
    global _ELEMENT_SCHEMA
    if _ELEMENT_SCHEMA is None:
        with open(ELEMENT_SCHEMA_PATH, "r", encoding="utf-8") as f:
            _ELEMENT_SCHEMA = json.load(f)
    return _ELEMENT_SCHEMA


class ArtifactCodec(ABC):
    """Converts between job payloads and Element descriptions."""

    @abstractmethod
    def encode(self, element: Element) -> str:
        """Serialize an element into a payload string."""
        ...

    @abstractmethod
    def decode(self, payload: str) -> Element:
        """Deserialize a payload into an element.

        Raises:
            ResultParseFailed: If the payload is not a valid element description.
        """
        ...


class JsonArtifactCodec(ArtifactCodec):
    """JSON payloads validated against the element schema."""

    def __init__(self, schema: Optional[Dict[str, Any]] = None) -> None:
        self._schema = schema if schema is not None else _load_element_schema()

    def encode(self, element: Element) -> str:
        return json.dumps(element_to_dict(element), sort_keys=True)

    def decode(self, payload: str) -> Element:
        try:
            data = json.loads(payload)
        except (TypeError, json.JSONDecodeError) as e:
            raise ResultParseFailed(f"Result payload is not valid JSON: {e}") from e

        try:
            jsonschema.validate(data, self._schema)
        except jsonschema.ValidationError as e:
            location = "/".join(str(p) for p in e.absolute_path) or "<root>"
            raise ResultParseFailed(
                f"Result payload failed validation at {location}: {e.message}"
            ) from e

        try:
            element = element_from_dict(data)
        except (KeyError, ValueError) as e:
            raise ResultParseFailed(f"Result payload is not a valid element: {e}") from e

        logger.debug("Decoded %s element %s", element.element_type.value, element.uri)
        return element
