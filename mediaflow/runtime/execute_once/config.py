"""
config.py - Step options for the execute-once operation.

Options arrive as a flat key/value mapping (as written in a workflow
definition). They are trimmed, blank values count as unset, and everything is
parsed up front so a bad option fails the step before any job is submitted.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from mediaflow.runtime.errors import ConfigurationInvalid
from mediaflow.runtime.tag_patch import parse_tag_patch
from mediaflow.runtime.types import ElementType, Flavor
from mediaflow.runtime.workspace import is_path_segment

EXEC_PROPERTY = "exec"
PARAMS_PROPERTY = "params"
SOURCE_FLAVOR_PROPERTY = "source-flavor"
SOURCE_TAGS_PROPERTY = "source-tags"
OUTPUT_FILENAME_PROPERTY = "output-filename"
EXPECTED_TYPE_PROPERTY = "expected-type"
TARGET_FLAVOR_PROPERTY = "target-flavor"
TARGET_TAGS_PROPERTY = "target-tags"

_ACCEPTED_TYPES = ", ".join(t.value for t in ElementType)

CONFIG_OPTIONS: Dict[str, str] = dict(
    sorted(
        {
            EXEC_PROPERTY: "The full path of the executable to run",
            PARAMS_PROPERTY: "Space separated list of command line parameters to pass to the executable",
            SOURCE_FLAVOR_PROPERTY: "The flavor an element must have to be used as input",
            SOURCE_TAGS_PROPERTY: "The tags an element must have to be used as input",
            OUTPUT_FILENAME_PROPERTY: "The name of the element created by this operation",
            EXPECTED_TYPE_PROPERTY: (
                "The type of the element returned by this operation. "
                f"Accepted values are: {_ACCEPTED_TYPES}"
            ),
            TARGET_FLAVOR_PROPERTY: "The flavor that the resulting element will be assigned",
            TARGET_TAGS_PROPERTY: (
                "The tags that the resulting element will be assigned. "
                "Tags starting with '-' are removed instead"
            ),
        }.items()
    )
)


class StepConfiguration(BaseModel):
    """Parsed, immutable step options."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    exec_path: str = Field(..., alias=EXEC_PROPERTY, min_length=1)
    params: Optional[str] = Field(default=None, alias=PARAMS_PROPERTY)
    source_flavor: Optional[Flavor] = Field(default=None, alias=SOURCE_FLAVOR_PROPERTY)
    source_tags: Tuple[str, ...] = Field(default=(), alias=SOURCE_TAGS_PROPERTY)
    output_filename: Optional[str] = Field(default=None, alias=OUTPUT_FILENAME_PROPERTY)
    expected_type: Optional[ElementType] = Field(default=None, alias=EXPECTED_TYPE_PROPERTY)
    target_flavor: Optional[Flavor] = Field(default=None, alias=TARGET_FLAVOR_PROPERTY)
    target_tags: Tuple[str, ...] = Field(default=(), alias=TARGET_TAGS_PROPERTY)

    @model_validator(mode="before")
    @classmethod
    def _trim_values(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        cleaned: Dict[str, Any] = {}
        for key, value in data.items():
            if isinstance(value, (list, tuple)):
                value = ",".join(str(v) for v in value)
            elif value is not None and not isinstance(value, (str, Flavor, ElementType)):
                value = str(value)
            if isinstance(value, str):
                value = value.strip() or None
            if value is not None:
                cleaned[key] = value
        return cleaned

    @field_validator("source_flavor", "target_flavor", mode="before")
    @classmethod
    def _parse_flavor(cls, value: Any) -> Any:
        if isinstance(value, str):
            return Flavor.parse(value)
        return value

    @field_validator("output_filename")
    @classmethod
    def _check_output_filename(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not is_path_segment(value):
            raise ValueError(f"'{value}' must be a plain file name without directories")
        return value

    @field_validator("expected_type", mode="before")
    @classmethod
    def _parse_expected_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            return ElementType.parse(value)
        return value

    @field_validator("source_tags", "target_tags", mode="before")
    @classmethod
    def _split_tags(cls, value: Any) -> Any:
        if isinstance(value, str):
            return tuple(parse_tag_patch(value))
        return value

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "StepConfiguration":
        """Parse step options.

        Raises:
            ConfigurationInvalid: If a required option is missing or a value
                cannot be parsed.
        """
        try:
            return cls.model_validate(dict(options))
        except ValidationError as e:
            error = e.errors()[0]
            option = str(error["loc"][0]) if error.get("loc") else None
            if error.get("type") == "missing":
                message = f"Missing required option '{option}'"
            else:
                message = f"Invalid value for option '{option}': {error.get('msg')}"
            raise ConfigurationInvalid(message, option=option) from e
