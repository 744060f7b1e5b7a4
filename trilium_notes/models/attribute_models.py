"""Pydantic input models for attribute operations.

Labels are name/value pairs; relations point from a note to another note.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .base import BaseNoteInput, validate_entity_id

AttributeType = Literal["label", "relation"]


class AttributeIdInput(BaseModel):
    """Base model for operations addressing one attribute by ID."""

    attribute_id: str = Field(
        min_length=1,
        description="ID of the attribute (see get_attributes)",
    )

    @field_validator('attribute_id')
    @classmethod
    def validate_attribute_id(cls, v: str) -> str:
        return validate_entity_id(v, "Attribute ID")


class GetAttributesInput(BaseNoteInput):
    """Input model for get_attributes tool."""


class GetAttributeInput(AttributeIdInput):
    """Input model for get_attribute tool."""


class DeleteAttributeInput(AttributeIdInput):
    """Input model for delete_attribute tool."""


class SetAttributeInput(BaseNoteInput):
    """Input model for set_attribute tool.

    Updates the note's existing attribute of the same type and name, or creates
    one. For relations ``value`` is the ID of the target note.

    Examples:
        >>> SetAttributeInput(note_id="abc123", type="label", name="status", value="draft")
        >>> SetAttributeInput(note_id="abc123", type="relation", name="author", value="def456")
    """

    type: AttributeType = Field(description="'label' or 'relation'")
    name: str = Field(
        min_length=1,
        description="Name of the attribute without the # or ~ prefix",
    )
    value: str = Field(
        "",
        description="Label value, or the target note ID for relations",
    )
    is_inheritable: Optional[bool] = Field(
        None, description="Whether child notes inherit the attribute"
    )
    position: Optional[int] = Field(
        None,
        gt=0,
        description="Ordering among attributes (10, 20, 30...)",
    )
    attribute_id: Optional[str] = Field(
        None,
        description="Force a specific ID for a new attribute (imports and migrations)",
    )

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Strip the name and reject a leading # or ~."""
        cleaned = v.strip()
        if not cleaned:
            raise ValueError("Attribute name cannot be empty.")
        if cleaned[0] in "#~":
            raise ValueError(
                f"Attribute name must not include the '{cleaned[0]}' prefix. "
                f"Use '{cleaned[1:]}' with type 'label' or 'relation'."
            )
        return cleaned

    @field_validator('attribute_id')
    @classmethod
    def validate_attribute_id(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return validate_entity_id(v, "Attribute ID")

    @model_validator(mode="after")
    def validate_relation_target(self) -> "SetAttributeInput":
        """Relations must point at a well-formed note ID."""
        if self.type == "relation":
            self.value = validate_entity_id(self.value, "Relation target note ID")
        return self

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"note_id": "a1B2c3D4e5F6", "type": "label", "name": "status", "value": "done"},
                {"note_id": "a1B2c3D4e5F6", "type": "relation", "name": "template", "value": "tmpl0001"},
            ]
        }
