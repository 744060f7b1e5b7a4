"""Pydantic input models for attachment operations.

Attachments are files or images owned by a note. Metadata and content are
read and written separately.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .base import validate_entity_id


class AttachmentIdInput(BaseModel):
    """Base model for operations addressing one attachment by ID."""

    attachment_id: str = Field(min_length=1, description="ID of the attachment")

    @field_validator('attachment_id')
    @classmethod
    def validate_attachment_id(cls, v: str) -> str:
        return validate_entity_id(v, "Attachment ID")


class CreateAttachmentInput(BaseModel):
    """Input model for create_attachment tool.

    Binary content (images, PDFs) is passed base64-encoded.

    Examples:
        >>> CreateAttachmentInput(owner_id="abc123", role="file", mime="text/plain",
        ...                       title="notes.txt", content="hello")
    """

    owner_id: str = Field(min_length=1, description="ID of the note that owns the attachment")
    role: str = Field(min_length=1, description="Role of the attachment, e.g. 'file' or 'image'")
    mime: str = Field(min_length=1, description="MIME type, e.g. 'image/png' or 'application/pdf'")
    title: str = Field(min_length=1, description="Title or file name of the attachment")
    content: str = Field(description="Attachment content (base64-encoded for binary files)")
    position: Optional[int] = Field(None, gt=0, description="Ordering position (10, 20, 30...)")

    @field_validator('owner_id')
    @classmethod
    def validate_owner_id(cls, v: str) -> str:
        return validate_entity_id(v, "Owner note ID")


class GetAttachmentInput(AttachmentIdInput):
    """Input model for get_attachment tool."""


class GetAttachmentContentInput(AttachmentIdInput):
    """Input model for get_attachment_content tool."""


class DeleteAttachmentInput(AttachmentIdInput):
    """Input model for delete_attachment tool."""


class UpdateAttachmentInput(AttachmentIdInput):
    """Input model for update_attachment tool (metadata only)."""

    role: Optional[str] = Field(None, description="New role")
    mime: Optional[str] = Field(None, description="New MIME type")
    title: Optional[str] = Field(None, description="New title or file name")
    position: Optional[int] = Field(None, gt=0, description="New ordering position")

    @model_validator(mode="after")
    def validate_has_changes(self) -> "UpdateAttachmentInput":
        """Require at least one metadata field."""
        if not (self.role or self.mime or self.title or self.position):
            raise ValueError(
                "Provide at least one of 'role', 'mime', 'title', or 'position'. "
                "To change the attachment body use update_attachment_content."
            )
        return self


class UpdateAttachmentContentInput(AttachmentIdInput):
    """Input model for update_attachment_content tool."""

    content: str = Field(description="New attachment content (base64-encoded for binary files)")
