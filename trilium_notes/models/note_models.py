"""Pydantic input models for note operations.

This module defines input models for note management tools:
- Create notes
- Retrieve note metadata and content
- Update note metadata
- Update or append note content (full, search/replace, unified diff)
- Delete notes
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from trilium_notes.data_models import ContentMutationRequest

from .base import BaseNoteInput, SearchReplaceBlock, validate_entity_id

NoteType = Literal["text", "code", "file", "image", "search", "book", "relationMap", "render"]
ContentFormat = Literal["html", "markdown"]


class CreateNoteInput(BaseModel):
    """Input model for create_note tool.

    Creates a note under ``parent_note_id``. Text note content is HTML unless
    ``format="markdown"``, in which case it is converted before upload.

    Examples:
        >>> CreateNoteInput(parent_note_id="root", title="Ideas", type="text", content="<p>Hi</p>")
        >>> CreateNoteInput(parent_note_id="root", title="Ideas", type="text",
        ...                 content="# Hi", format="markdown")
    """

    parent_note_id: str = Field(
        min_length=1,
        description="ID of the parent note (use 'root' for top-level)",
    )
    title: str = Field(min_length=1, description="Title of the new note")
    type: NoteType = Field(description="Type of the note")
    content: str = Field(
        description=(
            "Content of the note. For text notes: HTML (default) or markdown "
            "(if format is 'markdown'). For code notes: raw code. "
            "Can be empty string to create a blank note."
        )
    )
    format: Optional[ContentFormat] = Field(
        None,
        description="Use 'markdown' to convert markdown to HTML. Only applies to text notes.",
    )
    mime: Optional[str] = Field(
        None,
        description="MIME type (required for code, file, image notes), e.g. 'text/x-python'",
    )
    note_position: Optional[int] = Field(
        None,
        gt=0,
        description="Position in parent (10, 20, 30...). Use 5 for first position",
    )
    prefix: Optional[str] = Field(
        None,
        description="Branch-specific title prefix (e.g., 'Archive:', 'Draft:')",
    )

    @field_validator('parent_note_id')
    @classmethod
    def validate_parent_note_id(cls, v: str) -> str:
        """Validate the parent note identifier format."""
        return validate_entity_id(v, "Parent note ID")

    @field_validator('title')
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Reject whitespace-only titles."""
        if not v.strip():
            raise ValueError("Note title cannot be empty.")
        return v

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {
                    "parent_note_id": "root",
                    "title": "Meeting Notes",
                    "type": "text",
                    "content": "# Agenda\n\n- Budget",
                    "format": "markdown",
                }
            ]
        }


class GetNoteInput(BaseNoteInput):
    """Input model for get_note and get_note_tree tools."""


class GetNoteContentInput(BaseNoteInput):
    """Input model for get_note_content tool.

    Examples:
        >>> GetNoteContentInput(note_id="abc123XYZ", format="markdown")
    """

    format: Optional[ContentFormat] = Field(
        None,
        description=(
            "Output format for text notes. 'markdown' converts the stored HTML; "
            "defaults to 'html' (content as stored)."
        ),
    )


class UpdateNoteInput(BaseNoteInput):
    """Input model for update_note tool (metadata only, never content)."""

    title: Optional[str] = Field(None, description="New title for the note")
    type: Optional[NoteType] = Field(None, description="New type for the note")
    mime: Optional[str] = Field(None, description="New MIME type for the note")

    @model_validator(mode="after")
    def validate_has_changes(self) -> "UpdateNoteInput":
        """Require at least one metadata field."""
        if not (self.title or self.type or self.mime):
            raise ValueError(
                "Provide at least one of 'title', 'type', or 'mime'. "
                "To change the note body use update_note_content."
            )
        return self


class ContentMutationInput(BaseNoteInput):
    """Shared input for tools that write note content.

    Exactly one of three modes must be used:

    - ``content``: full content (replacement or appended text, depending on tool)
    - ``changes``: search/replace blocks applied in order to the stored content
    - ``patch``: unified diff applied to the stored content

    ``format="markdown"`` only applies to ``content`` since diffs operate on the
    stored representation (HTML for text notes).
    """

    content: Optional[str] = Field(
        None,
        description=(
            "Full content. For text notes: HTML (default) or markdown (if format is 'markdown'). "
            "For code blocks in HTML use <pre><code class=\"language-X\">...</code></pre>."
        ),
    )
    changes: Optional[list[SearchReplaceBlock]] = Field(
        None,
        description=(
            "Search/replace blocks applied sequentially to the existing content. Each "
            "old_string must match exactly once. Operates on stored content (HTML for text notes)."
        ),
    )
    patch: Optional[str] = Field(
        None,
        description="Unified diff patch applied to the existing content.",
    )
    format: Optional[ContentFormat] = Field(
        None,
        description=(
            "Use 'markdown' to convert markdown to HTML. Only applies to 'content' mode."
        ),
    )

    @model_validator(mode="after")
    def validate_single_mode(self) -> "ContentMutationInput":
        """Enforce exactly one content mode and format compatibility."""
        modes = [
            name
            for name in ("content", "changes", "patch")
            if getattr(self, name) is not None
        ]
        if not modes:
            raise ValueError('Exactly one of "content", "changes", or "patch" must be provided')
        if len(modes) > 1:
            raise ValueError('Only one of "content", "changes", or "patch" can be provided at a time')
        if self.format == "markdown" and self.content is None:
            raise ValueError(
                'format="markdown" cannot be used with "changes" or "patch" modes; '
                "diffs operate on stored content (HTML)"
            )
        return self

    def to_request(self) -> ContentMutationRequest:
        """Return the engine-level request for this input."""
        return ContentMutationRequest(
            content=self.content,
            changes=tuple(self.changes) if self.changes is not None else None,
            patch=self.patch,
        )


class UpdateNoteContentInput(ContentMutationInput):
    """Input model for update_note_content tool.

    Examples:
        >>> UpdateNoteContentInput(note_id="abc123XYZ", content="<p>New</p>")
        >>> UpdateNoteContentInput(
        ...     note_id="abc123XYZ",
        ...     changes=[{"old_string": "Draft", "new_string": "Final"}],
        ... )
    """

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"note_id": "abc123XYZ", "content": "<p>Rewritten</p>"},
                {
                    "note_id": "abc123XYZ",
                    "changes": [{"old_string": "<p>Draft</p>", "new_string": "<p>Final</p>"}],
                },
                {
                    "note_id": "abc123XYZ",
                    "patch": "--- a\n+++ b\n@@ -1,1 +1,1 @@\n-old line\n+new line\n",
                },
            ]
        }


class AppendNoteContentInput(ContentMutationInput):
    """Input model for append_note_content tool.

    In ``content`` mode the text is appended to the end of the note; the diff
    modes behave exactly as in update_note_content.
    """

    @field_validator('content')
    @classmethod
    def validate_content_not_empty(cls, v: Optional[str]) -> Optional[str]:
        """Reject empty text when appending."""
        if v is not None and not v.strip():
            raise ValueError(
                "Content cannot be empty when appending to a note. "
                "Provide the text you want to add to the note."
            )
        return v


class DeleteNoteInput(BaseNoteInput):
    """Input model for delete_note tool. Deletion also removes all branches."""
