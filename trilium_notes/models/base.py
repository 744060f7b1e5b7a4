"""Base Pydantic models for MCP tool input validation.

This module defines base models that provide common validation patterns
for note operations. Other input models inherit from these bases.

Base Models:
- BaseNoteInput: Common validation for operations addressing one note
- SearchReplaceBlock: A single exact-match edit applied to note content
"""

from __future__ import annotations

import re

from pydantic import BaseModel, Field, field_validator

from trilium_notes.constants import ENTITY_ID_PATTERN

_ENTITY_ID_RE = re.compile(ENTITY_ID_PATTERN)


def validate_entity_id(value: str, label: str = "Note ID") -> str:
    """Strip and validate an ETAPI entity identifier.

    Args:
        value: Raw identifier supplied by the caller.
        label: Human-friendly name used in error messages.

    Returns:
        The stripped identifier.

    Raises:
        ValueError: If the identifier is empty or not 4-32 word characters.
    """
    cleaned = value.strip()
    if not cleaned:
        raise ValueError(
            f"{label} cannot be empty. "
            "Use search_notes to find note IDs, or 'root' for the top-level note."
        )
    if not _ENTITY_ID_RE.match(cleaned):
        raise ValueError(
            f"{label} must be 4-32 alphanumeric characters (or 'root'). "
            f"Invalid ID: '{cleaned}'"
        )
    return cleaned


class BaseNoteInput(BaseModel):
    """Base model for operations on a single existing note.

    Provides standard validation for the note identifier.
    All note-related input models should inherit from this class.
    """

    note_id: str = Field(
        min_length=1,
        description=(
            "ID of the note. Use search_notes to find note IDs; "
            "use 'root' for the top-level note."
        ),
        examples=["root", "a1B2c3D4e5F6"]
    )

    @field_validator('note_id')
    @classmethod
    def validate_note_id(cls, v: str) -> str:
        """Validate the note identifier format."""
        return validate_entity_id(v)


class SearchReplaceBlock(BaseModel):
    """One exact-match edit.

    ``old_string`` must occur exactly once in the current content. An empty
    ``old_string`` inserts ``new_string`` at the beginning of the content.
    """

    old_string: str = Field(
        description="The exact string to find in the existing content (empty to prepend)"
    )
    new_string: str = Field(
        description="The replacement string (empty to delete the matched text)"
    )

    model_config = {"frozen": True}
