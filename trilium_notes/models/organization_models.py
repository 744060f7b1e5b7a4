"""Pydantic input models for tree organization operations.

A note can appear under several parents; each placement is a branch with its
own prefix and position.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .base import BaseNoteInput, validate_entity_id


class MoveNoteInput(BaseNoteInput):
    """Input model for move_note tool."""

    new_parent_note_id: str = Field(min_length=1, description="ID of the new parent note")
    prefix: Optional[str] = Field(None, description="Branch title prefix in the new location")

    @field_validator('new_parent_note_id')
    @classmethod
    def validate_new_parent_note_id(cls, v: str) -> str:
        return validate_entity_id(v, "New parent note ID")


class CloneNoteInput(BaseNoteInput):
    """Input model for clone_note tool."""

    parent_note_id: str = Field(min_length=1, description="ID of the additional parent note")
    prefix: Optional[str] = Field(None, description="Branch title prefix for the clone")

    @field_validator('parent_note_id')
    @classmethod
    def validate_parent_note_id(cls, v: str) -> str:
        return validate_entity_id(v, "Parent note ID")


class BranchPosition(BaseModel):
    """New position for one branch."""

    branch_id: str = Field(
        min_length=1,
        description="ID of the branch (see childBranchIds in get_note)",
    )
    note_position: int = Field(gt=0, description="New position (10, 20, 30...)")

    @field_validator('branch_id')
    @classmethod
    def validate_branch_id(cls, v: str) -> str:
        # Branch IDs join parent and child note IDs ("root_abc123")
        cleaned = v.strip()
        if not cleaned:
            raise ValueError("Branch ID cannot be empty.")
        return cleaned


class ReorderNotesInput(BaseModel):
    """Input model for reorder_notes tool.

    Examples:
        >>> ReorderNotesInput(parent_note_id="root", note_positions=[
        ...     {"branch_id": "root_abc123", "note_position": 10},
        ...     {"branch_id": "root_def456", "note_position": 20},
        ... ])
    """

    parent_note_id: str = Field(min_length=1, description="ID of the parent note")
    note_positions: list[BranchPosition] = Field(
        min_length=1,
        description="Branches to reposition",
    )

    @field_validator('parent_note_id')
    @classmethod
    def validate_parent_note_id(cls, v: str) -> str:
        return validate_entity_id(v, "Parent note ID")
