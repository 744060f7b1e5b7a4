"""Pydantic input models for search and navigation operations.

This module defines input models for search and discovery tools:
- Search notes with Trilium query syntax
- Browse a note's children
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from trilium_notes.constants import MAX_SEARCH_LIMIT

from .base import BaseNoteInput, validate_entity_id


class SearchNotesInput(BaseModel):
    """Input model for search_notes tool.

    Fulltext words are ANDed implicitly; ``or`` between bare words is rewritten
    into explicit content filters before the query is sent.

    Examples:
        >>> SearchNotesInput(query="meeting or project")
        >>> SearchNotesInput(query="#book", order_by="title", limit=10)
    """

    query: str = Field(
        min_length=1,
        description=(
            "Trilium search query. Fulltext: 'word1 word2' (implicit AND), '\"exact phrase\"'. "
            "Labels: #label, #label=value, #!label. Relations: ~relation. "
            "Operators: = != *=* =* *= >= > < <=. Boolean: 'or' between terms, "
            "AND with parentheses."
        ),
        examples=["meeting", "#project", "#status = active", "meeting or project"]
    )
    fast_search: Optional[bool] = Field(
        None, description="Enable fast search (skips content search)"
    )
    include_archived_notes: Optional[bool] = Field(
        None, description="Include archived notes"
    )
    ancestor_note_id: Optional[str] = Field(
        None, description="Search only in the subtree of this note"
    )
    order_by: Optional[str] = Field(
        None, description="Property to order by (title, dateCreated, dateModified)"
    )
    order_direction: Optional[Literal["asc", "desc"]] = Field(
        None, description="Order direction"
    )
    limit: Optional[int] = Field(
        None,
        ge=1,
        le=MAX_SEARCH_LIMIT,
        description="Maximum number of results",
    )

    @field_validator('query')
    @classmethod
    def validate_query(cls, v: str) -> str:
        """Reject whitespace-only queries."""
        if not v.strip():
            raise ValueError(
                "Search query cannot be empty. "
                "Provide words to search for or an attribute filter such as '#project'."
            )
        return v

    @field_validator('ancestor_note_id')
    @classmethod
    def validate_ancestor(cls, v: Optional[str]) -> Optional[str]:
        """Validate the optional ancestor note identifier."""
        if v is None:
            return None
        return validate_entity_id(v, "Ancestor note ID")

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"query": "meeting or project"},
                {"query": "#book", "order_by": "title", "order_direction": "asc", "limit": 20},
            ]
        }


class GetNoteTreeInput(BaseNoteInput):
    """Input model for get_note_tree tool.

    Examples:
        >>> GetNoteTreeInput(note_id="root")
    """
