"""Note management MCP tools.

This module provides MCP tool wrappers for note operations:
- Create notes
- Retrieve note metadata and content
- Update note metadata
- Replace or edit note content (full, search/replace, unified diff)
- Append to notes
- Delete notes

All tools delegate to core operations in trilium_notes.core.note_operations.
"""
from __future__ import annotations

from typing import Any

from trilium_notes.server import etapi_errors, mcp
from trilium_notes.session import get_client
from trilium_notes.models import (
    CreateNoteInput,
    GetNoteInput,
    GetNoteContentInput,
    UpdateNoteInput,
    UpdateNoteContentInput,
    AppendNoteContentInput,
    DeleteNoteInput,
)
from trilium_notes.core.note_operations import (
    create_note,
    get_note,
    get_note_content,
    update_note,
    update_note_content,
    append_note_content,
    delete_note,
)


# ==============================================================================
# READ OPERATIONS
# ==============================================================================

# Metadata only; the body is fetched separately with get_note_content.
@mcp.tool(name="get_note")
async def get_note_tool(input: GetNoteInput) -> dict[str, Any]:
    """Get note metadata by ID.

    Returns note properties including title, type, MIME type, attributes and
    parent/child relationships. Does not include the note body.

    Args:
        input (GetNoteInput): Validated input containing:
            - note_id (str): ID of the note ('root' for the top-level note)

    Returns:
        The ETAPI note object: {"noteId", "title", "type", "mime", "attributes",
        "parentNoteIds", "childNoteIds", ...}

    Error Handling:
        - ValidationError: Empty or malformed note ID
        - NOTE_NOT_FOUND → Error, use search_notes to find valid IDs
    """
    async with etapi_errors():
        return await get_note(get_client(), input.note_id)


@mcp.tool(name="get_note_content")
async def get_note_content_tool(input: GetNoteContentInput) -> dict[str, Any]:
    """Get the content/body of a note.

    Text notes are stored as HTML. Set format to "markdown" for a converted
    view; edit tools always operate on the stored HTML though.

    Args:
        input (GetNoteContentInput): Validated input containing:
            - note_id (str): ID of the note
            - format (str, optional): "html" (default, as stored) or "markdown"

    Returns:
        {"note_id": str, "format": str, "content": str}

    Examples:
        - Use when: Need the exact text before building search/replace blocks
        - Use format="html": Before update_note_content with changes or patch
        - Use format="markdown": Just reading the note

    Error Handling:
        - NOTE_NOT_FOUND → Error, use search_notes to find valid IDs
    """
    async with etapi_errors():
        return await get_note_content(get_client(), input.note_id, input.format)


# ==============================================================================
# CREATE OPERATIONS
# ==============================================================================

@mcp.tool(name="create_note")
async def create_note_tool(input: CreateNoteInput) -> dict[str, Any]:
    """Create a new note under a parent note.

    Args:
        input (CreateNoteInput): Validated input containing:
            - parent_note_id (str): Parent note ID ("root" for top level)
            - title (str): Note title
            - type (str): text, code, file, image, search, book, relationMap, render
            - content (str): HTML, or markdown when format="markdown"
            - format (str, optional): "html" (default) or "markdown"
            - mime (str, optional): MIME type for code/file/image notes
            - note_position (int, optional): Ordering position in the parent
            - prefix (str, optional): Branch title prefix

    Returns:
        {"note": {...}, "branch": {...}}

    Error Handling:
        - ValidationError: Invalid type, empty title, malformed parent ID
        - NOTE_NOT_FOUND → Parent does not exist
    """
    async with etapi_errors():
        return await create_note(
            get_client(),
            input.parent_note_id,
            input.title,
            input.type,
            input.content,
            content_format=input.format,
            mime=input.mime,
            note_position=input.note_position,
            prefix=input.prefix,
        )


# ==============================================================================
# UPDATE OPERATIONS
# ==============================================================================

@mcp.tool(name="update_note")
async def update_note_tool(input: UpdateNoteInput) -> dict[str, Any]:
    """Update note metadata (title, type, or MIME type).

    Does not touch the note body; use update_note_content for that.

    Returns:
        The updated ETAPI note object.
    """
    async with etapi_errors():
        return await update_note(
            get_client(),
            input.note_id,
            title=input.title,
            note_type=input.type,
            mime=input.mime,
        )


# Three mutually exclusive modes; diff modes read the stored content first.
@mcp.tool(name="update_note_content")
async def update_note_content_tool(input: UpdateNoteContentInput) -> dict[str, Any]:
    """Update the content/body of a note.

    Exactly one mode per call:

    1. content: full replacement. HTML by default, or markdown with
       format="markdown".
    2. changes: list of {old_string, new_string} blocks applied in order to the
       stored content. Each old_string must match exactly once; an empty
       old_string prepends new_string. Later blocks see earlier results.
    3. patch: unified diff (---/+++ headers, @@ hunks) applied to the stored
       content.

    Nothing is written unless every block or hunk applies. After a changes
    write the note is read back and every new_string must be present.

    Args:
        input (UpdateNoteContentInput): Validated input containing:
            - note_id (str): ID of the note
            - content | changes | patch: exactly one
            - format (str, optional): "markdown" (content mode only)

    Returns:
        {"note_id": str, "mode": str, "status": "updated"}

    Examples:
        - Use changes: Fix a typo or rewrite one paragraph
        - Use patch: Line-oriented edits to code notes
        - Use content: Rewriting the whole note
        - Workflow: get_note_content(format="html") → update_note_content(changes=...)

    Error Handling:
        - "could not find": old_string is not in the current content; re-read the note
        - "ambiguous": old_string matches several places; include more context
        - "patch could not be applied": content changed; fetch it and regenerate the diff
        - "read-back verification failed": Trilium altered the saved content
    """
    async with etapi_errors():
        return await update_note_content(
            get_client(),
            input.note_id,
            input.to_request(),
            input.format,
        )


@mcp.tool(name="append_note_content")
async def append_note_content_tool(input: AppendNoteContentInput) -> dict[str, Any]:
    """Append to, or edit, the content of an existing note.

    Exactly one mode per call:

    1. content: appended to the end of the existing content (markdown is
       converted to HTML when format="markdown").
    2. changes: search/replace blocks, as in update_note_content.
    3. patch: unified diff, as in update_note_content.

    Returns:
        {"note_id": str, "mode": str, "status": "appended" | "updated"}

    Error Handling:
        - ValidationError: Empty content, several modes, or markdown with diffs
        - Same edit errors as update_note_content
    """
    async with etapi_errors():
        return await append_note_content(
            get_client(),
            input.note_id,
            input.to_request(),
            input.format,
        )


# ==============================================================================
# DELETE OPERATIONS
# ==============================================================================

@mcp.tool(name="delete_note")
async def delete_note_tool(input: DeleteNoteInput) -> dict[str, Any]:
    """Delete a note by ID (also deletes all branches pointing to it).

    Always confirm with the user before calling.

    Returns:
        {"note_id": str, "status": "deleted"}
    """
    async with etapi_errors():
        return await delete_note(get_client(), input.note_id)
