"""Tree organization MCP tools: move, clone and reorder notes."""
from __future__ import annotations

from typing import Any

from trilium_notes.server import etapi_errors, mcp
from trilium_notes.session import get_client
from trilium_notes.models import MoveNoteInput, CloneNoteInput, ReorderNotesInput
from trilium_notes.core.organization_operations import move_note, clone_note, reorder_notes


@mcp.tool(name="move_note")
async def move_note_tool(input: MoveNoteInput) -> dict[str, Any]:
    """Move a note to a different parent.

    Creates a branch under the new parent, then removes the note's primary
    branch. Clones in other locations are left in place.

    Args:
        input (MoveNoteInput): Validated input containing:
            - note_id (str): ID of the note to move
            - new_parent_note_id (str): ID of the new parent
            - prefix (str, optional): Branch title prefix in the new location

    Returns:
        {"note_id": str, "branch": {...}, "removed_branch_id": str | None}
    """
    async with etapi_errors():
        return await move_note(
            get_client(), input.note_id, input.new_parent_note_id, prefix=input.prefix
        )


@mcp.tool(name="clone_note")
async def clone_note_tool(input: CloneNoteInput) -> dict[str, Any]:
    """Make a note appear under an additional parent (same note, new branch).

    Returns:
        The created branch: {"branchId", "noteId", "parentNoteId", "prefix", "notePosition", ...}
    """
    async with etapi_errors():
        return await clone_note(get_client(), input.note_id, input.parent_note_id, prefix=input.prefix)


@mcp.tool(name="reorder_notes")
async def reorder_notes_tool(input: ReorderNotesInput) -> dict[str, Any]:
    """Change the display order of notes within a parent.

    Args:
        input (ReorderNotesInput): Validated input containing:
            - parent_note_id (str): ID of the parent note
            - note_positions (list): [{"branch_id": str, "note_position": int}, ...]
              Branch IDs are listed in the parent's childBranchIds (get_note).

    Returns:
        {"parent_note_id": str, "updated_branches": [...]}
    """
    positions = [(item.branch_id, item.note_position) for item in input.note_positions]
    async with etapi_errors():
        return await reorder_notes(get_client(), input.parent_note_id, positions)
