"""Tree organization: moving, cloning and reordering notes via branches."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Optional

from trilium_notes.client import TriliumClient

logger = logging.getLogger(__name__)


def _branch_definition(note_id: str, parent_note_id: str, prefix: Optional[str]) -> dict[str, Any]:
    definition: dict[str, Any] = {"noteId": note_id, "parentNoteId": parent_note_id}
    if prefix is not None:
        definition["prefix"] = prefix
    return definition


async def move_note(
    client: TriliumClient,
    note_id: str,
    new_parent_note_id: str,
    *,
    prefix: Optional[str] = None,
) -> dict[str, Any]:
    """Move a note from its primary parent to ``new_parent_note_id``.

    The new branch is created before the old one is removed, since deleting a
    note's last branch deletes the note. Other placements (clones) are kept.

    Returns:
        ``{"note_id", "branch", "removed_branch_id"}``; ``removed_branch_id``
        is ``None`` when nothing had to be removed.
    """
    note = await client.get_note(note_id)
    parent_branch_ids = note.get("parentBranchIds", [])
    old_branch_id = parent_branch_ids[0] if parent_branch_ids else None

    # ETAPI answers an existing placement with that same branch
    branch = await client.create_branch(_branch_definition(note_id, new_parent_note_id, prefix))

    removed_branch_id = None
    if old_branch_id is not None and old_branch_id != branch.get("branchId"):
        await client.delete_branch(old_branch_id)
        removed_branch_id = old_branch_id

    logger.info("Moved note '%s' under '%s'", note_id, new_parent_note_id)
    return {"note_id": note_id, "branch": branch, "removed_branch_id": removed_branch_id}


async def clone_note(
    client: TriliumClient,
    note_id: str,
    parent_note_id: str,
    *,
    prefix: Optional[str] = None,
) -> dict[str, Any]:
    """Place an existing note under an additional parent."""
    branch = await client.create_branch(_branch_definition(note_id, parent_note_id, prefix))
    logger.info("Cloned note '%s' under '%s'", note_id, parent_note_id)
    return branch


async def reorder_notes(
    client: TriliumClient,
    parent_note_id: str,
    positions: Sequence[tuple[str, int]],
) -> dict[str, Any]:
    """Set ``notePosition`` on each ``(branch_id, position)`` and refresh the parent's ordering.

    Returns:
        ``{"parent_note_id", "updated_branches": [...]}``.
    """
    updated = []
    for branch_id, note_position in positions:
        updated.append(await client.update_branch(branch_id, {"notePosition": note_position}))

    await client.refresh_note_ordering(parent_note_id)
    logger.info("Reordered %d branch(es) under '%s'", len(updated), parent_note_id)
    return {"parent_note_id": parent_note_id, "updated_branches": updated}
