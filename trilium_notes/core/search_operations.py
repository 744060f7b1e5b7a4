"""Search and tree navigation operations."""

from __future__ import annotations

import logging
from typing import Any, Optional

from trilium_notes.client import TriliumClient
from trilium_notes.core.query_operations import preprocess_search_query

logger = logging.getLogger(__name__)


async def search_notes(
    client: TriliumClient,
    query: str,
    *,
    fast_search: Optional[bool] = None,
    include_archived_notes: Optional[bool] = None,
    ancestor_note_id: Optional[str] = None,
    order_by: Optional[str] = None,
    order_direction: Optional[str] = None,
    limit: Optional[int] = None,
) -> dict[str, Any]:
    """Search notes with Trilium query syntax.

    OR between bare fulltext words is rewritten into explicit content filters
    before the query is sent (see :func:`preprocess_search_query`).

    Returns:
        The ETAPI search response plus ``query`` (as supplied) and
        ``effective_query`` (as sent to Trilium).
    """
    effective_query = preprocess_search_query(query)
    if effective_query != query:
        logger.info("Search query rewritten for Trilium: %s", effective_query)

    response = await client.search_notes(
        effective_query,
        fast_search=fast_search,
        include_archived_notes=include_archived_notes,
        ancestor_note_id=ancestor_note_id,
        order_by=order_by,
        order_direction=order_direction,
        limit=limit,
    )
    return {
        "query": query,
        "effective_query": effective_query,
        **response,
    }


async def get_note_tree(client: TriliumClient, note_id: str) -> dict[str, Any]:
    """Return a simplified view of a note focused on its children."""
    note = await client.get_note(note_id)
    child_note_ids = note.get("childNoteIds", [])
    return {
        "noteId": note["noteId"],
        "title": note.get("title"),
        "type": note.get("type"),
        "childNoteIds": child_note_ids,
        "childBranchIds": note.get("childBranchIds", []),
        "hasChildren": bool(child_note_ids),
    }
