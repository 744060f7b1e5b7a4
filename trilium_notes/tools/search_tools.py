"""Search and navigation tools for Trilium notes.

This module contains MCP tool wrappers for discovery operations:
- search_notes: Search with Trilium query syntax (fulltext, labels, relations)
- get_note_tree: List the children of a note
"""
from __future__ import annotations

from typing import Any

from trilium_notes.server import etapi_errors, mcp
from trilium_notes.session import get_client
from trilium_notes.models import SearchNotesInput, GetNoteTreeInput
from trilium_notes.core.search_operations import search_notes, get_note_tree

# ==============================================================================
# DISCOVERY & SEARCH TOOLS
# ==============================================================================


@mcp.tool(name="search_notes")
async def search_notes_tool(input: SearchNotesInput) -> dict[str, Any]:
    """Search notes using fulltext search and/or attribute filters.

    Full-text search:
        - `rings tolkien`: both terms must appear (implicit AND)
        - `"exact phrase"`: quotes for exact phrase matching
        - `meeting or project`: either term (rewritten to
          `note.content *=* meeting OR note.content *=* project`)

    Attribute filters:
        - `#label`, `#!label`, `#year = 1954`, `#year >= 1950`
        - `#name *=* john`: label value contains "john"
        - `~relation`: notes with relation

    Combining:
        - `tolkien #book`: fulltext AND attribute
        - `#book or #article`: OR between attributes
        - `(#year >= 1950 AND #year <= 1960)`: grouping

    Note properties: note.title, note.dateCreated, note.dateModified,
    note.parents.title, note.ancestors.title

    Args:
        input (SearchNotesInput): Validated input containing:
            - query (str): Trilium search query
            - fast_search (bool, optional): Skip content search
            - include_archived_notes (bool, optional)
            - ancestor_note_id (str, optional): Restrict to a subtree
            - order_by (str, optional): title, dateCreated, dateModified
            - order_direction (str, optional): "asc" or "desc"
            - limit (int, optional): 1-10000

    Returns:
        {"query": str, "effective_query": str, "results": [note, ...]}
    """
    async with etapi_errors():
        return await search_notes(
            get_client(),
            input.query,
            fast_search=input.fast_search,
            include_archived_notes=input.include_archived_notes,
            ancestor_note_id=input.ancestor_note_id,
            order_by=input.order_by,
            order_direction=input.order_direction,
            limit=input.limit,
        )


@mcp.tool(name="get_note_tree")
async def get_note_tree_tool(input: GetNoteTreeInput) -> dict[str, Any]:
    """Get the children of a note for tree navigation.

    Returns:
        {"noteId", "title", "type", "childNoteIds", "childBranchIds", "hasChildren"}
    """
    async with etapi_errors():
        return await get_note_tree(get_client(), input.note_id)
