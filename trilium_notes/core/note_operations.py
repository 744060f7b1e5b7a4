"""Core business logic for note CRUD and content mutation operations."""

from __future__ import annotations

import logging
from typing import Any, Optional

import markdown
from markdownify import ATX, markdownify

from trilium_notes.client import TriliumClient
from trilium_notes.core.diff_operations import resolve_content, verify_search_replace_results
from trilium_notes.data_models import ContentMutationRequest

logger = logging.getLogger(__name__)

MARKDOWN_EXTENSIONS = ["fenced_code", "tables", "sane_lists"]


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def markdown_to_html(text: str) -> str:
    """Render Markdown as the HTML Trilium stores for text notes."""
    return markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS)


def html_to_markdown(html: str) -> str:
    """Convert stored HTML to Markdown with ATX headings and fenced code blocks."""
    return markdownify(html, heading_style=ATX).strip()


def _convert_content(content: str, content_format: Optional[str]) -> str:
    if content_format == "markdown":
        return markdown_to_html(content)
    return content


async def _write_content(
    client: TriliumClient,
    note_id: str,
    request: ContentMutationRequest,
    existing_content: str,
    content_format: Optional[str] = None,
) -> str:
    """Resolve, persist and (for search/replace) verify new note content.

    Persistence happens only after the whole request resolved successfully, so a
    failing edit never leaves a partially edited note behind.
    """
    convert_fn = markdown_to_html if content_format == "markdown" else None
    final_content = await resolve_content(existing_content, request, convert_fn)

    await client.update_note_content(note_id, final_content)
    logger.info("Updated content of note '%s' (%s mode)", note_id, request.mode)

    if request.changes is not None:
        read_back = await client.get_note_content(note_id)
        verify_search_replace_results(read_back, request.changes)

    return final_content


# ==============================================================================
# NOTE OPERATIONS
# ==============================================================================


async def create_note(
    client: TriliumClient,
    parent_note_id: str,
    title: str,
    note_type: str,
    content: str,
    *,
    content_format: Optional[str] = None,
    mime: Optional[str] = None,
    note_position: Optional[int] = None,
    prefix: Optional[str] = None,
) -> dict[str, Any]:
    """Create a note under ``parent_note_id``.

    Args:
        client: ETAPI client.
        parent_note_id: Parent note (``"root"`` for top level).
        title: Note title.
        note_type: Trilium note type (``text``, ``code``...).
        content: Initial content; Markdown when ``content_format="markdown"``.
        content_format: ``"markdown"`` to convert ``content`` to HTML first.
        mime: MIME type for code/file/image notes.
        note_position: Ordering position within the parent.
        prefix: Branch-specific title prefix.

    Returns:
        The ETAPI ``{"note", "branch"}`` payload.
    """
    definition: dict[str, Any] = {
        "parentNoteId": parent_note_id,
        "title": title,
        "type": note_type,
        "content": _convert_content(content, content_format),
    }
    optional_fields = {"mime": mime, "notePosition": note_position, "prefix": prefix}
    definition.update({key: value for key, value in optional_fields.items() if value is not None})

    result = await client.create_note(definition)
    logger.info("Created note '%s' under '%s'", title, parent_note_id)
    return result


async def get_note(client: TriliumClient, note_id: str) -> dict[str, Any]:
    """Return note metadata (title, type, attributes, parents and children)."""
    return await client.get_note(note_id)


async def get_note_content(
    client: TriliumClient,
    note_id: str,
    content_format: Optional[str] = None,
) -> dict[str, Any]:
    """Return the stored note body, optionally converted to Markdown.

    Returns:
        ``{"note_id", "format", "content"}``.
    """
    raw_content = await client.get_note_content(note_id)
    if content_format == "markdown":
        return {"note_id": note_id, "format": "markdown", "content": html_to_markdown(raw_content)}
    return {"note_id": note_id, "format": "html", "content": raw_content}


async def update_note(
    client: TriliumClient,
    note_id: str,
    *,
    title: Optional[str] = None,
    note_type: Optional[str] = None,
    mime: Optional[str] = None,
) -> dict[str, Any]:
    """Patch note metadata. Unset fields are left untouched."""
    patch = {
        key: value
        for key, value in {"title": title, "type": note_type, "mime": mime}.items()
        if value
    }
    result = await client.update_note(note_id, patch)
    logger.info("Updated metadata of note '%s': %s", note_id, ", ".join(sorted(patch)))
    return result


async def update_note_content(
    client: TriliumClient,
    note_id: str,
    request: ContentMutationRequest,
    content_format: Optional[str] = None,
) -> dict[str, Any]:
    """Replace or edit the content of a note.

    Full replacement (``request.content``) never reads the current content.
    Search/replace and patch modes fetch it first, apply the edits locally and
    write the result. Search/replace writes are read back and verified.

    Returns:
        ``{"note_id", "mode", "status": "updated"}``.

    Raises:
        ContentMutationError: If edits do not apply or read-back verification fails.
        TriliumClientError: On ETAPI failures.
    """
    existing_content = await client.get_note_content(note_id) if request.is_diff else ""
    await _write_content(client, note_id, request, existing_content, content_format)
    return {"note_id": note_id, "mode": request.mode, "status": "updated"}


async def append_note_content(
    client: TriliumClient,
    note_id: str,
    request: ContentMutationRequest,
    content_format: Optional[str] = None,
) -> dict[str, Any]:
    """Append to, or edit, the content of a note.

    In ``content`` mode the new text (converted from Markdown if requested) is
    concatenated to the end of the existing content. Diff modes behave as in
    :func:`update_note_content`.

    Returns:
        ``{"note_id", "mode", "status"}`` where status is ``"appended"`` or ``"updated"``.
    """
    existing_content = await client.get_note_content(note_id)

    if request.content is not None:
        appended = existing_content + _convert_content(request.content, content_format)
        await _write_content(client, note_id, ContentMutationRequest(content=appended), existing_content)
        return {"note_id": note_id, "mode": "content", "status": "appended"}

    await _write_content(client, note_id, request, existing_content)
    return {"note_id": note_id, "mode": request.mode, "status": "updated"}


async def delete_note(client: TriliumClient, note_id: str) -> dict[str, Any]:
    """Delete a note and every branch pointing to it."""
    await client.delete_note(note_id)
    logger.info("Deleted note '%s'", note_id)
    return {"note_id": note_id, "status": "deleted"}
