"""Revisions, database backups and subtree exports."""

from __future__ import annotations

import base64
import logging
from typing import Any

from trilium_notes.client import TriliumClient

logger = logging.getLogger(__name__)


async def create_revision(client: TriliumClient, note_id: str, content_format: str = "html") -> dict[str, Any]:
    """Snapshot a note into its revision history."""
    await client.create_revision(note_id, content_format)
    logger.info("Created revision of note '%s'", note_id)
    return {"note_id": note_id, "format": content_format, "status": "revision_created"}


async def create_backup(client: TriliumClient, backup_name: str) -> dict[str, Any]:
    await client.create_backup(backup_name)
    file_name = f"backup-{backup_name}.db"
    logger.info("Created database backup %s", file_name)
    return {"backup_file": file_name, "status": "created"}


async def export_note(client: TriliumClient, note_id: str, content_format: str = "html") -> dict[str, Any]:
    """Export a note and its subtree as a base64-encoded ZIP archive.

    Returns:
        ``{"note_id", "format", "size_bytes", "base64_data"}``.
    """
    archive = await client.export_note(note_id, content_format)
    logger.info("Exported note '%s' (%s, %d bytes)", note_id, content_format, len(archive))
    return {
        "note_id": note_id,
        "format": content_format,
        "size_bytes": len(archive),
        "base64_data": base64.b64encode(archive).decode("ascii"),
    }
