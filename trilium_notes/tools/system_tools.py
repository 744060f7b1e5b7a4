"""MCP tools for server status, revisions, backups and exports."""

from typing import Any

from trilium_notes.server import etapi_errors, mcp
from trilium_notes.session import get_client
from trilium_notes.config import get_configuration
from trilium_notes.models import CreateRevisionInput, CreateBackupInput, ExportNoteInput
from trilium_notes.core.system_operations import create_revision, create_backup, export_note


@mcp.tool(name="get_app_info")
async def get_app_info_tool() -> dict[str, Any]:
    """Get Trilium server information and verify the connection.

    Returns:
        {
            "connection": {"url": str, "transport": str, "http_port": int,
                           "token_configured": bool},
            "app_info": {...}  # ETAPI app-info (version, db version, ...)
        }

    Examples:
        - Use when: First call of a session, to confirm Trilium is reachable
        - Use when: Other tools fail with connection errors
    """
    async with etapi_errors():
        app_info = await get_client().get_app_info()
    return {
        "connection": get_configuration().as_payload(),
        "app_info": app_info,
    }


@mcp.tool(name="create_revision")
async def create_revision_tool(input: CreateRevisionInput) -> dict[str, Any]:
    """Snapshot a note into its revision history.

    Use before significant edits; revisions can be viewed and restored in
    Trilium's note history.

    Args:
        input (CreateRevisionInput): Validated input containing:
            - note_id (str): ID of the note
            - format (str): "html" (default) or "markdown"
    """
    async with etapi_errors():
        return await create_revision(get_client(), input.note_id, input.format)


@mcp.tool(name="create_backup")
async def create_backup_tool(input: CreateBackupInput) -> dict[str, Any]:
    """Create a full database backup named backup-{backup_name}.db in Trilium's data directory."""
    async with etapi_errors():
        return await create_backup(get_client(), input.backup_name)


@mcp.tool(name="export_note")
async def export_note_tool(input: ExportNoteInput) -> dict[str, Any]:
    """Export a note and its subtree as a ZIP archive.

    Args:
        input (ExportNoteInput): Validated input containing:
            - note_id (str): Note to export ("root" for the whole database)
            - format (str): "html" (default) or "markdown"

    Returns:
        {"note_id": str, "format": str, "size_bytes": int, "base64_data": str}
        Decode base64_data and unzip it to read the exported notes.
    """
    async with etapi_errors():
        return await export_note(get_client(), input.note_id, input.format)
