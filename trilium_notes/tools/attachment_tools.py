"""Attachment MCP tools.

Attachments are files or images owned by a note. Image content is returned
as an MCP image so the agent can see it; everything else is returned as text.
"""
from __future__ import annotations

import base64
from typing import Any

from mcp.server.fastmcp import Image

from trilium_notes.server import etapi_errors, mcp
from trilium_notes.session import get_client
from trilium_notes.models import (
    CreateAttachmentInput,
    GetAttachmentInput,
    GetAttachmentContentInput,
    UpdateAttachmentInput,
    UpdateAttachmentContentInput,
    DeleteAttachmentInput,
)
from trilium_notes.core.attachment_operations import (
    create_attachment,
    get_attachment,
    get_attachment_content,
    update_attachment,
    update_attachment_content,
    delete_attachment,
)


@mcp.tool(name="create_attachment")
async def create_attachment_tool(input: CreateAttachmentInput) -> dict[str, Any]:
    """Attach a file or image to a note.

    Args:
        input (CreateAttachmentInput): Validated input containing:
            - owner_id (str): ID of the owning note
            - role (str): "file" or "image"
            - mime (str): MIME type, e.g. "image/png"
            - title (str): File name
            - content (str): Text, or base64 for binary files
            - position (int, optional): Ordering position

    Returns:
        The created attachment metadata (attachmentId, ownerId, role, mime, title...)
    """
    async with etapi_errors():
        return await create_attachment(
            get_client(),
            input.owner_id,
            input.role,
            input.mime,
            input.title,
            input.content,
            position=input.position,
        )


@mcp.tool(name="get_attachment")
async def get_attachment_tool(input: GetAttachmentInput) -> dict[str, Any]:
    """Get attachment metadata (owner, role, MIME type, title, position)."""
    async with etapi_errors():
        return await get_attachment(get_client(), input.attachment_id)


@mcp.tool(name="update_attachment")
async def update_attachment_tool(input: UpdateAttachmentInput) -> dict[str, Any]:
    """Update attachment metadata. Use update_attachment_content for the body."""
    async with etapi_errors():
        return await update_attachment(
            get_client(),
            input.attachment_id,
            role=input.role,
            mime=input.mime,
            title=input.title,
            position=input.position,
        )


@mcp.tool(name="delete_attachment")
async def delete_attachment_tool(input: DeleteAttachmentInput) -> dict[str, Any]:
    """Permanently delete an attachment and its content."""
    async with etapi_errors():
        return await delete_attachment(get_client(), input.attachment_id)


# Images are returned as MCP image content, other attachments as text
@mcp.tool(name="get_attachment_content")
async def get_attachment_content_tool(input: GetAttachmentContentInput):
    """Get the body of an attachment.

    PNG, JPEG, GIF, WebP and SVG attachments are returned as images for visual
    inspection. Other attachments are returned as text.

    Args:
        input (GetAttachmentContentInput): Validated input containing:
            - attachment_id (str): ID of the attachment
    """
    async with etapi_errors():
        result = await get_attachment_content(get_client(), input.attachment_id)

    if result["encoding"] == "base64":
        image_format = result["mime"].split("/", 1)[1]
        return Image(data=base64.b64decode(result["content"]), format=image_format)
    return result["content"]


@mcp.tool(name="update_attachment_content")
async def update_attachment_content_tool(input: UpdateAttachmentContentInput) -> dict[str, Any]:
    """Replace the body of an attachment (text, or base64 for binary files)."""
    async with etapi_errors():
        return await update_attachment_content(get_client(), input.attachment_id, input.content)
