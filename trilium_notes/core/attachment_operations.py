"""Attachment metadata and content operations."""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Any, Optional

from trilium_notes.client import TriliumClient
from trilium_notes.constants import IMAGE_MIME_TYPES

logger = logging.getLogger(__name__)


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def is_image_mime(mime: str) -> bool:
    return mime.lower() in IMAGE_MIME_TYPES


def image_base64(raw: bytes) -> str:
    """Return image content as base64 text.

    Attachments uploaded through ETAPI as text are already base64; images
    added in the Trilium UI are stored as raw bytes and get encoded here.
    """
    try:
        stripped = raw.strip()
        base64.b64decode(stripped, validate=True)
        return stripped.decode("ascii")
    except (binascii.Error, ValueError):
        return base64.b64encode(raw).decode("ascii")


# ==============================================================================
# ATTACHMENT OPERATIONS
# ==============================================================================


async def create_attachment(
    client: TriliumClient,
    owner_id: str,
    role: str,
    mime: str,
    title: str,
    content: str,
    *,
    position: Optional[int] = None,
) -> dict[str, Any]:
    definition: dict[str, Any] = {
        "ownerId": owner_id,
        "role": role,
        "mime": mime,
        "title": title,
        "content": content,
    }
    if position is not None:
        definition["position"] = position
    result = await client.create_attachment(definition)
    logger.info("Created attachment '%s' on note '%s'", title, owner_id)
    return result


async def get_attachment(client: TriliumClient, attachment_id: str) -> dict[str, Any]:
    return await client.get_attachment(attachment_id)


async def update_attachment(
    client: TriliumClient,
    attachment_id: str,
    *,
    role: Optional[str] = None,
    mime: Optional[str] = None,
    title: Optional[str] = None,
    position: Optional[int] = None,
) -> dict[str, Any]:
    """Patch attachment metadata. Unset fields are left untouched."""
    patch = {
        key: value
        for key, value in {"role": role, "mime": mime, "title": title, "position": position}.items()
        if value
    }
    result = await client.update_attachment(attachment_id, patch)
    logger.info("Updated attachment '%s': %s", attachment_id, ", ".join(sorted(patch)))
    return result


async def get_attachment_content(client: TriliumClient, attachment_id: str) -> dict[str, Any]:
    """Return an attachment's body.

    Returns:
        ``{"attachment_id", "mime", "encoding", "content"}`` where encoding is
        ``"base64"`` for images and ``"text"`` otherwise.
    """
    attachment = await client.get_attachment(attachment_id)
    mime = attachment.get("mime", "")

    if is_image_mime(mime):
        raw = await client.get_attachment_bytes(attachment_id)
        return {
            "attachment_id": attachment_id,
            "mime": mime,
            "encoding": "base64",
            "content": image_base64(raw),
        }

    content = await client.get_attachment_content(attachment_id)
    return {"attachment_id": attachment_id, "mime": mime, "encoding": "text", "content": content}


async def update_attachment_content(client: TriliumClient, attachment_id: str, content: str) -> dict[str, Any]:
    await client.update_attachment_content(attachment_id, content)
    logger.info("Updated content of attachment '%s'", attachment_id)
    return {"attachment_id": attachment_id, "status": "updated"}


async def delete_attachment(client: TriliumClient, attachment_id: str) -> dict[str, Any]:
    await client.delete_attachment(attachment_id)
    logger.info("Deleted attachment '%s'", attachment_id)
    return {"attachment_id": attachment_id, "status": "deleted"}
