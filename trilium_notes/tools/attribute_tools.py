"""Attribute MCP tools.

Labels (#name=value) tag notes; relations (~name=noteId) link them. All tools
delegate to trilium_notes.core.attribute_operations.
"""
from __future__ import annotations

from typing import Any

from trilium_notes.server import etapi_errors, mcp
from trilium_notes.session import get_client
from trilium_notes.models import (
    GetAttributesInput,
    GetAttributeInput,
    SetAttributeInput,
    DeleteAttributeInput,
)
from trilium_notes.core.attribute_operations import (
    get_attributes,
    get_attribute,
    set_attribute,
    delete_attribute,
)


@mcp.tool(name="get_attributes")
async def get_attributes_tool(input: GetAttributesInput) -> dict[str, Any]:
    """Get all labels and relations of a note.

    Args:
        input (GetAttributesInput): Validated input containing:
            - note_id (str): ID of the note

    Returns:
        {"note_id": str, "labels": [...], "relations": [...]}
        Each attribute has attributeId, type, name, value, position and
        isInheritable.

    Error Handling:
        - NOTE_NOT_FOUND → Error, use search_notes to find valid IDs
    """
    async with etapi_errors():
        return await get_attributes(get_client(), input.note_id)


@mcp.tool(name="get_attribute")
async def get_attribute_tool(input: GetAttributeInput) -> dict[str, Any]:
    """Get a single attribute by ID."""
    async with etapi_errors():
        return await get_attribute(get_client(), input.attribute_id)


@mcp.tool(name="set_attribute")
async def set_attribute_tool(input: SetAttributeInput) -> dict[str, Any]:
    """Add or update a label or relation on a note.

    If the note already has an attribute with this type and name its value
    (and position, if given) is updated; otherwise a new one is created.

    Args:
        input (SetAttributeInput): Validated input containing:
            - note_id (str): ID of the note
            - type (str): "label" or "relation"
            - name (str): Attribute name without # or ~
            - value (str): Label value, or target note ID for relations
            - is_inheritable (bool, optional): Inherited by child notes
            - position (int, optional): Ordering among attributes
            - attribute_id (str, optional): Force the ID of a new attribute

    Returns:
        The attribute plus "status": "created" or "updated"

    Examples:
        - Tag a note: type="label", name="status", value="draft"
        - Link notes: type="relation", name="author", value=<note ID>
    """
    async with etapi_errors():
        return await set_attribute(
            get_client(),
            input.note_id,
            input.type,
            input.name,
            input.value,
            is_inheritable=input.is_inheritable,
            position=input.position,
            attribute_id=input.attribute_id,
        )


@mcp.tool(name="delete_attribute")
async def delete_attribute_tool(input: DeleteAttributeInput) -> dict[str, Any]:
    """Remove an attribute by ID (see get_attributes)."""
    async with etapi_errors():
        return await delete_attribute(get_client(), input.attribute_id)
