"""Label and relation operations."""

from __future__ import annotations

import logging
from typing import Any, Optional

from trilium_notes.client import TriliumClient

logger = logging.getLogger(__name__)


async def get_attributes(client: TriliumClient, note_id: str) -> dict[str, Any]:
    """Return a note's own and inherited attributes grouped by type.

    Returns:
        ``{"note_id", "labels": [...], "relations": [...]}``.
    """
    note = await client.get_note(note_id)
    attributes = note.get("attributes", [])
    return {
        "note_id": note_id,
        "labels": [attribute for attribute in attributes if attribute.get("type") == "label"],
        "relations": [attribute for attribute in attributes if attribute.get("type") == "relation"],
    }


async def get_attribute(client: TriliumClient, attribute_id: str) -> dict[str, Any]:
    return await client.get_attribute(attribute_id)


async def set_attribute(
    client: TriliumClient,
    note_id: str,
    attribute_type: str,
    name: str,
    value: str,
    *,
    is_inheritable: Optional[bool] = None,
    position: Optional[int] = None,
    attribute_id: Optional[str] = None,
) -> dict[str, Any]:
    """Create an attribute, or update the note's existing one with the same type and name.

    Only attributes owned by ``note_id`` are considered for update; an
    inherited attribute of the same name is shadowed by a new one instead.
    With ``attribute_id`` a new attribute is always created under that ID.

    Returns:
        The ETAPI attribute plus ``status`` (``"created"`` or ``"updated"``).
    """
    existing = None
    if attribute_id is None:
        note = await client.get_note(note_id)
        existing = next(
            (
                attribute
                for attribute in note.get("attributes", [])
                if attribute.get("type") == attribute_type
                and attribute.get("name") == name
                and attribute.get("noteId", note_id) == note_id
            ),
            None,
        )

    if existing is not None:
        patch: dict[str, Any] = {"value": value}
        if position is not None:
            patch["position"] = position
        result = await client.update_attribute(existing["attributeId"], patch)
        logger.info("Updated %s '%s' on note '%s'", attribute_type, name, note_id)
        return {**result, "status": "updated"}

    definition: dict[str, Any] = {
        "noteId": note_id,
        "type": attribute_type,
        "name": name,
        "value": value,
    }
    optional_fields = {
        "isInheritable": is_inheritable,
        "position": position,
        "attributeId": attribute_id,
    }
    definition.update({key: value for key, value in optional_fields.items() if value is not None})

    result = await client.create_attribute(definition)
    logger.info("Created %s '%s' on note '%s'", attribute_type, name, note_id)
    return {**result, "status": "created"}


async def delete_attribute(client: TriliumClient, attribute_id: str) -> dict[str, Any]:
    await client.delete_attribute(attribute_id)
    logger.info("Deleted attribute '%s'", attribute_id)
    return {"attribute_id": attribute_id, "status": "deleted"}
