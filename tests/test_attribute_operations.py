"""Tests for label and relation operations against the fake ETAPI."""

import pytest

from trilium_notes.core.attribute_operations import (
    delete_attribute,
    get_attribute,
    get_attributes,
    set_attribute,
)
from trilium_notes.errors import TriliumClientError


@pytest.fixture
def note(fake_etapi):
    fake_etapi.add_note("book0001", "Dune")
    return "book0001"


class TestGetAttributes:
    """Test suite for reading attributes."""

    @pytest.mark.asyncio
    async def test_grouped_by_type(self, client, fake_etapi, note):
        """Test that labels and relations are returned separately."""
        fake_etapi.add_note("auth0001", "Frank Herbert")
        fake_etapi.add_attribute(note, "label", "genre", "scifi")
        fake_etapi.add_attribute(note, "relation", "author", "auth0001")

        result = await get_attributes(client, note)

        assert result["note_id"] == note
        assert [label["name"] for label in result["labels"]] == ["genre"]
        assert [relation["value"] for relation in result["relations"]] == ["auth0001"]

    @pytest.mark.asyncio
    async def test_note_without_attributes(self, client, note):
        """Test that empty groups are returned for a bare note."""
        assert await get_attributes(client, note) == {"note_id": note, "labels": [], "relations": []}

    @pytest.mark.asyncio
    async def test_get_single_attribute(self, client, fake_etapi, note):
        """Test fetching one attribute by ID."""
        attribute = fake_etapi.add_attribute(note, "label", "status", "draft")
        result = await get_attribute(client, attribute["attributeId"])
        assert result["value"] == "draft"

    @pytest.mark.asyncio
    async def test_unknown_attribute(self, client):
        """Test that a missing attribute surfaces the ETAPI error."""
        with pytest.raises(TriliumClientError) as exc_info:
            await get_attribute(client, "nothere1")
        assert exc_info.value.code == "ATTRIBUTE_NOT_FOUND"


class TestSetAttribute:
    """Test suite for the create-or-update behavior of set_attribute."""

    @pytest.mark.asyncio
    async def test_creates_new_label(self, client, fake_etapi, note):
        """Test that a label is created when none with that name exists."""
        result = await set_attribute(client, note, "label", "status", "draft", is_inheritable=True)

        assert result["status"] == "created"
        assert ("POST", "/attributes") in fake_etapi.requests
        stored = fake_etapi.notes[note]["attributes"]
        assert len(stored) == 1
        assert stored[0]["isInheritable"] is True

    @pytest.mark.asyncio
    async def test_updates_existing_label(self, client, fake_etapi, note):
        """Test that an existing label of the same name is updated in place."""
        existing = fake_etapi.add_attribute(note, "label", "status", "draft")

        result = await set_attribute(client, note, "label", "status", "done", position=30)

        assert result["status"] == "updated"
        assert result["attributeId"] == existing["attributeId"]
        assert existing["value"] == "done"
        assert existing["position"] == 30
        assert ("POST", "/attributes") not in fake_etapi.requests

    @pytest.mark.asyncio
    async def test_same_name_different_type_is_created(self, client, fake_etapi, note):
        """Test that a relation does not update a label that shares its name."""
        fake_etapi.add_note("other001", "Other")
        fake_etapi.add_attribute(note, "label", "related", "x")

        result = await set_attribute(client, note, "relation", "related", "other001")

        assert result["status"] == "created"
        assert len(fake_etapi.notes[note]["attributes"]) == 2

    @pytest.mark.asyncio
    async def test_forced_id_always_creates(self, client, fake_etapi, note):
        """Test that supplying attribute_id skips the lookup and creates."""
        fake_etapi.add_attribute(note, "label", "status", "draft")

        result = await set_attribute(client, note, "label", "status", "again", attribute_id="myattr01")

        assert result["status"] == "created"
        assert result["attributeId"] == "myattr01"
        assert ("GET", f"/notes/{note}") not in fake_etapi.requests

    @pytest.mark.asyncio
    async def test_position_omitted_when_unset(self, client, fake_etapi, note):
        """Test that updating without a position keeps the stored one."""
        existing = fake_etapi.add_attribute(note, "label", "status", "draft", position=20)
        await set_attribute(client, note, "label", "status", "done")
        assert existing["position"] == 20


class TestDeleteAttribute:
    """Test suite for removing attributes."""

    @pytest.mark.asyncio
    async def test_delete(self, client, fake_etapi, note):
        """Test that the attribute disappears from the note."""
        attribute = fake_etapi.add_attribute(note, "label", "status", "draft")
        result = await delete_attribute(client, attribute["attributeId"])
        assert result == {"attribute_id": attribute["attributeId"], "status": "deleted"}
        assert fake_etapi.notes[note]["attributes"] == []
