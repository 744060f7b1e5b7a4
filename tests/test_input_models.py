"""Tests for Pydantic input models.

This test suite validates the input validation logic for MCP tools,
ensuring that:
- Valid inputs are accepted and normalized correctly
- Invalid inputs raise ValidationError with descriptive messages
- Content tools accept exactly one content mode
- Schema generation produces correct JSON schemas for MCP
"""

import pytest
from pydantic import ValidationError

from trilium_notes.models import (
    AppendNoteContentInput,
    BaseNoteInput,
    CreateNoteInput,
    ReorderNotesInput,
    SearchNotesInput,
    SearchReplaceBlock,
    SetAttributeInput,
    UpdateNoteContentInput,
    UpdateNoteInput,
)


class TestBaseNoteInput:
    """Test suite for BaseNoteInput model validation."""

    def test_valid_note_id(self):
        """Test that alphanumeric IDs are accepted."""
        model = BaseNoteInput(note_id="a1B2c3D4e5F6")
        assert model.note_id == "a1B2c3D4e5F6"

    def test_root_is_valid(self):
        """Test that the root note ID is accepted."""
        assert BaseNoteInput(note_id="root").note_id == "root"

    def test_whitespace_is_stripped(self):
        """Test that surrounding whitespace is removed."""
        assert BaseNoteInput(note_id="  abcd1234  ").note_id == "abcd1234"

    def test_empty_note_id_rejected(self):
        """Test that blank IDs are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            BaseNoteInput(note_id="   ")
        assert "cannot be empty" in str(exc_info.value)

    @pytest.mark.parametrize("note_id", ["abc", "a" * 33, "bad/id", "has space", "dash-id"])
    def test_malformed_note_id_rejected(self, note_id):
        """Test that IDs outside 4-32 word characters are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            BaseNoteInput(note_id=note_id)
        assert "4-32 alphanumeric" in str(exc_info.value)


class TestCreateNoteInput:
    """Test suite for CreateNoteInput model validation."""

    def test_minimal(self):
        """Test that required fields alone are enough."""
        model = CreateNoteInput(parent_note_id="root", title="Ideas", type="text", content="")
        assert model.format is None
        assert model.note_position is None

    def test_invalid_type_rejected(self):
        """Test that unknown note types are rejected."""
        with pytest.raises(ValidationError):
            CreateNoteInput(parent_note_id="root", title="Ideas", type="spreadsheet", content="")

    def test_blank_title_rejected(self):
        """Test that whitespace-only titles are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            CreateNoteInput(parent_note_id="root", title="  ", type="text", content="")
        assert "title cannot be empty" in str(exc_info.value)

    def test_parent_id_label_in_error(self):
        """Test that parent ID errors name the parent field."""
        with pytest.raises(ValidationError) as exc_info:
            CreateNoteInput(parent_note_id="x", title="Ideas", type="text", content="")
        assert "Parent note ID" in str(exc_info.value)

    def test_note_position_must_be_positive(self):
        """Test that note_position must be greater than zero."""
        with pytest.raises(ValidationError):
            CreateNoteInput(parent_note_id="root", title="Ideas", type="text", content="", note_position=0)


class TestUpdateNoteInput:
    """Test suite for UpdateNoteInput model validation."""

    def test_title_only(self):
        """Test that a single metadata field is enough."""
        assert UpdateNoteInput(note_id="abcd1234", title="Renamed").title == "Renamed"

    def test_requires_a_field(self):
        """Test that an update without any field is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            UpdateNoteInput(note_id="abcd1234")
        assert "at least one" in str(exc_info.value)


class TestUpdateNoteContentInput:
    """Test suite for content mode selection."""

    def test_content_mode(self):
        """Test full replacement input."""
        model = UpdateNoteContentInput(note_id="abcd1234", content="<p>New</p>")
        request = model.to_request()
        assert request.mode == "content"
        assert request.content == "<p>New</p>"

    def test_changes_mode_accepts_dicts(self):
        """Test that change blocks can be given as plain mappings."""
        model = UpdateNoteContentInput(
            note_id="abcd1234",
            changes=[{"old_string": "Draft", "new_string": "Final"}],
        )
        request = model.to_request()
        assert request.mode == "changes"
        assert request.changes == (SearchReplaceBlock(old_string="Draft", new_string="Final"),)

    def test_patch_mode(self):
        """Test unified diff input."""
        model = UpdateNoteContentInput(note_id="abcd1234", patch="@@ -1 +1 @@\n-a\n+b\n")
        assert model.to_request().mode == "patch"

    def test_empty_content_allowed_for_replacement(self):
        """Test that clearing a note with empty content is allowed."""
        assert UpdateNoteContentInput(note_id="abcd1234", content="").to_request().mode == "content"

    def test_no_mode_rejected(self):
        """Test that omitting every mode is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            UpdateNoteContentInput(note_id="abcd1234")
        assert "Exactly one of" in str(exc_info.value)

    def test_several_modes_rejected(self):
        """Test that two modes at once are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            UpdateNoteContentInput(note_id="abcd1234", content="<p>x</p>", patch="@@ -1 +1 @@\n-a\n+b\n")
        assert "Only one of" in str(exc_info.value)

    def test_markdown_with_changes_rejected(self):
        """Test that markdown conversion cannot be combined with diff modes."""
        with pytest.raises(ValidationError) as exc_info:
            UpdateNoteContentInput(
                note_id="abcd1234",
                changes=[{"old_string": "a", "new_string": "b"}],
                format="markdown",
            )
        assert "cannot be used with" in str(exc_info.value)

    def test_markdown_with_content_allowed(self):
        """Test that markdown conversion is allowed for full content."""
        model = UpdateNoteContentInput(note_id="abcd1234", content="# Title", format="markdown")
        assert model.format == "markdown"

    def test_missing_new_string_rejected(self):
        """Test that change blocks require both strings."""
        with pytest.raises(ValidationError):
            UpdateNoteContentInput(note_id="abcd1234", changes=[{"old_string": "a"}])


class TestAppendNoteContentInput:
    """Test suite for AppendNoteContentInput model validation."""

    def test_blank_content_rejected(self):
        """Test that appending nothing is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            AppendNoteContentInput(note_id="abcd1234", content="   ")
        assert "cannot be empty" in str(exc_info.value)

    def test_changes_allowed(self):
        """Test that diff modes are accepted by the append tool."""
        model = AppendNoteContentInput(
            note_id="abcd1234",
            changes=[{"old_string": "a", "new_string": "b"}],
        )
        assert model.to_request().is_diff is True


class TestSearchNotesInput:
    """Test suite for SearchNotesInput model validation."""

    def test_query_only(self):
        """Test that filters default to None."""
        model = SearchNotesInput(query="meeting")
        assert model.limit is None
        assert model.ancestor_note_id is None

    def test_blank_query_rejected(self):
        """Test that whitespace-only queries are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            SearchNotesInput(query="   ")
        assert "cannot be empty" in str(exc_info.value)

    @pytest.mark.parametrize("limit", [0, 10_001])
    def test_limit_bounds(self, limit):
        """Test that limits outside 1-10000 are rejected."""
        with pytest.raises(ValidationError):
            SearchNotesInput(query="meeting", limit=limit)

    def test_order_direction(self):
        """Test that only asc and desc are accepted."""
        assert SearchNotesInput(query="x", order_direction="desc").order_direction == "desc"
        with pytest.raises(ValidationError):
            SearchNotesInput(query="x", order_direction="down")

    def test_ancestor_validated(self):
        """Test that the ancestor note ID uses entity ID validation."""
        with pytest.raises(ValidationError) as exc_info:
            SearchNotesInput(query="x", ancestor_note_id="no")
        assert "Ancestor note ID" in str(exc_info.value)


class TestSchemaGeneration:
    """Test suite for JSON schema generation."""

    def test_content_input_schema(self):
        """Test that the content mutation schema exposes all three modes."""
        schema = UpdateNoteContentInput.model_json_schema()
        assert {"note_id", "content", "changes", "patch", "format"} <= set(schema["properties"])
        assert schema["required"] == ["note_id"]
        assert "examples" in schema

    def test_search_input_schema(self):
        """Test that the search schema carries bounds for limit."""
        schema = SearchNotesInput.model_json_schema()
        assert "query" in schema["required"]
        limit_schema = schema["properties"]["limit"]["anyOf"][0]
        assert limit_schema["minimum"] == 1
        assert limit_schema["maximum"] == 10_000


class TestSetAttributeInput:
    """Test suite for SetAttributeInput model validation."""

    def test_valid_label(self):
        """Test that a label is accepted with a stripped name."""
        model = SetAttributeInput(note_id="abcd1234", type="label", name=" status ", value="draft")
        assert model.name == "status"

    def test_label_value_defaults_to_empty(self):
        """Test that flag-style labels need no value."""
        assert SetAttributeInput(note_id="abcd1234", type="label", name="archived").value == ""

    @pytest.mark.parametrize("name", ["#status", "~author"])
    def test_prefixed_name_rejected(self, name):
        """Test that # and ~ prefixes are rejected with a hint."""
        with pytest.raises(ValidationError) as exc_info:
            SetAttributeInput(note_id="abcd1234", type="label", name=name, value="x")
        assert f"Use '{name[1:]}'" in str(exc_info.value)

    def test_relation_requires_note_id_value(self):
        """Test that a relation must point at a well-formed note ID."""
        with pytest.raises(ValidationError, match="Relation target note ID"):
            SetAttributeInput(note_id="abcd1234", type="relation", name="author", value="not an id")

    def test_invalid_type(self):
        with pytest.raises(ValidationError):
            SetAttributeInput(note_id="abcd1234", type="tag", name="x", value="y")

    def test_forced_attribute_id_validated(self):
        with pytest.raises(ValidationError, match="Attribute ID"):
            SetAttributeInput(note_id="abcd1234", type="label", name="x", attribute_id="ab")


class TestReorderNotesInput:
    """Test suite for ReorderNotesInput model validation."""

    def test_valid(self):
        model = ReorderNotesInput(
            parent_note_id="root",
            note_positions=[{"branch_id": "root_abcd1234", "note_position": 10}],
        )
        assert model.note_positions[0].branch_id == "root_abcd1234"

    def test_empty_positions_rejected(self):
        with pytest.raises(ValidationError):
            ReorderNotesInput(parent_note_id="root", note_positions=[])

    def test_non_positive_position_rejected(self):
        with pytest.raises(ValidationError):
            ReorderNotesInput(
                parent_note_id="root",
                note_positions=[{"branch_id": "root_abcd1234", "note_position": 0}],
            )
