"""Pydantic input models for MCP tool validation.

This package defines Pydantic models that provide automatic input validation
for all MCP tools. Each model represents the input schema for one or more tools,
with field-level validation, type checking, and descriptive error messages.

Architecture:
- base: Base models (BaseNoteInput, SearchReplaceBlock) for common validation
- note_models: Input models for note CRUD and content mutation operations
- search_models: Input models for search and tree navigation operations
- attribute_models: Input models for labels and relations
- attachment_models: Input models for note attachments
- organization_models: Input models for moving, cloning and reordering notes
- calendar_models: Input models for journal (day, week, month, year, inbox) notes
- system_models: Input models for revisions, backups and exports

Usage:
    from trilium_notes.models import UpdateNoteContentInput, SearchNotesInput
"""

from .base import BaseNoteInput, SearchReplaceBlock
from .note_models import (
    CreateNoteInput,
    GetNoteInput,
    GetNoteContentInput,
    UpdateNoteInput,
    ContentMutationInput,
    UpdateNoteContentInput,
    AppendNoteContentInput,
    DeleteNoteInput,
)
from .search_models import (
    SearchNotesInput,
    GetNoteTreeInput,
)
from .attribute_models import (
    GetAttributesInput,
    GetAttributeInput,
    SetAttributeInput,
    DeleteAttributeInput,
)
from .attachment_models import (
    CreateAttachmentInput,
    GetAttachmentInput,
    GetAttachmentContentInput,
    UpdateAttachmentInput,
    UpdateAttachmentContentInput,
    DeleteAttachmentInput,
)
from .organization_models import (
    MoveNoteInput,
    CloneNoteInput,
    BranchPosition,
    ReorderNotesInput,
)
from .calendar_models import DateInput, PeriodNoteInput
from .system_models import CreateRevisionInput, CreateBackupInput, ExportNoteInput

__all__ = [
    # Base models
    "BaseNoteInput",
    "SearchReplaceBlock",
    # Note models
    "CreateNoteInput",
    "GetNoteInput",
    "GetNoteContentInput",
    "UpdateNoteInput",
    "ContentMutationInput",
    "UpdateNoteContentInput",
    "AppendNoteContentInput",
    "DeleteNoteInput",
    # Search models
    "SearchNotesInput",
    "GetNoteTreeInput",
    # Attribute models
    "GetAttributesInput",
    "GetAttributeInput",
    "SetAttributeInput",
    "DeleteAttributeInput",
    # Attachment models
    "CreateAttachmentInput",
    "GetAttachmentInput",
    "GetAttachmentContentInput",
    "UpdateAttachmentInput",
    "UpdateAttachmentContentInput",
    "DeleteAttachmentInput",
    # Organization models
    "MoveNoteInput",
    "CloneNoteInput",
    "BranchPosition",
    "ReorderNotesInput",
    # Calendar models
    "DateInput",
    "PeriodNoteInput",
    # System models
    "CreateRevisionInput",
    "CreateBackupInput",
    "ExportNoteInput",
]
