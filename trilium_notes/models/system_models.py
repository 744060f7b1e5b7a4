"""Pydantic input models for revision, backup and export operations."""

from __future__ import annotations

import re
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from trilium_notes.constants import BACKUP_NAME_PATTERN

from .base import BaseNoteInput

ExportFormat = Literal["html", "markdown"]

_BACKUP_NAME_RE = re.compile(BACKUP_NAME_PATTERN)


class CreateRevisionInput(BaseNoteInput):
    """Input model for create_revision tool."""

    format: ExportFormat = Field("html", description="Format of the revision content")


class CreateBackupInput(BaseModel):
    """Input model for create_backup tool.

    Examples:
        >>> CreateBackupInput(backup_name="before-migration")
    """

    backup_name: str = Field(
        min_length=1,
        description="Backup name; the file is written as backup-{name}.db",
        examples=["before-migration", "daily-2024-01-15"],
    )

    @field_validator('backup_name')
    @classmethod
    def validate_backup_name(cls, v: str) -> str:
        cleaned = v.strip()
        if not _BACKUP_NAME_RE.match(cleaned):
            raise ValueError(
                "Backup name may only contain letters, digits, hyphens and underscores. "
                f"Invalid name: '{v}'"
            )
        return cleaned


class ExportNoteInput(BaseNoteInput):
    """Input model for export_note tool ('root' exports the whole database)."""

    format: ExportFormat = Field(
        "html",
        description="Export format; 'markdown' is easier to read back",
    )
