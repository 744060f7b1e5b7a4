"""Data models for server configuration and content mutation requests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from trilium_notes.models.base import SearchReplaceBlock


@dataclass(frozen=True)
class TriliumConfiguration:
    """Normalized connection settings for a Trilium ETAPI endpoint."""

    url: str
    token: str
    transport: str
    http_port: int

    def as_payload(self) -> dict[str, Any]:
        """Return a serializable payload representation (token redacted)."""
        return {
            "url": self.url,
            "transport": self.transport,
            "http_port": self.http_port,
            "token_configured": bool(self.token),
        }


@dataclass(frozen=True)
class ContentMutationRequest:
    """One of three ways of producing new note content.

    Exactly one of ``content`` (full replacement), ``changes`` (ordered
    search/replace blocks) or ``patch`` (unified diff) may be set. A request with
    none set is representable so the resolver can report it, but setting more
    than one is rejected at construction.
    """

    content: Optional[str] = None
    changes: Optional[tuple[SearchReplaceBlock, ...]] = None
    patch: Optional[str] = None

    def __post_init__(self) -> None:
        if self.changes is not None and not isinstance(self.changes, tuple):
            object.__setattr__(self, "changes", tuple(self.changes))

        populated = [
            name
            for name in ("content", "changes", "patch")
            if getattr(self, name) is not None
        ]
        if len(populated) > 1:
            raise ValueError(
                "Only one of \"content\", \"changes\", or \"patch\" can be provided at a time "
                f"(got: {', '.join(populated)})."
            )

    @property
    def mode(self) -> Optional[str]:
        """Name of the populated field, or ``None`` when nothing was supplied."""
        if self.content is not None:
            return "content"
        if self.changes is not None:
            return "changes"
        if self.patch is not None:
            return "patch"
        return None

    @property
    def is_diff(self) -> bool:
        """True for modes that operate on the stored content."""
        return self.mode in ("changes", "patch")
