"""Error types and agent-facing error formatting."""

from __future__ import annotations

from enum import Enum
from typing import Any


class MutationFailure(str, Enum):
    """Condition that made a content mutation fail."""

    NOT_FOUND = "not_found"
    AMBIGUOUS = "ambiguous"
    PATCH_FAILED = "patch_failed"
    NO_MODE_SPECIFIED = "no_mode_specified"
    READBACK_MISMATCH = "readback_mismatch"


class ContentMutationError(ValueError):
    """Raised when edits, patches or read-back verification fail."""

    def __init__(self, kind: MutationFailure, message: str) -> None:
        super().__init__(message)
        self.kind = kind


class TriliumClientError(Exception):
    """Raised when the ETAPI answers with a non-success status."""

    def __init__(self, status: int, code: str, message: str) -> None:
        super().__init__(message)
        self.status = status
        self.code = code
        self.message = message


# Guidance for ETAPI error codes
TRILIUM_ERROR_GUIDANCE: dict[str, str] = {
    "NOTE_NOT_FOUND": (
        "The specified note ID does not exist. Use search_notes to find valid note IDs, "
        "or check for typos."
    ),
    "NOTE_IS_PROTECTED": (
        "This note is protected. Choose a different note or unprotect it in Trilium first."
    ),
    "BRANCH_NOT_FOUND": (
        "The specified branch ID does not exist. Use get_note to retrieve valid branch IDs."
    ),
    "ATTRIBUTE_NOT_FOUND": (
        "The specified attribute ID does not exist. Use get_attributes to list a note's attributes."
    ),
    "ATTACHMENT_NOT_FOUND": "The specified attachment ID does not exist. Verify the ID is correct.",
    "ENTITY_NOT_FOUND": "The specified entity does not exist. Verify the ID is correct.",
    "INVALID_ENTITY_ID": "The entity ID format is invalid. IDs must be 4-32 alphanumeric characters.",
    "NOTE_IS_DELETED": "This note has been deleted. It cannot be accessed or modified.",
    "VALIDATION_ERROR": "The request contains invalid data. Check the field requirements.",
    "ETAPI_TOKEN_INVALID": "The API token is invalid or expired. Check your TRILIUM_TOKEN configuration.",
}

# Fallback guidance when no specific error code is known
STATUS_CODE_GUIDANCE: dict[int, str] = {
    400: "The request was malformed. Check the parameter values and formats.",
    401: "Authentication failed. Verify your TRILIUM_TOKEN is correct.",
    403: "Access denied. The token may lack required permissions.",
    404: "The requested resource was not found. Verify the ID exists.",
    409: "A conflict occurred. The resource may have been modified by another operation.",
    500: "An internal server error occurred in Trilium. Try again or check Trilium logs.",
}

GENERIC_GUIDANCE = "An unexpected error occurred. Check the error details for more information."


def format_trilium_error(error: TriliumClientError) -> dict[str, Any]:
    """Build a structured error with actionable guidance for an ETAPI failure."""
    suggestion = (
        TRILIUM_ERROR_GUIDANCE.get(error.code)
        or STATUS_CODE_GUIDANCE.get(error.status)
        or GENERIC_GUIDANCE
    )
    return {
        "message": error.message,
        "status": error.status,
        "code": error.code,
        "suggestion": suggestion,
    }


def render_error(structured: dict[str, Any]) -> str:
    """Render a structured error as the markdown text returned to the agent."""
    parts = [f"**Error**: {structured['message']}"]

    status = structured.get("status")
    code = structured.get("code")
    if status is not None and code:
        parts.append(f"**Status**: {status} ({code})")
    elif status is not None:
        parts.append(f"**Status**: {status}")
    elif code:
        parts.append(f"**Code**: {code}")

    if structured.get("suggestion"):
        parts.append("")
        parts.append(f"**Suggestion**: {structured['suggestion']}")

    return "\n".join(parts)
