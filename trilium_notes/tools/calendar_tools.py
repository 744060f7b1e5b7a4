"""Journal MCP tools: day, week, month, year and inbox notes."""
from __future__ import annotations

from typing import Any

from trilium_notes.server import etapi_errors, mcp
from trilium_notes.session import get_client
from trilium_notes.models import DateInput, PeriodNoteInput
from trilium_notes.core.calendar_operations import get_day_note, get_inbox_note, get_period_note


@mcp.tool(name="get_day_note")
async def get_day_note_tool(input: DateInput) -> dict[str, Any]:
    """Get the journal note for a date, creating it if it does not exist yet.

    Args:
        input (DateInput): Validated input containing:
            - date (str, optional): YYYY-MM-DD, defaults to today

    Returns:
        The ETAPI note object of the day note
    """
    async with etapi_errors():
        return await get_day_note(get_client(), input.resolved_date())


@mcp.tool(name="get_inbox_note")
async def get_inbox_note_tool(input: DateInput) -> dict[str, Any]:
    """Get the inbox note for quick capture.

    Depending on Trilium's configuration this is a fixed note (#inbox label)
    or the day note of the given date.
    """
    async with etapi_errors():
        return await get_inbox_note(get_client(), input.resolved_date())


@mcp.tool(name="get_period_note")
async def get_period_note_tool(input: PeriodNoteInput) -> dict[str, Any]:
    """Get the journal note for a week (2024-W03), month (2024-01) or year (2024)."""
    async with etapi_errors():
        return await get_period_note(get_client(), input.period, input.kind)
