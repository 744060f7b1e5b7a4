"""Journal notes: day, week, month, year and inbox."""

from __future__ import annotations

from typing import Any

from trilium_notes.client import TriliumClient


async def get_day_note(client: TriliumClient, date: str) -> dict[str, Any]:
    """Return the journal note for ``date`` (YYYY-MM-DD), creating it if needed."""
    return await client.get_day_note(date)


async def get_inbox_note(client: TriliumClient, date: str) -> dict[str, Any]:
    """Return the inbox note, a fixed note or the day note depending on Trilium's setup."""
    return await client.get_inbox_note(date)


async def get_period_note(client: TriliumClient, period: str, kind: str) -> dict[str, Any]:
    """Return the week, month or year journal note for ``period``."""
    fetchers = {
        "week": client.get_week_note,
        "month": client.get_month_note,
        "year": client.get_year_note,
    }
    if kind not in fetchers:
        raise ValueError(f"Unknown journal period '{kind}'. Use week, month or year.")
    return await fetchers[kind](period)
