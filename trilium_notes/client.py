"""Async client for the Trilium ETAPI."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from trilium_notes.constants import REQUEST_TIMEOUT_SECONDS
from trilium_notes.errors import TriliumClientError

logger = logging.getLogger(__name__)


class TriliumClient:
    """Thin typed wrapper over the ETAPI REST endpoints.

    Args:
        base_url: Normalized ETAPI root, e.g. ``http://localhost:37740/etapi``.
        token: ETAPI token sent in the ``Authorization`` header.
        timeout: Per-request timeout in seconds.
        transport: Optional httpx transport (used by tests to mock the server).
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Authorization": token},
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "TriliumClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    @staticmethod
    def _error_from_response(response: httpx.Response) -> TriliumClientError:
        """Build a :class:`TriliumClientError` from an ETAPI error body."""
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict):
            return TriliumClientError(
                int(body.get("status", response.status_code)),
                str(body.get("code", "UNKNOWN_ERROR")),
                str(body.get("message", response.reason_phrase)),
            )
        return TriliumClientError(response.status_code, "UNKNOWN_ERROR", response.reason_phrase)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        text: Optional[str] = None,
        params: Optional[dict[str, Any]] = None,
        as_text: bool = False,
        as_bytes: bool = False,
    ) -> Any:
        """Send a request and decode the response.

        Raises:
            TriliumClientError: If the server answers with a non-2xx status.
            httpx.HTTPError: On transport failures (connection refused, timeout).
        """
        headers = {}
        content = None
        if text is not None:
            headers["Content-Type"] = "text/plain"
            content = text.encode("utf-8")

        query = {key: value for key, value in (params or {}).items() if value is not None}

        response = await self._http.request(
            method,
            path,
            json=json,
            content=content,
            params=query or None,
            headers=headers,
        )

        if response.is_error:
            error = self._error_from_response(response)
            logger.warning(
                "ETAPI %s %s failed: %s %s (%s)",
                method,
                path,
                error.status,
                error.code,
                error.message,
            )
            raise error

        if response.status_code == 204:
            return None
        if as_text:
            return response.text
        if as_bytes:
            return response.content
        return response.json()

    # ==========================================================================
    # NOTES
    # ==========================================================================

    async def create_note(self, definition: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", "/create-note", json=definition)

    async def get_note(self, note_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/notes/{note_id}")

    async def get_note_content(self, note_id: str) -> str:
        return await self._request("GET", f"/notes/{note_id}/content", as_text=True)

    async def update_note(self, note_id: str, patch: dict[str, Any]) -> dict[str, Any]:
        return await self._request("PATCH", f"/notes/{note_id}", json=patch)

    async def update_note_content(self, note_id: str, content: str) -> None:
        await self._request("PUT", f"/notes/{note_id}/content", text=content)

    async def delete_note(self, note_id: str) -> None:
        await self._request("DELETE", f"/notes/{note_id}")

    # ==========================================================================
    # SEARCH & SYSTEM
    # ==========================================================================

    async def search_notes(
        self,
        search: str,
        *,
        fast_search: Optional[bool] = None,
        include_archived_notes: Optional[bool] = None,
        ancestor_note_id: Optional[str] = None,
        order_by: Optional[str] = None,
        order_direction: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> dict[str, Any]:
        """Run an ETAPI search; ``None`` filters are omitted from the query string."""
        return await self._request(
            "GET",
            "/notes",
            params={
                "search": search,
                "fastSearch": fast_search,
                "includeArchivedNotes": include_archived_notes,
                "ancestorNoteId": ancestor_note_id,
                "orderBy": order_by,
                "orderDirection": order_direction,
                "limit": limit,
            },
        )

    async def get_app_info(self) -> dict[str, Any]:
        return await self._request("GET", "/app-info")

    # ==========================================================================
    # BRANCHES
    # ==========================================================================

    async def create_branch(self, definition: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", "/branches", json=definition)

    async def get_branch(self, branch_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/branches/{branch_id}")

    async def update_branch(self, branch_id: str, patch: dict[str, Any]) -> dict[str, Any]:
        return await self._request("PATCH", f"/branches/{branch_id}", json=patch)

    async def delete_branch(self, branch_id: str) -> None:
        await self._request("DELETE", f"/branches/{branch_id}")

    async def refresh_note_ordering(self, parent_note_id: str) -> None:
        """Push changed branch positions of ``parent_note_id``'s children to connected clients."""
        await self._request("POST", f"/refresh-note-ordering/{parent_note_id}")

    # ==========================================================================
    # ATTRIBUTES
    # ==========================================================================

    async def create_attribute(self, definition: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", "/attributes", json=definition)

    async def get_attribute(self, attribute_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/attributes/{attribute_id}")

    async def update_attribute(self, attribute_id: str, patch: dict[str, Any]) -> dict[str, Any]:
        return await self._request("PATCH", f"/attributes/{attribute_id}", json=patch)

    async def delete_attribute(self, attribute_id: str) -> None:
        await self._request("DELETE", f"/attributes/{attribute_id}")

    # ==========================================================================
    # ATTACHMENTS
    # ==========================================================================

    async def create_attachment(self, definition: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", "/attachments", json=definition)

    async def get_attachment(self, attachment_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/attachments/{attachment_id}")

    async def update_attachment(self, attachment_id: str, patch: dict[str, Any]) -> dict[str, Any]:
        return await self._request("PATCH", f"/attachments/{attachment_id}", json=patch)

    async def delete_attachment(self, attachment_id: str) -> None:
        await self._request("DELETE", f"/attachments/{attachment_id}")

    async def get_attachment_content(self, attachment_id: str) -> str:
        return await self._request("GET", f"/attachments/{attachment_id}/content", as_text=True)

    async def get_attachment_bytes(self, attachment_id: str) -> bytes:
        return await self._request("GET", f"/attachments/{attachment_id}/content", as_bytes=True)

    async def update_attachment_content(self, attachment_id: str, content: str) -> None:
        await self._request("PUT", f"/attachments/{attachment_id}/content", text=content)

    # ==========================================================================
    # CALENDAR
    # ==========================================================================

    async def get_day_note(self, date: str) -> dict[str, Any]:
        return await self._request("GET", f"/calendar/days/{date}")

    async def get_week_note(self, week: str) -> dict[str, Any]:
        return await self._request("GET", f"/calendar/weeks/{week}")

    async def get_month_note(self, month: str) -> dict[str, Any]:
        return await self._request("GET", f"/calendar/months/{month}")

    async def get_year_note(self, year: str) -> dict[str, Any]:
        return await self._request("GET", f"/calendar/years/{year}")

    async def get_inbox_note(self, date: str) -> dict[str, Any]:
        return await self._request("GET", f"/inbox/{date}")

    # ==========================================================================
    # REVISIONS, BACKUP & EXPORT
    # ==========================================================================

    async def create_revision(self, note_id: str, format: str = "html") -> None:
        await self._request("POST", f"/notes/{note_id}/revision", params={"format": format})

    async def create_backup(self, backup_name: str) -> None:
        """Write ``backup-{backup_name}.db`` into the Trilium data directory."""
        await self._request("PUT", f"/backup/{backup_name}")

    async def export_note(self, note_id: str, format: str = "html") -> bytes:
        """Download ``note_id`` and its subtree as a ZIP archive."""
        return await self._request(
            "GET", f"/notes/{note_id}/export", params={"format": format}, as_bytes=True
        )
