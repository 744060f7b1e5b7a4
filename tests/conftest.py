"""Shared fixtures: an in-memory ETAPI served through ``httpx.MockTransport``."""

from __future__ import annotations

import json
from typing import Callable, Optional

import httpx
import pytest

from trilium_notes.client import TriliumClient

BASE_URL = "http://trilium.test/etapi"
TOKEN = "test-token"
EXPORT_PREFIX = b"PK\x03\x04"


class FakeEtapi:
    """Minimal stand-in for a Trilium server's ETAPI.

    ``normalize`` simulates a server that silently rewrites stored content.
    ``requests`` records every ``(method, path)`` that was handled.
    """

    def __init__(self) -> None:
        self.notes: dict[str, dict] = {}
        self.contents: dict[str, str] = {}
        self.branches: dict[str, dict] = {}
        self.attributes: dict[str, dict] = {}
        self.attachments: dict[str, dict] = {}
        self.attachment_contents: dict[str, bytes] = {}
        self.revisions: list[tuple[str, str]] = []
        self.backups: list[str] = []
        self.refreshed: list[str] = []
        self.requests: list[tuple[str, str]] = []
        self.search_params: list[dict[str, str]] = []
        self.normalize: Optional[Callable[[str], str]] = None
        self._counter = 0

    def _next_id(self, prefix: str) -> str:
        self._counter += 1
        return f"{prefix}{self._counter:04d}"

    def add_note(self, note_id: str, title: str, content: str = "", parent: str = "root") -> None:
        self.notes[note_id] = {
            "noteId": note_id,
            "title": title,
            "type": "text",
            "mime": "text/html",
            "attributes": [],
            "childNoteIds": [],
            "childBranchIds": [],
            "parentNoteIds": [],
            "parentBranchIds": [],
        }
        self.contents[note_id] = content
        self.add_branch(note_id, parent)

    def add_branch(self, note_id: str, parent: str, prefix: Optional[str] = None) -> dict:
        branch_id = f"{parent}_{note_id}"
        branch = {
            "branchId": branch_id,
            "noteId": note_id,
            "parentNoteId": parent,
            "prefix": prefix,
            "notePosition": 10 * (len(self.notes[parent]["childNoteIds"]) + 1) if parent in self.notes else 0,
        }
        self.branches[branch_id] = branch
        self.notes[note_id]["parentNoteIds"].append(parent)
        self.notes[note_id]["parentBranchIds"].append(branch_id)
        if parent in self.notes:
            self.notes[parent]["childNoteIds"].append(note_id)
            self.notes[parent]["childBranchIds"].append(branch_id)
        return branch

    def remove_branch(self, branch_id: str) -> None:
        branch = self.branches.pop(branch_id)
        note_id, parent = branch["noteId"], branch["parentNoteId"]
        note = self.notes[note_id]
        note["parentNoteIds"].remove(parent)
        note["parentBranchIds"].remove(branch_id)
        if parent in self.notes:
            self.notes[parent]["childNoteIds"].remove(note_id)
            self.notes[parent]["childBranchIds"].remove(branch_id)
        # A note without branches is deleted
        if not note["parentBranchIds"]:
            del self.notes[note_id]
            del self.contents[note_id]

    def add_attribute(self, note_id: str, attribute_type: str, name: str, value: str = "", **extra) -> dict:
        attribute_id = extra.pop("attributeId", None) or self._next_id("attr")
        attribute = {
            "attributeId": attribute_id,
            "noteId": note_id,
            "type": attribute_type,
            "name": name,
            "value": value,
            "position": extra.pop("position", 10),
            "isInheritable": extra.pop("isInheritable", False),
        }
        self.attributes[attribute_id] = attribute
        self.notes[note_id]["attributes"].append(attribute)
        return attribute

    def add_attachment(self, owner_id: str, mime: str, content: bytes, title: str = "file") -> dict:
        attachment_id = self._next_id("att")
        attachment = {
            "attachmentId": attachment_id,
            "ownerId": owner_id,
            "role": "image" if mime.startswith("image/") else "file",
            "mime": mime,
            "title": title,
            "position": 10,
        }
        self.attachments[attachment_id] = attachment
        self.attachment_contents[attachment_id] = content
        return attachment

    def journal_note(self, kind: str, value: str) -> dict:
        note_id = f"{kind}{value.replace('-', '')}"
        if note_id not in self.notes:
            self.add_note(note_id, value)
        return self.notes[note_id]

    @staticmethod
    def _error(status: int, code: str, message: str) -> httpx.Response:
        return httpx.Response(status, json={"status": status, "code": code, "message": message})

    def handle(self, request: httpx.Request) -> httpx.Response:
        if request.headers.get("Authorization") != TOKEN:
            return self._error(401, "NOT_AUTHENTICATED", "Not authenticated")

        path = request.url.path
        if path.startswith("/etapi"):
            path = path[len("/etapi"):]
        parts = [part for part in path.split("/") if part]
        self.requests.append((request.method, path))
        method = request.method

        if parts == ["app-info"]:
            return httpx.Response(200, json={"appVersion": "0.90.0", "dbVersion": 228})

        if parts == ["create-note"] and method == "POST":
            body = json.loads(request.content)
            note_id = self._next_id("created")
            self.add_note(note_id, body["title"], body["content"], body["parentNoteId"])
            self.notes[note_id]["type"] = body["type"]
            branch = self.branches[f"{body['parentNoteId']}_{note_id}"]
            return httpx.Response(201, json={"note": self.notes[note_id], "branch": branch})

        if parts == ["notes"] and method == "GET":
            params = dict(request.url.params)
            self.search_params.append(params)
            term = params.get("search", "").lower()
            results = [note for note in self.notes.values() if term in note["title"].lower()]
            return httpx.Response(200, json={"results": results})

        if parts[:1] == ["branches"]:
            return self._handle_branches(request, parts)
        if parts[:1] == ["attributes"]:
            return self._handle_attributes(request, parts)
        if parts[:1] == ["attachments"]:
            return self._handle_attachments(request, parts)

        if len(parts) == 2 and parts[0] == "refresh-note-ordering" and method == "POST":
            self.refreshed.append(parts[1])
            return httpx.Response(204)

        if len(parts) == 2 and parts[0] == "backup" and method == "PUT":
            self.backups.append(parts[1])
            return httpx.Response(204)

        if len(parts) == 3 and parts[0] == "calendar" and method == "GET":
            kind = {"days": "day", "weeks": "week", "months": "month", "years": "year"}[parts[1]]
            return httpx.Response(200, json=self.journal_note(kind, parts[2]))

        if len(parts) == 2 and parts[0] == "inbox" and method == "GET":
            return httpx.Response(200, json=self.journal_note("day", parts[1]))

        if len(parts) >= 2 and parts[0] == "notes":
            note_id = parts[1]
            if note_id not in self.notes:
                return self._error(404, "NOTE_NOT_FOUND", f"Note '{note_id}' not found.")

            if len(parts) == 3 and parts[2] == "content":
                if method == "GET":
                    return httpx.Response(200, text=self.contents[note_id])
                if method == "PUT":
                    content = request.content.decode("utf-8")
                    if self.normalize is not None:
                        content = self.normalize(content)
                    self.contents[note_id] = content
                    return httpx.Response(204)

            if len(parts) == 3 and parts[2] == "revision" and method == "POST":
                self.revisions.append((note_id, request.url.params.get("format", "html")))
                return httpx.Response(204)

            if len(parts) == 3 and parts[2] == "export" and method == "GET":
                archive = EXPORT_PREFIX + f"{note_id}:{request.url.params.get('format')}".encode()
                return httpx.Response(200, content=archive, headers={"Content-Type": "application/zip"})

            if len(parts) == 2:
                if method == "GET":
                    return httpx.Response(200, json=self.notes[note_id])
                if method == "PATCH":
                    self.notes[note_id].update(json.loads(request.content))
                    return httpx.Response(200, json=self.notes[note_id])
                if method == "DELETE":
                    for branch_id in list(self.notes[note_id]["parentBranchIds"]):
                        self.remove_branch(branch_id)
                    return httpx.Response(204)

        return self._error(400, "BAD_REQUEST", f"Unsupported request {method} {path}")

    def _handle_branches(self, request: httpx.Request, parts: list[str]) -> httpx.Response:
        if len(parts) == 1 and request.method == "POST":
            body = json.loads(request.content)
            note_id, parent = body["noteId"], body["parentNoteId"]
            for note in (note_id, parent):
                if note not in self.notes:
                    return self._error(404, "NOTE_NOT_FOUND", f"Note '{note}' not found.")
            existing = self.branches.get(f"{parent}_{note_id}")
            if existing is not None:
                existing["prefix"] = body.get("prefix", existing["prefix"])
                return httpx.Response(200, json=existing)
            return httpx.Response(201, json=self.add_branch(note_id, parent, body.get("prefix")))

        branch_id = parts[1]
        if branch_id not in self.branches:
            return self._error(404, "BRANCH_NOT_FOUND", f"Branch '{branch_id}' not found.")
        if request.method == "GET":
            return httpx.Response(200, json=self.branches[branch_id])
        if request.method == "PATCH":
            self.branches[branch_id].update(json.loads(request.content))
            return httpx.Response(200, json=self.branches[branch_id])
        if request.method == "DELETE":
            self.remove_branch(branch_id)
            return httpx.Response(204)
        return self._error(400, "BAD_REQUEST", "Unsupported branch request")

    def _handle_attributes(self, request: httpx.Request, parts: list[str]) -> httpx.Response:
        if len(parts) == 1 and request.method == "POST":
            body = json.loads(request.content)
            if body["noteId"] not in self.notes:
                return self._error(404, "NOTE_NOT_FOUND", f"Note '{body['noteId']}' not found.")
            attribute = self.add_attribute(
                body.pop("noteId"), body.pop("type"), body.pop("name"), body.pop("value", ""), **body
            )
            return httpx.Response(201, json=attribute)

        attribute_id = parts[1]
        if attribute_id not in self.attributes:
            return self._error(404, "ATTRIBUTE_NOT_FOUND", f"Attribute '{attribute_id}' not found.")
        attribute = self.attributes[attribute_id]
        if request.method == "GET":
            return httpx.Response(200, json=attribute)
        if request.method == "PATCH":
            attribute.update(json.loads(request.content))
            return httpx.Response(200, json=attribute)
        if request.method == "DELETE":
            del self.attributes[attribute_id]
            self.notes[attribute["noteId"]]["attributes"].remove(attribute)
            return httpx.Response(204)
        return self._error(400, "BAD_REQUEST", "Unsupported attribute request")

    def _handle_attachments(self, request: httpx.Request, parts: list[str]) -> httpx.Response:
        if len(parts) == 1 and request.method == "POST":
            body = json.loads(request.content)
            if body["ownerId"] not in self.notes:
                return self._error(404, "NOTE_NOT_FOUND", f"Note '{body['ownerId']}' not found.")
            attachment = self.add_attachment(
                body["ownerId"], body["mime"], body["content"].encode("utf-8"), body["title"]
            )
            attachment["role"] = body["role"]
            attachment["position"] = body.get("position", 10)
            return httpx.Response(201, json=attachment)

        attachment_id = parts[1]
        if attachment_id not in self.attachments:
            return self._error(404, "ATTACHMENT_NOT_FOUND", f"Attachment '{attachment_id}' not found.")

        if len(parts) == 3 and parts[2] == "content":
            if request.method == "GET":
                return httpx.Response(200, content=self.attachment_contents[attachment_id])
            if request.method == "PUT":
                self.attachment_contents[attachment_id] = request.content
                return httpx.Response(204)

        if len(parts) == 2:
            if request.method == "GET":
                return httpx.Response(200, json=self.attachments[attachment_id])
            if request.method == "PATCH":
                self.attachments[attachment_id].update(json.loads(request.content))
                return httpx.Response(200, json=self.attachments[attachment_id])
            if request.method == "DELETE":
                del self.attachments[attachment_id]
                del self.attachment_contents[attachment_id]
                return httpx.Response(204)
        return self._error(400, "BAD_REQUEST", "Unsupported attachment request")


@pytest.fixture
def fake_etapi() -> FakeEtapi:
    """A fake server holding only the root note."""
    server = FakeEtapi()
    server.add_note("root", "root", parent="none")
    return server


@pytest.fixture
def client(fake_etapi: FakeEtapi) -> TriliumClient:
    """A real TriliumClient talking to ``fake_etapi``."""
    return TriliumClient(BASE_URL, TOKEN, transport=httpx.MockTransport(fake_etapi.handle))
