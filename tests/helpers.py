"""Shared test helpers for quivr_sync tests."""

from __future__ import annotations

import json
from dataclasses import dataclass
from email.parser import BytesParser
from email.policy import default
from typing import Any

import httpx


@dataclass
class MultipartField:
    """One decoded multipart/form-data field."""

    body: bytes
    filename: str | None = None
    content_type: str | None = None


def parse_multipart(request: httpx.Request) -> dict[str, MultipartField]:
    """Decode the multipart body of a captured request."""
    header = f"Content-Type: {request.headers['Content-Type']}\r\n\r\n".encode()
    message = BytesParser(policy=default).parsebytes(header + request.content)
    fields: dict[str, MultipartField] = {}
    for part in message.iter_parts():
        name = part.get_param("name", header="content-disposition")
        fields[name] = MultipartField(
            body=part.get_payload(decode=True),
            filename=part.get_filename(),
            content_type=part["Content-Type"],
        )
    return fields


class FakeQuivr:
    """In-memory stand-in for the Quivr API, served through httpx.MockTransport."""

    def __init__(self, items: list[dict[str, Any]] | None = None) -> None:
        self.items = list(items or [])
        self.requests: list[httpx.Request] = []
        self.folder_creations: list[dict[str, Any]] = []
        self.uploads: list[tuple[dict[str, Any], MultipartField]] = []
        self.list_status = 200
        self.list_error: Exception | None = None
        self.create_status = 200
        self.failing_uploads: set[str] = set()
        self.broken_uploads: set[str] = set()
        self._next_id = 100

    def _new_id(self) -> str:
        self._next_id += 1
        return f"id-{self._next_id}"

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == "GET" and request.url.path == "/knowledge/files":
            if self.list_error is not None:
                raise self.list_error
            if self.list_status != 200:
                return httpx.Response(self.list_status, json={"detail": "listing failed"})
            return httpx.Response(200, json=self.items)

        if request.method == "POST" and request.url.path == "/knowledge/":
            fields = parse_multipart(request)
            data = json.loads(fields["knowledge_data"].body)
            if data["is_folder"]:
                self.folder_creations.append(data)
                if self.create_status != 200:
                    return httpx.Response(self.create_status, text="cannot create folder")
                item = {**data, "id": self._new_id()}
                self.items.append(item)
                return httpx.Response(200, json=item)

            self.uploads.append((data, fields["file"]))
            if data["file_name"] in self.broken_uploads:
                raise httpx.ConnectError("connection reset", request=request)
            if data["file_name"] in self.failing_uploads:
                return httpx.Response(500, json={"detail": "server error"})
            item = {**data, "id": self._new_id()}
            self.items.append(item)
            return httpx.Response(200, json=item)

        return httpx.Response(404, json={"detail": "not found"})

    def http_client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))
