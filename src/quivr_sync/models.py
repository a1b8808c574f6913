"""Data models for the quivr_sync library."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class RemoteItem:
    """A file or folder record as known to Quivr."""

    id: str
    file_name: str
    is_folder: bool = False
    parent_id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RemoteItem:
        parent_id = data.get("parent_id")
        return cls(
            id=str(data["id"]),
            file_name=str(data.get("file_name") or ""),
            is_folder=bool(data.get("is_folder", False)),
            parent_id=str(parent_id) if parent_id is not None else None,
        )


@dataclass(frozen=True)
class KnowledgeData:
    """Metadata sent as the ``knowledge_data`` field of every create/upload."""

    parent_id: str | None
    file_name: str
    is_folder: bool = False

    def to_json(self) -> str:
        return json.dumps(asdict(self))


@dataclass(frozen=True)
class LocalDocument:
    """A markdown document found in the local vault."""

    path: Path
    relative_path: str

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def extension(self) -> str:
        return self.path.suffix.lstrip(".").lower()

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()


@dataclass(frozen=True)
class ListResult:
    """Result of listing remote items."""

    success: bool
    items: list[RemoteItem] = field(default_factory=list)
    error: str | None = None
    status_code: int | None = None

    @property
    def folders(self) -> list[RemoteItem]:
        return [item for item in self.items if item.is_folder]


@dataclass(frozen=True)
class FolderResult:
    """Result of resolving or creating a remote folder."""

    success: bool
    folder_id: str | None = None
    created: bool = False
    error: str | None = None


@dataclass(frozen=True)
class UploadResult:
    """Result of an upload operation."""

    success: bool
    file_name: str
    parent_id: str | None
    error: str | None = None
    status_code: int | None = None
    response: Any = None


@dataclass(frozen=True)
class SyncOutcome:
    """Outcome of one sync invocation.

    ``results`` holds one entry per attempted document, in enumeration order.
    When ``aborted`` is set no upload was attempted.
    """

    folder_id: str | None
    results: list[UploadResult] = field(default_factory=list)
    aborted: bool = False
    error: str | None = None

    @property
    def failed(self) -> list[UploadResult]:
        return [result for result in self.results if not result.success]
