"""Destination folder reconciliation."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Callable

from quivr_sync.client import QuivrClient
from quivr_sync.models import FolderResult, RemoteItem

logger = logging.getLogger(__name__)

Notifier = Callable[[str], None]


def log_notice(message: str) -> None:
    """Default notifier: send notices to the log."""
    logger.info(message)


def find_folder(items: Iterable[RemoteItem], name: str) -> RemoteItem | None:
    """Return the first folder called ``name``, in listing order."""
    for item in items:
        if item.is_folder and item.file_name == name:
            return item
    return None


def resolve_folder(
    client: QuivrClient,
    items: Iterable[RemoteItem],
    name: str,
    notify: Notifier = log_notice,
) -> FolderResult:
    """Reuse the folder called ``name`` or ask Quivr to create it.

    At most one create_folder call is issued, and none when the folder
    already exists.
    """
    existing = find_folder(items, name)
    if existing is not None:
        notify(f"Found existing folder: {existing.file_name}")
        return FolderResult(success=True, folder_id=existing.id)

    notify("Creating new folder in Quivr...")
    result = client.create_folder(name)
    if result.success:
        notify(f'Folder "{name}" created successfully with ID: {result.folder_id}.')
    else:
        notify(f'Failed to create folder "{name}".')
    return result
