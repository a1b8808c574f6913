"""Sync orchestration: enumerate, reconcile, upload."""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from quivr_sync.client import QuivrClient, content_type_for
from quivr_sync.config import DEFAULT_FOLDER_NAME, Settings
from quivr_sync.exceptions import SyncInProgressError
from quivr_sync.models import KnowledgeData, LocalDocument, SyncOutcome, UploadResult
from quivr_sync.reconciler import Notifier, log_notice, resolve_folder
from quivr_sync.scanner import scan_documents

logger = logging.getLogger(__name__)

# Serializes sync_vault calls, which each build their own Synchronizer
_sync_vault_lock = threading.Lock()


class Synchronizer:
    """Uploads a vault's markdown documents into one Quivr folder.

    Uploads run one at a time in enumeration order. A failed upload is
    reported and skipped; only a failed folder resolution stops a run.
    A document whose bytes cannot be read gets a failed result and no
    upload call. Overlapping runs on the same instance are rejected.
    """

    def __init__(self, client: QuivrClient, notify: Notifier | None = None) -> None:
        self.client = client
        self.notify = notify or log_notice
        self._lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        return self._lock.locked()

    def run(
        self,
        root: Path | str,
        folder_name: str = DEFAULT_FOLDER_NAME,
        *,
        abort_on_list_failure: bool = True,
    ) -> SyncOutcome:
        """Run one sync of ``root`` into the folder ``folder_name``.

        Raises:
            SyncInProgressError: If this synchronizer is already running
            ScanError: If root is not a readable directory
        """
        if not self._lock.acquire(blocking=False):
            raise SyncInProgressError("A sync is already in progress")
        try:
            return self._run(Path(root), folder_name, abort_on_list_failure)
        finally:
            self._lock.release()

    def _run(self, root: Path, folder_name: str, abort_on_list_failure: bool) -> SyncOutcome:
        documents = scan_documents(root)
        listing = self.client.list_items()

        if listing.success:
            names = ", ".join(item.file_name for item in listing.items)
            self.notify(f"Found Quivr files: {names}")
        elif abort_on_list_failure:
            error = listing.error or "Failed to fetch files"
            self.notify(f"{error}. Sync aborted.")
            return SyncOutcome(folder_id=None, aborted=True, error=error)
        else:
            self.notify("Error fetching files. Continuing as if Quivr were empty.")

        folder = resolve_folder(self.client, listing.items, folder_name, self.notify)
        if not folder.success or not folder.folder_id:
            self.notify("Failed to determine folder ID for uploads.")
            return SyncOutcome(
                folder_id=None,
                aborted=True,
                error=folder.error or "Failed to determine folder ID for uploads.",
            )

        results = [self._upload(document, folder.folder_id) for document in documents]
        logger.info(f"Sync of {root} finished ({len(results)} document(s) processed)")
        return SyncOutcome(folder_id=folder.folder_id, results=results)

    def _upload(self, document: LocalDocument, folder_id: str) -> UploadResult:
        self.notify(f"Uploading file: {document.name}")
        try:
            content = document.read_bytes()
        except OSError as e:
            error_msg = f'Error reading file "{document.name}": {e}'
            logger.error(error_msg)
            self.notify(error_msg)
            return UploadResult(
                success=False, file_name=document.name, parent_id=folder_id, error=error_msg
            )

        knowledge_data = KnowledgeData(
            parent_id=folder_id, file_name=document.name, is_folder=False
        )
        try:
            result = self.client.upload_file(
                knowledge_data, content, content_type_for(document.extension)
            )
        except Exception as e:
            error_msg = f'Error uploading file "{document.name}": {e}'
            logger.error(error_msg)
            result = UploadResult(
                success=False, file_name=document.name, parent_id=folder_id, error=error_msg
            )
        if result.success:
            self.notify(f"File uploaded successfully: {document.name}")
        else:
            self.notify(result.error or f'Error uploading file "{document.name}"')
        return result


def sync_vault(
    settings: Settings,
    root: Path | str,
    *,
    notify: Notifier | None = None,
    client: QuivrClient | None = None,
) -> SyncOutcome:
    """Run a single sync with explicit settings.

    A client is built from ``settings`` unless one is given, and closed
    afterwards in that case. Only one sync_vault call runs at a time in a
    process.

    Raises:
        SyncInProgressError: If another sync_vault call is running
        ConfigError: If settings carry no API key
    """
    if not _sync_vault_lock.acquire(blocking=False):
        raise SyncInProgressError("A sync is already in progress")
    try:
        owns_client = client is None
        if client is None:
            client = QuivrClient(settings.api_key, settings.api_url, timeout=settings.timeout)
        try:
            return Synchronizer(client, notify).run(
                root,
                settings.folder_name,
                abort_on_list_failure=settings.abort_on_list_failure,
            )
        finally:
            if owns_client:
                client.close()
    finally:
        _sync_vault_lock.release()
