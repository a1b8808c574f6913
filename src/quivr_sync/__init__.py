"""Quivr Sync - upload a markdown vault into a Quivr knowledge folder.

Example usage:
    from quivr_sync import QuivrClient, Synchronizer

    with QuivrClient("api-key") as client:
        outcome = Synchronizer(client).run("~/Notes", "obsidian-sync")
        for result in outcome.results:
            print(f"{result.file_name}: {'ok' if result.success else result.error}")

    # With persisted settings
    from quivr_sync import QuivrSyncApp

    with QuivrSyncApp() as app:
        app.sync_now("~/Notes")
"""

from quivr_sync.app import QuivrSyncApp
from quivr_sync.client import QuivrClient, content_type_for
from quivr_sync.config import Settings, load_settings, save_settings
from quivr_sync.exceptions import (
    ConfigError,
    QuivrSyncError,
    ScanError,
    SessionError,
    SyncInProgressError,
)
from quivr_sync.models import (
    FolderResult,
    KnowledgeData,
    ListResult,
    LocalDocument,
    RemoteItem,
    SyncOutcome,
    UploadResult,
)
from quivr_sync.reconciler import find_folder, resolve_folder
from quivr_sync.scanner import scan_documents
from quivr_sync.sync import Synchronizer, sync_vault

__version__ = "0.1.0"

__all__ = [
    # Main entry points
    "QuivrClient",
    "QuivrSyncApp",
    "Synchronizer",
    "sync_vault",
    # Building blocks
    "content_type_for",
    "find_folder",
    "resolve_folder",
    "scan_documents",
    # Settings
    "Settings",
    "load_settings",
    "save_settings",
    # Models
    "FolderResult",
    "KnowledgeData",
    "ListResult",
    "LocalDocument",
    "RemoteItem",
    "SyncOutcome",
    "UploadResult",
    # Exceptions
    "QuivrSyncError",
    "ConfigError",
    "ScanError",
    "SessionError",
    "SyncInProgressError",
]
