"""Application lifecycle around the sync routine."""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import Any

import httpx

from quivr_sync.client import QuivrClient
from quivr_sync.config import Settings, load_settings, save_settings
from quivr_sync.exceptions import QuivrSyncError, SessionError
from quivr_sync.models import ListResult, RemoteItem, SyncOutcome
from quivr_sync.reconciler import Notifier, log_notice
from quivr_sync.sync import Synchronizer

logger = logging.getLogger(__name__)


class QuivrSyncApp:
    """Holds the settings and the client between sync invocations.

    Example:
        with QuivrSyncApp() as app:
            app.sync_now("~/Notes")
    """

    def __init__(
        self,
        config_path: Path | str | None = None,
        notify: Notifier | None = None,
        *,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize the application.

        Args:
            config_path: Settings file (default: ~/.quivr_sync/settings.json)
            notify: Callable receiving user-facing notices
            http_client: Optional httpx client handed to QuivrClient
        """
        self.config_path = Path(config_path) if config_path else None
        self.notify = notify or log_notice
        self._http_client = http_client
        self._stored: Settings | None = None
        self._settings: Settings | None = None
        self._client: QuivrClient | None = None
        self._synchronizer: Synchronizer | None = None

    def __enter__(self) -> QuivrSyncApp:
        """Enter context manager."""
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Exit context manager."""
        self.stop()

    @property
    def is_started(self) -> bool:
        return self._settings is not None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            raise SessionError("Application not started. Call start() first.")
        return self._settings

    def start(self) -> None:
        """Load settings; environment variables override the stored values."""
        self._stored = load_settings(self.config_path)
        self._settings = self._stored.with_env()
        logger.info("Quivr sync started")

    def stop(self) -> None:
        """Close the HTTP client and forget the loaded settings."""
        self._reset_client()
        self._stored = None
        self._settings = None
        logger.info("Quivr sync stopped")

    def _reset_client(self) -> None:
        if self._client is not None:
            self._client.close()
        self._client = None
        self._synchronizer = None

    def _get_synchronizer(self) -> Synchronizer:
        if self._synchronizer is None:
            settings = self.settings
            self._client = QuivrClient(
                settings.api_key,
                settings.api_url,
                timeout=settings.timeout,
                http_client=self._http_client,
            )
            self._synchronizer = Synchronizer(self._client, self.notify)
        return self._synchronizer

    def sync_now(self, root: Path | str) -> SyncOutcome:
        """Upload every markdown document under ``root`` to Quivr.

        Raises:
            SessionError: If start() has not been called
            ConfigError: If no API key is configured
            SyncInProgressError: If a sync is already running
        """
        settings = self.settings
        synchronizer = self._get_synchronizer()
        return synchronizer.run(
            Path(root).expanduser(),
            settings.folder_name,
            abort_on_list_failure=settings.abort_on_list_failure,
        )

    def list_remote(self) -> ListResult:
        """Fetch the current remote listing."""
        return self._get_synchronizer().client.list_items()

    def fetch_folders(self) -> list[RemoteItem]:
        """Return the folders Quivr currently holds (empty if listing failed)."""
        listing = self.list_remote()
        if not listing.success:
            self.notify(listing.error or "Error fetching files.")
        return listing.folders

    def set_api_key(self, api_key: str) -> None:
        """Store a new API key and persist the settings.

        The new key applies to this session even when QUIVR_API_KEY is set;
        only the stored record is written to disk.
        """
        if self._synchronizer is not None and self._synchronizer.is_running:
            raise QuivrSyncError("Cannot change the API key while a sync is running")
        settings = self.settings
        api_key = api_key.strip()
        self._stored = replace(self._stored or Settings(), api_key=api_key)
        save_settings(self._stored, self.config_path)
        self._settings = replace(settings, api_key=api_key)
        self._reset_client()
