"""Exception hierarchy for the quivr_sync library.

Remote API failures are not raised: the client reports them as failed
result objects (see quivr_sync.models). These exceptions cover local
problems that make a sync impossible to start.
"""

from __future__ import annotations


class QuivrSyncError(Exception):
    """Base exception for all quivr_sync errors."""

    pass


class ConfigError(QuivrSyncError):
    """Raised when settings are missing or cannot be read."""

    pass


class SessionError(QuivrSyncError):
    """Raised when the application is used before start()."""

    pass


class ScanError(QuivrSyncError):
    """Raised when the local document tree cannot be scanned."""

    pass


class SyncInProgressError(QuivrSyncError):
    """Raised when a sync is requested while another one is running."""

    pass
