"""Persisted settings for quivr_sync."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any

from quivr_sync.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.quivr.app"
DEFAULT_FOLDER_NAME = "obsidian-sync"
DEFAULT_TIMEOUT = 30.0

# Default settings location
DEFAULT_CONFIG_PATH = Path.home() / ".quivr_sync" / "settings.json"

API_KEY_ENV = "QUIVR_API_KEY"
API_URL_ENV = "QUIVR_API_URL"


@dataclass(frozen=True)
class Settings:
    """Configuration passed explicitly into every sync."""

    api_key: str = ""
    api_url: str = DEFAULT_API_URL
    folder_name: str = DEFAULT_FOLDER_NAME
    abort_on_list_failure: bool = True
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Build settings from a stored record, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def with_env(self, environ: dict[str, str] | None = None) -> Settings:
        """Return a copy with QUIVR_API_KEY / QUIVR_API_URL applied."""
        env = os.environ if environ is None else environ
        overrides: dict[str, Any] = {}
        if env.get(API_KEY_ENV):
            overrides["api_key"] = env[API_KEY_ENV]
        if env.get(API_URL_ENV):
            overrides["api_url"] = env[API_URL_ENV]
        return replace(self, **overrides) if overrides else self


def load_settings(path: Path | str | None = None) -> Settings:
    """Load settings from disk.

    A missing file yields the defaults.

    Raises:
        ConfigError: If the file exists but is not a valid settings record
    """
    config_path = Path(path) if path else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        logger.info(f"No settings file at {config_path}; using defaults")
        return Settings()
    try:
        data = json.loads(config_path.read_text())
    except (OSError, ValueError) as e:
        raise ConfigError(f"Failed to read settings from {config_path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Settings file {config_path} must contain a JSON object")
    try:
        return Settings.from_dict(data)
    except TypeError as e:
        raise ConfigError(f"Invalid settings in {config_path}: {e}") from e


def save_settings(settings: Settings, path: Path | str | None = None) -> Path:
    """Write settings to disk, creating the parent directory if needed."""
    config_path = Path(path) if path else DEFAULT_CONFIG_PATH
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(json.dumps(settings.to_dict(), indent=2))
    except OSError as e:
        raise ConfigError(f"Failed to save settings to {config_path}: {e}") from e
    logger.info(f"Saved settings to {config_path}")
    return config_path
