"""Configuration manager for fdentry. Persists settings to ~/.config/fdentry/settings.json."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

CONFIG_DIR = Path.home() / ".config" / "fdentry"
SETTINGS_FILE = CONFIG_DIR / "settings.json"
CACHE_DIR = Path.home() / ".cache" / "fdentry"

DEFAULTS: dict[str, Any] = {
    "applications_dirs": [
        "/usr/share/applications",
        "/usr/local/share/applications",
        str(Path.home() / ".local" / "share" / "applications"),
    ],
    "log_level": "WARNING",
}

# Plain logging here; fdentry.core.logger imports this module.
_log = logging.getLogger("fdentry.config")


class Config:
    """Singleton settings manager with JSON persistence."""

    _instance: "Config | None" = None

    def __new__(cls) -> "Config":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._loaded = False
        return cls._instance

    def __init__(self) -> None:
        if self._loaded:
            return
        self._data: dict[str, Any] = dict(DEFAULTS)
        self._ensure_dirs()
        self._load()
        self._loaded = True

    @staticmethod
    def _ensure_dirs() -> None:
        for d in (CONFIG_DIR, CACHE_DIR):
            try:
                d.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                _log.warning("Cannot create %s: %s", d, exc)

    def _load(self) -> None:
        if SETTINGS_FILE.exists():
            try:
                with open(SETTINGS_FILE, "r", encoding="utf-8") as f:
                    saved = json.load(f)
                self._data.update(saved)
            except (json.JSONDecodeError, OSError) as exc:
                _log.warning("Ignoring unreadable settings file %s: %s", SETTINGS_FILE, exc)

    def save(self) -> None:
        try:
            with open(SETTINGS_FILE, "w", encoding="utf-8") as f:
                json.dump(self._data, f, indent=2)
        except OSError as exc:
            _log.warning("Cannot save settings to %s: %s", SETTINGS_FILE, exc)

    def get(self, key: str, fallback: Any = None) -> Any:
        return self._data.get(key, fallback if fallback is not None else DEFAULTS.get(key))

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        self.save()

    def reset(self) -> None:
        self._data = dict(DEFAULTS)
        self.save()

    def applications_dirs(self) -> list[Path]:
        return [Path(p).expanduser() for p in self.get("applications_dirs")]
