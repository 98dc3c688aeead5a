"""Durable key-value storage backed by a single JSON file.

Holds exactly what must survive a restart: the raw user token and the raw
Twitch user object. Values are strings; callers serialize anything richer.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

USER_TOKEN_KEY = "twitchUserToken"
USER_DATA_KEY = "twitchUserData"


class KeyValueStore:
    """String key-value entries persisted to *path*."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Storage file unreadable ({self.path}): {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Storage file has unexpected shape: {type(data).__name__}")
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _write(self, data: dict[str, str]) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f)
        except OSError as e:
            logger.exception(f"Storage file not writable ({self.path}): {e}")
            return False
        return True

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set(self, key: str, value: str) -> bool:
        """Persist *value*; ``False`` if the file could not be written."""
        data = self._read()
        data[key] = value
        if not self._write(data):
            return False
        logger.debug(f"Storage saved '{key}' ({len(value)} chars)")
        return True

    def remove(self, key: str) -> bool:
        data = self._read()
        if data.pop(key, None) is None:
            return True
        if not self._write(data):
            return False
        logger.debug(f"Storage removed '{key}'")
        return True
