from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

from filelock import FileLock, Timeout

from free_images.core.config import settings
from free_images.core.exceptions import PreferenceStoreError

logger = logging.getLogger(__name__)


class JsonFilePreferenceStore:
    """IPreferenceStore kept in a JSON file, one store per user.

    Reads and writes are serialised with a FileLock next to the file.
    """

    def __init__(self, path: Optional[str] = None, timeout: Optional[float] = None) -> None:
        self.path = path or settings.preferences_path
        self.lock_path = self.path + ".lock"
        self.timeout = timeout if timeout is not None else settings.preferences_lock_timeout

    def get(self, name: str, default: Any = None) -> Any:
        return self._load().get(name, default)

    def set(self, name: str, value: Any) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        try:
            with FileLock(self.lock_path, timeout=self.timeout):
                prefs = self._read_unlocked()
                prefs[name] = value
                with open(self.path, "w", encoding="utf-8") as f:
                    json.dump(prefs, f)
        except Timeout as e:
            raise PreferenceStoreError(
                f"Timed out waiting for preference lock {self.lock_path}", path=self.path
            ) from e
        except OSError as e:
            raise PreferenceStoreError(
                f"Could not write preferences: {e}", path=self.path
            ) from e
        logger.debug("Preference %s set to %r", name, value)

    def _load(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        try:
            with FileLock(self.lock_path, timeout=self.timeout):
                return self._read_unlocked()
        except Timeout as e:
            raise PreferenceStoreError(
                f"Timed out waiting for preference lock {self.lock_path}", path=self.path
            ) from e

    def _read_unlocked(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError):
            logger.warning("Unreadable preference file %s, starting empty", self.path)
            return {}
        return data if isinstance(data, dict) else {}
