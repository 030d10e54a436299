"""Tiny string key/value slot persisted as one JSON file.

Everything the tracker keeps between runs (the habit collection and the theme
preference) lives under a string key with a string value, the same way a
browser's local storage holds it. Writes replace the whole file through a
temporary sibling so a crash never leaves a half-written slot behind.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)

STORAGE_FILENAME = "storage.json"


class LocalStorage:
    def __init__(self, path: Path):
        self._path = Path(path)
        self._lock = threading.RLock()

    def _read(self) -> Dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable storage file %s: %s", self._path, exc)
            return {}
        if not isinstance(payload, dict):
            logger.warning("Ignoring storage file %s: expected an object", self._path)
            return {}
        dropped = sorted(str(key) for key, value in payload.items() if not isinstance(value, str))
        if dropped:
            logger.warning("Ignoring non-string values in %s for keys: %s", self._path, ", ".join(dropped))
        return {str(key): value for key, value in payload.items() if isinstance(value, str)}

    def _write(self, items: Dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(json.dumps(items, indent=2, sort_keys=True), encoding="utf-8")
        tmp.replace(self._path)

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            items = self._read()
            items[key] = value
            self._write(items)

