"""Persistent key-value store (file-backed local storage).

The whole store is one JSON document mapping string keys to JSON-encoded
string values, the same shape browser local storage has. Every call re-reads
the file so callers always observe the latest persisted state.
"""
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from threading import RLock
from typing import Any, Dict, List, Optional, Union

from family.utilities.errors import StorageParseError

logger = logging.getLogger(__name__)


class KeyValueStore:
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = RLock()

    # --- Raw file access ---------------------------------------------------
    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error("Store file %s is corrupted, treating as empty: %s", self.path, e)
            return {}
        except OSError as e:
            logger.error("Store file %s is unreadable, treating as empty: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.error("Store file %s does not hold an object, treating as empty", self.path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _atomic_write(self, data: Dict[str, str]):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(self.path.parent), prefix=".store_", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(data, tmp, indent=2, ensure_ascii=False)
            shutil.move(tmp_path, str(self.path))
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

    # --- Local storage API -------------------------------------------------
    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._read_all().get(key)

    def set_item(self, key: str, value: str):
        with self._lock:
            data = self._read_all()
            data[key] = str(value)
            self._atomic_write(data)

    def remove_item(self, key: str):
        with self._lock:
            data = self._read_all()
            if key in data:
                del data[key]
                self._atomic_write(data)

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._read_all().keys())

    def clear(self):
        with self._lock:
            self._atomic_write({})

    # --- JSON helpers ------------------------------------------------------
    def load_json(self, key: str) -> Any:
        """Decode the value under ``key``; None when absent.

        Raises StorageParseError when the stored string is not valid JSON.
        """
        raw = self.get_item(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageParseError(key, str(e)) from e

    def get_json(self, key: str, default: Any = None) -> Any:
        """Like load_json, but a missing or corrupted value falls back to ``default``."""
        try:
            value = self.load_json(key)
        except StorageParseError as e:
            logger.error("%s; falling back to default", e)
            return default
        return default if value is None else value

    def set_json(self, key: str, value: Any):
        self.set_item(key, json.dumps(value, ensure_ascii=False))

    def __repr__(self) -> str:
        return f"KeyValueStore({str(self.path)!r})"
