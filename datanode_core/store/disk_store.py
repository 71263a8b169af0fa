"""
JSON-on-disk KV store.

Keeps data in memory and periodically persists it to a single JSON file.
Keys and values are bytes; on disk keys are hex and values base64.

Provides atomic writes (temp file + os.replace), configurable save
frequency, and thread safety. Suited to a single datanode gateway or tests;
a real ledger brings its own store.
"""

import base64
import json
import logging
import os
import tempfile
import threading
import time
from typing import Optional

logger = logging.getLogger(__name__)


class JSONDiskKVStore:
    """
    Thread-safe bytes KV store backed by a JSON file.

    Writes are atomic (write to temp file, then os.replace) to avoid
    corruption. A failed save is logged and retried on the next one.
    """

    def __init__(self, store_file: str, save_interval: int = 10):
        """
        Args:
            store_file: Path to the JSON file on disk.
            save_interval: Save to disk every N puts (default every 10th).
        """
        self.store_file = store_file
        self.save_interval = save_interval
        self._data: dict[str, str] = {}
        self._lock = threading.Lock()
        self._update_count = 0

        self._load()

    def _load(self) -> None:
        """Load store contents from disk. Missing file = empty store."""
        if not os.path.exists(self.store_file):
            return

        try:
            with open(self.store_file, "r") as f:
                raw = json.load(f)
        except Exception as e:
            logger.warning("Failed to load store from %s: %s", self.store_file, e)
            return

        data = raw.get("data", {}) if isinstance(raw, dict) else None
        if not isinstance(data, dict):
            logger.warning("Ignoring store file %s: unexpected layout", self.store_file)
            return

        self._data = data
        logger.info("Loaded %d entries from %s", len(self._data), self.store_file)

    def _save(self) -> None:
        """Atomically save store to disk. Must be called with lock held."""
        try:
            store_dir = os.path.dirname(self.store_file)
            if store_dir:
                os.makedirs(store_dir, exist_ok=True)

            payload = {
                "data": self._data,
                "saved_at": int(time.time()),
            }

            fd, tmp_path = tempfile.mkstemp(
                dir=store_dir or ".",
                suffix=".tmp",
            )
            try:
                with os.fdopen(fd, "w") as f:
                    json.dump(payload, f)
                os.replace(tmp_path, self.store_file)
            except BaseException:
                try:
                    os.unlink(tmp_path)
                except OSError:
                    pass
                raise
        except Exception as e:
            logger.warning("Failed to save store to %s: %s", self.store_file, e)

    def get(self, key: bytes) -> Optional[bytes]:
        """Return the stored value, or None if the key is absent."""
        with self._lock:
            encoded = self._data.get(bytes(key).hex())
        if encoded is None:
            return None
        return base64.b64decode(encoded)

    def put(self, key: bytes, value: bytes) -> None:
        """Store a value. Periodically saves to disk based on save_interval."""
        encoded = base64.b64encode(bytes(value)).decode("ascii")
        with self._lock:
            self._data[bytes(key).hex()] = encoded
            self._mark_dirty()

    def delete(self, key: bytes) -> bool:
        """Delete a key. Returns True if it existed."""
        with self._lock:
            if self._data.pop(bytes(key).hex(), None) is None:
                return False
            self._mark_dirty()
            return True

    def _mark_dirty(self) -> None:
        """Count an update and save every save_interval. Must be called with lock held."""
        self._update_count += 1
        if self._update_count >= self.save_interval:
            self._save()
            self._update_count = 0

    def keys(self) -> list[bytes]:
        with self._lock:
            return [bytes.fromhex(k) for k in self._data]

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def flush(self) -> None:
        """Force save to disk immediately."""
        with self._lock:
            self._save()
            self._update_count = 0
