"""
KV store interface and an in-memory implementation.

The surrounding ledger normally supplies the store; anything exposing
get(key) -> bytes | None and put(key, value) works.
"""

import threading
from typing import Optional, Protocol


class KVStore(Protocol):
    def get(self, key: bytes) -> Optional[bytes]:
        ...

    def put(self, key: bytes, value: bytes) -> None:
        ...


class MemoryKVStore:
    """Thread-safe dict-backed KV store."""

    def __init__(self):
        self._data: dict[bytes, bytes] = {}
        self._lock = threading.Lock()

    def get(self, key: bytes) -> Optional[bytes]:
        with self._lock:
            return self._data.get(bytes(key))

    def put(self, key: bytes, value: bytes) -> None:
        with self._lock:
            self._data[bytes(key)] = bytes(value)

    def delete(self, key: bytes) -> bool:
        with self._lock:
            return self._data.pop(bytes(key), None) is not None

    def keys(self) -> list[bytes]:
        with self._lock:
            return list(self._data.keys())

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)
