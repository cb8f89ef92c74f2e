"""Simple memory-backed engine

This engine keeps raw byte keys and values in a dict. Like the on-disk
engine it promises no iteration order, so it exercises the same ordering
logic in `HashStore`. Useful for tests and development runs.
"""
import logging
from threading import RLock
from typing import Dict, Iterator, Tuple

logger = logging.getLogger(__name__)


class MemoryEngine:
    def __init__(self):
        self._lock = RLock()
        self._store: Dict[bytes, bytes] = {}

    def has(self, key: bytes) -> bool:
        with self._lock:
            return key in self._store

    def get(self, key: bytes) -> bytes:
        with self._lock:
            return self._store[key]

    def put(self, key: bytes, value: bytes) -> None:
        with self._lock:
            self._store[key] = bytes(value)

    def delete(self, key: bytes) -> None:
        with self._lock:
            del self._store[key]

    def count(self) -> int:
        with self._lock:
            return len(self._store)

    def items(self) -> Iterator[Tuple[bytes, bytes]]:
        # Walk a copy of the key set so writers may proceed during the scan.
        with self._lock:
            keys = list(self._store)
        for key in keys:
            with self._lock:
                value = self._store.get(key)
            if value is not None:
                yield key, value

    def close(self) -> None:
        logger.debug("MemoryEngine closed with %d keys", len(self._store))
