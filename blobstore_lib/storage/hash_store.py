"""BlobStore implementation over an unordered hash engine.

`HashStore` wraps one engine exposing has/get/put/delete/count and a full
unordered scan. Existence is checked with `has` before acting, so the
caller sees `KeyNotFound` and `KeyExists` regardless of how the engine
reports a missing key. The check and the following write are separate
engine calls and are not atomic with respect to other writers.

The engine cannot seek or iterate in order, so `list` scans every key,
keeps those at or after `start`, and sorts them in memory before calling
the visitor. Writes that happen while the scan is running may or may not
be reflected.
"""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Callable, List, Optional

from blobstore_lib.config import StoreOptions, parse_address
from blobstore_lib.errors import KeyExists, KeyNotFound, StopListing
from .base import BlobStore
from .dbm_engine import DBMEngine
from .interfaces import EngineProtocol

logger = logging.getLogger(__name__)


class HashStore(BlobStore):
    def __init__(self, engine: EngineProtocol) -> None:
        self._engine = engine

    @property
    def engine(self) -> EngineProtocol:
        return self._engine

    def get(self, key: str) -> bytes:
        bkey = key.encode("utf-8")
        if not self._engine.has(bkey):
            raise KeyNotFound(key)
        return self._engine.get(bkey)

    def put(self, key: str, data: bytes, replace: bool = False) -> None:
        bkey = key.encode("utf-8")
        if self._engine.has(bkey) and not replace:
            raise KeyExists(key)
        self._engine.put(bkey, data)
        logger.debug("Stored %r (%d bytes, replace=%s)", key, len(data), replace)

    def delete(self, key: str) -> None:
        bkey = key.encode("utf-8")
        if not self._engine.has(bkey):
            raise KeyNotFound(key)
        self._engine.delete(bkey)
        logger.debug("Deleted %r", key)

    def list(self, start: str, visit: Callable[[str], object]) -> None:
        # UTF-8 byte order and str code point order agree, so comparing and
        # sorting the decoded keys yields byte-wise lexicographic order.
        keys: List[str] = []
        for bkey, _ in self._engine.items():  # values are not needed
            key = bkey.decode("utf-8")
            if key < start:
                continue
            keys.append(key)
        keys.sort()
        logger.debug("Listing %d keys from %r", len(keys), start)

        for key in keys:
            try:
                visit(key)
            except StopListing:
                break

    def len(self) -> int:
        return self._engine.count()

    def close(self) -> None:
        self._engine.close()


def open_store(path: str | Path, options: Optional[StoreOptions] = None) -> HashStore:
    """Open the on-disk database at `path` and return a store over it."""
    return HashStore(DBMEngine(path, options))


def opener(address: str) -> HashStore:
    """Open a store from an address such as ``dbm:///srv/blobs.db?sync=5s``.

    See `blobstore_lib.config` for the recognized query parameters.
    """
    path, options = parse_address(address)
    logger.info(
        "Opening store at %s (sync=%ss, compact=%ss)",
        path, options.sync_interval, options.compact_interval,
    )
    return open_store(path, options)
