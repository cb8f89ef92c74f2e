"""On-disk engine built on the standard `dbm` databases.

The database at `path` is created if it does not exist. Which `dbm`
implementation is used depends on what the interpreter was built with;
none of them iterate keys in a useful order, and all report missing keys
with `KeyError` and other failures with `dbm.error` or `OSError`.

A daemon thread performs the periodic maintenance configured through
`StoreOptions`: `sync()` every `sync_interval` seconds and `reorganize()`
every `compact_interval` seconds, for databases that provide them. A
negative `sync_interval` syncs after every put and delete instead; zero or
negative intervals start no background task.
"""
from __future__ import annotations
import dbm
import importlib
import logging
import threading
import time
from pathlib import Path
from typing import Iterator, Optional, Tuple

from blobstore_lib.config import StoreOptions

logger = logging.getLogger(__name__)

# Implementations used for new databases. dbm.sqlite3 connections may only be
# used from the thread that opened them, and some ndbm builds cap value size.
_CREATE_ORDER = ("dbm.gnu", "dbm.dumb")


def _open_db(path: Path):
    if dbm.whichdb(str(path)):
        return dbm.open(str(path), "c")
    for name in _CREATE_ORDER:
        try:
            mod = importlib.import_module(name)
        except ImportError:
            continue
        return mod.open(str(path), "c")
    raise ImportError("no usable dbm implementation is available")


class DBMEngine:
    def __init__(self, path: str | Path, options: Optional[StoreOptions] = None) -> None:
        self.path = Path(path)
        self.options = options or StoreOptions()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.RLock()
        self._db = _open_db(self.path)
        self._sync_on_write = self.options.sync_interval < 0
        self._stop = threading.Event()
        self._worker: Optional[threading.Thread] = None
        if self.options.sync_interval > 0 or self.options.compact_interval > 0:
            self._worker = threading.Thread(
                target=self._maintain,
                name=f"dbm-maintenance:{self.path.name}",
                daemon=True,
            )
            self._worker.start()
        logger.info("Opened %s database at %s", dbm.whichdb(str(self.path)) or "dbm", self.path)

    def has(self, key: bytes) -> bool:
        with self._lock:
            return key in self._db

    def get(self, key: bytes) -> bytes:
        with self._lock:
            return bytes(self._db[key])

    def put(self, key: bytes, value: bytes) -> None:
        with self._lock:
            self._db[key] = value
            if self._sync_on_write:
                self.sync()

    def delete(self, key: bytes) -> None:
        with self._lock:
            del self._db[key]
            if self._sync_on_write:
                self.sync()

    def count(self) -> int:
        with self._lock:
            return len(self._db)

    def items(self) -> Iterator[Tuple[bytes, bytes]]:
        # Walk a snapshot of the key set; gdbm's firstkey/nextkey cursor is lost
        # when the current key is deleted or the file is reorganized.
        with self._lock:
            keys = list(self._db.keys())
        for key in keys:
            with self._lock:
                value = self._db.get(key)
            if value is not None:  # deleted since the scan began
                yield bytes(key), bytes(value)

    def sync(self) -> None:
        """Flush pending writes to disk, if the database supports it."""
        self._run("sync")

    def compact(self) -> None:
        """Reclaim space left by deleted entries, if the database supports it."""
        self._run("reorganize")

    def close(self) -> None:
        self._stop.set()
        if self._worker is not None:
            self._worker.join()
            self._worker = None
        with self._lock:
            if hasattr(self._db, "sync"):
                self._db.sync()
            self._db.close()
        logger.info("Closed database at %s", self.path)

    def _run(self, method: str) -> None:
        fn = getattr(self._db, method, None)
        if fn is None:
            return
        with self._lock:
            fn()

    def _maintain(self) -> None:
        sync_every = self.options.sync_interval
        compact_every = self.options.compact_interval
        now = time.monotonic()
        next_sync = now + sync_every if sync_every > 0 else None
        next_compact = now + compact_every if compact_every > 0 else None

        while True:
            deadline = min(d for d in (next_sync, next_compact) if d is not None)
            if self._stop.wait(max(0.0, deadline - time.monotonic())):
                return
            now = time.monotonic()
            if next_sync is not None and now >= next_sync:
                self._background("sync", self.sync)
                next_sync = now + sync_every
            if next_compact is not None and now >= next_compact:
                self._background("compaction", self.compact)
                next_compact = now + compact_every

    def _background(self, label: str, task) -> None:
        try:
            task()
        except Exception:
            logger.exception("Background %s of %s failed", label, self.path)
        else:
            logger.debug("Background %s of %s done", label, self.path)
