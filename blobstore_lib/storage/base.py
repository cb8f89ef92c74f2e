"""Blob store interface definitions.

Defines the BlobStore abstract class used by callers to store, fetch,
delete and enumerate opaque byte blobs keyed by strings. Implementations
adapt whatever primitive their backing engine offers to these semantics.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Callable, List


class BlobStore(ABC):
    """Abstract blob store.

    Implementations are not required to serialize concurrent callers
    themselves; they are only as safe as the engine they wrap.
    """

    @abstractmethod
    def get(self, key: str) -> bytes:
        """Return the blob stored under `key`.

        Should raise `KeyNotFound` if the key does not exist.
        """

    @abstractmethod
    def put(self, key: str, data: bytes, replace: bool = False) -> None:
        """Store `data` under `key`.

        If the key exists and `replace` is false, raise `KeyExists` without
        writing; otherwise create or overwrite it.
        """

    @abstractmethod
    def delete(self, key: str) -> None:
        """Delete the stored blob. Raise `KeyNotFound` if not found."""

    @abstractmethod
    def list(self, start: str, visit: Callable[[str], object]) -> None:
        """Call `visit` once per key >= `start`, in ascending order.

        If `visit` raises `StopListing`, enumeration ends and `list` returns
        normally. Any other exception from `visit` propagates.
        """

    @abstractmethod
    def len(self) -> int:
        """Return the number of keys in the store."""

    @abstractmethod
    def close(self) -> None:
        """Release the store. It must not be used afterwards."""

    def keys(self, start: str = "") -> List[str]:
        """Return every key >= `start` in ascending order."""
        out: List[str] = []
        self.list(start, out.append)
        return out

    def __len__(self) -> int:
        return self.len()

    def __enter__(self) -> "BlobStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
