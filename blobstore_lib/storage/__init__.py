"""Blob storage package for blobstore_lib."""
from typing import Callable, Mapping, Optional
from urllib.parse import urlsplit

from blobstore_lib.errors import ConfigError, KeyExists, KeyNotFound, StopListing
from .base import BlobStore
from .dbm_engine import DBMEngine
from .hash_store import HashStore, open_store, opener
from .memory_backend import MemoryEngine

__all__ = [
    "BlobStore",
    "HashStore",
    "DBMEngine",
    "MemoryEngine",
    "KeyNotFound",
    "KeyExists",
    "StopListing",
    "ConfigError",
    "create_store",
    "open_store",
    "opener",
]


def create_store(
    address: str,
    openers: Optional[Mapping[str, Callable[[str], BlobStore]]] = None,
) -> BlobStore:
    """Factory to create a BlobStore from an address.

    - `memory:` opens a fresh in-memory store.
    - `dbm://...` or a plain filesystem path opens the on-disk store.
    - `openers` maps extra schemes to callables taking the full address;
      entries here take precedence over the built-in schemes.
    """
    scheme = urlsplit(address).scheme.lower()
    if openers and scheme in openers:
        return openers[scheme](address)
    if scheme == "memory":
        return HashStore(MemoryEngine())
    if scheme in ("", "dbm"):
        return opener(address)
    raise ConfigError(f"unknown store scheme {scheme!r} in address {address!r}")
