"""Store options, address parsing and the YAML configuration file.

An address names the database location and may carry two optional query
parameters controlling the engine's background maintenance:

    sync    : interval between automatic syncs (duration; default 10s)
    compact : interval between automatic compactions (duration; default 1m)

For example ``dbm:///var/lib/blobs/store.db?sync=5s&compact=15s``. The host
and path together identify the database; unrecognized parameters are
ignored.
"""
from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Any, Optional, Tuple
from urllib.parse import parse_qs, urlsplit

import yaml
from pydantic import BaseModel, field_validator

from blobstore_lib.errors import ConfigError
from blobstore_lib.util import parse_duration

logger = logging.getLogger(__name__)

DEFAULT_SYNC_INTERVAL = 10.0
DEFAULT_COMPACT_INTERVAL = 60.0
DEFAULT_LOG_LEVEL = "WARNING"


class StoreOptions(BaseModel):
    """Options for opening an on-disk store.

    Intervals are in seconds; duration strings are accepted as well. An
    interval of 0 disables the corresponding background task; a negative
    sync interval syncs after every write and a negative compaction
    interval disables compaction.
    """

    sync_interval: float = DEFAULT_SYNC_INTERVAL
    compact_interval: float = DEFAULT_COMPACT_INTERVAL

    @field_validator("sync_interval", "compact_interval", mode="before")
    @classmethod
    def _parse_duration(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_duration(value)
        return value


class StoreConfig(BaseModel):
    address: Optional[str] = None
    log_level: str = DEFAULT_LOG_LEVEL


def _interval(query: dict, name: str, label: str, default: float) -> float:
    values = query.get(name)
    if not values or not values[0]:
        return default
    try:
        return parse_duration(values[0])
    except ConfigError as e:
        raise ConfigError(f"invalid {label} interval: {e}") from e


def parse_address(address: str) -> Tuple[str, StoreOptions]:
    """Split a store address into a database path and its options.

    Raises `ConfigError` if the address has no path or a duration parameter
    is malformed.
    """
    u = urlsplit(address)
    if u.netloc:
        path = os.path.join(u.netloc, u.path.lstrip("/"))
    else:
        path = u.path
    if not path:
        raise ConfigError(f"store address {address!r} does not name a path")

    query = parse_qs(u.query)
    opts = StoreOptions(
        sync_interval=_interval(query, "sync", "sync", DEFAULT_SYNC_INTERVAL),
        compact_interval=_interval(query, "compact", "compact", DEFAULT_COMPACT_INTERVAL),
    )
    return os.path.normpath(path), opts


def load_config(config_path: Optional[Path] = None) -> StoreConfig:
    """Load the YAML configuration file, returning defaults if it is absent.

    Recognized keys are `address` and `log_level`; anything else is ignored.
    """
    cfg_path = Path(config_path or "blobstore.yml")
    if not cfg_path.exists():
        logger.debug("No config file at %s, using defaults", cfg_path)
        return StoreConfig()
    with cfg_path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ConfigError(f"config file {cfg_path} must contain a mapping")
    return StoreConfig(**{k: raw[k] for k in ("address", "log_level") if raw.get(k) is not None})
