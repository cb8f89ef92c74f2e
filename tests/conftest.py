"""Pytest configuration and shared store fixtures.

Ensure the project root is on sys.path so tests can import the package
(and `tests.storetest`) without requiring PYTHONPATH to be set externally.
"""
import sys
from pathlib import Path

import pytest


def pytest_configure(config):
    # Insert repo root (one level up from tests/) to sys.path
    repo_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo_root))


@pytest.fixture
def memory_store():
    from blobstore_lib.storage import create_store

    store = create_store("memory:")
    yield store
    store.close()


@pytest.fixture
def dbm_store(tmp_path):
    from blobstore_lib.config import StoreOptions
    from blobstore_lib.storage import open_store

    store = open_store(tmp_path / "fixture.db", StoreOptions(sync_interval=0, compact_interval=0))
    yield store
    store.close()
