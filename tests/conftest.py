"""Shared fixtures: a record store rooted in a per-test temporary directory.

No external services are needed -- every test gets its own empty data
directory, so tests are isolated by construction.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from insomnia_store.settings import get_settings
from insomnia_store.store.local import LocalRecordStore


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    path = tmp_path / "insomnia"
    path.mkdir()
    return path


@pytest.fixture
def store(data_dir: Path) -> LocalRecordStore:
    return LocalRecordStore(data_dir)


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep host env vars out of tests and drop the cached settings around each test."""
    for key in ("INSOMNIA_APP_DATA_DIR", "INSOMNIA_MCP_PROJECT_ID", "INSOMNIA_MCP_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
